from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from .diagram import CapturedValue, build_message
from .errors import InvalidSpan
from .operators import parse_operator
from .segments import Literal, Message
from .spans import SourceMap, Span


class CaseError(ValueError):
    pass


def load_case(doc: dict, *, file: str = "<case>") -> tuple[str, SourceMap, Span, list[CapturedValue]]:
    """Turn a JSON case document into build_message() arguments."""
    try:
        source = doc["source"]
        call = doc["call"]
        items = doc.get("captured", [])
    except (KeyError, TypeError) as e:
        raise CaseError(f"missing key in case document: {e}") from None
    if not isinstance(source, str):
        raise CaseError("'source' must be a string")

    sm = SourceMap(source, file=file)
    call_span = sm.span(*_offsets(call, "call"))
    captured: list[CapturedValue] = []
    for n, item in enumerate(items):
        if not isinstance(item, dict) or "span" not in item:
            raise CaseError(f"captured[{n}] must be an object with a 'span'")
        captured.append(
            CapturedValue(
                span=sm.span(*_offsets(item["span"], f"captured[{n}].span")),
                value=item.get("value"),
                operator=parse_operator(item.get("operator")),
            )
        )
    title = doc.get("title", "Assertion failed")
    if not isinstance(title, str):
        raise CaseError("'title' must be a string")
    return title, sm, call_span, captured


def _offsets(obj: object, what: str) -> tuple[int, int]:
    if (
        not isinstance(obj, list)
        or len(obj) != 2
        or not all(isinstance(x, int) and not isinstance(x, bool) for x in obj)
    ):
        raise CaseError(f"{what} must be a [start, end] pair of integers")
    return obj[0], obj[1]


def _segments_json(msg: Message) -> list[dict]:
    out = []
    for seg in msg:
        if isinstance(seg, Literal):
            out.append({"literal": seg.text})
        else:
            out.append({"value": seg.value})
    return out


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(prog="assertdiagram", description="Render an assertion diagram from a JSON case")
    ap.add_argument("case", help="JSON case file ('-' for stdin)")
    ap.add_argument("--title", help="Override the case title")
    ap.add_argument("--str", dest="use_str", action="store_true", help="Stringify values with str() instead of repr()")
    ap.add_argument("--segments", action="store_true", help="Print the segment list as JSON")
    ap.add_argument("-v", "--verbose", action="store_true", help="Log layout decisions to stderr")
    args = ap.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    try:
        if args.case == "-":
            doc = json.load(sys.stdin)
            file = "<stdin>"
        else:
            p = Path(args.case)
            doc = json.loads(p.read_text(encoding="utf-8"))
            file = str(p)
        title, sm, call_span, captured = load_case(doc, file=file)
        msg = build_message(args.title or title, sm, call_span, captured)
    except (OSError, json.JSONDecodeError, InvalidSpan, ValueError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 2

    if args.segments:
        print(json.dumps(_segments_json(msg), indent=2))
    else:
        print(msg.render(str if args.use_str else repr))
    return 0
