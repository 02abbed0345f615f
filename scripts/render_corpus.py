from __future__ import annotations

import argparse
import hashlib
from pathlib import Path

from assertdiagram import build_message
from assertdiagram.testing import generate_cases


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(prog="render_corpus")
    ap.add_argument("--seed", type=int, default=1)
    ap.add_argument("--count", type=int, default=100)
    ap.add_argument("--out", help="Write each case and its diagram under this directory")
    args = ap.parse_args(argv)

    out_dir = None
    if args.out:
        out_dir = Path(args.out).resolve() / f"seed_{args.seed}_count_{args.count}"
        out_dir.mkdir(parents=True, exist_ok=True)

    h = hashlib.sha256()
    for case in generate_cases(seed=args.seed, count=args.count):
        msg = build_message("Assertion failed", case.source_map(), case.call_span(), case.captured_values())
        text = msg.render()
        h.update(text.encode("utf-8"))
        h.update(b"\n---\n")
        if out_dir is not None:
            (out_dir / case.name).write_text(case.source, encoding="utf-8")
            (out_dir / (case.name + ".txt")).write_text(text + "\n", encoding="utf-8")

    if out_dir is not None:
        print(str(out_dir))
    print(h.hexdigest())
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
