from __future__ import annotations

import logging
from collections import defaultdict
from dataclasses import dataclass, field
from typing import Callable, Sequence

from .errors import InvalidSpan
from .layout import ValueDisplay, normalize_indentation, project
from .operators import Operator, anchor_offset
from .segments import Literal, Message, Segment, ValueSlot
from .spans import SourceMap, Span


logger = logging.getLogger(__name__)

BAR = "|"


@dataclass(frozen=True, slots=True)
class CapturedValue:
    """A subexpression selected for display and the value it evaluated to."""

    span: Span
    value: object
    operator: Operator = field(default_factory=Operator.none)


@dataclass(frozen=True, slots=True)
class CallSite:
    span: Span
    title: str = "Assertion failed"

    def message(self, source_map: SourceMap, captured: Sequence[CapturedValue]) -> Message:
        return build_message(self.title, source_map, self.span, captured)


def build_message(
    title: str,
    source_map: SourceMap,
    call_span: Span,
    captured: Sequence[CapturedValue],
) -> Message:
    """Lay out an assertion diagram for the expression at `call_span`.

    The message reprints the call's source with each captured value stacked
    below the column it was computed at. Raises InvalidSpan for spans that
    do not fit the source or lie outside the call.
    """
    source_map.check(call_span)
    for cap in captured:
        source_map.check(cap.span)
        if not call_span.contains(cap.span):
            raise InvalidSpan(
                file=source_map.file,
                start=cap.span.start.offset,
                end=cap.span.end.offset,
                message="captured span is outside the call",
                hint=f"call spans [{call_span.start.offset}, {call_span.end.offset})",
            )

    call_start, _ = source_map.resolve(call_span)
    base_indent = call_start.column - 1
    call_source = normalize_indentation(source_map.slice(call_span), base_indent)

    displays: list[ValueDisplay] = []
    for cap in captured:
        source = normalize_indentation(source_map.slice(cap.span), base_indent)
        start, _ = source_map.resolve(cap.span)
        displays.append(
            project(
                cap.value,
                call_start=call_start,
                start=start,
                source=source,
                anchor=anchor_offset(source, cap.operator),
            )
        )

    logger.debug("laying out %d value(s) over %s", len(displays), call_span.format())
    return Message.build(assemble(title, call_source, displays))


def assemble(title: str, call_source: str, displays: Sequence[ValueDisplay]) -> list[Segment]:
    """Interleave the call's source lines with bar lines and value lines."""
    by_row: dict[int, list[ValueDisplay]] = defaultdict(list)
    for d in displays:
        by_row[d.row].append(d)

    out: list[Segment] = [Literal(title)]
    for row, line in enumerate(call_source.split("\n")):
        # sorted() is stable: equal indents keep capture order.
        values = by_row.get(row, [])
        indents = [d.indent for d in sorted(values, key=lambda d: d.indent)]

        buf = ["\n", line]
        if indents:
            buf.append("\n")
            bars, _ = _bar_line(indents)
            buf.append(bars)
        out.append(Literal("".join(buf)))

        for d in sorted(values, key=lambda d: -d.indent):
            bars, last = _bar_line(indents, stop=d.indent)
            out.append(Literal("\n" + bars + " " * max(0, d.indent - last - 1)))
            out.append(ValueSlot(d.value))
    return out


def _bar_line(indents: list[int], stop: int | None = None) -> tuple[str, int]:
    # Returns the markers left of `stop` (all of them when None) and the last column used.
    buf: list[str] = []
    last = -1
    for i in indents:
        if stop is not None and i >= stop:
            break
        if i < 0:
            # Line indented less than the call; its values print at column 0.
            continue
        if i > last:
            buf.append(" " * (i - last - 1))
            buf.append(BAR)
        last = i
    return "".join(buf), last


def render_diagram(
    title: str,
    source_map: SourceMap,
    call_span: Span,
    captured: Sequence[CapturedValue],
    *,
    stringify: Callable[[object], str] = repr,
) -> str:
    return build_message(title, source_map, call_span, captured).render(stringify)
