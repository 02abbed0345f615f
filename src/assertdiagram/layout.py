from __future__ import annotations

from dataclasses import dataclass

from .spans import Position


@dataclass(frozen=True, slots=True)
class ValueDisplay:
    """Where a captured value goes, relative to the call's first line and column."""

    value: object
    row: int
    indent: int
    source: str  # normalized subexpression source


def normalize_indentation(source: str, base_indent: int) -> str:
    """Strip `base_indent` leading spaces from every line after the first.

    Lines indented by less are kept as they are.
    """
    if base_indent < 0:
        raise ValueError(f"base_indent must be >= 0, got {base_indent}")
    if base_indent == 0:
        return source
    return source.replace("\n" + " " * base_indent, "\n")


def project(
    value: object,
    *,
    call_start: Position,
    start: Position,
    source: str,
    anchor: int,
) -> ValueDisplay:
    """Project a captured subexpression onto the call's (row, indent) grid.

    `source` is the normalized subexpression source and `anchor` an offset
    into it. When the anchor sits on a later line than the subexpression
    start, the indent becomes the anchor's column on that line.
    """
    row = start.line - call_start.line
    indent = start.column - call_start.column

    prefix = source[:anchor]
    row_shift = prefix.count("\n")
    if row_shift == 0:
        indent += anchor
    else:
        row += row_shift
        indent = anchor - (prefix.rfind("\n") + 1)

    return ValueDisplay(value=value, row=row, indent=indent, source=source)
