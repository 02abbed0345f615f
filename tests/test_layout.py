from __future__ import annotations

import pytest

from assertdiagram import Position, normalize_indentation
from assertdiagram.layout import project


def _pos(line: int, column: int) -> Position:
    # Offsets do not take part in projection.
    return Position(offset=0, line=line, column=column)


def test_normalize_strips_call_indent_from_later_lines() -> None:
    src = "check(a,\n        b)"
    assert normalize_indentation(src, 4) == "check(a,\n    b)"


def test_normalize_keeps_shallower_lines() -> None:
    src = "check(a,\n  b)"
    assert normalize_indentation(src, 4) == src


def test_normalize_leaves_first_line_alone() -> None:
    assert normalize_indentation("    x", 4) == "    x"


def test_normalize_rejects_negative_width() -> None:
    with pytest.raises(ValueError):
        normalize_indentation("x", -1)


def test_project_same_line() -> None:
    d = project("v", call_start=_pos(3, 5), start=_pos(3, 11), source="a == b", anchor=2)
    assert (d.row, d.indent) == (0, 8)
    assert d.source == "a == b"


def test_project_later_line() -> None:
    d = project("v", call_start=_pos(3, 5), start=_pos(4, 9), source="b", anchor=0)
    assert (d.row, d.indent) == (1, 4)


def test_project_anchor_on_later_line_resets_indent() -> None:
    src = "check(a,\n      b) == c"
    d = project("v", call_start=_pos(2, 5), start=_pos(2, 5), source=src, anchor=src.index("=="))
    assert (d.row, d.indent) == (1, 9)
