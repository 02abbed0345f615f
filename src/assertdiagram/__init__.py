from __future__ import annotations

from .diagram import CallSite, CapturedValue, build_message, render_diagram
from .errors import InvalidSpan
from .layout import ValueDisplay, normalize_indentation
from .operators import Operator, OperatorKind, anchor_offset
from .segments import Literal, Message, Segment, ValueSlot
from .spans import Position, SourceMap, Span

__all__ = [
    "CallSite",
    "CapturedValue",
    "InvalidSpan",
    "Literal",
    "Message",
    "Operator",
    "OperatorKind",
    "Position",
    "Segment",
    "SourceMap",
    "Span",
    "ValueDisplay",
    "ValueSlot",
    "anchor_offset",
    "build_message",
    "normalize_indentation",
    "render_diagram",
]
