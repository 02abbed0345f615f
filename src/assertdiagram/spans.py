from __future__ import annotations

from bisect import bisect_right
from dataclasses import dataclass, field

from .errors import InvalidSpan


@dataclass(frozen=True, slots=True)
class Position:
    """A concrete source position.

    Offsets are 0-based; line/column are 1-based for user-facing messages.
    """

    offset: int
    line: int
    column: int


@dataclass(frozen=True, slots=True)
class Span:
    """Half-open span [start, end) in a single file."""

    file: str
    start: Position
    end: Position

    def format(self) -> str:
        return f"{self.file}:{self.start.line}:{self.start.column}"

    def contains(self, other: Span) -> bool:
        return self.start.offset <= other.start.offset and other.end.offset <= self.end.offset


@dataclass(frozen=True, slots=True)
class SourceMap:
    """Immutable source text with a line index.

    Spans handed out by a source map always point into its own text; spans
    coming from elsewhere are checked against the text bounds before use.
    """

    text: str
    file: str = "<memory>"
    _line_starts: tuple[int, ...] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        starts = [0]
        for i, ch in enumerate(self.text):
            if ch == "\n":
                starts.append(i + 1)
        object.__setattr__(self, "_line_starts", tuple(starts))

    def position(self, offset: int) -> Position:
        if offset < 0 or offset > len(self.text):
            raise InvalidSpan(
                file=self.file,
                start=offset,
                end=offset,
                message=f"offset {offset} is outside the source (length {len(self.text)})",
            )
        idx = bisect_right(self._line_starts, offset) - 1
        return Position(offset=offset, line=idx + 1, column=offset - self._line_starts[idx] + 1)

    def span(self, start: int, end: int) -> Span:
        self._check(start, end)
        return Span(file=self.file, start=self.position(start), end=self.position(end))

    def slice(self, span: Span) -> str:
        self.check(span)
        return self.text[span.start.offset : span.end.offset]

    def resolve(self, span: Span) -> tuple[Position, Position]:
        """Return (start, end) positions recomputed from the span's offsets."""
        self.check(span)
        return self.position(span.start.offset), self.position(span.end.offset)

    def check(self, span: Span) -> None:
        self._check(span.start.offset, span.end.offset)

    def _check(self, start: int, end: int) -> None:
        if end < start:
            raise InvalidSpan(file=self.file, start=start, end=end, message="span ends before it starts")
        if start < 0 or end > len(self.text):
            raise InvalidSpan(
                file=self.file,
                start=start,
                end=end,
                message=f"span is outside the source (length {len(self.text)})",
            )
