from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Iterable, Iterator, Union


@dataclass(frozen=True, slots=True)
class Literal:
    text: str


@dataclass(frozen=True, slots=True)
class ValueSlot:
    """Insertion point for a captured value; stringified only at render time."""

    value: object


Segment = Union[Literal, ValueSlot]


@dataclass(frozen=True, slots=True)
class Message:
    """An assertion diagram as an ordered, immutable run of segments."""

    segments: tuple[Segment, ...]

    @classmethod
    def build(cls, parts: Iterable[Segment]) -> Message:
        # Adjacent literals are merged; empty ones dropped.
        out: list[Segment] = []
        for part in parts:
            if isinstance(part, Literal):
                if not part.text:
                    continue
                if out and isinstance(out[-1], Literal):
                    out[-1] = Literal(out[-1].text + part.text)
                    continue
            out.append(part)
        return cls(segments=tuple(out))

    def __iter__(self) -> Iterator[Segment]:
        return iter(self.segments)

    def __len__(self) -> int:
        return len(self.segments)

    def __str__(self) -> str:
        return self.render()

    @property
    def values(self) -> tuple[object, ...]:
        return tuple(s.value for s in self.segments if isinstance(s, ValueSlot))

    def render(self, stringify: Callable[[object], str] = repr) -> str:
        parts: list[str] = []
        for seg in self.segments:
            if isinstance(seg, Literal):
                parts.append(seg.text)
            else:
                parts.append(stringify(seg.value))
        return "".join(parts)

    def literal_text(self) -> str:
        """Message text with every value slot left out."""
        return "".join(s.text for s in self.segments if isinstance(s, Literal))
