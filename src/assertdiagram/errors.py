from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True)
class InvalidSpan(Exception):
    file: str
    start: int
    end: int
    message: str
    hint: str | None = None

    def __str__(self) -> str:
        base = f"{self.file}:[{self.start}, {self.end}): {self.message}"
        if self.hint:
            return f"{base}\nhint: {self.hint}"
        return base
