from __future__ import annotations

from .corpus import DiagramCase, generate_cases

__all__ = ["DiagramCase", "generate_cases"]
