from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum


logger = logging.getLogger(__name__)


class OperatorKind(str, Enum):
    NONE = "none"
    INFIX = "infix"  # named function called in operator position
    EQ = "eq"  # == and ===
    NOT_EQ = "not_eq"  # != and !==
    LT = "lt"
    GT = "gt"
    LT_EQ = "lt_eq"
    GT_EQ = "gt_eq"


_TOKENS: dict[OperatorKind, str] = {
    OperatorKind.EQ: "==",
    OperatorKind.NOT_EQ: "!=",
    OperatorKind.LT: "<",
    OperatorKind.GT: ">",
    OperatorKind.LT_EQ: "<=",
    OperatorKind.GT_EQ: ">=",
}


@dataclass(frozen=True, slots=True)
class Operator:
    """Syntactic shape of a captured subexpression, as far as anchoring cares.

    Only INFIX carries a name: the function name the anchor is searched for.
    """

    kind: OperatorKind = OperatorKind.NONE
    name: str | None = None

    def __post_init__(self) -> None:
        if self.kind is OperatorKind.INFIX and not self.name:
            raise ValueError("infix operator requires a function name")
        if self.kind is not OperatorKind.INFIX and self.name is not None:
            raise ValueError(f"{self.kind.value} operator does not take a name")

    @classmethod
    def none(cls) -> Operator:
        return cls()

    @classmethod
    def infix(cls, name: str) -> Operator:
        return cls(OperatorKind.INFIX, name)

    @property
    def token(self) -> str | None:
        """Source text the anchor sits on, or None for non-operator values."""
        if self.kind is OperatorKind.NONE:
            return None
        if self.kind is OperatorKind.INFIX:
            return self.name
        return _TOKENS[self.kind]


def parse_operator(obj: object) -> Operator:
    """Build an Operator from its loose form: None, a kind name, or {"infix": name}."""
    if obj is None:
        return Operator.none()
    if isinstance(obj, Operator):
        return obj
    if isinstance(obj, dict):
        if set(obj) != {"infix"} or not isinstance(obj["infix"], str):
            raise ValueError(f"invalid operator: {obj!r}")
        return Operator.infix(obj["infix"])
    if isinstance(obj, str):
        try:
            kind = OperatorKind(obj.lower())
        except ValueError:
            raise ValueError(f"unknown operator kind: {obj!r}") from None
        return Operator(kind)
    raise ValueError(f"invalid operator: {obj!r}")


def anchor_offset(source: str, operator: Operator) -> int:
    """Offset of the operator token inside a subexpression's source.

    Values line up under the operator rather than under the left operand.
    A token that cannot be found anchors at 0.
    """
    token = operator.token
    if token is None:
        return 0
    i = source.find(token)
    if i < 0:
        logger.debug("operator %r not found in %r, anchoring at column 0", token, source)
        return 0
    return i
