"""Domain checks for the scalar quantities used by the Erlang formulas."""

from __future__ import annotations

import math
import numbers
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Optional, Tuple


def _is_real(value: Any) -> bool:
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        return False
    return math.isfinite(value)


class ParameterKind(Enum):
    """Kinds of parameters, each carrying its own acceptance predicate."""

    TRAFFIC = ("a finite real number >= 0", lambda v: _is_real(v) and v >= 0)
    SERVERS = (
        "an integer >= 0",
        lambda v: _is_real(v) and v >= 0 and v == int(v),
    )
    PROBABILITY = ("a probability in [0, 1]", lambda v: _is_real(v) and 0 <= v <= 1)
    TIME = ("a finite duration >= 0", lambda v: _is_real(v) and v >= 0)
    PRECISION = ("unset or a real number > 0", lambda v: v is None or (_is_real(v) and v > 0))

    def __init__(self, constraint: str, predicate: Callable[[Any], bool]):
        self.constraint = constraint
        self._predicate = predicate

    def accepts(self, value: Any) -> bool:
        return bool(self._predicate(value))


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of :func:`validate`; truthy only when every parameter passed."""

    ok: bool
    name: Optional[str] = None
    kind: Optional[ParameterKind] = None
    value: Any = None

    def __bool__(self) -> bool:
        return self.ok

    @property
    def message(self) -> str:
        if self.ok:
            return "all parameters valid"
        return f"{self.name}={self.value!r} must be {self.kind.constraint}"


VALID = ValidationResult(ok=True)


def validate(**params: Tuple[ParameterKind, Any]) -> ValidationResult:
    """
    Check ``name=(kind, value)`` pairs in order, stopping at the first failure.

    Example:
        >>> bool(validate(traffic=(ParameterKind.TRAFFIC, 5.0)))
        True
    """
    for name, (kind, value) in params.items():
        if not kind.accepts(value):
            return ValidationResult(ok=False, name=name, kind=kind, value=value)
    return VALID
