"""Error kinds and result wrappers for the pricing engine.

Kernels raise; public entry points catch at the boundary and hand back an
``Outcome`` so callers can show the failure message verbatim.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from functools import wraps
from typing import Callable, Generic, Optional, TypeVar

logger = logging.getLogger("bsm_calculator.error_handling")

T = TypeVar('T')


class ErrorKind(str, Enum):
    """Category of a failed calculation."""

    INVALID_INPUT = "invalid_input"
    NON_CONVERGENCE = "non_convergence"


class CalculationError(Exception):
    """Base exception for pricing and solver failures."""

    kind: ErrorKind = ErrorKind.INVALID_INPUT


class InvalidInputError(ValueError, CalculationError):
    """Raised when inputs violate a pricing precondition.

    Inherits from ValueError so kernel callers can treat it like any other
    bad-argument error.
    """

    kind = ErrorKind.INVALID_INPUT


class NonConvergenceError(CalculationError):
    """Raised when the implied-volatility iteration budget is exhausted."""

    kind = ErrorKind.NON_CONVERGENCE


class ConfigurationError(ValueError):
    """Raised when engine configuration is invalid."""
    pass


@dataclass(frozen=True)
class Outcome(Generic[T]):
    """Either a complete value or a typed failure, never both."""

    value: Optional[T] = None
    error: Optional[CalculationError] = None

    @classmethod
    def success(cls, value: T) -> "Outcome[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, error: CalculationError) -> "Outcome[T]":
        return cls(error=error)

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def kind(self) -> Optional[ErrorKind]:
        """Error kind, or None on success."""
        return self.error.kind if self.error is not None else None

    @property
    def message(self) -> str:
        return str(self.error) if self.error is not None else ""

    def unwrap(self) -> T:
        """Return the value, re-raising the stored error on failure."""
        if self.error is not None:
            raise self.error
        return self.value


def returns_outcome(func: Callable[..., T]) -> Callable[..., Outcome[T]]:
    """Decorator converting ``CalculationError`` raises into failed outcomes.

    Example:
        >>> @returns_outcome
        >>> def price(inputs):
        >>>     return _price_or_raise(inputs)
        >>> outcome = price(inputs)
        >>> if not outcome.ok:
        >>>     print(outcome.message)
    """
    @wraps(func)
    def wrapper(*args, **kwargs) -> Outcome[T]:
        try:
            return Outcome.success(func(*args, **kwargs))
        except CalculationError as e:
            logger.warning("%s failed (%s): %s", func.__name__, e.kind.value, e)
            return Outcome.failure(e)

    return wrapper
