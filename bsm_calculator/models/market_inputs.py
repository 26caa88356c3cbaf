"""Market input snapshot and option/position tags."""

import math
from dataclasses import dataclass, replace
from datetime import date, datetime
from enum import Enum
from typing import Any, Dict, Tuple


class OptionSide(str, Enum):
    """Call or put; selects sign conventions in the pricing formulas."""

    CALL = "call"
    PUT = "put"


class PositionDirection(str, Enum):
    """Long or short; a ±1 multiplier applied to P&L, never to raw prices."""

    LONG = "long"
    SHORT = "short"

    @property
    def sign(self) -> int:
        return 1 if self is PositionDirection.LONG else -1


def _parse_date(value: Any) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value).strip())


@dataclass(frozen=True)
class MarketInputs:
    """Immutable snapshot of the user's inputs for one calculation.

    Volatility, rate and dividend yield are whole-number percentages
    (25 = 25%). Use the ``*_decimal`` properties inside formulas.
    """

    spot: float
    strike: float
    valuation_date: date
    exercise_date: date
    volatility: float = 25.0
    risk_free_rate: float = 5.0
    dividend_yield: float = 0.0

    @property
    def vol_decimal(self) -> float:
        return self.volatility / 100.0

    @property
    def rate_decimal(self) -> float:
        return self.risk_free_rate / 100.0

    @property
    def dividend_decimal(self) -> float:
        return self.dividend_yield / 100.0

    @property
    def days_to_expiry(self) -> int:
        """Whole calendar days from valuation to exercise (may be negative)."""
        return (self.exercise_date - self.valuation_date).days

    def with_volatility(self, volatility_pct: float) -> "MarketInputs":
        """Copy of these inputs with a new volatility (in percent)."""
        return replace(self, volatility=volatility_pct)

    def validate(self, check_volatility: bool = True) -> Tuple[bool, str]:
        """Check that inputs are usable for pricing.

        Args:
            check_volatility: False skips the volatility field, which the
                implied-vol solver replaces

        Returns:
            Tuple of (is_valid, error_message)

        Note:
            Exercise on or before valuation is not rejected here; the
            year-fraction floor handles it for direct pricing.
        """
        numbers = {
            'spot': self.spot,
            'strike': self.strike,
            'risk_free_rate': self.risk_free_rate,
            'dividend_yield': self.dividend_yield,
        }
        if check_volatility:
            numbers['volatility'] = self.volatility
        for name, value in numbers.items():
            if not isinstance(value, (int, float)) or not math.isfinite(value):
                return False, f"{name} must be a finite number, got {value!r}"

        if self.spot <= 0:
            return False, f"Spot price must be positive, got {self.spot}"
        if self.strike <= 0:
            return False, f"Strike price must be positive, got {self.strike}"
        if check_volatility and self.volatility <= 0:
            return False, f"Volatility must be positive, got {self.volatility}"

        return True, ""

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MarketInputs":
        """Create MarketInputs from a dictionary.

        Accepts both snake_case keys and the form-field names
        (``spotPrice``, ``strikePrice``, ``valuationDate``, ``exerciseDate``,
        ``volatility``, ``riskFreeRate``, ``dividendYield``). Dates may be
        ``date`` objects or ISO strings.

        Raises:
            KeyError: If spot, strike or either date is missing
            ValueError: If a date string or number cannot be parsed
        """
        def pick(snake: str, camel: str, default: Any = None) -> Any:
            if snake in data:
                return data[snake]
            if camel in data:
                return data[camel]
            if default is None:
                raise KeyError(f"Missing required field: {snake}")
            return default

        return cls(
            spot=float(pick('spot', 'spotPrice')),
            strike=float(pick('strike', 'strikePrice')),
            valuation_date=_parse_date(pick('valuation_date', 'valuationDate')),
            exercise_date=_parse_date(pick('exercise_date', 'exerciseDate')),
            volatility=float(pick('volatility', 'volatility', 25.0)),
            risk_free_rate=float(pick('risk_free_rate', 'riskFreeRate', 5.0)),
            dividend_yield=float(pick('dividend_yield', 'dividendYield', 0.0)),
        )

    @classmethod
    def default(cls, today: date | None = None) -> "MarketInputs":
        """Starting inputs: at-the-money 100 strike, one year out, 25% vol, 5% rate."""
        today = today or date.today()
        try:
            exercise = today.replace(year=today.year + 1)
        except ValueError:
            # Feb 29 -> Mar 1 of next year
            exercise = date(today.year + 1, 3, 1)
        return cls(
            spot=100.0,
            strike=100.0,
            valuation_date=today,
            exercise_date=exercise,
        )

    def __repr__(self) -> str:
        return (f"MarketInputs(S={self.spot:.2f} K={self.strike:.2f} "
                f"{self.valuation_date.isoformat()}->{self.exercise_date.isoformat()} "
                f"vol={self.volatility:.2f}% r={self.risk_free_rate:.2f}% "
                f"q={self.dividend_yield:.2f}%)")
