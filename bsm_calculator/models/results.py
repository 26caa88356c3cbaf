"""Pricing, curve and implied-volatility result records."""

from dataclasses import dataclass, field
from typing import List

from .market_inputs import MarketInputs, OptionSide, PositionDirection


@dataclass(frozen=True)
class OptionGreeks:
    """Theoretical price and Greeks for one side.

    Vega is per 1 volatility point (0.01), theta per calendar day.
    """

    price: float
    delta: float
    gamma: float
    vega: float
    theta: float


@dataclass(frozen=True)
class PricingResult:
    """Call and put valuations at the same inputs."""

    call: OptionGreeks
    put: OptionGreeks
    time_to_expiry: float

    def for_side(self, side: OptionSide) -> OptionGreeks:
        return self.call if OptionSide(side) is OptionSide.CALL else self.put

    @property
    def parity_gap(self) -> float:
        """Call minus put price."""
        return self.call.price - self.put.price


def position_greeks(greeks: OptionGreeks, direction: PositionDirection) -> OptionGreeks:
    """Greeks of the trade rather than the instrument.

    Sensitivities are multiplied by the direction sign; price is left as the
    instrument's theoretical value.
    """
    sign = PositionDirection(direction).sign
    return OptionGreeks(
        price=greeks.price,
        delta=greeks.delta * sign,
        gamma=greeks.gamma * sign,
        vega=greeks.vega * sign,
        theta=greeks.theta * sign,
    )


@dataclass(frozen=True)
class CurvePoint:
    """One swept spot value with direction-adjusted P&L series and raw Greeks."""

    spot: float
    call_payoff: float
    put_payoff: float
    call_current: float
    put_current: float
    call_intrinsic: float
    put_intrinsic: float
    call_delta: float
    put_delta: float
    gamma: float
    vega: float


@dataclass(frozen=True)
class ImpliedVolResult:
    """Solved volatility with the full re-derived valuation."""

    volatility_percent: float
    pricing: PricingResult
    curve: List[CurvePoint] = field(repr=False)
    iterations: int
    inputs: MarketInputs

    @property
    def volatility(self) -> float:
        """Solved volatility as a decimal."""
        return self.volatility_percent / 100.0
