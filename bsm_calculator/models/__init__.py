"""Core data models for option valuation."""

from .market_inputs import MarketInputs, OptionSide, PositionDirection
from .results import (
    CurvePoint,
    ImpliedVolResult,
    OptionGreeks,
    PricingResult,
    position_greeks,
)

__all__ = [
    "MarketInputs",
    "OptionSide",
    "PositionDirection",
    "OptionGreeks",
    "PricingResult",
    "CurvePoint",
    "ImpliedVolResult",
    "position_greeks",
]
