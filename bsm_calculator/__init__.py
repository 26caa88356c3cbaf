"""European option pricing, Greeks, P&L curves and implied volatility.

Black-Scholes-Merton with a continuous dividend yield.
"""

from .analytics.greeks import BlackScholesGreeks, price_option
from .analytics.implied_vol import solve_implied_volatility
from .analytics.payoff import build_curve, curve_to_frame
from .config import EngineConfig, load_config
from .engine import CalculationMode, CalculationRequest, CalculationSnapshot, recompute
from .models import (
    CurvePoint,
    ImpliedVolResult,
    MarketInputs,
    OptionGreeks,
    OptionSide,
    PositionDirection,
    PricingResult,
    position_greeks,
)
from .utils.error_handling import ErrorKind, Outcome

__version__ = "0.1.0"

__all__ = [
    'BlackScholesGreeks',
    'price_option',
    'build_curve',
    'curve_to_frame',
    'solve_implied_volatility',
    'recompute',
    'CalculationMode',
    'CalculationRequest',
    'CalculationSnapshot',
    'EngineConfig',
    'load_config',
    'MarketInputs',
    'OptionSide',
    'PositionDirection',
    'OptionGreeks',
    'PricingResult',
    'CurvePoint',
    'ImpliedVolResult',
    'position_greeks',
    'ErrorKind',
    'Outcome',
]
