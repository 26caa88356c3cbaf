"""Payoff and P&L curves across a sweep of hypothetical spot prices.

Strike, time, volatility, rate and dividend yield are held at their current
values while spot moves, so the "current" series is a mark-to-market
snapshot rather than a projection through time.
"""

import logging
from dataclasses import asdict
from typing import List

import numpy as np
import pandas as pd

from ..config import DEFAULT_CONFIG, EngineConfig
from ..models.market_inputs import MarketInputs, OptionSide, PositionDirection
from ..models.results import CurvePoint
from ..utils.error_handling import InvalidInputError
from .greeks import BlackScholesGreeks, check_parameters
from .time_basis import year_fraction

logger = logging.getLogger("bsm_calculator.payoff")

CURVE_COLUMNS = [
    'spot',
    'call_payoff', 'put_payoff',
    'call_current', 'put_current',
    'call_intrinsic', 'put_intrinsic',
    'call_delta', 'put_delta',
    'gamma', 'vega',
]


def spot_grid(spot: float, config: EngineConfig | None = None) -> np.ndarray:
    """Evenly spaced spot values around the current spot.

    Args:
        spot: Current underlying price
        config: Sweep width, step count and minimum spot

    Returns:
        Ascending array of ``sweep_steps + 1`` spots from
        ``max(min_sweep_spot, spot * (1 - width))`` to ``spot * (1 + width)``
    """
    config = config or DEFAULT_CONFIG
    half_range = spot * config.sweep_width
    upper = spot + half_range
    lower = max(config.min_sweep_spot, spot - half_range)

    if lower >= upper:
        # Spot so small that the minimum sweep spot lies above the whole range
        lower = spot - half_range

    return np.linspace(lower, upper, int(config.sweep_steps) + 1)


def curve_from_parameters(
    spot: float,
    strike: float,
    time_to_expiry: float,
    rate: float,
    vol: float,
    dividend_yield: float,
    entry_call_price: float,
    entry_put_price: float,
    direction: PositionDirection = PositionDirection.LONG,
    config: EngineConfig | None = None,
) -> List[CurvePoint]:
    """Build the curve from decimal model parameters.

    Raises:
        InvalidInputError: If spot, strike, time or vol is not positive
    """
    config = config or DEFAULT_CONFIG
    check_parameters(spot, strike, time_to_expiry, vol)
    sign = PositionDirection(direction).sign

    points = []
    for grid_spot in spot_grid(spot, config):
        s = float(grid_spot)
        args = (s, strike, time_to_expiry, rate, vol)

        call_value = BlackScholesGreeks.calculate_price(*args, OptionSide.CALL, dividend_yield)
        put_value = BlackScholesGreeks.calculate_price(*args, OptionSide.PUT, dividend_yield)

        call_intrinsic = max(0.0, s - strike)
        put_intrinsic = max(0.0, strike - s)

        points.append(CurvePoint(
            spot=s,
            call_payoff=(call_intrinsic - entry_call_price) * sign,
            put_payoff=(put_intrinsic - entry_put_price) * sign,
            call_current=(call_value - entry_call_price) * sign,
            put_current=(put_value - entry_put_price) * sign,
            call_intrinsic=call_intrinsic * sign,
            put_intrinsic=put_intrinsic * sign,
            call_delta=BlackScholesGreeks.calculate_delta(*args, OptionSide.CALL, dividend_yield),
            put_delta=BlackScholesGreeks.calculate_delta(*args, OptionSide.PUT, dividend_yield),
            gamma=BlackScholesGreeks.calculate_gamma(*args, dividend_yield),
            vega=BlackScholesGreeks.calculate_vega(*args, dividend_yield),
        ))

    logger.debug(
        "Built %d-point %s curve over spot [%.2f, %.2f]",
        len(points), PositionDirection(direction).value, points[0].spot, points[-1].spot
    )

    return points


def build_curve(
    inputs: MarketInputs,
    direction: PositionDirection,
    entry_call_price: float,
    entry_put_price: float,
    config: EngineConfig | None = None,
) -> List[CurvePoint]:
    """Sweep spot and compute payoff, mark-to-market and intrinsic series.

    Args:
        inputs: Market inputs; spot sets the sweep centre
        direction: Long or short, applied as a ±1 multiplier to P&L series
        entry_call_price: Call price paid (theoretical price at current spot)
        entry_put_price: Put price paid
        config: Engine settings

    Returns:
        CurvePoints ordered by increasing spot (201 by default)

    Raises:
        InvalidInputError: If inputs fail validation
    """
    is_valid, error = inputs.validate()
    if not is_valid:
        raise InvalidInputError(error)

    t = year_fraction(inputs.valuation_date, inputs.exercise_date, config)
    return curve_from_parameters(
        inputs.spot,
        inputs.strike,
        t,
        inputs.rate_decimal,
        inputs.vol_decimal,
        inputs.dividend_decimal,
        entry_call_price,
        entry_put_price,
        direction,
        config,
    )


def curve_to_frame(points: List[CurvePoint]) -> pd.DataFrame:
    """Tabulate a curve for charting, one row per spot."""
    if not points:
        return pd.DataFrame(columns=CURVE_COLUMNS)
    return pd.DataFrame([asdict(p) for p in points], columns=CURVE_COLUMNS)
