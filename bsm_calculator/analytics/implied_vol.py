"""Implied volatility by Newton-Raphson on the Black-Scholes price.

Iterates are clamped to ``[min_vol, max_vol]`` after every step. A target
below the discounted intrinsic value is rejected before iterating.
"""

import logging
import math

from ..config import DEFAULT_CONFIG, EngineConfig
from ..models.market_inputs import MarketInputs, OptionSide, PositionDirection
from ..models.results import ImpliedVolResult
from ..utils.error_handling import (
    InvalidInputError,
    NonConvergenceError,
    returns_outcome,
)
from .greeks import BlackScholesGreeks, as_side, price_both_sides
from .payoff import curve_from_parameters
from .time_basis import year_fraction

logger = logging.getLogger("bsm_calculator.implied_vol")


def discounted_intrinsic(
    spot: float,
    strike: float,
    time_to_expiry: float,
    rate: float,
    option_type: str,
    dividend_yield: float = 0.0,
) -> float:
    """Lower no-arbitrage bound for a European option price.

    Returns:
        ``max(0, S·e^-qT − K·e^-rT)`` for calls, ``max(0, K·e^-rT − S·e^-qT)`` for puts
    """
    fwd_spot = spot * math.exp(-dividend_yield * time_to_expiry)
    pv_strike = strike * math.exp(-rate * time_to_expiry)

    if as_side(option_type) is OptionSide.CALL:
        return max(0.0, fwd_spot - pv_strike)
    return max(0.0, pv_strike - fwd_spot)


def _check_market_price(price) -> None:
    if isinstance(price, bool) or not isinstance(price, (int, float)) \
            or not math.isfinite(price) or price <= 0:
        raise InvalidInputError("Please enter a valid option price")


def _newton_step(vol: float, diff: float, vega: float, config: EngineConfig) -> float:
    if vega > 0:
        vol = vol - diff / vega
    else:
        # Flat price: jump to the bound the error points at
        vol = config.min_vol if diff > 0 else config.max_vol
    return min(config.max_vol, max(config.min_vol, vol))


def find_implied_vol(
    target_price: float,
    spot: float,
    strike: float,
    time_to_expiry: float,
    rate: float,
    option_type: str,
    dividend_yield: float = 0.0,
    config: EngineConfig | None = None,
) -> tuple[float, int]:
    """Solve for the decimal volatility reproducing ``target_price``.

    Returns:
        Tuple of (volatility, iterations_used)

    Raises:
        InvalidInputError: If the target is not a positive finite number or is
            below the discounted intrinsic value
        NonConvergenceError: If the tolerance is not met within the budget
    """
    config = config or DEFAULT_CONFIG
    side = as_side(option_type)

    _check_market_price(target_price)

    intrinsic = discounted_intrinsic(spot, strike, time_to_expiry, rate, side, dividend_yield)
    if target_price < intrinsic:
        raise InvalidInputError(
            f"Price (${target_price:.2f}) is below intrinsic value (${intrinsic:.2f})"
        )

    vol = config.initial_vol
    for iteration in range(1, int(config.max_iterations) + 1):
        price = BlackScholesGreeks.calculate_price(
            spot, strike, time_to_expiry, rate, vol, side, dividend_yield
        )
        diff = price - target_price

        if abs(diff) < config.tolerance:
            logger.info(
                "Implied vol for %s converged to %.4f%% in %d iterations",
                side.value, vol * 100, iteration
            )
            return vol, iteration

        vega = BlackScholesGreeks.raw_vega(
            spot, strike, time_to_expiry, rate, vol, dividend_yield
        )
        logger.debug(
            "Iteration %d: vol=%.6f price=%.6f diff=%.6f vega=%.6f",
            iteration, vol, price, diff, vega
        )
        vol = _newton_step(vol, diff, vega, config)

    raise NonConvergenceError(
        f"IV calculation did not converge after {config.max_iterations} iterations. "
        f"Try a different price."
    )


@returns_outcome
def solve_implied_volatility(
    inputs: MarketInputs,
    side: OptionSide,
    market_price: float,
    direction: PositionDirection = PositionDirection.LONG,
    config: EngineConfig | None = None,
) -> ImpliedVolResult:
    """Find the volatility matching a market price and revalue at it.

    Args:
        inputs: Market inputs; the volatility field is ignored
        side: Which option the market price refers to
        market_price: Observed option price
        direction: Position direction for the P&L curve
        config: Engine settings

    Returns:
        Outcome wrapping an ImpliedVolResult (solved vol in percent, full
        PricingResult and curve), or an INVALID_INPUT / NON_CONVERGENCE failure

    Example:
        >>> outcome = solve_implied_volatility(inputs, OptionSide.CALL, 12.34)
        >>> outcome.value.volatility_percent
        >>> # ~25.0
    """
    config = config or DEFAULT_CONFIG
    _check_market_price(market_price)

    if inputs.exercise_date <= inputs.valuation_date:
        raise InvalidInputError("Exercise date must be after valuation date")

    is_valid, error = inputs.validate(check_volatility=False)
    if not is_valid:
        raise InvalidInputError(error)

    t = year_fraction(inputs.valuation_date, inputs.exercise_date, config)
    rate = inputs.rate_decimal
    dividend = inputs.dividend_decimal

    vol, iterations = find_implied_vol(
        market_price, inputs.spot, inputs.strike, t, rate, side, dividend, config
    )

    pricing = price_both_sides(inputs.spot, inputs.strike, t, rate, vol, dividend, config)
    curve = curve_from_parameters(
        inputs.spot, inputs.strike, t, rate, vol, dividend,
        pricing.call.price, pricing.put.price, direction, config
    )

    return ImpliedVolResult(
        volatility_percent=vol * 100,
        pricing=pricing,
        curve=curve,
        iterations=iterations,
        inputs=inputs.with_volatility(vol * 100),
    )
