"""Caller-invoked recomputation for the two calculator modes.

Price mode values the option at the input volatility. Implied-vol mode
solves for volatility from a market price first. Either way the result
replaces any previous one; nothing is cached.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from .analytics.greeks import price_inputs
from .analytics.implied_vol import solve_implied_volatility
from .analytics.payoff import build_curve
from .config import EngineConfig
from .models.market_inputs import MarketInputs, OptionSide, PositionDirection
from .models.results import CurvePoint, PricingResult
from .utils.error_handling import InvalidInputError, Outcome, returns_outcome

logger = logging.getLogger("bsm_calculator.engine")


class CalculationMode(str, Enum):
    PRICE = "price"
    IMPLIED_VOL = "iv"


@dataclass(frozen=True)
class CalculationRequest:
    """Everything one recompute needs.

    ``market_price`` is only read in implied-vol mode; ``side`` selects which
    option the market price belongs to.
    """

    inputs: MarketInputs
    mode: CalculationMode = CalculationMode.PRICE
    side: OptionSide = OptionSide.CALL
    direction: PositionDirection = PositionDirection.LONG
    market_price: Optional[float] = None


@dataclass(frozen=True)
class CalculationSnapshot:
    """Complete output of a recompute."""

    inputs: MarketInputs
    pricing: PricingResult
    curve: List[CurvePoint] = field(repr=False)
    volatility_percent: float
    iterations: int = 0


@returns_outcome
def _price_mode(request: CalculationRequest, config: EngineConfig | None) -> CalculationSnapshot:
    pricing = price_inputs(request.inputs, config)
    curve = build_curve(
        request.inputs,
        request.direction,
        pricing.call.price,
        pricing.put.price,
        config,
    )
    return CalculationSnapshot(
        inputs=request.inputs,
        pricing=pricing,
        curve=curve,
        volatility_percent=request.inputs.volatility,
    )


def recompute(
    request: CalculationRequest,
    config: EngineConfig | None = None,
) -> Outcome[CalculationSnapshot]:
    """Run the calculation the request's mode selects.

    Args:
        request: Inputs, mode, side, direction and optional market price
        config: Engine settings

    Returns:
        Outcome wrapping a CalculationSnapshot; in implied-vol mode the
        snapshot's inputs carry the solved volatility
    """
    try:
        mode = CalculationMode(request.mode)
    except ValueError:
        logger.warning("Unknown calculation mode: %r", request.mode)
        return Outcome.failure(InvalidInputError(f"Unknown calculation mode: {request.mode!r}"))

    logger.debug("Recompute in %s mode: %r", mode.value, request.inputs)

    if mode is CalculationMode.PRICE:
        return _price_mode(request, config)

    solved = solve_implied_volatility(
        request.inputs,
        request.side,
        request.market_price,
        request.direction,
        config,
    )
    if not solved.ok:
        return Outcome.failure(solved.error)

    result = solved.value
    return Outcome.success(CalculationSnapshot(
        inputs=result.inputs,
        pricing=result.pricing,
        curve=result.curve,
        volatility_percent=result.volatility_percent,
        iterations=result.iterations,
    ))
