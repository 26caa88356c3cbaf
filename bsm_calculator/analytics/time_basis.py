"""Year-fraction between valuation and exercise dates."""

import logging
from datetime import date

from ..config import DEFAULT_CONFIG, EngineConfig

logger = logging.getLogger("bsm_calculator.time_basis")


def year_fraction(
    valuation_date: date,
    exercise_date: date,
    config: EngineConfig | None = None,
) -> float:
    """Convert a date pair into an actual/365.25 year-fraction.

    Args:
        valuation_date: Pricing date
        exercise_date: Option exercise (expiry) date
        config: Engine settings (day count and floor)

    Returns:
        Year-fraction, never below ``config.min_year_fraction`` (0.001 by default)

    Note:
        Exercise on or before valuation is not an error here: the result is
        simply the floor. Callers wanting strict ordering check dates themselves.
    """
    config = config or DEFAULT_CONFIG
    days = (exercise_date - valuation_date).days
    t = days / config.day_count

    if t < config.min_year_fraction:
        logger.debug(
            "Year-fraction %.6f (%d days) below floor, using %.4f",
            t, days, config.min_year_fraction
        )
        return config.min_year_fraction

    return t
