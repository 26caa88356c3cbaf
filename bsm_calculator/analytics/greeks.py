"""Option pricing and Greeks using the Black-Scholes-Merton model.

European exercise with a continuous dividend yield. Call and put are valued
together since they share d1, d2, gamma and vega.
"""

import logging
import math

from ..config import DEFAULT_CONFIG, EngineConfig
from ..models.market_inputs import MarketInputs, OptionSide
from ..models.results import OptionGreeks, PricingResult
from ..utils.error_handling import InvalidInputError, returns_outcome
from .normal import normal_cdf, normal_pdf
from .time_basis import year_fraction

logger = logging.getLogger("bsm_calculator.pricer")


def as_side(option_type) -> OptionSide:
    """Coerce "call"/"put" or an OptionSide, raising InvalidInputError otherwise."""
    try:
        return OptionSide(option_type)
    except ValueError:
        raise InvalidInputError(f"Invalid option_type: {option_type}") from None


def check_parameters(spot: float, strike: float, time_to_expiry: float, vol: float) -> None:
    """Raise InvalidInputError unless S, K, T and vol are all positive and finite."""
    for name, value in (('spot', spot), ('strike', strike),
                        ('time_to_expiry', time_to_expiry), ('volatility', vol)):
        if not math.isfinite(value):
            raise InvalidInputError(f"{name} must be finite, got {value}")
        if value <= 0:
            raise InvalidInputError(f"{name} must be positive, got {value}")


class BlackScholesGreeks:
    """Closed-form Black-Scholes-Merton prices and Greeks.

    All rates and volatilities are decimals (0.25 = 25%). Methods assume
    validated inputs; use ``check_parameters`` first.
    """

    @staticmethod
    def d1_d2(
        spot: float,
        strike: float,
        time_to_expiry: float,
        rate: float,
        vol: float,
        dividend_yield: float = 0.0,
    ) -> tuple[float, float]:
        """Calculate the d1 and d2 terms."""
        vol_sqrt_t = vol * math.sqrt(time_to_expiry)
        d1 = (math.log(spot / strike)
              + (rate - dividend_yield + 0.5 * vol ** 2) * time_to_expiry) / vol_sqrt_t
        return d1, d1 - vol_sqrt_t

    @staticmethod
    def calculate_price(
        spot: float,
        strike: float,
        time_to_expiry: float,
        rate: float,
        vol: float,
        option_type: str,
        dividend_yield: float = 0.0,
    ) -> float:
        """Theoretical option value.

        Example:
            >>> BlackScholesGreeks.calculate_price(100, 100, 1.0, 0.05, 0.25, 'call')
            >>> # Returns ~12.34
        """
        side = as_side(option_type)
        d1, d2 = BlackScholesGreeks.d1_d2(spot, strike, time_to_expiry, rate, vol, dividend_yield)
        fwd_spot = spot * math.exp(-dividend_yield * time_to_expiry)
        pv_strike = strike * math.exp(-rate * time_to_expiry)

        if side is OptionSide.CALL:
            return fwd_spot * normal_cdf(d1) - pv_strike * normal_cdf(d2)
        return pv_strike * normal_cdf(-d2) - fwd_spot * normal_cdf(-d1)

    @staticmethod
    def calculate_delta(
        spot: float,
        strike: float,
        time_to_expiry: float,
        rate: float,
        vol: float,
        option_type: str,
        dividend_yield: float = 0.0,
    ) -> float:
        """Calculate delta.

        Returns:
            Call delta in [0, e^-qT], put delta in [-e^-qT, 0]
        """
        side = as_side(option_type)
        d1, _ = BlackScholesGreeks.d1_d2(spot, strike, time_to_expiry, rate, vol, dividend_yield)
        carry = math.exp(-dividend_yield * time_to_expiry)

        if side is OptionSide.CALL:
            return carry * normal_cdf(d1)
        return -carry * normal_cdf(-d1)

    @staticmethod
    def calculate_gamma(
        spot: float,
        strike: float,
        time_to_expiry: float,
        rate: float,
        vol: float,
        dividend_yield: float = 0.0,
    ) -> float:
        """Calculate gamma.

        Gamma is the same for both calls and puts.
        """
        d1, _ = BlackScholesGreeks.d1_d2(spot, strike, time_to_expiry, rate, vol, dividend_yield)
        carry = math.exp(-dividend_yield * time_to_expiry)
        return carry * normal_pdf(d1) / (spot * vol * math.sqrt(time_to_expiry))

    @staticmethod
    def raw_vega(
        spot: float,
        strike: float,
        time_to_expiry: float,
        rate: float,
        vol: float,
        dividend_yield: float = 0.0,
    ) -> float:
        """Derivative of price with respect to volatility (per 1.00 of vol)."""
        d1, _ = BlackScholesGreeks.d1_d2(spot, strike, time_to_expiry, rate, vol, dividend_yield)
        carry = math.exp(-dividend_yield * time_to_expiry)
        return spot * carry * normal_pdf(d1) * math.sqrt(time_to_expiry)

    @staticmethod
    def calculate_vega(
        spot: float,
        strike: float,
        time_to_expiry: float,
        rate: float,
        vol: float,
        dividend_yield: float = 0.0,
    ) -> float:
        """Calculate vega per 1 volatility point.

        Vega is the same for both calls and puts.
        """
        return BlackScholesGreeks.raw_vega(
            spot, strike, time_to_expiry, rate, vol, dividend_yield
        ) / 100

    @staticmethod
    def calculate_theta(
        spot: float,
        strike: float,
        time_to_expiry: float,
        rate: float,
        vol: float,
        option_type: str,
        dividend_yield: float = 0.0,
        days_per_year: float = 365.0,
    ) -> float:
        """Calculate theta (time decay) per calendar day.

        Returns:
            Theta value (typically negative)
        """
        side = as_side(option_type)
        d1, d2 = BlackScholesGreeks.d1_d2(spot, strike, time_to_expiry, rate, vol, dividend_yield)
        carry = math.exp(-dividend_yield * time_to_expiry)
        discount = math.exp(-rate * time_to_expiry)

        term1 = -(spot * normal_pdf(d1) * vol * carry) / (2 * math.sqrt(time_to_expiry))

        if side is OptionSide.CALL:
            annual = (term1
                      - rate * strike * discount * normal_cdf(d2)
                      + dividend_yield * spot * carry * normal_cdf(d1))
        else:
            annual = (term1
                      + rate * strike * discount * normal_cdf(-d2)
                      - dividend_yield * spot * carry * normal_cdf(-d1))

        return annual / days_per_year

    @staticmethod
    def calculate_all_greeks(
        spot: float,
        strike: float,
        time_to_expiry: float,
        rate: float,
        vol: float,
        option_type: str,
        dividend_yield: float = 0.0,
        days_per_year: float = 365.0,
    ) -> OptionGreeks:
        """Calculate price and all Greeks for one side."""
        args = (spot, strike, time_to_expiry, rate, vol)
        return OptionGreeks(
            price=BlackScholesGreeks.calculate_price(*args, option_type, dividend_yield),
            delta=BlackScholesGreeks.calculate_delta(*args, option_type, dividend_yield),
            gamma=BlackScholesGreeks.calculate_gamma(*args, dividend_yield),
            vega=BlackScholesGreeks.calculate_vega(*args, dividend_yield),
            theta=BlackScholesGreeks.calculate_theta(
                *args, option_type, dividend_yield, days_per_year
            ),
        )


def price_both_sides(
    spot: float,
    strike: float,
    time_to_expiry: float,
    rate: float,
    vol: float,
    dividend_yield: float = 0.0,
    config: EngineConfig | None = None,
) -> PricingResult:
    """Value call and put from decimal parameters.

    Raises:
        InvalidInputError: If S, K, T or vol is not positive
    """
    config = config or DEFAULT_CONFIG
    check_parameters(spot, strike, time_to_expiry, vol)

    call = BlackScholesGreeks.calculate_all_greeks(
        spot, strike, time_to_expiry, rate, vol, OptionSide.CALL,
        dividend_yield, config.theta_days_per_year
    )
    put = BlackScholesGreeks.calculate_all_greeks(
        spot, strike, time_to_expiry, rate, vol, OptionSide.PUT,
        dividend_yield, config.theta_days_per_year
    )

    logger.debug(
        "Priced S=%.4f K=%.4f T=%.6f vol=%.4f: call=%.4f put=%.4f",
        spot, strike, time_to_expiry, vol, call.price, put.price
    )

    return PricingResult(call=call, put=put, time_to_expiry=time_to_expiry)


def price_inputs(inputs: MarketInputs, config: EngineConfig | None = None) -> PricingResult:
    """Raising variant of ``price_option``."""
    is_valid, error = inputs.validate()
    if not is_valid:
        raise InvalidInputError(error)

    t = year_fraction(inputs.valuation_date, inputs.exercise_date, config)
    return price_both_sides(
        inputs.spot,
        inputs.strike,
        t,
        inputs.rate_decimal,
        inputs.vol_decimal,
        inputs.dividend_decimal,
        config,
    )


@returns_outcome
def price_option(inputs: MarketInputs, config: EngineConfig | None = None) -> PricingResult:
    """Price call and put for a market snapshot.

    Args:
        inputs: Market inputs (percent units)
        config: Engine settings

    Returns:
        Outcome wrapping a PricingResult, or an INVALID_INPUT failure when
        spot, strike or volatility is not positive

    Example:
        >>> outcome = price_option(MarketInputs.default())
        >>> if outcome.ok:
        >>>     print(outcome.value.call.price)
    """
    return price_inputs(inputs, config)
