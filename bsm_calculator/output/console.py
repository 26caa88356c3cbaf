"""Console output formatter for pricing and implied-vol results."""

from typing import List

from ..models.market_inputs import MarketInputs, OptionSide, PositionDirection
from ..models.results import CurvePoint, PricingResult, position_greeks


def moneyness(spot: float, strike: float, side: OptionSide, atm_band: float = 0.01) -> str:
    """Label ITM/ATM/OTM; within ``atm_band`` of strike counts as ATM."""
    if abs(spot - strike) <= strike * atm_band:
        return "ATM"
    in_the_money = spot > strike if OptionSide(side) is OptionSide.CALL else spot < strike
    return "ITM" if in_the_money else "OTM"


def print_header(inputs: MarketInputs):
    """Print calculation session header.

    Args:
        inputs: Market inputs being valued
    """
    print("\n" + "=" * 80)
    print("  BLACK-SCHOLES OPTION CALCULATOR")
    print(f"  Spot: ${inputs.spot:.2f}   Strike: ${inputs.strike:.2f}   "
          f"Valuation: {inputs.valuation_date.isoformat()}   "
          f"Exercise: {inputs.exercise_date.isoformat()}")
    print(f"  Vol: {inputs.volatility:.2f}%   Rate: {inputs.risk_free_rate:.2f}%   "
          f"Dividend: {inputs.dividend_yield:.2f}%")
    print("=" * 80)


def print_pricing_result(
    result: PricingResult,
    inputs: MarketInputs,
    side: OptionSide = OptionSide.CALL,
    direction: PositionDirection = PositionDirection.LONG,
):
    """Print price and Greeks for both sides, highlighting the selected one.

    Greeks in the position column are direction-adjusted; theoretical
    prices are not.
    """
    side = OptionSide(side)
    direction = PositionDirection(direction)

    print(f"\nTime to expiry: {result.time_to_expiry:.4f} years ({inputs.days_to_expiry} days)")
    print("-" * 80)
    print(f"{'':<10} {'Price':>10} {'Delta':>10} {'Gamma':>12} {'Vega':>10} {'Theta':>10}")
    print("-" * 80)

    for label, greeks in (("Call", result.call), ("Put", result.put)):
        marker = "*" if label.lower() == side.value else " "
        print(
            f"{marker}{label:<9} {greeks.price:>10.4f} {greeks.delta:>10.4f} "
            f"{greeks.gamma:>12.6f} {greeks.vega:>10.4f} {greeks.theta:>10.4f}"
        )

    position = position_greeks(result.for_side(side), direction)
    print("-" * 80)
    print(f"Position ({direction.value} {side.value}, "
          f"{moneyness(inputs.spot, inputs.strike, side)}):")
    print(f"  Delta: {position.delta:.4f}  Gamma: {position.gamma:.6f}  "
          f"Vega: {position.vega:.4f}  Theta: {position.theta:.4f}")


def print_implied_vol_result(volatility_percent: float, iterations: int, market_price: float):
    """Print the solved implied volatility."""
    print(f"\nMarket price: ${market_price:.2f}")
    print(f"Implied Vol: {volatility_percent:.2f}% ({iterations} iterations)")


def print_curve_summary(
    curve: List[CurvePoint],
    side: OptionSide = OptionSide.CALL,
    rows: int = 11,
):
    """Print an evenly sampled table of the P&L curve for one side.

    Args:
        curve: Curve points ordered by spot
        side: Which side's series to show
        rows: Approximate number of rows to display
    """
    if not curve:
        print("No curve points.")
        return

    side = OptionSide(side)
    prefix = side.value
    stride = max(1, (len(curve) - 1) // max(1, rows - 1))
    sampled = curve[::stride]
    if sampled[-1] is not curve[-1]:
        sampled.append(curve[-1])

    print(f"\n{side.value.capitalize()} P&L by spot:")
    print("-" * 80)
    print(f"{'Spot':>10} {'Expiry P&L':>12} {'Current P&L':>12} {'Intrinsic':>10} {'Delta':>8}")
    print("-" * 80)
    for point in sampled:
        print(
            f"{point.spot:>10.2f} {getattr(point, f'{prefix}_payoff'):>12.2f} "
            f"{getattr(point, f'{prefix}_current'):>12.2f} "
            f"{getattr(point, f'{prefix}_intrinsic'):>10.2f} "
            f"{getattr(point, f'{prefix}_delta'):>8.4f}"
        )


def print_error(message: str):
    """Print a failure message verbatim."""
    print(f"\n❌ Error: {message}")
