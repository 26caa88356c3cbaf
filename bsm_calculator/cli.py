#!/usr/bin/env python3
"""Command line front end for the Black-Scholes calculator.

Usage:
    bsm-calc price --spot 100 --strike 100 --vol 25
    bsm-calc price --spot 100 --strike 95 --exercise 2026-06-19 --put --short
    bsm-calc iv --spot 100 --strike 100 --market-price 12.34 --call
"""

import argparse
import sys
from datetime import date
from typing import List, Optional

from .config import DEFAULT_CONFIG, load_config
from .engine import CalculationMode, CalculationRequest, recompute
from .models.market_inputs import MarketInputs, OptionSide, PositionDirection
from .output.console import (
    print_curve_summary,
    print_error,
    print_header,
    print_implied_vol_result,
    print_pricing_result,
)
from .utils.error_handling import ConfigurationError
from .utils.logging_config import get_logger, setup_logging

logger = get_logger("cli")


def _add_common_arguments(parser: argparse.ArgumentParser):
    defaults = MarketInputs.default()

    parser.add_argument('--spot', type=float, default=defaults.spot,
                        help='Spot price (default: 100)')
    parser.add_argument('--strike', type=float, default=defaults.strike,
                        help='Strike price (default: 100)')
    parser.add_argument('--valuation', type=date.fromisoformat, default=defaults.valuation_date,
                        help='Valuation date YYYY-MM-DD (default: today)')
    parser.add_argument('--exercise', type=date.fromisoformat, default=defaults.exercise_date,
                        help='Exercise date YYYY-MM-DD (default: one year from today)')
    parser.add_argument('--rate', type=float, default=defaults.risk_free_rate,
                        help='Risk-free rate in percent (default: 5.0)')
    parser.add_argument('--dividend', type=float, default=defaults.dividend_yield,
                        help='Dividend yield in percent (default: 0)')

    side = parser.add_mutually_exclusive_group()
    side.add_argument('--call', dest='side', action='store_const', const=OptionSide.CALL,
                      help='Show call position (default)')
    side.add_argument('--put', dest='side', action='store_const', const=OptionSide.PUT,
                      help='Show put position')

    direction = parser.add_mutually_exclusive_group()
    direction.add_argument('--long', dest='direction', action='store_const',
                           const=PositionDirection.LONG, help='Long position (default)')
    direction.add_argument('--short', dest='direction', action='store_const',
                           const=PositionDirection.SHORT, help='Short position')

    parser.add_argument('--curve-rows', type=int, default=11,
                        help='Rows of the P&L table to print, 0 to skip (default: 11)')
    parser.add_argument('--config', help='Path to YAML engine config')
    parser.add_argument('--log-level', default='WARNING',
                        help='Logging level (default: WARNING)')
    parser.add_argument('--log-file',
                        help='Also append log records to this file')

    parser.set_defaults(side=OptionSide.CALL, direction=PositionDirection.LONG)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='bsm-calc',
        description='Price European options and solve implied volatility (Black-Scholes-Merton)',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Price an at-the-money option, one year out
  bsm-calc price --spot 100 --strike 100 --vol 25

  # Short put P&L
  bsm-calc price --spot 100 --strike 95 --put --short

  # Implied vol from a call quote
  bsm-calc iv --spot 100 --strike 100 --market-price 12.34

  # Keep a log of the solver iterations
  bsm-calc iv --market-price 12.34 --log-level DEBUG --log-file logs/iv.log
        """
    )
    subparsers = parser.add_subparsers(dest='mode', required=True)

    price = subparsers.add_parser('price', help='Theoretical price and Greeks')
    _add_common_arguments(price)
    price.add_argument('--vol', type=float, default=25.0,
                       help='Volatility in percent (default: 25)')

    iv = subparsers.add_parser('iv', help='Implied volatility from a market price')
    _add_common_arguments(iv)
    iv.add_argument('--market-price', type=float, required=True,
                    help='Observed option price')

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(log_level=args.log_level, log_file=args.log_file)

    try:
        config = load_config(args.config) if args.config else DEFAULT_CONFIG
    except (FileNotFoundError, ConfigurationError) as e:
        print_error(f"Could not load config: {e}")
        return 2

    inputs = MarketInputs(
        spot=args.spot,
        strike=args.strike,
        valuation_date=args.valuation,
        exercise_date=args.exercise,
        volatility=getattr(args, 'vol', 25.0),
        risk_free_rate=args.rate,
        dividend_yield=args.dividend,
    )

    if args.mode == 'iv':
        request = CalculationRequest(
            inputs=inputs,
            mode=CalculationMode.IMPLIED_VOL,
            side=args.side,
            direction=args.direction,
            market_price=args.market_price,
        )
    else:
        request = CalculationRequest(
            inputs=inputs,
            mode=CalculationMode.PRICE,
            side=args.side,
            direction=args.direction,
        )

    outcome = recompute(request, config)
    if not outcome.ok:
        logger.warning("Calculation failed: %s", outcome.message)
        print_error(outcome.message)
        return 1

    snapshot = outcome.value
    print_header(snapshot.inputs)
    if args.mode == 'iv':
        print_implied_vol_result(snapshot.volatility_percent, snapshot.iterations, args.market_price)
    print_pricing_result(snapshot.pricing, snapshot.inputs, args.side, args.direction)
    if args.curve_rows > 0:
        print_curve_summary(snapshot.curve, args.side, rows=args.curve_rows)

    return 0


if __name__ == '__main__':
    sys.exit(main())
