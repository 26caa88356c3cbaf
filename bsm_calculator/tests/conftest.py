"""Shared fixtures for calculator tests."""

from datetime import date

import pytest

from bsm_calculator.models.market_inputs import MarketInputs


@pytest.fixture
def atm_inputs():
    """At-the-money option, 365 days out, 25% vol, 5% rate, no dividend."""
    return MarketInputs(
        spot=100.0,
        strike=100.0,
        valuation_date=date(2025, 1, 1),
        exercise_date=date(2026, 1, 1),
        volatility=25.0,
        risk_free_rate=5.0,
        dividend_yield=0.0,
    )


@pytest.fixture
def dividend_inputs():
    """Out-of-the-money call / in-the-money put with a dividend yield."""
    return MarketInputs(
        spot=100.0,
        strike=110.0,
        valuation_date=date(2025, 3, 1),
        exercise_date=date(2025, 9, 1),
        volatility=35.0,
        risk_free_rate=4.0,
        dividend_yield=2.0,
    )
