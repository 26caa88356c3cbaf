"""Unit tests for data models."""

from dataclasses import FrozenInstanceError, replace
from datetime import date

import pytest

from bsm_calculator.models import (
    MarketInputs,
    OptionGreeks,
    OptionSide,
    PositionDirection,
    PricingResult,
    position_greeks,
)


class TestMarketInputs:
    """Test suite for MarketInputs."""

    def test_decimal_conversions(self, dividend_inputs):
        """Test percentages convert to decimals."""
        assert dividend_inputs.vol_decimal == pytest.approx(0.35)
        assert dividend_inputs.rate_decimal == pytest.approx(0.04)
        assert dividend_inputs.dividend_decimal == pytest.approx(0.02)

    def test_days_to_expiry(self, atm_inputs):
        assert atm_inputs.days_to_expiry == 365

    def test_immutable(self, atm_inputs):
        with pytest.raises(FrozenInstanceError):
            atm_inputs.spot = 101.0

    def test_with_volatility(self, atm_inputs):
        updated = atm_inputs.with_volatility(31.5)
        assert updated.volatility == 31.5
        assert atm_inputs.volatility == 25.0
        assert updated.spot == atm_inputs.spot

    def test_validate_ok(self, atm_inputs):
        assert atm_inputs.validate() == (True, "")

    @pytest.mark.parametrize("field,value,fragment", [
        ('spot', 0.0, "Spot price"),
        ('strike', -1.0, "Strike price"),
        ('volatility', 0.0, "Volatility"),
        ('risk_free_rate', float('nan'), "risk_free_rate"),
    ])
    def test_validate_rejects(self, atm_inputs, field, value, fragment):
        is_valid, error = replace(atm_inputs, **{field: value}).validate()
        assert not is_valid
        assert fragment in error

    def test_validate_allows_negative_rate(self, atm_inputs):
        assert replace(atm_inputs, risk_free_rate=-0.5).validate()[0]

    def test_validate_without_volatility(self, atm_inputs):
        """Test the volatility field can be left out of the check."""
        inputs = replace(atm_inputs, volatility=float('nan'))
        assert inputs.validate(check_volatility=False) == (True, "")
        assert not inputs.validate()[0]

    def test_from_dict_form_keys(self):
        """Test form-style keys and ISO date strings."""
        inputs = MarketInputs.from_dict({
            'spotPrice': '105',
            'strikePrice': 100,
            'valuationDate': '2025-01-15',
            'exerciseDate': '2025-07-15',
            'volatility': 30,
            'riskFreeRate': 4.5,
            'dividendYield': 1,
        })
        assert inputs.spot == 105.0
        assert inputs.valuation_date == date(2025, 1, 15)
        assert inputs.exercise_date == date(2025, 7, 15)
        assert inputs.risk_free_rate == 4.5
        assert inputs.dividend_yield == 1.0

    def test_from_dict_snake_keys_with_defaults(self):
        inputs = MarketInputs.from_dict({
            'spot': 50, 'strike': 55,
            'valuation_date': date(2025, 1, 1), 'exercise_date': '2025-02-01',
        })
        assert inputs.volatility == 25.0
        assert inputs.risk_free_rate == 5.0
        assert inputs.dividend_yield == 0.0

    def test_from_dict_missing_field(self):
        with pytest.raises(KeyError, match="strike"):
            MarketInputs.from_dict({'spot': 1, 'valuation_date': '2025-01-01',
                                    'exercise_date': '2025-02-01'})

    def test_default(self):
        inputs = MarketInputs.default(date(2025, 3, 10))
        assert (inputs.spot, inputs.strike) == (100.0, 100.0)
        assert inputs.exercise_date == date(2026, 3, 10)
        assert (inputs.volatility, inputs.risk_free_rate, inputs.dividend_yield) == (25.0, 5.0, 0.0)

    def test_default_leap_day(self):
        inputs = MarketInputs.default(date(2024, 2, 29))
        assert inputs.exercise_date == date(2025, 3, 1)


class TestTags:
    """Test suite for side and direction tags."""

    def test_direction_sign(self):
        assert PositionDirection.LONG.sign == 1
        assert PositionDirection.SHORT.sign == -1

    def test_from_string(self):
        assert OptionSide("put") is OptionSide.PUT
        assert PositionDirection("short") is PositionDirection.SHORT


class TestPricingResult:
    """Test suite for result helpers."""

    @pytest.fixture
    def result(self):
        call = OptionGreeks(price=10.0, delta=0.6, gamma=0.02, vega=0.4, theta=-0.02)
        put = OptionGreeks(price=6.0, delta=-0.4, gamma=0.02, vega=0.4, theta=-0.01)
        return PricingResult(call=call, put=put, time_to_expiry=1.0)

    def test_for_side(self, result):
        assert result.for_side(OptionSide.CALL) is result.call
        assert result.for_side("put") is result.put

    def test_parity_gap(self, result):
        assert result.parity_gap == pytest.approx(4.0)

    def test_position_greeks_short(self, result):
        """Test short flips sensitivities but not price."""
        short = position_greeks(result.put, PositionDirection.SHORT)
        assert short.price == 6.0
        assert short.delta == pytest.approx(0.4)
        assert short.gamma == pytest.approx(-0.02)
        assert short.vega == pytest.approx(-0.4)
        assert short.theta == pytest.approx(0.01)

    def test_position_greeks_long_unchanged(self, result):
        assert position_greeks(result.call, "long") == result.call
