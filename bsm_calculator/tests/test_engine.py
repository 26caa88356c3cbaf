"""Tests for mode dispatch in recompute."""

from dataclasses import replace

import pytest

from bsm_calculator.analytics.greeks import price_option
from bsm_calculator.engine import CalculationMode, CalculationRequest, recompute
from bsm_calculator.models.market_inputs import OptionSide, PositionDirection
from bsm_calculator.utils.error_handling import ErrorKind


class TestPriceMode:
    """Test suite for theoretical pricing mode."""

    def test_snapshot(self, atm_inputs):
        """Test price mode returns pricing, curve and the input vol."""
        outcome = recompute(CalculationRequest(inputs=atm_inputs))

        assert outcome.ok
        snapshot = outcome.value
        assert snapshot.pricing == price_option(atm_inputs).value
        assert snapshot.volatility_percent == 25.0
        assert snapshot.inputs is atm_inputs
        assert len(snapshot.curve) == 201
        assert snapshot.iterations == 0

    def test_market_price_ignored(self, atm_inputs):
        """Test a market price does nothing in price mode."""
        with_price = recompute(CalculationRequest(inputs=atm_inputs, market_price=-5.0))
        assert with_price.ok

    def test_direction_applied_to_curve(self, atm_inputs):
        """Test short direction reaches the curve."""
        outcome = recompute(CalculationRequest(
            inputs=atm_inputs, direction=PositionDirection.SHORT
        ))
        assert outcome.value.curve[-1].call_intrinsic == pytest.approx(-50.0)

    def test_invalid_input_failure(self, atm_inputs):
        """Test zero vol comes back as a failure value."""
        outcome = recompute(CalculationRequest(inputs=replace(atm_inputs, volatility=0.0)))

        assert not outcome.ok
        assert outcome.kind == ErrorKind.INVALID_INPUT


class TestImpliedVolMode:
    """Test suite for implied-vol mode."""

    def test_solves_and_replaces_vol(self, atm_inputs):
        """Test solved vol is written into the snapshot's inputs."""
        call_price = price_option(atm_inputs).value.call.price
        request = CalculationRequest(
            inputs=replace(atm_inputs, volatility=60.0),
            mode=CalculationMode.IMPLIED_VOL,
            side=OptionSide.CALL,
            market_price=call_price,
        )

        snapshot = recompute(request).unwrap()

        assert snapshot.volatility_percent == pytest.approx(25.0, rel=1e-3)
        assert snapshot.inputs.volatility == snapshot.volatility_percent
        assert snapshot.iterations > 0
        assert snapshot.pricing.call.price == pytest.approx(call_price, abs=1e-4)

    def test_mode_from_string(self, atm_inputs):
        """Test the mode tag can be given as its string value."""
        put_price = price_option(atm_inputs).value.put.price
        outcome = recompute(CalculationRequest(
            inputs=atm_inputs, mode="iv", side=OptionSide.PUT, market_price=put_price
        ))
        assert outcome.ok

    def test_unknown_mode(self, atm_inputs):
        """Test an unrecognised mode tag is INVALID_INPUT, not an exception."""
        outcome = recompute(CalculationRequest(inputs=atm_inputs, mode="bogus"))

        assert not outcome.ok
        assert outcome.kind == ErrorKind.INVALID_INPUT
        assert "bogus" in outcome.message

    def test_missing_market_price(self, atm_inputs):
        """Test a missing market price is INVALID_INPUT."""
        outcome = recompute(CalculationRequest(
            inputs=atm_inputs, mode=CalculationMode.IMPLIED_VOL
        ))
        assert outcome.kind == ErrorKind.INVALID_INPUT

    def test_non_convergence_failure(self, atm_inputs):
        """Test non-convergence is passed through."""
        outcome = recompute(CalculationRequest(
            inputs=atm_inputs, mode=CalculationMode.IMPLIED_VOL, market_price=500.0
        ))
        assert outcome.kind == ErrorKind.NON_CONVERGENCE
        assert outcome.value is None
