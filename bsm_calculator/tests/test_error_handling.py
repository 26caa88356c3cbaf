"""Tests for error types and outcome wrappers."""

import pytest

from bsm_calculator.utils.error_handling import (
    CalculationError,
    ErrorKind,
    InvalidInputError,
    NonConvergenceError,
    Outcome,
    returns_outcome,
)


class TestErrorKinds:
    """Test suite for the exception hierarchy."""

    def test_kinds(self):
        assert InvalidInputError("x").kind == ErrorKind.INVALID_INPUT
        assert NonConvergenceError("x").kind == ErrorKind.NON_CONVERGENCE

    def test_hierarchy(self):
        assert issubclass(InvalidInputError, ValueError)
        assert issubclass(InvalidInputError, CalculationError)
        assert issubclass(NonConvergenceError, CalculationError)
        assert not issubclass(NonConvergenceError, ValueError)


class TestOutcome:
    """Test suite for Outcome."""

    def test_success(self):
        outcome = Outcome.success(42)
        assert outcome.ok
        assert outcome.kind is None
        assert outcome.message == ""
        assert outcome.unwrap() == 42

    def test_failure(self):
        outcome = Outcome.failure(NonConvergenceError("did not converge"))
        assert not outcome.ok
        assert outcome.kind == ErrorKind.NON_CONVERGENCE
        assert outcome.message == "did not converge"
        with pytest.raises(NonConvergenceError):
            outcome.unwrap()


class TestReturnsOutcome:
    """Test suite for the boundary decorator."""

    def test_wraps_value(self):
        @returns_outcome
        def double(x):
            return 2 * x

        assert double(3).value == 6

    def test_catches_calculation_errors(self):
        @returns_outcome
        def bad():
            raise InvalidInputError("nope")

        outcome = bad()
        assert outcome.kind == ErrorKind.INVALID_INPUT
        assert outcome.message == "nope"

    def test_other_errors_propagate(self):
        """Test programming errors are not converted."""
        @returns_outcome
        def broken():
            raise KeyError("missing")

        with pytest.raises(KeyError):
            broken()
