# tests/torchroots/root_finding/test__convergence.py
import math

import pytest

from torchroots.root_finding._convergence import (
    ConvergenceMode,
    ConvergencePolicy,
    percent_relative_error,
)


class TestParse:
    """Tests for tolerance literal parsing."""

    def test_bare_number_is_absolute(self):
        """A plain number selects absolute mode."""
        policy = ConvergencePolicy.parse("1e-6")
        assert policy.tolerance == 1e-6
        assert policy.mode is ConvergenceMode.ABSOLUTE
        assert not policy.is_percent

    def test_percent_suffix_is_percent_relative(self):
        """A trailing % selects percent-relative mode."""
        policy = ConvergencePolicy.parse("0.5%")
        assert policy.tolerance == 0.5
        assert policy.mode is ConvergenceMode.PERCENT_RELATIVE
        assert policy.is_percent

    def test_whitespace_is_ignored(self):
        """Surrounding whitespace does not matter."""
        assert ConvergencePolicy.parse(" 2 % ").tolerance == 2.0

    def test_float_is_absolute(self):
        """A float tolerance is absolute."""
        policy = ConvergencePolicy.parse(1e-4)
        assert policy == ConvergencePolicy(1e-4, ConvergenceMode.ABSOLUTE)

    def test_policy_passes_through(self):
        """Parsing a policy returns it unchanged."""
        policy = ConvergencePolicy(0.1, ConvergenceMode.PERCENT_RELATIVE)
        assert ConvergencePolicy.parse(policy) is policy

    @pytest.mark.parametrize("literal", ["abc", "%", "", "1e-6%%"])
    def test_invalid_literal(self, literal):
        """Unparseable literals raise ValueError."""
        with pytest.raises(ValueError, match="Invalid tolerance"):
            ConvergencePolicy.parse(literal)

    @pytest.mark.parametrize("literal", ["-1", "-0.5%", "inf", "nan"])
    def test_out_of_range(self, literal):
        """Negative or non-finite tolerances are rejected."""
        with pytest.raises(ValueError, match="non-negative"):
            ConvergencePolicy.parse(literal)

    def test_wrong_type(self):
        """Non-string, non-number tolerances raise TypeError."""
        with pytest.raises(TypeError):
            ConvergencePolicy.parse([1e-6])

    def test_immutable(self):
        """Policies are frozen for the whole run."""
        policy = ConvergencePolicy.parse("1%")
        with pytest.raises(AttributeError):
            policy.mode = ConvergenceMode.ABSOLUTE


class TestStoppingTest:
    """Tests for keep_iterating / converged."""

    def test_continue_while_error_at_least_tolerance(self):
        """The loop continues while error >= tolerance."""
        policy = ConvergencePolicy(1e-3)
        assert policy.keep_iterating(1e-3)
        assert policy.keep_iterating(math.inf)
        assert not policy.keep_iterating(9e-4)

    def test_converged_is_strict(self):
        """Convergence requires error < tolerance."""
        policy = ConvergencePolicy(1e-3)
        assert policy.converged(9e-4)
        assert not policy.converged(1e-3)

    def test_nan_stops_without_converging(self):
        """A NaN error ends the loop but is never converged."""
        policy = ConvergencePolicy(1e-3)
        assert not policy.keep_iterating(math.nan)
        assert not policy.converged(math.nan)


class TestPercentRelativeError:
    """Tests for the percent-relative error formula."""

    def test_first_iteration_is_infinite(self):
        """Without a previous estimate the error is infinite."""
        assert percent_relative_error(1.5, None) == math.inf

    def test_equal_estimates_give_zero(self):
        """Two equal successive estimates give exactly zero."""
        assert percent_relative_error(1.414214, 1.414214) == 0.0
        assert percent_relative_error(0.0, 0.0) == 0.0

    def test_formula(self):
        """Relative change is normalized by the current estimate."""
        assert percent_relative_error(2.0, 1.0) == pytest.approx(50.0)
        assert percent_relative_error(-4.0, -5.0) == pytest.approx(25.0)

    def test_zero_current_estimate(self):
        """A zero estimate after a nonzero one cannot be normalized."""
        assert percent_relative_error(0.0, 0.1) == math.inf

    def test_nan_propagates(self):
        """NaN estimates give a NaN error."""
        assert math.isnan(percent_relative_error(math.nan, 1.0))
