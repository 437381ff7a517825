# tests/torchroots/root_finding/test__secant.py
import math
from unittest import mock

import pytest

from torchroots.root_finding import DegenerateSlopeError, Evaluator, secant


class TestSecant:
    """Tests for the secant method."""

    def test_sqrt_2(self):
        """Find sqrt(2) by solving x^2 - 2 = 0."""
        f = Evaluator("x**2 - 2")

        result = secant(f, 1.0, 2.0)

        assert result.converged
        assert abs(result.root - math.sqrt(2)) < 1e-5

    def test_first_record(self):
        """The first record holds the seeds and the first estimate."""
        f = Evaluator("x**2 - 2")

        first = secant(f, 1.0, 2.0).trace[0]

        assert (first.x1, first.x2) == (1.0, 2.0)
        assert (first.f_x1, first.f_x2) == (-1.0, 2.0)
        assert first.xr == 1.333333

    def test_window_slides(self):
        """Each pass drops the oldest point."""
        f = Evaluator("x**2 - 2")

        trace = secant(f, 1.0, 2.0).trace

        for previous, record in zip(trace, trace[1:]):
            assert record.x1 == previous.x2
            assert record.x2 == previous.xr

    def test_error_uses_window_before_slide(self):
        """The absolute error is the half-width of the window a pass starts from."""
        f = Evaluator("x**2 - 2")

        trace = secant(f, 1.0, 2.0).trace

        assert trace[0].error == 0.5
        assert trace[1].error == pytest.approx(0.333333, abs=1e-6)

    def test_repeated_estimate_ends_run(self):
        """An estimate equal to x2 ends the run instead of collapsing the window."""
        f = Evaluator("x - 1")

        result = secant(f, 0.0, 1.0)

        assert result.converged
        assert result.root == 1.0
        assert result.num_iterations == 1
        assert result.trace[0].error == 0.5

    def test_no_derivative(self):
        """The derivative is never evaluated."""
        f = Evaluator("x**2 - 2")

        with mock.patch.object(
            Evaluator, "evaluate_derivative", side_effect=AssertionError
        ):
            result = secant(f, 1.0, 2.0)

        assert result.converged

    def test_percent_relative(self):
        """Percent mode always runs a first pass."""
        f = Evaluator("x**2 - 2")

        result = secant(f, 1.0, 2.0, tol="0.01%")

        assert result.converged
        assert result.trace[0].error == math.inf
        assert abs(result.root - math.sqrt(2)) < 1e-5

    def test_seeds_within_tolerance(self):
        """Seeds already within tolerance give an empty trace."""
        f = Evaluator("x**2 - 2")

        result = secant(f, 1.4142135, 1.4142136)

        assert len(result.trace) == 0
        assert result.root == 1.4142136
        assert result.converged

    def test_degenerate_slope(self):
        """Equal function values at both points raise DegenerateSlopeError."""
        f = Evaluator("x**2")

        with pytest.raises(DegenerateSlopeError, match="gives 0"):
            secant(f, -1.0, 1.0)

    def test_maxiter(self):
        """The loop is bounded by maxiter."""
        f = Evaluator("x**2 - 2")

        result = secant(f, 1.0, 2.0, maxiter=2)

        assert result.num_iterations == 2
        assert not result.converged

    def test_invalid_maxiter(self):
        """maxiter must be positive."""
        with pytest.raises(ValueError, match="maxiter"):
            secant(Evaluator("x"), 1.0, 2.0, maxiter=0)
