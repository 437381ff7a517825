# tests/torchroots/root_finding/test__fixed_point.py
import math

import pytest

from torchroots.root_finding import (
    Evaluator,
    InapplicableMethodWarning,
    can_apply_fixed_point,
    fixed_point,
)


class TestCanApplyFixedPoint:
    """Tests for the fixed-point applicability check."""

    def test_contraction(self):
        """cos maps [0, 1] into itself and contracts near both ends."""
        assert can_apply_fixed_point(Evaluator("cos(x)"), 0.0, 1.0)

    def test_escapes_interval(self):
        """2x maps 1 outside [0, 1]."""
        assert not can_apply_fixed_point(Evaluator("2*x"), 0.0, 1.0)

    def test_expanding_derivative(self):
        """A map with |g'| > 1 at an endpoint is rejected."""
        assert not can_apply_fixed_point(Evaluator("x**2"), 0.0, 1.0)

    def test_endpoint_order(self):
        """The endpoints may be given in either order."""
        assert can_apply_fixed_point(Evaluator("cos(x)"), 1.0, 0.0)


class TestFixedPoint:
    """Tests for fixed-point iteration."""

    def test_dottie_number(self):
        """Find the fixed point of cos(x)."""
        g = Evaluator("cos(x)")

        result = fixed_point(g, 0.0, 1.0)

        assert result.converged
        assert result.root == 0.739085

    def test_first_record(self):
        """The interval midpoint seeds the iteration."""
        g = Evaluator("cos(x)")

        first = fixed_point(g, 0.0, 1.0).trace[0]

        assert (first.x, first.g_x) == (0.5, 0.877583)
        assert first.error == pytest.approx(43.025332, abs=1e-6)

    def test_iterates_chain(self):
        """Each pass applies g to the previous value."""
        g = Evaluator("cos(x)")

        trace = fixed_point(g, 0.0, 1.0).trace

        for previous, record in zip(trace, trace[1:]):
            assert record.x == previous.g_x

    def test_seed_only(self):
        """Without b the iteration starts from a and skips the check."""
        g = Evaluator("cos(x)")

        result = fixed_point(g, 0.5)

        assert result.root == 0.739085
        assert result.trace[0].x == 0.5

    def test_not_applicable(self):
        """A rejected interval gives NaN, an empty trace and a warning."""
        g = Evaluator("2*x")

        with pytest.warns(InapplicableMethodWarning, match="not applicable"):
            result = fixed_point(g, 0.0, 1.0)

        assert math.isnan(result.root)
        assert not result.converged
        assert result.num_iterations == 0
        assert len(result.trace) == 0

    def test_divergent_map(self):
        """A divergent map runs until maxiter."""
        g = Evaluator("2*x")

        result = fixed_point(g, 1.0, maxiter=20)

        assert result.num_iterations == 20
        assert not result.converged
        assert result.trace.last.error == 50.0

    def test_invalid_maxiter(self):
        """maxiter must be positive."""
        with pytest.raises(ValueError, match="maxiter"):
            fixed_point(Evaluator("cos(x)"), 0.5, maxiter=0)
