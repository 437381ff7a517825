# tests/torchroots/root_finding/test__root_finder.py
import math

import pytest

from torchroots.root_finding import (
    ConvergenceMode,
    ExpressionError,
    RootFinder,
)


class TestRootFinder:
    """Tests for the RootFinder session object."""

    def test_configuration(self):
        """The evaluator and policy are built once."""
        finder = RootFinder("x**2 - 2", "0.5%", fix=4)

        assert finder.evaluator.fix == 4
        assert finder.policy.tolerance == 0.5
        assert finder.policy.mode is ConvergenceMode.PERCENT_RELATIVE

    def test_all_methods_agree(self):
        """Every method finds sqrt(2) with the same settings."""
        finder = RootFinder("x**2 - 2", "1e-6")

        results = [
            finder.bisection(1.0, 2.0),
            finder.false_position(1.0, 2.0),
            finder.newton(1.0),
            finder.secant(1.0, 2.0),
        ]

        for result in results:
            assert result.converged
            assert abs(result.root - math.sqrt(2)) < 1e-5

    def test_bisection_step(self):
        """The bracket can be located by sampling."""
        finder = RootFinder("x**2 - 2", "1e-6")

        result = finder.bisection(0.0, 3.0, 0.5)

        assert result.trace[0].x1 == 1.0

    def test_fixed_point(self):
        """Fixed-point iteration uses the expression as g."""
        finder = RootFinder("cos(x)", "1e-6")

        assert finder.fixed_point(0.0, 1.0).root == 0.739085

    def test_reusable(self):
        """A finder can run several methods in sequence."""
        finder = RootFinder("x**3 - 2*x - 5", "1e-6")

        first = finder.newton(2.0)
        second = finder.newton(2.0)

        assert first.root == second.root
        assert first.trace is not second.trace

    def test_invalid_tolerance(self):
        """Bad tolerance literals fail at construction."""
        with pytest.raises(ValueError):
            RootFinder("x**2 - 2", "tiny")

    def test_invalid_expression(self):
        """Bad expressions fail at construction."""
        with pytest.raises(ExpressionError):
            RootFinder("x**2 - y", "1e-6")
