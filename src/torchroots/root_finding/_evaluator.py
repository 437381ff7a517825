"""Rounded, failure-isolating evaluation of a parsed function."""

import math
import warnings
from typing import Callable

import sympy
import torch
from torch import Tensor

from ._exceptions import (
    DerivativeError,
    EvaluationError,
    EvaluationWarning,
    ExpressionError,
)
from ._expression import compile_expression, differentiate, parse_expression

_ROUNDING_RULES = ("half_even", "half_away")
_FAILURE_POLICIES = ("warn", "raise")


class Evaluator:
    """Evaluate a function and its derivative at a fixed decimal precision.

    The expression is parsed and differentiated once at construction. Every
    value returned by :meth:`evaluate`, :meth:`evaluate_derivative` and
    :meth:`evaluate_over_range` is rounded to ``fix`` decimal digits using
    the configured rounding rule.

    Parameters
    ----------
    expression : str
        Function expression, e.g. ``"x**3 - 2*x - 5"``.
    variable : str, default="x"
        Name of the independent variable.
    fix : int, default=6
        Number of decimal digits kept after rounding.
    rounding : str, default="half_even"
        ``"half_even"`` rounds ties to the even digit (banker's rounding);
        ``"half_away"`` rounds ties away from zero.
    on_failure : str, default="warn"
        What to do when the function is undefined at a point (division by
        zero, domain error, non-finite result). ``"warn"`` issues an
        :class:`EvaluationWarning` naming the input and returns NaN so the
        caller may keep probing; ``"raise"`` raises :class:`EvaluationError`.

    Examples
    --------
    >>> f = Evaluator("x**2 - 2", fix=4)
    >>> f.evaluate(1.5)
    0.25
    >>> f.evaluate_derivative(1.5)
    3.0
    >>> f.derivative
    2*x

    Notes
    -----
    Instances have no mutable state after construction and can be shared by
    any number of sequential method runs.
    """

    def __init__(
        self,
        expression: str,
        variable: str = "x",
        *,
        fix: int = 6,
        rounding: str = "half_even",
        on_failure: str = "warn",
    ):
        if isinstance(fix, bool) or not isinstance(fix, int) or fix < 0:
            raise ValueError(f"fix must be a non-negative integer, got {fix!r}")
        if rounding not in _ROUNDING_RULES:
            raise ValueError(
                f"Unknown rounding: {rounding}. Use 'half_even' or 'half_away'."
            )
        if on_failure not in _FAILURE_POLICIES:
            raise ValueError(
                f"Unknown on_failure: {on_failure}. Use 'warn' or 'raise'."
            )

        self._expression = expression
        self._variable = variable
        self._fix = fix
        self._rounding = rounding
        self._on_failure = on_failure

        self._function = parse_expression(expression, variable)
        self._derivative = differentiate(self._function, variable)
        self._f = compile_expression(self._function, variable)

        # Derivative-free methods still work when f' has no tensor form.
        try:
            self._df = compile_expression(self._derivative, variable)
        except ExpressionError:
            self._df = None

    def __repr__(self) -> str:
        return (
            f"Evaluator({self._expression!r}, variable={self._variable!r}, "
            f"fix={self._fix}, rounding={self._rounding!r})"
        )

    @property
    def expression(self) -> str:
        return self._expression

    @property
    def variable(self) -> str:
        return self._variable

    @property
    def fix(self) -> int:
        return self._fix

    @property
    def rounding(self) -> str:
        return self._rounding

    @property
    def on_failure(self) -> str:
        return self._on_failure

    @property
    def function(self) -> sympy.Expr:
        return self._function

    @property
    def derivative(self) -> sympy.Expr:
        return self._derivative

    def round(self, value: float) -> float:
        """Round ``value`` to ``fix`` digits with the configured rule."""
        if math.isnan(value):
            return value
        t = torch.tensor(value, dtype=torch.float64)
        return self._round_tensor(t).item()

    def evaluate(self, x: float) -> float:
        """Evaluate the function at ``x``.

        Returns NaN (after an :class:`EvaluationWarning`) when the function
        is undefined at ``x`` and ``on_failure="warn"``.
        """
        t = torch.tensor(float(x), dtype=torch.float64)
        return self._evaluate(self._f, t, "f").item()

    def evaluate_derivative(self, x: float) -> float:
        """Evaluate the derivative at ``x`` with the same contract as :meth:`evaluate`.

        Raises
        ------
        DerivativeError
            If the symbolic derivative cannot be evaluated numerically.
        """
        if self._df is None:
            raise DerivativeError(
                f"f'({self._variable}) = {self._derivative} cannot be evaluated"
            )
        t = torch.tensor(float(x), dtype=torch.float64)
        return self._evaluate(self._df, t, "f'").item()

    def evaluate_over_range(
        self,
        start: float,
        stop: float,
        step: float,
    ) -> dict[float, float]:
        """Sample the function from ``start`` to ``stop`` inclusive.

        Parameters
        ----------
        start : float
            First sample point.
        stop : float
            Last sample point (included when reached within float accuracy).
        step : float
            Distance between samples. Must be positive.

        Returns
        -------
        dict[float, float]
            Sample point (rounded to ``fix`` digits) to function value, in
            increasing order of the sample point. Undefined samples map to
            NaN.

        Raises
        ------
        ValueError
            If ``step`` is not positive or a bound is not finite.
        """
        if not step > 0 or not math.isfinite(step):
            raise ValueError(f"step must be a positive number, got {step}")
        if not (math.isfinite(start) and math.isfinite(stop)):
            raise ValueError(
                f"range bounds must be finite, got ({start}, {stop})"
            )

        n = math.floor((stop - start) / step + 1e-9) + 1
        if n <= 0:
            return {}

        x = start + step * torch.arange(n, dtype=torch.float64)
        values = self._evaluate(self._f, x, "f")
        keys = self._round_tensor(x)
        return dict(zip(keys.tolist(), values.tolist()))

    def _round_tensor(self, t: Tensor) -> Tensor:
        if self._rounding == "half_even":
            return torch.round(t, decimals=self._fix)
        scale = 10.0**self._fix
        return torch.sign(t) * torch.floor(torch.abs(t) * scale + 0.5) / scale

    def _evaluate(
        self,
        fn: Callable[[Tensor], Tensor],
        x: Tensor,
        label: str,
    ) -> Tensor:
        cause = None
        try:
            y = fn(x)
        except (ArithmeticError, ValueError, TypeError, RuntimeError) as exc:
            cause = exc
            y = torch.full_like(x, math.nan)

        undefined = ~torch.isfinite(y)
        if undefined.any():
            self._report(label, x.reshape(-1)[undefined.reshape(-1)].tolist(), cause)
            y = torch.where(undefined, torch.full_like(y, math.nan), y)

        return self._round_tensor(y)

    def _report(
        self,
        label: str,
        points: list[float],
        cause: Exception | None,
    ) -> None:
        where = ", ".join(repr(p) for p in points)
        message = f"{label}({self._variable}) is undefined at {self._variable} = {where}"
        if cause is not None:
            message = f"{message} ({cause})"

        if self._on_failure == "raise":
            raise EvaluationError(message) from cause

        warnings.warn(message, EvaluationWarning, stacklevel=4)
