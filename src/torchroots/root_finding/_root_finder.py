"""Session object binding one function and one stopping rule to every method."""

from ._bisection import bisection
from ._convergence import ConvergencePolicy
from ._evaluator import Evaluator
from ._false_position import false_position
from ._fixed_point import fixed_point
from ._newton import newton
from ._secant import secant
from ._trace import RootResult


class RootFinder:
    """Run any root finding method on one function with one tolerance.

    Parameters
    ----------
    expression : str
        Function expression.
    tolerance : str, float or ConvergencePolicy
        Tolerance literal; a trailing ``%`` selects percent-relative error.
    variable : str, default="x"
        Name of the independent variable.
    fix : int, default=6
        Decimal digits kept by the evaluator.
    rounding : str, default="half_even"
        Rounding rule, see :class:`Evaluator`.
    on_failure : str, default="warn"
        Evaluation failure policy, see :class:`Evaluator`.

    Examples
    --------
    >>> finder = RootFinder("x**2 - 2", "1e-6")
    >>> finder.newton(1.0).root
    1.414214
    >>> finder.bisection(1.0, 2.0).converged
    True
    """

    def __init__(
        self,
        expression: str,
        tolerance: str | float | ConvergencePolicy,
        *,
        variable: str = "x",
        fix: int = 6,
        rounding: str = "half_even",
        on_failure: str = "warn",
    ):
        self.evaluator = Evaluator(
            expression,
            variable,
            fix=fix,
            rounding=rounding,
            on_failure=on_failure,
        )
        self.policy = ConvergencePolicy.parse(tolerance)

    def __repr__(self) -> str:
        return f"RootFinder({self.evaluator!r}, {self.policy!r})"

    def bisection(
        self,
        x1: float,
        x2: float,
        step: float | None = None,
        *,
        maxiter: int = 100,
    ) -> RootResult:
        return bisection(
            self.evaluator, x1, x2, tol=self.policy, step=step, maxiter=maxiter
        )

    def false_position(
        self,
        x1: float,
        x2: float,
        *,
        maxiter: int = 100,
    ) -> RootResult:
        return false_position(
            self.evaluator, x1, x2, tol=self.policy, maxiter=maxiter
        )

    def newton(self, x1: float, *, maxiter: int = 50) -> RootResult:
        return newton(self.evaluator, x1, tol=self.policy, maxiter=maxiter)

    def secant(self, x1: float, x2: float, *, maxiter: int = 50) -> RootResult:
        return secant(self.evaluator, x1, x2, tol=self.policy, maxiter=maxiter)

    def fixed_point(
        self,
        a: float,
        b: float | None = None,
        *,
        maxiter: int = 500,
    ) -> RootResult:
        return fixed_point(self.evaluator, a, b, tol=self.policy, maxiter=maxiter)
