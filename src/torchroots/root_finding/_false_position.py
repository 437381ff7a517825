"""False position (regula falsi) root finding method."""

import math

from ._bracket import check_bracket
from ._convergence import ConvergencePolicy, percent_relative_error
from ._evaluator import Evaluator
from ._secant import _secant_step
from ._trace import FalsePositionRecord, RootResult, Trace


def false_position(
    f: Evaluator,
    x1: float,
    x2: float,
    *,
    tol: str | float | ConvergencePolicy = 1e-6,
    maxiter: int = 100,
) -> RootResult:
    """
    Find a root of f(x) = 0 in a bracket by linear interpolation.

    Each pass intersects the chord through ``(x1, f(x1))`` and
    ``(x2, f(x2))`` with the x-axis,
    ``xr = x2 - f(x2) * (x2 - x1) / (f(x2) - f(x1))``, and keeps the
    sub-bracket on which ``f`` changes sign, exactly as bisection does.

    Parameters
    ----------
    f : Evaluator
        Function to solve.
    x1, x2 : float
        Bracket endpoints with ``f(x1) * f(x2) < 0``.
    tol : str, float or ConvergencePolicy, default=1e-6
        Tolerance literal. In absolute mode the error is the residual
        ``|f(xr)|``; in percent mode it is the percent-relative change
        between successive estimates.
    maxiter : int, default=100
        Maximum number of passes.

    Returns
    -------
    RootResult
        ``root`` is the last estimate ``xr``. Records hold the bracket
        before that pass's update.

    Raises
    ------
    BracketError
        If ``f(x1) * f(x2) >= 0`` and ``f(x1) != f(x2)``.
    DegenerateSlopeError
        If ``f(x2) == f(x1)`` on any pass, including equal endpoint values
        on the first pass.

    Examples
    --------
    >>> f = Evaluator("x**3 - 2*x - 5")
    >>> result = false_position(f, 2.0, 3.0)
    >>> round(result.root, 4)
    2.0946
    >>> abs(result.trace.last.f_xr) < 1e-6
    True

    Notes
    -----
    False position keeps the root bracketed like bisection but can
    converge one-sidedly: on convex or concave stretches one endpoint
    stays fixed and convergence is only linear.

    See Also
    --------
    bisection : Bracketed method using midpoints
    secant : Same update without bracket maintenance
    """
    if maxiter < 1:
        raise ValueError(f"maxiter must be at least 1, got {maxiter}")

    policy = ConvergencePolicy.parse(tol)

    fx1 = f.evaluate(x1)
    fx2 = f.evaluate(x2)
    # Equal endpoint values fail on the first pass as a zero slope.
    if fx1 != fx2:
        check_bracket(x1, x2, fx1, fx2)

    trace = Trace(FalsePositionRecord)
    xr = None
    error = math.inf

    for iteration in range(1, maxiter + 1):
        previous = xr
        xr = _secant_step(x1, x2, fx1, fx2)
        fxr = f.evaluate(xr)

        record = FalsePositionRecord(
            iteration, x1, x2, fx1, fx2, xr, fxr, math.nan
        )

        if fx1 * fxr < 0:
            x2, fx2 = xr, fxr
        else:
            x1, fx1 = xr, fxr

        if policy.is_percent:
            error = f.round(percent_relative_error(xr, previous))
        else:
            error = abs(fxr)

        trace.append(record._replace(error=error))

        if not policy.keep_iterating(error):
            break

    return RootResult(xr, policy.converged(error), len(trace), trace)
