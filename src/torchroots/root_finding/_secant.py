"""Secant root finding method."""

import math

from ._convergence import ConvergencePolicy, percent_relative_error
from ._evaluator import Evaluator
from ._exceptions import DegenerateSlopeError
from ._trace import RootResult, SecantRecord, Trace


def _secant_step(x1: float, x2: float, fx1: float, fx2: float) -> float:
    """Return ``x2 - f(x2) * (x2 - x1) / (f(x2) - f(x1))``."""
    denominator = fx2 - fx1
    if denominator == 0:
        raise DegenerateSlopeError(
            f"f(x2) - f(x1) = {fx2} - {fx1} gives 0 (x1 = {x1}, x2 = {x2})"
        )
    return x2 - fx2 * (x2 - x1) / denominator


def secant(
    f: Evaluator,
    x1: float,
    x2: float,
    *,
    tol: str | float | ConvergencePolicy = 1e-6,
    maxiter: int = 50,
) -> RootResult:
    """
    Find a root of f(x) = 0 using the Secant method.

    The Secant method replaces the derivative of Newton's method with the
    slope through the two latest points:
    ``xr = x2 - f(x2) * (x2 - x1) / (f(x2) - f(x1))``, then slides the
    window ``x1 <- x2, x2 <- xr``. No bracket is maintained and the
    derivative is never evaluated.

    Parameters
    ----------
    f : Evaluator
        Function to solve.
    x1, x2 : float
        Two initial guesses. They need not bracket the root.
    tol : str, float or ConvergencePolicy, default=1e-6
        Tolerance literal. In absolute mode the error is the half-width
        ``|x2 - x1| / 2`` of the window a pass starts from; in percent mode
        it is the percent-relative change between successive estimates.
    maxiter : int, default=50
        Maximum number of passes.

    Returns
    -------
    RootResult
        ``root`` is the newest estimate. Records hold the window before the
        slide, and ``error`` is measured on that same window.

    Raises
    ------
    DegenerateSlopeError
        If ``f(x2) == f(x1)`` on any pass.

    Examples
    --------
    >>> f = Evaluator("x**2 - 2")
    >>> result = secant(f, 1.0, 2.0)
    >>> round(result.root, 5)
    1.41421
    >>> result.converged
    True

    Notes
    -----
    **Loop shape**: the test runs before each pass. In absolute mode, seeds
    already closer than ``2 * tol`` produce an empty trace and ``x2`` as the
    root. In percent mode the first pass always executes.

    **Rounding**: each new estimate is rounded to the evaluator's precision,
    so the window settles on the same decimal grid as the function values.
    When a new estimate repeats ``x2`` the next window would have zero
    width, so the run ends there and counts as converged.

    See Also
    --------
    false_position : Same update with bracket maintenance
    newton : Uses the exact derivative instead of a secant slope
    """
    if maxiter < 1:
        raise ValueError(f"maxiter must be at least 1, got {maxiter}")

    policy = ConvergencePolicy.parse(tol)

    fx1 = f.evaluate(x1)
    fx2 = f.evaluate(x2)

    trace = Trace(SecantRecord)
    xr = None
    error = math.inf if policy.is_percent else f.round(abs(x2 - x1) / 2)
    settled = False

    while not settled and policy.keep_iterating(error) and len(trace) < maxiter:
        previous = xr
        xr = f.round(_secant_step(x1, x2, fx1, fx2))
        fxr = f.evaluate(xr)

        if policy.is_percent:
            error = f.round(percent_relative_error(xr, previous))
        else:
            error = f.round(abs(x2 - x1) / 2)

        trace.append(SecantRecord(len(trace) + 1, x1, x2, fx1, fx2, xr, fxr, error))

        # A repeated estimate would leave a zero-width window.
        settled = xr == x2

        x1, fx1 = x2, fx2
        x2, fx2 = xr, fxr

    converged = not math.isnan(x2) and (settled or policy.converged(error))
    return RootResult(x2, converged, len(trace), trace)
