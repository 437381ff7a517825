"""Bisection root finding method."""

import math

from ._bracket import check_bracket, find_sign_change_interval
from ._convergence import ConvergencePolicy, percent_relative_error
from ._evaluator import Evaluator
from ._trace import BisectionRecord, RootResult, Trace


def _keep_bisecting(policy: ConvergencePolicy, error: float, fxr: float) -> bool:
    if policy.is_percent:
        return policy.keep_iterating(error)
    return policy.keep_iterating(error) or fxr != 0


def bisection(
    f: Evaluator,
    x1: float,
    x2: float,
    *,
    tol: str | float | ConvergencePolicy = 1e-6,
    step: float | None = None,
    maxiter: int = 100,
) -> RootResult:
    """
    Find a root of f(x) = 0 in a bracket by repeated halving.

    Each pass evaluates the midpoint ``xr = (x1 + x2) / 2`` and keeps the
    half of the bracket on which ``f`` changes sign: ``x2 = xr`` when
    ``f(x1) * f(xr) < 0``, otherwise ``x1 = xr``.

    Parameters
    ----------
    f : Evaluator
        Function to solve.
    x1, x2 : float
        Bracket endpoints, or the sampling range when ``step`` is given.
    tol : str, float or ConvergencePolicy, default=1e-6
        Tolerance literal. ``"0.5%"`` selects percent-relative error between
        successive midpoints; a bare number selects the absolute error
        ``|x1 - x2| / 2`` of the updated bracket.
    step : float, optional
        If given, ``f`` is sampled over ``[x1, x2]`` with this spacing and
        the first sign change found replaces the bracket.
    maxiter : int, default=100
        Maximum number of passes.

    Returns
    -------
    RootResult
        ``root`` is the last midpoint. Each record holds the bracket before
        that pass's update; ``error`` is the value tested after the update.

    Raises
    ------
    NoSignChangeError
        If ``step`` is given and the sampled range has no sign change.
    BracketError
        If ``f(x1) * f(x2) >= 0``.

    Examples
    --------
    >>> f = Evaluator("x**2 - 2")
    >>> result = bisection(f, 1.0, 2.0, tol="0.001%")
    >>> round(result.root, 4)
    1.4142
    >>> result.trace[0].xr
    1.5

    Notes
    -----
    **Absolute mode** keeps iterating while ``|x1 - x2| / 2 >= tol`` *or*
    ``f(xr) != 0``, where ``f(xr)`` is rounded to the evaluator's precision.
    A run therefore ends only once the bracket is narrow enough and the
    midpoint's residual rounds to zero.

    **Exact roots**: when ``f(xr)`` is exactly zero the bracket collapses onto
    ``xr``.

    **Undefined values**: a NaN ``f(xr)`` ends the run with
    ``converged=False``.

    See Also
    --------
    false_position : Bracketed method using linear interpolation
    """
    if maxiter < 1:
        raise ValueError(f"maxiter must be at least 1, got {maxiter}")

    policy = ConvergencePolicy.parse(tol)

    if step is not None:
        x1, x2 = find_sign_change_interval(f.evaluate_over_range(x1, x2, step))

    fx1 = f.evaluate(x1)
    fx2 = f.evaluate(x2)
    check_bracket(x1, x2, fx1, fx2)

    trace = Trace(BisectionRecord)
    xr = None
    fxr = math.nan
    error = math.inf

    for iteration in range(1, maxiter + 1):
        previous = xr
        xr = (x1 + x2) / 2
        fxr = f.evaluate(xr)

        record_x1, record_x2, record_fx1, record_fx2 = x1, x2, fx1, fx2

        if fxr == 0:
            x1 = x2 = xr
            fx1 = fx2 = fxr
        elif fx1 * fxr < 0:
            x2, fx2 = xr, fxr
        else:
            x1, fx1 = xr, fxr

        if policy.is_percent:
            error = f.round(percent_relative_error(xr, previous))
        else:
            error = f.round(abs(x1 - x2) / 2)

        trace.append(
            BisectionRecord(
                iteration,
                record_x1,
                record_x2,
                xr,
                record_fx1,
                record_fx2,
                fxr,
                error,
            )
        )

        if math.isnan(fxr) or not _keep_bisecting(policy, error, fxr):
            break

    converged = not math.isnan(fxr) and not _keep_bisecting(policy, error, fxr)
    return RootResult(xr, converged, len(trace), trace)
