"""Newton-Raphson root finding method."""

from ._convergence import ConvergencePolicy, percent_relative_error
from ._evaluator import Evaluator
from ._exceptions import DerivativeError
from ._trace import NewtonRecord, RootResult, Trace


def newton(
    f: Evaluator,
    x1: float,
    *,
    tol: str | float | ConvergencePolicy = 1e-6,
    maxiter: int = 50,
) -> RootResult:
    """
    Find a root of f(x) = 0 using Newton-Raphson method.

    Newton's method uses the iteration ``xr = x1 - f(x1) / f'(x1)`` with the
    evaluator's symbolic derivative. It converges quadratically when
    starting near a simple root, but may diverge if the initial guess is
    far from any root.

    Parameters
    ----------
    f : Evaluator
        Function to solve. Its symbolic derivative supplies ``f'``.
    x1 : float
        Initial guess.
    tol : str, float or ConvergencePolicy, default=1e-6
        Tolerance literal. In absolute mode the error is
        ``|xr - x1| * 100``; in percent mode it is the percent-relative
        change from the previous estimate (the seed on the first pass).
    maxiter : int, default=50
        Maximum number of passes.

    Returns
    -------
    RootResult
        ``root`` is the last estimate. Records hold ``x1`` before the update.

    Raises
    ------
    DerivativeError
        If ``f'(x1)`` evaluates to zero.

    Examples
    --------
    Find the square root of 2 (solve x^2 - 2 = 0):

    >>> f = Evaluator("x**2 - 2")
    >>> result = newton(f, 1.0)
    >>> result.root
    1.414214
    >>> result.num_iterations <= 10
    True

    Notes
    -----
    **Loop shape**: one pass always executes before the stopping test.

    **Rounding**: each new estimate is rounded to the evaluator's precision,
    so a converged run ends with two equal successive estimates.

    **Undefined values**: a NaN function or derivative value makes the error
    NaN, which ends the run with ``converged=False``.

    **Zero derivative**: rather than dividing by zero and carrying an
    infinite or NaN estimate through later passes, a zero ``f'(x1)`` stops
    the run with :class:`DerivativeError`. Callers that prefer a NaN result
    can catch it and fall back to :func:`secant`.

    See Also
    --------
    secant : Derivative-free variant
    """
    if maxiter < 1:
        raise ValueError(f"maxiter must be at least 1, got {maxiter}")

    policy = ConvergencePolicy.parse(tol)
    trace = Trace(NewtonRecord)

    while True:
        fx1 = f.evaluate(x1)
        dfx1 = f.evaluate_derivative(x1)
        if dfx1 == 0:
            raise DerivativeError(
                f"f'({x1}) = 0; the Newton step is undefined "
                f"(f'({f.variable}) = {f.derivative})"
            )

        xr = f.round(x1 - fx1 / dfx1)
        fxr = f.evaluate(xr)

        if policy.is_percent:
            error = f.round(percent_relative_error(xr, x1))
        else:
            error = f.round(abs(xr - x1) * 100)

        trace.append(NewtonRecord(len(trace) + 1, x1, fx1, dfx1, xr, fxr, error))
        x1 = xr

        if not policy.keep_iterating(error) or len(trace) >= maxiter:
            break

    return RootResult(x1, policy.converged(error), len(trace), trace)
