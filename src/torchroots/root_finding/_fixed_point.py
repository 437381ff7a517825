"""Fixed-point iteration method."""

import math
import warnings

from ._convergence import ConvergencePolicy, percent_relative_error
from ._evaluator import Evaluator
from ._exceptions import InapplicableMethodWarning
from ._trace import FixedPointRecord, RootResult, Trace


def can_apply_fixed_point(
    g: Evaluator,
    a: float,
    b: float,
    *,
    offset: float = 0.01,
) -> bool:
    """Check a sufficient condition for fixed-point iteration on ``[a, b]``.

    The test requires ``g(a)`` and ``g(b)`` to lie in ``[a, b]`` and the
    derivative to be contracting near both endpoints,
    ``|g'(a - offset)| < 1`` and ``|g'(b - offset)| < 1``. It samples the
    contraction condition rather than proving it over the whole interval.

    Parameters
    ----------
    g : Evaluator
        Iteration map.
    a, b : float
        Interval endpoints, in either order.
    offset : float, default=0.01
        Shift applied to the endpoints before evaluating ``g'``.

    Returns
    -------
    bool
        False when any condition fails or any value is undefined.

    Examples
    --------
    >>> can_apply_fixed_point(Evaluator("cos(x)"), 0.0, 1.0)
    True
    >>> can_apply_fixed_point(Evaluator("2*x"), 0.0, 1.0)
    False
    """
    lo, hi = min(a, b), max(a, b)

    ga = g.evaluate(a)
    gb = g.evaluate(b)
    if not (lo <= ga <= hi and lo <= gb <= hi):
        return False

    dga = g.evaluate_derivative(a - offset)
    dgb = g.evaluate_derivative(b - offset)
    return abs(dga) < 1 and abs(dgb) < 1


def fixed_point(
    g: Evaluator,
    a: float,
    b: float | None = None,
    *,
    tol: str | float | ConvergencePolicy = 1e-6,
    maxiter: int = 500,
) -> RootResult:
    """
    Find fixed point of g(x) = x using simple iteration.

    The fixed-point iteration repeatedly applies the function g until
    convergence: x_{n+1} = g(x_n). This converges when g is a contraction
    mapping, i.e., |g(x) - g(y)| < |x - y| for all x, y in the domain.

    Parameters
    ----------
    g : Evaluator
        Iteration map.
    a : float
        Seed, or first interval endpoint when ``b`` is given.
    b : float, optional
        Second interval endpoint. When given, :func:`can_apply_fixed_point`
        must accept ``[a, b]`` and the seed is the midpoint.
    tol : str, float or ConvergencePolicy, default=1e-6
        Tolerance on the percent-relative change between successive
        iterates. The error is always percent-relative; a ``%`` suffix is
        accepted but not required.
    maxiter : int, default=500
        Maximum number of passes.

    Returns
    -------
    RootResult
        ``root`` is the last iterate. When the applicability check fails,
        ``root`` is NaN, ``converged`` is False and the trace is empty.

    Warns
    -----
    InapplicableMethodWarning
        If the applicability check rejects ``[a, b]``.

    Examples
    --------
    Find the fixed point of cos(x) (Dottie number):

    >>> result = fixed_point(Evaluator("cos(x)"), 0.0, 1.0)
    >>> result.root
    0.739085
    >>> result.converged
    True

    Notes
    -----
    Iterates are the evaluator's rounded values of ``g``, so a converged run
    ends when two successive iterates coincide or differ by less than the
    tolerance.

    See Also
    --------
    can_apply_fixed_point : Applicability check
    newton : Newton-Raphson method for root-finding
    """
    if maxiter < 1:
        raise ValueError(f"maxiter must be at least 1, got {maxiter}")

    policy = ConvergencePolicy.parse(tol)
    trace = Trace(FixedPointRecord)

    if b is not None:
        if not can_apply_fixed_point(g, a, b):
            warnings.warn(
                f"Fixed-point iteration is not applicable to "
                f"g({g.variable}) = {g.function} on [{a}, {b}]",
                InapplicableMethodWarning,
                stacklevel=2,
            )
            return RootResult(math.nan, False, 0, trace)
        x = (a + b) / 2
    else:
        x = a

    while True:
        gx = g.evaluate(x)
        error = g.round(percent_relative_error(gx, x))

        trace.append(FixedPointRecord(len(trace) + 1, x, gx, error))
        x = gx

        if not policy.keep_iterating(error) or len(trace) >= maxiter:
            break

    return RootResult(x, policy.converged(error), len(trace), trace)
