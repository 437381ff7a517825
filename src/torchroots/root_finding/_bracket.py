"""Sign-change bracket search over sampled function values."""

from typing import Mapping

import torch

from ._exceptions import BracketError, NoSignChangeError


def find_sign_change_interval(samples: Mapping[float, float]) -> tuple[float, float]:
    """Locate the first adjacent sign change in sampled function values.

    Parameters
    ----------
    samples : Mapping[float, float]
        Sample point to function value, scanned in insertion order (as
        returned by :meth:`Evaluator.evaluate_over_range`).

    Returns
    -------
    tuple[float, float]
        The pair of sample points ``(x1, x2)`` whose values satisfy
        ``f(x1) * f(x2) < 0``.

    Raises
    ------
    NoSignChangeError
        If no adjacent pair changes sign. NaN samples never match.

    Examples
    --------
    >>> find_sign_change_interval({-1.0: -2.0, -0.5: -0.1, 0.0: 0.3, 0.5: 1.2})
    (-0.5, 0.0)
    """
    points = list(samples.keys())
    if len(points) < 2:
        raise NoSignChangeError(
            f"Sequence of {len(points)} sample(s) does not contain a sign change"
        )

    values = torch.tensor(list(samples.values()), dtype=torch.float64)
    changes = torch.nonzero(values[:-1] * values[1:] < 0).flatten()

    if changes.numel() == 0:
        raise NoSignChangeError(
            f"Sequence does not contain a sign change on [{points[0]}, {points[-1]}]"
        )

    i = int(changes[0])
    return points[i], points[i + 1]


def check_bracket(x1: float, x2: float, fx1: float, fx2: float) -> None:
    """Require ``f(x1) * f(x2) < 0``.

    Raises
    ------
    BracketError
        If the endpoint values do not have strictly opposite signs (this
        includes NaN values and an endpoint that is itself a root).
    """
    if not fx1 * fx2 < 0:
        raise BracketError(
            f"f({x1}) = {fx1} and f({x2}) = {fx2} do not bracket a root; "
            "f(x1) * f(x2) must be negative"
        )
