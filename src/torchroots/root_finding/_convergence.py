"""Convergence utilities for root finding."""

import enum
import math
from dataclasses import dataclass


class ConvergenceMode(enum.Enum):
    """How the stopping error of a method run is measured."""

    ABSOLUTE = "absolute"
    PERCENT_RELATIVE = "percent_relative"


@dataclass(frozen=True)
class ConvergencePolicy:
    """Stopping rule shared by every iteration of a method run.

    Attributes
    ----------
    tolerance : float
        Non-negative threshold. A method keeps iterating while its error is
        ``>= tolerance``.
    mode : ConvergenceMode
        Selects between absolute and percent-relative error formulas.
    """

    tolerance: float
    mode: ConvergenceMode = ConvergenceMode.ABSOLUTE

    def __post_init__(self):
        if not math.isfinite(self.tolerance) or self.tolerance < 0:
            raise ValueError(
                f"tolerance must be a finite non-negative number, got {self.tolerance}"
            )

    @classmethod
    def parse(cls, tolerance: "str | float | ConvergencePolicy") -> "ConvergencePolicy":
        """Build a policy from a tolerance literal.

        A trailing ``%`` selects percent-relative mode, anything else is an
        absolute tolerance.

        >>> ConvergencePolicy.parse("0.5%")
        ConvergencePolicy(tolerance=0.5, mode=<ConvergenceMode.PERCENT_RELATIVE: 'percent_relative'>)
        >>> ConvergencePolicy.parse(1e-6).mode
        <ConvergenceMode.ABSOLUTE: 'absolute'>
        """
        if isinstance(tolerance, ConvergencePolicy):
            return tolerance
        if isinstance(tolerance, (int, float)) and not isinstance(tolerance, bool):
            return cls(float(tolerance))
        if not isinstance(tolerance, str):
            raise TypeError(
                f"tolerance must be a string or a number, got {type(tolerance).__name__}"
            )

        text = tolerance.strip()
        mode = ConvergenceMode.ABSOLUTE
        if text.endswith("%"):
            mode = ConvergenceMode.PERCENT_RELATIVE
            text = text[:-1].strip()

        try:
            value = float(text)
        except ValueError:
            raise ValueError(f"Invalid tolerance: {tolerance!r}") from None

        return cls(value, mode)

    @property
    def is_percent(self) -> bool:
        return self.mode is ConvergenceMode.PERCENT_RELATIVE

    def keep_iterating(self, error: float) -> bool:
        """Return True while ``error >= tolerance``. NaN stops iteration."""
        return error >= self.tolerance

    def converged(self, error: float) -> bool:
        """Return True when ``error < tolerance``. NaN never converges."""
        return error < self.tolerance


def percent_relative_error(current: float, previous: float | None) -> float:
    """Percent-relative change ``|(current - previous) / current| * 100``.

    Parameters
    ----------
    current : float
        Newest estimate.
    previous : float or None
        Preceding estimate, or None on the first iteration.

    Returns
    -------
    float
        ``inf`` when there is no previous estimate, ``0.0`` when both
        estimates are equal, and ``inf`` when ``current`` is zero but
        ``previous`` is not.
    """
    if previous is None:
        return math.inf
    if current == previous:
        return 0.0
    if current == 0:
        return math.inf
    return abs((current - previous) / current) * 100
