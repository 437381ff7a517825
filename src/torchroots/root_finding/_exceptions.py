"""Exception and warning classes for root finding module."""


class RootFindingError(Exception):
    """Base exception for root finding errors."""

    pass


class ExpressionError(RootFindingError, ValueError):
    """Raised when an expression string cannot be parsed."""

    pass


class EvaluationError(RootFindingError):
    """Raised when a function is undefined at a point and failures are not tolerated."""

    pass


class BracketError(RootFindingError):
    """Raised when bracket doesn't contain sign change."""

    pass


class NoSignChangeError(BracketError):
    """Raised when a sampled range contains no sign change."""

    pass


class DegenerateSlopeError(RootFindingError):
    """Raised when a secant-type update divides by f(x2) - f(x1) == 0."""

    pass


class DerivativeError(RootFindingError):
    """Raised when derivative computation fails (e.g., zero derivative)."""

    pass


class EvaluationWarning(RuntimeWarning):
    """Issued when a function evaluates to an undefined value."""

    pass


class InapplicableMethodWarning(RuntimeWarning):
    """Issued when a method's applicability check rejects its inputs."""

    pass
