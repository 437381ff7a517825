from ._bisection import bisection
from ._bracket import check_bracket, find_sign_change_interval
from ._convergence import (
    ConvergenceMode,
    ConvergencePolicy,
    percent_relative_error,
)
from ._evaluator import Evaluator
from ._exceptions import (
    BracketError,
    DegenerateSlopeError,
    DerivativeError,
    EvaluationError,
    EvaluationWarning,
    ExpressionError,
    InapplicableMethodWarning,
    NoSignChangeError,
    RootFindingError,
)
from ._expression import compile_expression, differentiate, parse_expression
from ._false_position import false_position
from ._fixed_point import can_apply_fixed_point, fixed_point
from ._newton import newton
from ._root_finder import RootFinder
from ._secant import secant
from ._trace import (
    BisectionRecord,
    FalsePositionRecord,
    FixedPointRecord,
    NewtonRecord,
    RootResult,
    SecantRecord,
    Trace,
)

__all__ = [
    "bisection",
    "can_apply_fixed_point",
    "check_bracket",
    "compile_expression",
    "differentiate",
    "false_position",
    "find_sign_change_interval",
    "fixed_point",
    "newton",
    "parse_expression",
    "percent_relative_error",
    "secant",
    "BisectionRecord",
    "ConvergenceMode",
    "ConvergencePolicy",
    "Evaluator",
    "FalsePositionRecord",
    "FixedPointRecord",
    "NewtonRecord",
    "RootFinder",
    "RootResult",
    "SecantRecord",
    "Trace",
    "BracketError",
    "DegenerateSlopeError",
    "DerivativeError",
    "EvaluationError",
    "EvaluationWarning",
    "ExpressionError",
    "InapplicableMethodWarning",
    "NoSignChangeError",
    "RootFindingError",
]
