"""Symbolic expression utilities for root finding."""

import builtins
import functools
from typing import Callable

import sympy
import torch
from sympy.printing.pycode import PythonCodePrinter
from torch import Tensor

from ._exceptions import ExpressionError


def _elementwise(fn: Callable[..., Tensor]) -> Callable[..., Tensor]:
    # Constant subexpressions such as sqrt(2) arrive as Python numbers.
    @functools.wraps(fn)
    def wrapped(*args):
        return fn(*(torch.as_tensor(arg, dtype=torch.float64) for arg in args))

    return wrapped


def _maximum(*args: Tensor) -> Tensor:
    return functools.reduce(torch.maximum, args)


def _minimum(*args: Tensor) -> Tensor:
    return functools.reduce(torch.minimum, args)


def _heaviside(x: Tensor, h0: float = 0.5) -> Tensor:
    return torch.heaviside(x, torch.as_tensor(h0, dtype=x.dtype))


# Names emitted by the code printer, resolved against PyTorch so compiled
# expressions accept and return tensors.
_TORCH_NAMESPACE = {
    name: _elementwise(fn)
    for name, fn in {
        "sin": torch.sin,
        "cos": torch.cos,
        "tan": torch.tan,
        "asin": torch.asin,
        "acos": torch.acos,
        "atan": torch.atan,
        "atan2": torch.atan2,
        "sinh": torch.sinh,
        "cosh": torch.cosh,
        "tanh": torch.tanh,
        "exp": torch.exp,
        "log": torch.log,
        "sqrt": torch.sqrt,
        "erf": torch.erf,
        "Abs": torch.abs,
        "sign": torch.sign,
        "floor": torch.floor,
        "ceiling": torch.ceil,
        "Max": _maximum,
        "Min": _minimum,
        "Heaviside": _heaviside,
    }.items()
}


class _TorchCodePrinter(PythonCodePrinter):
    """Python code printer that prints ``sign`` as a plain call."""

    def _print_sign(self, expr):
        return f"sign({self._print(expr.args[0])})"


def parse_expression(expression: str, variable: str = "x") -> sympy.Expr:
    """Parse an expression string in a single real variable.

    Parameters
    ----------
    expression : str
        Expression such as ``"x**2 - 2"`` or ``"cos(x) - x"``. ``^`` is
        accepted as exponentiation.
    variable : str
        Name of the independent variable.

    Returns
    -------
    sympy.Expr
        Parsed expression.

    Raises
    ------
    ExpressionError
        If the string is empty, cannot be parsed, is not an arithmetic
        expression, or references symbols other than ``variable``.
    """
    if not expression or not expression.strip():
        raise ExpressionError("Function expression cannot be empty.")

    symbol = sympy.Symbol(variable, real=True)
    try:
        expr = sympy.sympify(expression, locals={variable: symbol})
    except (sympy.SympifyError, SyntaxError, TypeError) as exc:
        raise ExpressionError(
            f"Invalid function expression: {expression}"
        ) from exc

    if not isinstance(expr, sympy.Expr):
        raise ExpressionError(
            f"Expression {expression!r} is not an arithmetic expression."
        )

    foreign = sorted(str(s) for s in expr.free_symbols if s != symbol)
    if foreign:
        raise ExpressionError(
            f"Expression {expression!r} uses symbols other than "
            f"{variable!r}: {', '.join(foreign)}"
        )

    return expr


def differentiate(expr: sympy.Expr, variable: str = "x") -> sympy.Expr:
    """Return the symbolic derivative of ``expr`` with respect to ``variable``."""
    return sympy.diff(expr, sympy.Symbol(variable, real=True))


def compile_expression(
    expr: sympy.Expr,
    variable: str = "x",
) -> Callable[[Tensor], Tensor]:
    """Compile a sympy expression into an elementwise tensor function.

    Parameters
    ----------
    expr : sympy.Expr
        Expression in ``variable``.
    variable : str
        Name of the independent variable.

    Returns
    -------
    Callable[[Tensor], Tensor]
        Function mapping a tensor of inputs to a tensor of the same shape
        and dtype. Constant expressions are broadcast to the input shape.

    Raises
    ------
    ExpressionError
        If the expression uses a function with no tensor implementation,
        such as an unevaluated derivative.

    Examples
    --------
    >>> import torch
    >>> f = compile_expression(parse_expression("x**2 - sqrt(2)"))
    >>> f(torch.tensor([1.0, 2.0], dtype=torch.float64))
    tensor([-0.4142,  2.5858], dtype=torch.float64)
    """
    symbol = sympy.Symbol(variable, real=True)
    printer = _TorchCodePrinter(
        {
            "fully_qualified_modules": False,
            "inline": True,
            "allow_unknown_functions": True,
            "user_functions": {name: name for name in _TORCH_NAMESPACE},
        }
    )
    try:
        fn = sympy.lambdify(
            symbol,
            expr,
            modules=[_TORCH_NAMESPACE, "math"],
            printer=printer,
        )
    except (NotImplementedError, ValueError, TypeError, SyntaxError) as exc:
        raise ExpressionError(f"Cannot compile {expr}: {exc}") from exc

    unresolved = sorted(
        name
        for name in fn.__code__.co_names
        if name not in fn.__globals__ and not hasattr(builtins, name)
    )
    if unresolved:
        raise ExpressionError(
            f"Cannot compile {expr}: unsupported function(s) "
            f"{', '.join(unresolved)}"
        )

    def compiled(x: Tensor) -> Tensor:
        y = fn(x)
        if not isinstance(y, Tensor):
            y = torch.as_tensor(float(y), dtype=x.dtype, device=x.device)
        return y.expand_as(x).to(x.dtype)

    return compiled
