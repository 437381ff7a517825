"""Typer CLI for torchroots. One command per root finding method."""

from __future__ import annotations

import json
import logging
import math
from typing import Callable, Optional

import typer

from torchroots import __version__
from torchroots.root_finding import RootFinder, RootFindingError, RootResult, Trace

logger = logging.getLogger(__name__)

app = typer.Typer(help="Classical root finding with iteration tables.")

FORMATS = ("table", "json")


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )
    # Evaluation failures and inapplicable methods are reported as warnings.
    logging.captureWarnings(True)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"torchroots {__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
) -> None:
    _configure_logging(verbose)


# ── Rendering ──


def _format_value(value, fix: int) -> str:
    if isinstance(value, int):
        return str(value)
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "inf" if value > 0 else "-inf"
    return f"{value:.{fix}f}"


def render_table(trace: Trace, fix: int = 6) -> str:
    """Render a trace as a fixed-width text table with the method's headers."""
    headers = list(trace.headers)
    rows = [[_format_value(v, fix) for v in record] for record in trace]

    widths = [
        max(len(header), *(len(row[i]) for row in rows)) if rows else len(header)
        for i, header in enumerate(headers)
    ]
    rule = "+" + "+".join("-" * (w + 2) for w in widths) + "+"

    def line(values: list[str]) -> str:
        cells = (value.rjust(widths[i]) for i, value in enumerate(values))
        return "| " + " | ".join(cells) + " |"

    out = [rule, line(headers), rule]
    out.extend(line(row) for row in rows)
    out.append(rule)
    return "\n".join(out)


def render_json(trace: Trace) -> str:
    """Render a trace as JSON lines, one object per iteration."""
    return "\n".join(json.dumps(row) for row in trace.rows())


def _summary(result: RootResult, fix: int) -> str:
    if math.isnan(result.root) and result.num_iterations == 0:
        return "No root: the method is not applicable to the given interval."
    status = "converged" if result.converged else "did not converge"
    return (
        f"root = {_format_value(result.root, fix)} "
        f"({status} after {result.num_iterations} iterations)"
    )


def _solve(
    build: Callable[[], RootFinder],
    run: Callable[[RootFinder], RootResult],
    fmt: str,
    fix: int,
    show_derivative: bool = False,
) -> RootResult:
    if fmt not in FORMATS:
        raise typer.BadParameter(f"format must be one of {', '.join(FORMATS)}")

    try:
        finder = build()
        logger.debug("Solving with %r", finder)
        if show_derivative and fmt == "table":
            ev = finder.evaluator
            typer.echo(f"f'({ev.variable}) = {ev.derivative}")
        result = run(finder)
    except (RootFindingError, ValueError) as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(1)

    if fmt == "json":
        if len(result.trace):
            typer.echo(render_json(result.trace))
    else:
        typer.echo(render_table(result.trace, fix))
        typer.echo(_summary(result, fix))

    logger.debug(
        "root=%s converged=%s iterations=%d",
        result.root,
        result.converged,
        result.num_iterations,
    )
    return result


# ── Commands ──


@app.command()
def bisection(
    function: str = typer.Option(..., "--function", "-f", prompt="f(x)", help="Function expression"),
    x1: float = typer.Option(..., "--x1", prompt="X1", help="Left bracket endpoint"),
    x2: float = typer.Option(..., "--x2", prompt="X2", help="Right bracket endpoint"),
    tolerance: str = typer.Option(..., "--tolerance", "-t", prompt="Tolerance (TOL)", help="Absolute, or percent-relative with a trailing %"),
    step: Optional[float] = typer.Option(None, help="Sample [x1, x2] with this spacing to locate the bracket"),
    variable: str = typer.Option("x", help="Name of the variable"),
    fix: int = typer.Option(6, help="Decimal digits kept when rounding"),
    maxiter: int = typer.Option(100, help="Maximum number of iterations"),
    fmt: str = typer.Option("table", "--format", help="Output format: table or json"),
):
    """Bisection method on a bracket [x1, x2]."""
    _solve(
        lambda: RootFinder(function, tolerance, variable=variable, fix=fix),
        lambda finder: finder.bisection(x1, x2, step, maxiter=maxiter),
        fmt,
        fix,
    )


@app.command("false-position")
def false_position(
    function: str = typer.Option(..., "--function", "-f", prompt="f(x)", help="Function expression"),
    x1: float = typer.Option(..., "--x1", prompt="X1", help="Left bracket endpoint"),
    x2: float = typer.Option(..., "--x2", prompt="X2", help="Right bracket endpoint"),
    tolerance: str = typer.Option(..., "--tolerance", "-t", prompt="Tolerance (TOL)", help="Absolute, or percent-relative with a trailing %"),
    variable: str = typer.Option("x", help="Name of the variable"),
    fix: int = typer.Option(6, help="Decimal digits kept when rounding"),
    maxiter: int = typer.Option(100, help="Maximum number of iterations"),
    fmt: str = typer.Option("table", "--format", help="Output format: table or json"),
):
    """False position (regula falsi) method on a bracket [x1, x2]."""
    _solve(
        lambda: RootFinder(function, tolerance, variable=variable, fix=fix),
        lambda finder: finder.false_position(x1, x2, maxiter=maxiter),
        fmt,
        fix,
    )


@app.command()
def newton(
    function: str = typer.Option(..., "--function", "-f", prompt="f(x)", help="Function expression"),
    x1: float = typer.Option(..., "--x1", prompt="X1", help="Initial guess"),
    tolerance: str = typer.Option(..., "--tolerance", "-t", prompt="Tolerance (TOL)", help="Absolute, or percent-relative with a trailing %"),
    variable: str = typer.Option("x", help="Name of the variable"),
    fix: int = typer.Option(6, help="Decimal digits kept when rounding"),
    maxiter: int = typer.Option(50, help="Maximum number of iterations"),
    fmt: str = typer.Option("table", "--format", help="Output format: table or json"),
):
    """Newton-Raphson method from an initial guess."""
    _solve(
        lambda: RootFinder(function, tolerance, variable=variable, fix=fix),
        lambda finder: finder.newton(x1, maxiter=maxiter),
        fmt,
        fix,
        show_derivative=True,
    )


@app.command()
def secant(
    function: str = typer.Option(..., "--function", "-f", prompt="f(x)", help="Function expression"),
    x1: float = typer.Option(..., "--x1", prompt="X1", help="First initial guess"),
    x2: float = typer.Option(..., "--x2", prompt="X2", help="Second initial guess"),
    tolerance: str = typer.Option(..., "--tolerance", "-t", prompt="Tolerance (TOL)", help="Absolute, or percent-relative with a trailing %"),
    variable: str = typer.Option("x", help="Name of the variable"),
    fix: int = typer.Option(6, help="Decimal digits kept when rounding"),
    maxiter: int = typer.Option(50, help="Maximum number of iterations"),
    fmt: str = typer.Option("table", "--format", help="Output format: table or json"),
):
    """Secant method from two initial guesses."""
    _solve(
        lambda: RootFinder(function, tolerance, variable=variable, fix=fix),
        lambda finder: finder.secant(x1, x2, maxiter=maxiter),
        fmt,
        fix,
    )


@app.command("fixed-point")
def fixed_point(
    function: str = typer.Option(..., "--function", "-f", prompt="g(x)", help="Iteration map g in x = g(x)"),
    x1: float = typer.Option(..., "--x1", prompt="X1", help="Seed, or left interval endpoint"),
    x2: Optional[float] = typer.Option(None, "--x2", help="Right interval endpoint; enables the applicability check"),
    tolerance: str = typer.Option(..., "--tolerance", "-t", prompt="Tolerance (TOL)", help="Percent-relative tolerance"),
    variable: str = typer.Option("x", help="Name of the variable"),
    fix: int = typer.Option(6, help="Decimal digits kept when rounding"),
    maxiter: int = typer.Option(500, help="Maximum number of iterations"),
    fmt: str = typer.Option("table", "--format", help="Output format: table or json"),
):
    """Fixed-point iteration x = g(x)."""
    result = _solve(
        lambda: RootFinder(function, tolerance, variable=variable, fix=fix),
        lambda finder: finder.fixed_point(x1, x2, maxiter=maxiter),
        fmt,
        fix,
    )
    if math.isnan(result.root):
        raise typer.Exit(2)


def main():
    app()


if __name__ == "__main__":
    main()
