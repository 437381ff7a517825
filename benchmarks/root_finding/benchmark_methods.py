"""Benchmark root finding methods.

Compares bracketed (bisection, false position) and open (Newton-Raphson,
secant) methods on the same functions, reporting time per solve and the
number of iterations each method needs.
"""

import time

from torchroots.root_finding import RootFinder

PROBLEMS = [
    ("x**2 - 2", 1.0, 2.0),
    ("x**3 - 2*x - 5", 2.0, 3.0),
    ("cos(x) - x", 0.0, 1.0),
    ("exp(x) - 3*x", 0.0, 1.0),
]


def benchmark_method(finder: RootFinder, method: str, x1: float, x2: float, n_iterations: int = 20):
    """Benchmark one method on one problem.

    Returns
    -------
    tuple[float, int]
        Average time per solve in milliseconds and the number of
        iterations of the last solve.
    """
    if method == "newton":
        run = lambda: finder.newton(x1)  # noqa: E731
    else:
        run = lambda: getattr(finder, method)(x1, x2)  # noqa: E731

    # Warmup
    for _ in range(3):
        result = run()

    start = time.perf_counter()
    for _ in range(n_iterations):
        result = run()

    elapsed = time.perf_counter() - start
    return elapsed / n_iterations * 1000, result.num_iterations


def main():
    """Run the benchmark over all problems and methods."""
    methods = ["bisection", "false_position", "newton", "secant"]

    print("Root Finding Benchmark (tol = 1e-6)")
    print("=" * 78)
    print(f"{'Function':>18} " + " ".join(f"{m:>14}" for m in methods))
    print("-" * 78)

    for expression, x1, x2 in PROBLEMS:
        finder = RootFinder(expression, "1e-6")
        cells = []
        for method in methods:
            ms, iterations = benchmark_method(finder, method, x1, x2)
            cells.append(f"{ms:>7.2f}ms/{iterations:<4d}")
        print(f"{expression:>18} " + " ".join(f"{c:>14}" for c in cells))

    print("-" * 78)
    print("Cells show time per solve and iterations to converge.")


if __name__ == "__main__":
    main()
