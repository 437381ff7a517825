"""Iteration records, traces and results of root finding methods."""

from collections.abc import Sequence
from typing import Any, NamedTuple, Optional

import torch
from tensordict import TensorDict


class BisectionRecord(NamedTuple):
    """One pass of the bisection method, with the bracket before the update."""

    iteration: int
    x1: float
    x2: float
    xr: float
    f_x1: float
    f_x2: float
    f_xr: float
    error: float


class FalsePositionRecord(NamedTuple):
    """One pass of the false position or secant method."""

    iteration: int
    x1: float
    x2: float
    f_x1: float
    f_x2: float
    xr: float
    f_xr: float
    error: float


SecantRecord = FalsePositionRecord


class NewtonRecord(NamedTuple):
    """One pass of the Newton-Raphson method, with ``x1`` before the update."""

    iteration: int
    x1: float
    f_x1: float
    df_x1: float
    xr: float
    f_xr: float
    error: float


class FixedPointRecord(NamedTuple):
    """One pass of fixed-point iteration ``x -> g(x)``."""

    iteration: int
    x: float
    g_x: float
    error: float


HEADERS = {
    "iteration": "Iteration",
    "x": "X",
    "x1": "X1",
    "x2": "X2",
    "xr": "XR",
    "f_x1": "F(X1)",
    "f_x2": "F(X2)",
    "f_xr": "F(XR)",
    "df_x1": "F'(X1)",
    "g_x": "G(X)",
    "error": "Error",
}


class Trace(Sequence):
    """Append-only, ordered sequence of iteration records of one type.

    Parameters
    ----------
    record_type : type
        The ``NamedTuple`` class of the records this trace holds.

    Examples
    --------
    >>> trace = Trace(FixedPointRecord)
    >>> trace.append(FixedPointRecord(1, 0.5, 0.877583, float("inf")))
    >>> trace.headers
    ('Iteration', 'X', 'G(X)', 'Error')
    >>> trace.rows()[0]["g_x"]
    0.877583
    """

    def __init__(self, record_type: type):
        self._record_type = record_type
        self._records: list = []

    def __len__(self) -> int:
        return len(self._records)

    def __getitem__(self, index):
        if isinstance(index, slice):
            return tuple(self._records[index])
        return self._records[index]

    def __repr__(self) -> str:
        return f"Trace({self._record_type.__name__}, {len(self)} records)"

    @property
    def record_type(self) -> type:
        return self._record_type

    @property
    def columns(self) -> tuple[str, ...]:
        return tuple(self._record_type._fields)

    @property
    def headers(self) -> tuple[str, ...]:
        return tuple(HEADERS[column] for column in self.columns)

    @property
    def last(self) -> Optional[Any]:
        return self._records[-1] if self._records else None

    def append(self, record) -> None:
        """Append the record of the next iteration.

        Raises
        ------
        TypeError
            If ``record`` is not of this trace's record type.
        ValueError
            If ``record.iteration`` is not ``len(self) + 1``.
        """
        if not isinstance(record, self._record_type):
            raise TypeError(
                f"expected {self._record_type.__name__}, got {type(record).__name__}"
            )
        if record.iteration != len(self._records) + 1:
            raise ValueError(
                f"expected iteration {len(self._records) + 1}, got {record.iteration}"
            )
        self._records.append(record)

    def rows(self) -> list[dict[str, Any]]:
        """Records as flat dictionaries in column order."""
        return [record._asdict() for record in self._records]

    def to_tensordict(self) -> TensorDict:
        """Columnar view of the trace.

        Returns
        -------
        TensorDict
            One 1-D tensor per column (``int64`` for ``iteration``,
            ``float64`` otherwise) with ``batch_size=[len(self)]``.
        """
        columns = {}
        for i, column in enumerate(self.columns):
            dtype = torch.int64 if column == "iteration" else torch.float64
            columns[column] = torch.tensor(
                [record[i] for record in self._records], dtype=dtype
            )
        return TensorDict(columns, batch_size=[len(self._records)])


class RootResult(NamedTuple):
    """Result of a root finding method.

    Parameters
    ----------
    root : float
        Final estimate. NaN when the method was not applicable.
    converged : bool
        Whether the stopping error fell below the tolerance within
        ``maxiter`` iterations.
    num_iterations : int
        Number of passes performed, equal to ``len(trace)``.
    trace : Trace
        Per-iteration records, owned by the caller.
    """

    root: float
    converged: bool
    num_iterations: int
    trace: Trace
