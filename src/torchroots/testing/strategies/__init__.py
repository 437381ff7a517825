"""Hypothesis strategies for root finding tests."""

from ._brackets import brackets
from ._roots import roots

__all__ = [
    "brackets",
    "roots",
]
