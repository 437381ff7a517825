"""Testing utilities for root finding methods."""

from . import strategies

__all__ = [
    "strategies",
]
