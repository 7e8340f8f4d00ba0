"""Parallel pool - fan the same chain out over labeled inputs and back in."""

from .ops import (
    aggregate_each,
    combine_each,
    f_combine_each,
    f_reduce_each,
    merge_each,
    reduce_each,
)
from .pool import Mux, mux

__all__ = [
    "Mux",
    "mux",
    "aggregate_each",
    "combine_each",
    "f_combine_each",
    "merge_each",
    "reduce_each",
    "f_reduce_each",
]
