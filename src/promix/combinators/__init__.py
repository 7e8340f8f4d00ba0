"""Combinators - ordered accumulation and logical quorum evaluation."""

# Import chain to register capabilities
from . import chain  # noqa: F401
from .logical import and_, or_, xor
from .sequential import aggregate, combine, f_combine, merge, reduce, f_reduce

__all__ = [
    "aggregate",
    "combine",
    "f_combine",
    "merge",
    "reduce",
    "f_reduce",
    "or_",
    "and_",
    "xor",
]
