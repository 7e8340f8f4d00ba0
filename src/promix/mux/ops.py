"""Pool-level accumulators: build a Mux and fold every entry the same way."""

from collections.abc import Mapping, Sequence
from typing import Any

from promix.kernel.config import MixConfig

from .pool import Mux

Inputs = Sequence[Any] | Mapping[Any, Any]


def aggregate_each(operations: Any, inputs: Inputs, config: MixConfig | None = None) -> Mux:
    """Run aggregate() once per input entry, seeded with that entry."""
    return Mux(inputs).aggregate(operations, config)


def combine_each(operations: Any, inputs: Inputs, config: MixConfig | None = None) -> Mux:
    """Run combine() once per input entry, seeded with that entry."""
    return Mux(inputs).combine(operations, config)


def f_combine_each(operations: Any, inputs: Inputs, config: MixConfig | None = None) -> Mux:
    return Mux(inputs).f_combine(operations, config)


def merge_each(operations: Any, inputs: Inputs, config: MixConfig | None = None) -> Mux:
    return Mux(inputs).merge(operations, config)


def reduce_each(operations: Any, inputs: Inputs, config: MixConfig | None = None) -> Mux:
    """Thread every input entry through the same reduce() pipeline.

    Example:
        >>> await reduce_each([lambda n: n + 1, lambda n: n * 2], [2, 5]).de_mux()
        [6, 12]
    """
    return Mux(inputs).reduce(operations, config)


def f_reduce_each(operations: Any, inputs: Inputs, config: MixConfig | None = None) -> Mux:
    return Mux(inputs).f_reduce(operations, config)
