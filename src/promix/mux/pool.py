"""Mux - a labeled pool of independent chains."""

from __future__ import annotations

import asyncio
import logging
import random
from collections.abc import Callable, Mapping, Sequence
from typing import Any

from promix.combinators import logical, sequential
from promix.combinators.logical import Check
from promix.kernel.config import MixConfig
from promix.kernel.errors import MuxInputError
from promix.kernel.mix import Mix
from promix.kernel.operation import ErrorValue, Operation, Value
from promix.kernel.result import Result

logger = logging.getLogger(__name__)

_random = random.Random()


class Mux:
    """Data-parallel fan-out over a list or mapping of inputs.

    Every input entry gets its own Mix chain. Continuations are applied to
    each chain independently; entries never wait on each other until
    de_mux() fans them back in. The pool keeps the input's shape (list or
    dict), its keys and its cardinality.

    Example:
        >>> await Mux([2, 5, 8]).then(lambda n: n * 2).de_mux()
        [4, 10, 16]
    """

    def __init__(self, inputs: Sequence[Any] | Mapping[Any, Any]) -> None:
        self.pool: list[Mix[Any]] | dict[Any, Mix[Any]]
        if isinstance(inputs, Mapping):
            self.pool = {key: Mix.of(item) for key, item in inputs.items()}
        elif isinstance(inputs, Sequence) and not isinstance(inputs, (str, bytes, bytearray)):
            self.pool = [Mix.of(item) for item in inputs]
        else:
            raise MuxInputError(
                "Mux input must be a mapping or a sequence. "
                f"Current input type is {type(inputs).__name__}"
            )
        logger.debug("Mux created with %d %s entries", len(self.pool), type(self.pool).__name__)

    def __len__(self) -> int:
        return len(self.pool)

    def __repr__(self) -> str:
        return f"<Mux {type(self.pool).__name__} of {len(self.pool)}>"

    def _labels(self) -> list[Any]:
        if isinstance(self.pool, dict):
            return list(self.pool)
        return list(range(len(self.pool)))

    def then(self, func: Callable[..., Any], with_key: bool = False) -> Mux:
        """Append ``func`` to every entry's chain.

        Args:
            func: Continuation receiving the entry's value
            with_key: Also pass the entry's index or key as second argument

        Returns:
            This Mux, updated in place
        """
        for label in self._labels():
            chain = self.pool[label]
            if with_key:
                self.pool[label] = chain.then(lambda value, key=label: func(value, key))
            else:
                self.pool[label] = chain.then(func)
        return self

    def _each(self, name: str, operations: Any, config: MixConfig | None) -> Mux:
        algorithm = getattr(sequential, name)
        return self.then(lambda prev: algorithm(operations, prev, config=config))

    def aggregate(self, operations: Any, config: MixConfig | None = None) -> Mux:
        return self._each("aggregate", operations, config)

    def combine(self, operations: Any, config: MixConfig | None = None) -> Mux:
        return self._each("combine", operations, config)

    def f_combine(self, operations: Any, config: MixConfig | None = None) -> Mux:
        return self._each("f_combine", operations, config)

    def merge(self, operations: Any, config: MixConfig | None = None) -> Mux:
        return self._each("merge", operations, config)

    def reduce(self, operations: Any, config: MixConfig | None = None) -> Mux:
        return self._each("reduce", operations, config)

    def f_reduce(self, operations: Any, config: MixConfig | None = None) -> Mux:
        return self._each("f_reduce", operations, config)

    def _quorum(self, name: str, functions: Sequence[Any], check: Check | None) -> Mux:
        algorithm = getattr(logical, name)
        return self.then(lambda prev: algorithm([lambda: prev, *functions], check))

    def or_(self, functions: Sequence[Any], check: Check | None = None) -> Mux:
        return self._quorum("or_", functions, check)

    def and_(self, functions: Sequence[Any], check: Check | None = None) -> Mux:
        return self._quorum("and_", functions, check)

    def xor(self, functions: Sequence[Any], check: Check | None = None) -> Mux:
        return self._quorum("xor", functions, check)

    def filter(self, predicate: Callable[[Any], bool]) -> Mux:
        """Replace values failing ``predicate`` with None; slots are kept."""
        return self.then(lambda value: value if predicate(value) else None)

    def shuffle(self, rng: random.Random | None = None) -> Mux:
        """Permute chains over positions (list) or labels (dict).

        Uses a Fisher-Yates shuffle; keys and cardinality are preserved.
        """
        rng = rng or _random
        if isinstance(self.pool, dict):
            keys = list(self.pool)
            chains = list(self.pool.values())
            rng.shuffle(chains)
            self.pool = dict(zip(keys, chains))
        else:
            rng.shuffle(self.pool)
        return self

    def de_mux(self, func: Callable[[Any], Any] | None = None) -> Mix[Any]:
        """Fan in every entry into one Mix.

        All entries run concurrently. A list pool yields a list in index
        order; a dict pool is collected through aggregate(). When an entry
        failed, the first failed entry in pool order fails the result.
        """
        pool = self.pool

        async def run_func() -> Any:
            labels = list(pool) if isinstance(pool, dict) else range(len(pool))
            chains = list(pool.values()) if isinstance(pool, dict) else list(pool)
            settled = await asyncio.gather(*(chain.settle() for chain in chains))
            logger.debug("de_mux: %d entries settled", len(settled))
            if isinstance(pool, dict):
                return await sequential.aggregate(
                    {label: _outcome(result) for label, result in zip(labels, settled)}
                )
            return [result.unwrap() for result in settled]

        output = Mix(run_func)
        if func is not None:
            output = output.then(func)
        return output


def _outcome(result: Result[Any]) -> Operation:
    if result.control.reason is not None:
        return ErrorValue(result.control.reason)
    return Value(result.value)


def mux(inputs: Sequence[Any] | Mapping[Any, Any]) -> Mux:
    """Access point to build a Mux out of a list or a mapping."""
    return Mux(inputs)


def _bridge(self: Mix, func: Callable[[Mux], Any]) -> Mix:
    """Lift the chain's value into a Mux and continue with ``func(mux)``."""
    return self.then(lambda value: func(Mux(value)))


Mix.register_op("mux", _bridge)
