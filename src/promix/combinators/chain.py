"""Mix extensions: every combinator, seeded with the chain's value."""

from collections.abc import Sequence
from typing import Any

from promix.combinators import logical, sequential
from promix.combinators.logical import Check
from promix.kernel.config import MixConfig
from promix.kernel.mix import Mix


def _accumulating(name: str):
    algorithm = getattr(sequential, name)

    def extension(self: Mix, operations: Any, config: MixConfig | None = None) -> Mix:
        return self.then(lambda prev: algorithm(operations, prev, config=config))

    extension.__name__ = name
    extension.__doc__ = f"Run {name}() using the chain's value as init."
    return extension


def _logical(name: str):
    algorithm = getattr(logical, name)

    def extension(self: Mix, functions: Sequence[Any], check: Check | None = None) -> Mix:
        return Mix(lambda: algorithm([lambda: self, *functions], check))

    extension.__name__ = name
    extension.__doc__ = f"Run {name}() with the chain's value as the first entry."
    return extension


ACCUMULATORS = ("aggregate", "combine", "f_combine", "merge", "reduce", "f_reduce")
LOGICALS = ("or_", "and_", "xor")

for _name in ACCUMULATORS:
    Mix.register_op(_name, _accumulating(_name))

for _name in LOGICALS:
    Mix.register_op(_name, _logical(_name))
