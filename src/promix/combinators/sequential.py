"""Ordered accumulation over a mapping or sequence of operations.

Every function walks its operations strictly in order, resolving step
*i + 1* only after step *i* settled, and aborts on the first failure
without returning a partial accumulator.
"""

from __future__ import annotations

import logging
import warnings
from collections.abc import Iterable, Mapping
from typing import Any

from promix.kernel.config import MixConfig, resolve_config
from promix.kernel.errors import InitCoercionWarning
from promix.kernel.operation import NOTHING, Operation, resolve_operation

logger = logging.getLogger(__name__)

Operations = Mapping[Any, Any] | Iterable[Any]


def _entries(operations: Operations) -> Iterable[tuple[Any, Any]]:
    if isinstance(operations, Mapping):
        return operations.items()
    return enumerate(operations)


def _keyed_init(init: Any, name: str, config: MixConfig) -> dict[Any, Any]:
    if init is None:
        return {}
    if isinstance(init, Mapping):
        return dict(init)
    if config.is_dev:
        warnings.warn(
            f'"{name}" called with non-mapping init value, that value will be '
            f'assigned to an "_init" field in the output.',
            InitCoercionWarning,
            stacklevel=3,
        )
    return {"_init": init}


async def _fold_keyed(
    name: str,
    operations: Operations,
    init: Any,
    config: MixConfig | None,
    *,
    pass_accumulator: bool,
    callback: bool = False,
) -> dict[Any, Any]:
    config = resolve_config(config)
    accumulator = _keyed_init(init, name, config)
    for key, raw in _entries(operations):
        logger.debug("%s: resolving %r", name, key)
        accumulator[key] = await resolve_operation(
            Operation.of(raw, callback=callback),
            accumulator if pass_accumulator else NOTHING,
            config=config,
        )
    return accumulator


async def _fold_through(
    name: str,
    operations: Operations,
    init: Any,
    config: MixConfig | None,
    *,
    callback: bool = False,
) -> Any:
    config = resolve_config(config)
    accumulator = {} if init is None else init
    for index, (_, raw) in enumerate(_entries(operations)):
        logger.debug("%s: resolving step %d", name, index)
        accumulator = await resolve_operation(
            Operation.of(raw, callback=callback),
            accumulator,
            config=config,
        )
    return accumulator


async def aggregate(
    operations: Operations,
    init: Any = None,
    *,
    config: MixConfig | None = None,
) -> dict[Any, Any]:
    """Collect the results of independent operations under their keys.

    Operations do not receive the accumulator; use this for already
    running awaitables or plain values.

    Args:
        operations: Mapping (or sequence, keyed by index) of operations
        init: Initial mapping; other values are stored under "_init"
        config: Overrides the installed configuration

    Returns:
        Dict holding ``init``'s entries plus one entry per operation

    Example:
        >>> await aggregate({"cats": fetch_cats(), "fish": "Nemo"})
        {'cats': ['Felix', 'Garfield'], 'fish': 'Nemo'}
    """
    return await _fold_keyed("aggregate", operations, init, config, pass_accumulator=False)


async def combine(
    operations: Operations,
    init: Any = None,
    *,
    config: MixConfig | None = None,
) -> dict[Any, Any]:
    """Like aggregate, but each function receives the accumulator so far.

    Example:
        >>> await combine({
        ...     "user": lambda: fetch_user("dumbass"),
        ...     "posts": lambda acc: fetch_posts(acc["user"]["id"]),
        ... })
    """
    return await _fold_keyed("combine", operations, init, config, pass_accumulator=True)


async def f_combine(
    operations: Operations,
    init: Any = None,
    *,
    config: MixConfig | None = None,
) -> dict[Any, Any]:
    """Like combine, with callback-style functions ``func(acc, done)``."""
    return await _fold_keyed(
        "f_combine", operations, init, config, pass_accumulator=True, callback=True
    )


async def merge(
    operations: Operations,
    init: Any = None,
    *,
    config: MixConfig | None = None,
) -> list[Any]:
    """Flatten the results of the operations into one list.

    List results are spliced in, any other result is appended. A non-list
    ``init`` becomes the first item.
    """
    config = resolve_config(config)
    if init is None:
        accumulator: list[Any] = []
    elif isinstance(init, list):
        accumulator = list(init)
    else:
        accumulator = [init]
    for index, (_, raw) in enumerate(_entries(operations)):
        logger.debug("merge: resolving step %d", index)
        result = await resolve_operation(Operation.of(raw), NOTHING, config=config)
        if isinstance(result, list):
            accumulator.extend(result)
        else:
            accumulator.append(result)
    return accumulator


async def reduce(
    operations: Operations,
    init: Any = None,
    *,
    config: MixConfig | None = None,
) -> Any:
    """Thread a value through the operations and return the last result."""
    return await _fold_through("reduce", operations, init, config)


async def f_reduce(
    operations: Operations,
    init: Any = None,
    *,
    config: MixConfig | None = None,
) -> Any:
    """Like reduce, with callback-style functions ``func(acc, done)``."""
    return await _fold_through("f_reduce", operations, init, config, callback=True)
