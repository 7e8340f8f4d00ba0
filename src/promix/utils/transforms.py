"""Mix extensions operating on an already produced value.

These do not add concurrency or accumulation semantics; they shorten
chains that would otherwise need a hand-written ``then``.
"""

from __future__ import annotations

import asyncio
import inspect
import logging
from collections.abc import Callable, Mapping, Sequence
from typing import Any

from promix.kernel.errors import CheckError
from promix.kernel.mix import Mix
from promix.mux import Mux

logger = logging.getLogger(__name__)


async def _maybe_await(value: Any) -> Any:
    if inspect.isawaitable(value):
        return await value
    return value


def _failure(error: BaseException | str, value: Any) -> BaseException:
    if isinstance(error, BaseException):
        return error
    return CheckError(error, value)


def check(
    self: Mix,
    predicate: Callable[[Any], bool],
    error: BaseException | str = "Unmet check condition.",
) -> Mix:
    """Fail the chain unless ``predicate(value)`` holds."""
    def step(value: Any) -> Any:
        if predicate(value):
            return value
        raise _failure(error, value)

    return self.then(step)


def exists(self: Mix, error: BaseException | str = "Downstream is undefined.") -> Mix:
    """Fail the chain when the value is empty."""
    return check(self, bool, error)


def revive(self: Mix, new_value: Any = None) -> Mix:
    """Turn a failure into a value: ``new_value``, or the exception itself."""
    def recovery(exc: Exception) -> Any:
        logger.debug("Reviving chain after %r", exc)
        return exc if new_value is None else new_value

    return self.recover(recovery)


def check_or_revive(self: Mix, predicate: Callable[[Any], bool], new_value: Any = None) -> Mix:
    return revive(check(self, predicate), new_value)


def _is_blank(item: Any) -> bool:
    if item is None or (isinstance(item, str) and item == ""):
        return True
    return isinstance(item, (Mapping, list, tuple, set)) and len(item) == 0


def clean(self: Mix) -> Mix:
    """Drop None, empty strings and empty containers from a list or dict."""
    def step(value: Any) -> Any:
        if isinstance(value, list):
            return [item for item in value if not _is_blank(item)]
        if isinstance(value, Mapping):
            return {key: item for key, item in value.items() if not _is_blank(item)}
        return value

    return self.then(step)


def map_items(self: Mix, func: Callable[[Any], Any]) -> Mix:
    """Apply ``func`` to every item of the value in parallel.

    Equivalent to ``mix.mux(lambda m: m.then(func).de_mux())``.
    """
    return self.then(lambda value: Mux(value).then(func).de_mux())


def sleep(self: Mix, seconds: float) -> Mix:
    """Delay the chain, then continue with the same value."""
    async def step(value: Any) -> Any:
        await asyncio.sleep(seconds)
        return value

    return self.then(step)


def log(self: Mix, tag: str) -> Mix:
    def step(value: Any) -> Any:
        logger.info("%s %r", tag, value)
        return value

    return self.then(step)


def loop(
    self: Mix,
    iteration: Callable[[Any, int], Any],
    break_check: Callable[[Any, int], bool],
) -> Mix:
    """Run ``iteration(value, index)`` until ``break_check(value, index)`` holds.

    The check runs after each iteration, so ``iteration`` runs at least once.
    """
    async def step(value: Any) -> Any:
        index = 0
        while True:
            value = await _maybe_await(iteration(value, index))
            if break_check(value, index):
                return value
            index += 1

    return self.then(step)


def when(self: Mix, predicate: Callable[[Any], bool], func: Callable[[Any], Any]) -> Mix:
    """Apply ``func`` only when ``predicate(value)`` holds."""
    return self.then(lambda value: func(value) if predicate(value) else value)


def if_else(
    self: Mix,
    predicate: Callable[[Any], bool],
    if_func: Callable[[Any], Any],
    else_func: Callable[[Any], Any],
) -> Mix:
    return self.then(lambda value: if_func(value) if predicate(value) else else_func(value))


def pick(self: Mix, keys: Any) -> Mix:
    """Keep only the given keys (dict value) or indexes (list value)."""
    wanted = list(keys) if isinstance(keys, (list, tuple)) else [keys]

    def step(value: Any) -> Any:
        if isinstance(value, Mapping):
            return {key: value.get(key) for key in wanted}
        if isinstance(value, Sequence) and not isinstance(value, str):
            for key in wanted:
                if not isinstance(key, int) or isinstance(key, bool):
                    raise CheckError(f"Cannot read index {key!r} of {value!r}", value)
            return [value[key] if -len(value) <= key < len(value) else None for key in wanted]
        raise CheckError(f"Cannot read properties {wanted} of {value!r}", value)

    return self.then(step)


def aside(self: Mix, func: Callable[[Any], Any], ignore_errors: bool = False) -> Mix:
    """Run ``func(value)`` for its side effects and keep the original value."""
    async def step(value: Any) -> Any:
        try:
            await _maybe_await(func(value))
        except Exception as exc:
            if not ignore_errors:
                raise
            logger.warning("Ignoring failure of aside operation: %r", exc)
        return value

    return self.then(step)


for _name, _fn in {
    "check": check,
    "exists": exists,
    "revive": revive,
    "check_or_revive": check_or_revive,
    "clean": clean,
    "map_items": map_items,
    "sleep": sleep,
    "log": log,
    "loop": loop,
    "when": when,
    "if_else": if_else,
    "pick": pick,
    "just": pick,
    "aside": aside,
}.items():
    Mix.register_op(_name, _fn)
