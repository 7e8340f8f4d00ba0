"""Logical quorum evaluators over ordered asynchronous checks."""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from typing import Any

from promix.kernel.errors import (
    MORE_THAN_ONE_TRUE,
    NO_PROMISE_TRUE,
    SOME_PROMISE_FALSE,
    QuorumError,
)
from promix.kernel.operation import Operation, resolve_operation

logger = logging.getLogger(__name__)

Check = Callable[[Any], bool]


def _qualifies(result: Any, check: Check | None) -> bool:
    return bool(result) and (check is None or bool(check(result)))


async def _evaluate(entry: Any) -> Any:
    return await resolve_operation(Operation.of(entry))


async def or_(functions: Sequence[Any], check: Check | None = None) -> Any:
    """Return the first non-empty result passing ``check``.

    Entries after the first qualifying one are never evaluated.

    Raises:
        QuorumError: No entry qualified.
    """
    for index, entry in enumerate(functions):
        result = await _evaluate(entry)
        if _qualifies(result, check):
            logger.debug("or_: entry %d qualified", index)
            return result
    raise QuorumError(NO_PROMISE_TRUE)


async def and_(functions: Sequence[Any], check: Check | None = None) -> list[Any]:
    """Return every result, provided all are non-empty and pass ``check``.

    Raises:
        QuorumError: An entry did not qualify; later entries are skipped.
    """
    results: list[Any] = []
    for index, entry in enumerate(functions):
        result = await _evaluate(entry)
        if not _qualifies(result, check):
            logger.debug("and_: entry %d did not qualify", index)
            raise QuorumError(SOME_PROMISE_FALSE)
        results.append(result)
    return results


async def xor(functions: Sequence[Any], check: Check | None = None) -> Any:
    """Return the only non-empty result passing ``check``.

    Raises:
        QuorumError: Zero entries qualified, or a second one did.
    """
    found = False
    winner: Any = None
    for index, entry in enumerate(functions):
        result = await _evaluate(entry)
        if not _qualifies(result, check):
            continue
        if found:
            logger.debug("xor: entry %d is a second qualifier", index)
            raise QuorumError(MORE_THAN_ONE_TRUE)
        found = True
        winner = result
    if not found:
        raise QuorumError(NO_PROMISE_TRUE)
    return winner
