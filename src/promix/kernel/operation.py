"""Operations - the unit of deferred work every combinator resolves.

A raw caller value is classified once, at the call boundary, by
:meth:`Operation.of`. :func:`resolve_operation` then dispatches over the
closed set of variants below.
"""

from __future__ import annotations

import asyncio
import inspect
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any

from promix.kernel.config import MixConfig, resolve_config
from promix.kernel.errors import OperationError

logger = logging.getLogger(__name__)


class _Nothing:
    """Marker for "no accumulator is passed to this step"."""

    _instance: _Nothing | None = None

    def __new__(cls) -> _Nothing:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "NOTHING"

    def __bool__(self) -> bool:
        return False


NOTHING = _Nothing()

# Async callback operations still running after they called done.
_detached: set[asyncio.Task[Any]] = set()

Done = Callable[..., None]


class Operation:
    """Base of the operation variants."""

    __slots__ = ()

    @staticmethod
    def of(raw: Any, *, callback: bool = False) -> Operation:
        """Classify a raw value into an operation variant.

        Args:
            raw: A plain value, an exception, a function, an awaitable or
                an existing Operation
            callback: Treat functions as ``func(accumulator, done)``

        Returns:
            The matching Operation variant
        """
        if isinstance(raw, Operation):
            return raw
        if inspect.isawaitable(raw):
            return AwaitableOp(raw)
        if isinstance(raw, BaseException):
            return ErrorValue(raw)
        if callable(raw):
            return CallbackFn(raw) if callback else Fn(raw)
        return Value(raw)


@dataclass(frozen=True)
class Value(Operation):
    value: Any


@dataclass(frozen=True)
class ErrorValue(Operation):
    error: BaseException


@dataclass(frozen=True)
class Fn(Operation):
    func: Callable[..., Any]


@dataclass(frozen=True)
class CallbackFn(Operation):
    func: Callable[[Any, Done], Any]


@dataclass(frozen=True)
class AwaitableOp(Operation):
    awaitable: Awaitable[Any]


@dataclass(frozen=True)
class Wrapped(Operation):
    operation: Operation

    def __post_init__(self) -> None:
        if not isinstance(self.operation, Operation):
            object.__setattr__(self, "operation", Operation.of(self.operation))


def as_exception(error: object) -> BaseException:
    """Turn a failure payload into something that can be raised."""
    if isinstance(error, BaseException):
        return error
    return OperationError(f"Operation failed: {error!r}", payload=error)


def _raise_if_error(value: Any) -> Any:
    if isinstance(value, BaseException):
        raise value
    return value


def _accepts_argument(func: Callable[..., Any]) -> bool:
    try:
        signature = inspect.signature(func)
    except (TypeError, ValueError):
        # Builtins without introspectable signatures get the argument.
        return True
    return any(
        param.kind
        in (
            inspect.Parameter.POSITIONAL_ONLY,
            inspect.Parameter.POSITIONAL_OR_KEYWORD,
            inspect.Parameter.VAR_POSITIONAL,
        )
        for param in signature.parameters.values()
    )


async def _call(func: Callable[..., Any], accumulator: Any) -> Any:
    if _accepts_argument(func):
        result = func(None if accumulator is NOTHING else accumulator)
    else:
        result = func()
    if inspect.isawaitable(result):
        result = await result
    return _raise_if_error(result)


def _finish_detached(task: asyncio.Task[Any]) -> None:
    _detached.discard(task)
    if not task.cancelled() and task.exception() is not None:
        logger.warning("Callback operation failed after calling done: %r", task.exception())


async def _call_with_callback(func: Callable[[Any, Done], Any], accumulator: Any) -> Any:
    loop = asyncio.get_running_loop()
    future: asyncio.Future[Any] = loop.create_future()

    def done(error: object = None, result: Any = None) -> None:
        if future.done():
            logger.debug("Ignoring repeated callback invocation for %r", func)
            return
        if error is not None:
            future.set_exception(as_exception(error))
        else:
            future.set_result(result)

    returned = func(None if accumulator is NOTHING else accumulator, done)
    if not inspect.isawaitable(returned):
        return await future

    # An async callback operation settles on its first done() call or on
    # its own failure, whichever happens first.
    task = asyncio.ensure_future(returned)
    try:
        await asyncio.wait((future, task), return_when=asyncio.FIRST_COMPLETED)
    except asyncio.CancelledError:
        task.cancel()
        raise
    if future.done():
        if task.done():
            _finish_detached(task)
        else:
            _detached.add(task)
            task.add_done_callback(_finish_detached)
        return future.result()

    future.cancel()
    task.result()
    raise OperationError(
        f"Callback operation {func!r} finished without calling done",
        payload=func,
    )


async def resolve_operation(
    operation: Operation,
    accumulator: Any = NOTHING,
    *,
    config: MixConfig | None = None,
) -> Any:
    """Resolve one operation against the current accumulator.

    Args:
        operation: The operation to resolve
        accumulator: Value handed to function operations; NOTHING means
            the step receives no accumulator
        config: Overrides the installed configuration

    Returns:
        The operation's value

    Raises:
        The operation's failure: the exception it raised or returned, or
        an OperationError wrapping a non-exception payload.
    """
    limit = resolve_config(config).max_unwrap_depth
    depth = 0
    while isinstance(operation, Wrapped):
        depth += 1
        if depth > limit:
            raise OperationError(
                f"Wrapped operation nested deeper than {limit} levels",
                payload=operation,
            )
        operation = operation.operation

    if isinstance(operation, AwaitableOp):
        return await operation.awaitable
    if isinstance(operation, CallbackFn):
        return await _call_with_callback(operation.func, accumulator)
    if isinstance(operation, Fn):
        return await _call(operation.func, accumulator)
    if isinstance(operation, ErrorValue):
        raise operation.error
    if isinstance(operation, Value):
        return _raise_if_error(operation.value)
    raise TypeError(f"Unknown operation variant: {type(operation).__name__}")
