"""Mix - chainable handle around one eventual value."""

from __future__ import annotations

import asyncio
import inspect
from collections.abc import Awaitable, Callable, Generator
from typing import Any, Generic, TypeVar

from promix.kernel.operation import as_exception
from promix.kernel.result import Control, Result

V = TypeVar("V")
R = TypeVar("R")


# Extension registry - class-level storage for Mix capabilities
_extensions_registry: dict[str, Callable[..., Any]] = {}


class Mix(Generic[V]):
    """Promise-like wrapper around a coroutine factory.

    The chain is scheduled as an asyncio task on its first ``await`` and
    every later ``await`` shares that task, so each chain runs at most once.
    Combinators are registered via register_op() for extensibility.
    """

    __slots__ = ("_run", "_future")

    def __init__(self, run: Callable[[], Awaitable[V]]) -> None:
        self._run = run
        self._future: asyncio.Future[V] | None = None

    @classmethod
    def register_op(cls, name: str, fn: Callable[..., Any]) -> None:
        """Register an operation capability on the Mix class.

        Args:
            name: The operation name (e.g., "combine")
            fn: The function to register; receives the Mix as first argument
        """
        _extensions_registry[name] = fn

    def __getattr__(self, name: str) -> Any:
        """Allow calling registered extension methods."""
        if name in _extensions_registry:
            fn = _extensions_registry[name]
            # Bind the function to this instance
            return lambda *args, **kwargs: fn(self, *args, **kwargs)
        raise AttributeError(f"'{type(self).__name__}' object has no attribute '{name}'")

    def __await__(self) -> Generator[Any, None, V]:
        if self._future is None:
            self._future = asyncio.ensure_future(self._run())
        return self._future.__await__()

    def __repr__(self) -> str:
        if self._future is None:
            state = "pending"
        elif not self._future.done():
            state = "running"
        elif self._future.cancelled():
            state = "cancelled"
        elif self._future.exception() is not None:
            state = "rejected"
        else:
            state = "resolved"
        return f"<Mix {state}>"

    async def run(self) -> V:
        """Await the chain; convenient as the argument of asyncio.run()."""
        return await self

    async def settle(self) -> Result[V]:
        """Await the chain without raising.

        Returns:
            Result whose control tells whether the chain resolved or rejected
        """
        try:
            value = await self
        except Exception as exc:
            return Result(control=Control.Rejected(exc))
        return Result(value=value)

    def _create(self, run_func: Callable[[], Awaitable[R]]) -> Mix[R]:
        """Create a new chain instance."""
        return Mix(run_func)

    def then(self, func: Callable[[V], R | Awaitable[R]]) -> Mix[R]:
        """Chain a continuation to this value.

        ``func`` may return a plain value or an awaitable; awaitables are
        awaited before the next step sees the value. A returned exception
        instance fails the chain.
        """
        async def new_run() -> R:
            value = await self
            result = func(value)
            if inspect.isawaitable(result):
                result = await result
            if isinstance(result, BaseException):
                raise result
            return result

        return self._create(new_run)

    def map(self, func: Callable[[V], R]) -> Mix[R]:
        """Apply a synchronous transform to the value."""
        async def new_run() -> R:
            return func(await self)

        return self._create(new_run)

    def recover(self, recovery_func: Callable[[Exception], V | Awaitable[V]]) -> Mix[V]:
        """Recover from a failure with recovery function."""
        async def new_run() -> V:
            try:
                return await self
            except Exception as exc:
                recovered = recovery_func(exc)
                if inspect.isawaitable(recovered):
                    recovered = await recovered
                return recovered

        return self._create(new_run)

    @staticmethod
    def start(value: V) -> Mix[V]:
        """Create a Mix already resolved with a plain value."""
        async def run_func() -> V:
            return value

        return Mix(run_func)

    @staticmethod
    def of(value: V | Awaitable[V]) -> Mix[V]:
        """Create a Mix from a value, adopting it when it is awaitable."""
        if isinstance(value, Mix):
            return value
        if inspect.isawaitable(value):
            async def run_func() -> V:
                return await value

            return Mix(run_func)
        return Mix.start(value)

    @staticmethod
    def fail(error: object) -> Mix[Any]:
        """Create a Mix rejected with ``error``."""
        exc = as_exception(error)

        async def run_func() -> Any:
            raise exc

        return Mix(run_func)
