"""Error types raised by promix combinators."""

from __future__ import annotations

NO_PROMISE_TRUE = "No Promise checked true."
SOME_PROMISE_FALSE = "Some Promise checked false."
MORE_THAN_ONE_TRUE = "More than one Promise checked true."


class MixError(Exception):
    """Base class for every failure raised by promix itself."""


class OperationError(MixError):
    """An operation failed with a payload that is not an exception.

    The original payload (a callback error string, a sentinel object, ...)
    is kept untouched for the caller to inspect.
    """

    def __init__(self, message: str, payload: object = None) -> None:
        self.payload = payload
        super().__init__(message)

    def __repr__(self) -> str:
        return f"OperationError({super().__repr__()}, payload={self.payload!r})"


class QuorumError(MixError):
    """A logical evaluator (or_, and_, xor) did not reach its quorum."""


class CheckError(MixError):
    """A value-level check failed."""

    def __init__(self, message: str, value: object = None) -> None:
        self.value = value
        super().__init__(message)

    def __repr__(self) -> str:
        return f"CheckError({super().__repr__()}, value={self.value!r})"


class MuxInputError(MixError, TypeError):
    """A Mux was built from something that is neither a mapping nor a sequence."""


class InitCoercionWarning(UserWarning):
    """A keyed accumulator received a non-mapping initial value."""
