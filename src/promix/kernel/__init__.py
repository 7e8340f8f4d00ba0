"""Kernel layer - operations, the Mix chain handle, configuration and errors."""

from promix.kernel.config import MixConfig, configure, get_config
from promix.kernel.errors import (
    MORE_THAN_ONE_TRUE,
    NO_PROMISE_TRUE,
    SOME_PROMISE_FALSE,
    CheckError,
    InitCoercionWarning,
    MixError,
    MuxInputError,
    OperationError,
    QuorumError,
)
from promix.kernel.mix import Mix
from promix.kernel.operation import (
    NOTHING,
    AwaitableOp,
    CallbackFn,
    ErrorValue,
    Fn,
    Operation,
    Value,
    Wrapped,
    resolve_operation,
)
from promix.kernel.result import Control, Result

__all__ = [
    "Mix",
    "Control",
    "Result",
    # Operations
    "Operation",
    "Value",
    "ErrorValue",
    "Fn",
    "CallbackFn",
    "AwaitableOp",
    "Wrapped",
    "NOTHING",
    "resolve_operation",
    # Config
    "MixConfig",
    "configure",
    "get_config",
    # Errors
    "MixError",
    "OperationError",
    "QuorumError",
    "CheckError",
    "MuxInputError",
    "InitCoercionWarning",
    "NO_PROMISE_TRUE",
    "SOME_PROMISE_FALSE",
    "MORE_THAN_ONE_TRUE",
]
