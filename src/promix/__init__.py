from .combinators import (
    aggregate,
    and_,
    combine,
    f_combine,
    f_reduce,
    merge,
    or_,
    reduce,
    xor,
)
from .kernel import (
    MORE_THAN_ONE_TRUE,
    NO_PROMISE_TRUE,
    SOME_PROMISE_FALSE,
    CheckError,
    Control,
    InitCoercionWarning,
    Mix,
    MixConfig,
    MixError,
    MuxInputError,
    Operation,
    OperationError,
    QuorumError,
    Result,
    configure,
    get_config,
    resolve_operation,
)
from .mux import (
    Mux,
    aggregate_each,
    combine_each,
    f_combine_each,
    f_reduce_each,
    merge_each,
    mux,
    reduce_each,
)
from . import utils  # noqa: F401

__all__ = [
    # Sequential accumulation
    "aggregate",
    "combine",
    "f_combine",
    "merge",
    "reduce",
    "f_reduce",
    # Logical
    "or_",
    "and_",
    "xor",
    # Chaining
    "Mix",
    "Result",
    "Control",
    "Operation",
    "resolve_operation",
    # Parallel pool
    "Mux",
    "mux",
    "aggregate_each",
    "combine_each",
    "f_combine_each",
    "merge_each",
    "reduce_each",
    "f_reduce_each",
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
