"""Settled outcome of a chain - value or failure, never raised."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, Literal, TypeVar

V = TypeVar("V")


@dataclass(frozen=True)
class Control:
    """
    How a chain settled.

    Kinds:
    - resolved: the chain produced a value
    - rejected: the chain failed; ``reason`` holds the exception
    """

    kind: Literal["resolved", "rejected"]
    reason: BaseException | None = None

    @staticmethod
    def Resolved() -> Control:
        return Control(kind="resolved")

    @staticmethod
    def Rejected(reason: BaseException) -> Control:
        return Control(kind="rejected", reason=reason)


@dataclass(frozen=True)
class Result(Generic[V]):
    """
    A settled chain.

    Attributes:
        value: Output of the chain when resolved
        control: Whether the chain resolved or rejected
    """

    value: V | None = None
    control: Control = Control.Resolved()

    @property
    def failed(self) -> bool:
        return self.control.kind == "rejected"

    def unwrap(self) -> V | None:
        """Return the value, or raise the failure that rejected the chain."""
        if self.control.reason is not None:
            raise self.control.reason
        return self.value
