"""result_reason.py - boolean decision with the reason it was refused"""

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class ResultReason(Generic[T]):
    result: bool
    reason: T | None = None

    def __bool__(self) -> bool:
        return self.result

    def __iter__(self):
        # allows `ok, reason = should_seed(...)`
        yield self.result
        yield self.reason


def ok() -> ResultReason:
    return ResultReason(True)


def refuse(reason: T) -> ResultReason[T]:
    return ResultReason(False, reason)
