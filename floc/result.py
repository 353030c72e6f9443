"""Results of flow execution and masks over them."""

from __future__ import annotations

import enum
from dataclasses import dataclass


class Result(enum.IntEnum):
    """How the execution of a flow ended."""

    NONE = 1
    COMPLETED = 2
    CANCELED = 4
    FAILED = 8

    @classmethod
    def _missing_(cls, value: object) -> Result | None:
        if isinstance(value, int):
            pseudo = int.__new__(cls, value)
            pseudo._name_ = f"Result({value})"
            pseudo._value_ = value
            return pseudo
        return None

    def is_none(self) -> bool:
        return self == Result.NONE

    def is_completed(self) -> bool:
        return self == Result.COMPLETED

    def is_canceled(self) -> bool:
        return self == Result.CANCELED

    def is_failed(self) -> bool:
        return self == Result.FAILED

    def is_finished(self) -> bool:
        """Tell whether the result is completed, canceled or failed."""
        return bool(int(self) & _FINISHED_BITS)

    def is_valid(self) -> bool:
        return self in _VALID

    def mask(self) -> ResultMask:
        """Return a mask holding only this result."""
        return new_result_mask(self)

    def __str__(self) -> str:
        if self.is_valid():
            return self.name.title()
        return f"Result({int(self)})"

    def __format__(self, spec: str) -> str:
        return format(str(self), spec)


_VALID = frozenset(Result)
_USED_BITS = int(Result.NONE | Result.COMPLETED | Result.CANCELED | Result.FAILED)
_FINISHED_BITS = int(Result.COMPLETED | Result.CANCELED | Result.FAILED)


@dataclass(frozen=True)
class ResultMask:
    """A set of results stored as bits."""

    bits: int = 0

    def is_masked(self, result: Result | int) -> bool:
        value = int(result)
        return self.bits & value == value

    def is_empty(self) -> bool:
        return self.bits == 0

    def __str__(self) -> str:
        return "[" + ",".join(str(r) for r in Result if self.is_masked(r)) + "]"


def empty_result_mask() -> ResultMask:
    """Return the mask holding no result."""
    return ResultMask(0)


def new_result_mask(mask: Result | int) -> ResultMask:
    """Build a mask from result bits, dropping bits that name no result."""
    return ResultMask(int(mask) & _USED_BITS)