"""Exception types raised and reported by flows."""

from __future__ import annotations

from datetime import datetime
from typing import Any


class FlocError(Exception):
    """Base class of every error defined by the package."""


class InvalidJobError(FlocError):
    """The job given to run is not a job."""

    def __init__(self) -> None:
        super().__init__("job is invalid")

    def __str__(self) -> str:
        return "job is invalid"


class MultipleError(FlocError):
    """Several errors collected together, the first one on top."""

    def __init__(self, err: BaseException, *args: BaseException) -> None:
        self._errors: list[BaseException] = [err, *args]
        super().__init__(*self._errors)

    def top(self) -> BaseException:
        """Return the first error of the collection."""
        return self._errors[0]

    def errors(self) -> list[BaseException]:
        """Return a copy of the collected errors, in order."""
        return list(self._errors)

    def __len__(self) -> int:
        return len(self._errors)

    def __str__(self) -> str:
        if len(self._errors) == 1:
            return str(self._errors[0])
        quoted = ", ".join(f'"{err}"' for err in self._errors)
        return f"{len(self._errors)} errors: {quoted}"


class PanicError(FlocError):
    """A job blew up with an unexpected exception or value."""

    _PREFIX = "panic with "

    def __init__(self, data: Any) -> None:
        self._data = data
        super().__init__(data)

    def data(self) -> Any:
        """Return what the job blew up with."""
        return self._data

    def __str__(self) -> str:
        return f"{self._PREFIX}{self._data}"


class JobTimeoutError(FlocError):
    """A guarded job ran out of time."""

    def __init__(self, job_id: Any, at: datetime) -> None:
        self._job_id = job_id
        self._at = at
        super().__init__(job_id, at)

    def job_id(self) -> Any:
        """Return the identifier of the job that timed out."""
        return self._job_id

    def at(self) -> datetime:
        """Return the moment the timeout happened."""
        return self._at

    def __str__(self) -> str:
        return f"{self._job_id} timed out at {self._at}"