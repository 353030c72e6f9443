"""Control over the outcome of a running flow."""

from __future__ import annotations

import threading
from typing import Any

from floc.context import Context
from floc.result import Result


class Control:
    """Finishes a flow once and records how it finished."""

    def __init__(self, ctx: Context) -> None:
        if ctx is None:
            raise ValueError("context is None")
        cancel_ctx, self._cancel = ctx.ctx().with_cancel()
        ctx.update_ctx(cancel_ctx)
        self._ctx = ctx
        self._lock = threading.Lock()
        self._result = Result.NONE
        self._data: Any = None
        self._err: BaseException | None = None

    def __enter__(self) -> Control:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.release()

    def release(self) -> None:
        """Cancel the flow unless it has already finished."""
        self.cancel(None)

    def complete(self, data: Any) -> None:
        """Finish the flow successfully."""
        self._finish(Result.COMPLETED, data, None)

    def cancel(self, data: Any) -> None:
        """Cancel the flow."""
        self._finish(Result.CANCELED, data, None)

    def fail(self, data: Any, err: BaseException | None) -> None:
        """Cancel the flow with an error."""
        self._finish(Result.FAILED, data, err)

    def is_finished(self) -> bool:
        return self._result.is_finished()

    def result(self) -> tuple[Result, Any, BaseException | None]:
        """Return the result, data and error; data and error only once finished."""
        with self._lock:
            if self._result.is_finished():
                return self._result, self._data, self._err
            return self._result, None, None

    def _finish(self, result: Result, data: Any, err: BaseException | None) -> None:
        with self._lock:
            if self._result.is_finished():
                return
            self._data = data
            self._err = err
            self._result = result
        self._cancel()


def new_control(ctx: Context) -> Control:
    """Build a control over the given context."""
    return Control(ctx)