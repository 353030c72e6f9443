"""Guards that protect a flow from crashing or from unpredicted behaviour.

In this package a job reports an ordinary error by raising it, so the panic
guards treat any exception raised by the guarded job as the job blowing up.
"""

from __future__ import annotations

import threading
from contextlib import suppress
from datetime import datetime, timedelta, timezone
from typing import Any, Callable, Optional, Union

from floc.context import Context, background
from floc.control import Control
from floc.errors import JobTimeoutError, PanicError
from floc.flow import Job
from floc.result import Result, ResultMask

Duration = Union[float, timedelta]
PanicTrigger = Callable[[Context, Control, Any], None]
TimeoutTrigger = Callable[[Context, Control, Any], None]
WhenTimeoutFunc = Callable[[Context, Any], Duration]
WhenDeadlineFunc = Callable[[Context, Any], datetime]


def _seconds(value: Duration) -> float:
    if isinstance(value, timedelta):
        return value.total_seconds()
    return float(value)


def _as_timedelta(value: Duration) -> timedelta:
    if isinstance(value, timedelta):
        return value
    return timedelta(seconds=float(value))


def cancel(data: Any) -> Job:
    """Return a job that cancels the flow with the data given."""

    def run_cancel(ctx: Context, ctrl: Control) -> None:
        ctrl.cancel(data)

    return run_cancel


def complete(data: Any) -> Job:
    """Return a job that completes the flow with the data given."""

    def run_complete(ctx: Context, ctrl: Control) -> None:
        ctrl.complete(data)

    return run_complete


def fail(data: Any, err: Optional[BaseException]) -> Job:
    """Return a job that fails the flow with the data and error given."""

    def run_fail(ctx: Context, ctrl: Control) -> None:
        ctrl.fail(data, err)

    return run_fail


def panic(job: Job) -> Job:
    """Fail the flow with a PanicError if the job raises."""
    return on_panic(job, None)


def ignore_panic(job: Job) -> Job:
    """Swallow whatever the job raises."""

    def run_ignoring(ctx: Context, ctrl: Control) -> Any:
        with suppress(Exception):
            return job(ctx, ctrl)
        return None

    return run_ignoring


def on_panic(job: Job, panic_trigger: Optional[PanicTrigger]) -> Job:
    """Call the trigger with whatever the job raises.

    Without a trigger the flow fails with the raised exception as data and a
    PanicError wrapping it as the error.
    """

    def run_guarded(ctx: Context, ctrl: Control) -> Any:
        try:
            return job(ctx, ctrl)
        except Exception as exc:
            if panic_trigger is not None:
                panic_trigger(ctx, ctrl, exc)
            else:
                ctrl.fail(exc, PanicError(exc))
            return None

    return run_guarded


class _ResumeContext(Context):
    """A context of its own that still sees the values of the flow's context."""

    def __init__(self, outer: Context) -> None:
        super().__init__(background())
        self._outer = outer

    def value(self, key: Any) -> Any:
        found = super().value(key)
        if found is not None:
            return found
        return self._outer.value(key)


def _propagate(ctrl: Control, result: Result, data: Any, err: Optional[BaseException]) -> None:
    if result is Result.CANCELED:
        ctrl.cancel(data)
    elif result is Result.COMPLETED:
        ctrl.complete(data)
    elif result is Result.FAILED:
        ctrl.fail(data, err)


def resume(mask: ResultMask, job: Job) -> Job:
    """Resume the flow the job may finish.

    With an empty mask the flow always resumes. Otherwise it resumes only if
    the job finished with a masked result; any other result is passed on.
    """
    if mask.is_empty():

        def run_resumed(ctx: Context, ctrl: Control) -> Any:
            with _ResumeContext(ctx) as mock_ctx, Control(mock_ctx) as mock_ctrl:
                return job(mock_ctx, mock_ctrl)

        return run_resumed

    def run_filtered(ctx: Context, ctrl: Control) -> Any:
        mock_ctx = _ResumeContext(ctx)
        mock_ctrl = Control(mock_ctx)
        try:
            return job(mock_ctx, mock_ctrl)
        finally:
            mock_ctrl.release()
            mock_ctx.release()
            if mock_ctrl.is_finished():
                result, data, err = mock_ctrl.result()
                if not mask.is_masked(result):
                    _propagate(ctrl, result, data, err)

    return run_filtered


def timeout(when: WhenTimeoutFunc, job_id: Any, job: Job) -> Job:
    """Fail the flow with a JobTimeoutError if the job takes too long."""
    return on_timeout(when, job_id, job, None)


def on_timeout(
    when: WhenTimeoutFunc,
    job_id: Any,
    job: Job,
    timeout_trigger: Optional[TimeoutTrigger],
) -> Job:
    """Run the job in its own thread and call the trigger if time runs out.

    The caller waits until the job returns, the time runs out or the flow
    finishes, and then until the job returns. Without a trigger the flow fails
    with the id as data and a JobTimeoutError.
    """

    def run_with_timeout(ctx: Context, ctrl: Control) -> None:
        limit = max(_seconds(when(ctx, job_id)), 0.0)
        finished = threading.Event()
        wake = threading.Event()
        raised: list[Exception] = []

        def target() -> None:
            try:
                job(ctx, ctrl)
            except Exception as exc:
                raised.append(exc)
            finally:
                finished.set()
                wake.set()

        done = ctx.done()

        def watch() -> None:
            if done.wait(limit):
                wake.set()

        threading.Thread(target=target, daemon=True).start()
        threading.Thread(target=watch, daemon=True).start()

        wake.wait(limit)

        if not finished.is_set() and not done.is_set():
            if timeout_trigger is not None:
                timeout_trigger(ctx, ctrl, job_id)
            else:
                ctrl.fail(job_id, JobTimeoutError(job_id, datetime.now(timezone.utc)))

        finished.wait()
        if raised:
            raise raised[0]

    return run_with_timeout


def _until(moment: datetime) -> float:
    now = datetime.now(moment.tzinfo) if moment.tzinfo is not None else datetime.now()
    return (moment - now).total_seconds()


def deadline(when: WhenDeadlineFunc, job_id: Any, job: Job) -> Job:
    """Fail the flow with a JobTimeoutError if the job runs past the deadline."""
    return on_deadline(when, job_id, job, None)


def on_deadline(
    when: WhenDeadlineFunc,
    job_id: Any,
    job: Job,
    timeout_trigger: Optional[TimeoutTrigger],
) -> Job:
    """Like on_timeout, with the limit given as a moment in time."""

    def when_timeout(ctx: Context, ident: Any) -> float:
        return _until(when(ctx, ident))

    return on_timeout(when_timeout, job_id, job, timeout_trigger)


def const_deadline(deadline: datetime) -> WhenDeadlineFunc:
    """Return a deadline function that always gives the same moment."""
    return lambda ctx, job_id: deadline


def deadline_in(delay: Duration) -> WhenDeadlineFunc:
    """Return a deadline function giving the moment ``delay`` from now."""
    offset = _as_timedelta(delay)

    def when(ctx: Any, job_id: Any) -> datetime:
        return datetime.now() + offset

    return when


def const_timeout(timeout: Duration) -> WhenTimeoutFunc:
    """Return a timeout function that always gives the same duration."""
    return lambda ctx, job_id: timeout