"""Building blocks that combine jobs into flows.

Every function here takes at least one job and returns a new job, so blocks
nest freely and a whole flow ends up as a single job for ``floc.flow.run``.
An error raised by a nested job fails the flow with that error and is then
raised again to the enclosing block.
"""

from __future__ import annotations

import queue
import threading
import time
from typing import Any, Sequence

from floc.context import Context
from floc.control import Control
from floc.errors import MultipleError
from floc.flow import Job, Predicate


def _call(job: Job, ctx: Context, ctrl: Control) -> None:
    """Run the job and fail the flow with whatever it raises."""
    try:
        job(ctx, ctrl)
    except Exception as exc:
        ctrl.fail(None, exc)
        raise


def _checked(job: Job) -> Job:
    if not callable(job):
        raise TypeError(f"job must be callable, not {type(job).__name__}")
    return job


def background(job: Job) -> Job:
    """Start the job in its own thread without waiting for it.

    The job is not tracked: it may outlive the flow, so it should watch the
    flow's state itself. An error it raises fails the flow.
    """

    def run_in_background(ctx: Context, ctrl: Control) -> None:
        if ctrl.is_finished():
            return

        def target() -> None:
            try:
                job(ctx, ctrl)
            except Exception as exc:
                ctrl.fail(None, exc)

        threading.Thread(target=target, daemon=True).start()

    return run_in_background


def delay(delay: float, job: Job) -> Job:
    """Wait ``delay`` seconds, then run the job unless the flow finished meanwhile."""

    def run_delayed(ctx: Context, ctrl: Control) -> None:
        if ctrl.is_finished():
            return
        if ctx.done().wait(delay):
            return
        _call(job, ctx, ctrl)

    return run_delayed


def then(job: Job) -> Job:
    """Return the job itself; reads well as the first branch of if_.

    Raises TypeError if the job is not callable.
    """
    return _checked(job)


def else_(job: Job) -> Job:
    """Return the job itself; reads well as the second branch of if_.

    Raises TypeError if the job is not callable.
    """
    return _checked(job)


def _branch(
    predicate: Predicate, jobs: Sequence[Job], expected: bool, name: str
) -> Job:
    if len(jobs) not in (1, 2):
        raise ValueError(f"{name} requires one or two jobs")
    on_match = jobs[0]
    otherwise = jobs[1] if len(jobs) == 2 else None

    def run_branch(ctx: Context, ctrl: Control) -> None:
        if ctrl.is_finished():
            return
        chosen = on_match if bool(predicate(ctx)) == expected else otherwise
        if chosen is not None:
            _call(chosen, ctx, ctrl)

    return run_branch


def if_(predicate: Predicate, *args: Job) -> Job:
    """Run the first job if the condition holds, else the second one if given.

    Raises ValueError unless one or two jobs are given.
    """
    return _branch(predicate, args, True, "if_")


def if_not(predicate: Predicate, *args: Job) -> Job:
    """Run the first job if the condition fails, else the second one if given.

    Raises ValueError unless one or two jobs are given.
    """
    return _branch(predicate, args, False, "if_not")


def loop(job: Job) -> Job:
    """Run the job over and over until the flow finishes."""

    def run_loop(ctx: Context, ctrl: Control) -> None:
        while not ctrl.is_finished():
            _call(job, ctx, ctrl)

    return run_loop


def parallel(*args: Job) -> Job:
    """Run the jobs in their own threads and wait until all of them return.

    If any of them raise, the flow fails with the first error reported and a
    MultipleError holding every error, in the order they arrived, is raised.
    """
    jobs = list(args)

    def run_parallel(ctx: Context, ctrl: Control) -> None:
        if ctrl.is_finished():
            return

        done: queue.Queue[Exception | None] = queue.Queue()

        def worker(job: Job) -> None:
            err: Exception | None = None
            try:
                job(ctx, ctrl)
            except Exception as exc:
                err = exc
            finally:
                done.put(err)

        for job in jobs:
            threading.Thread(target=worker, args=(job,), daemon=True).start()

        errors: list[Exception] = []
        for _ in jobs:
            err = done.get()
            if err is not None:
                ctrl.fail(None, err)
                errors.append(err)

        if errors:
            raise MultipleError(errors[0], *errors[1:])

    return run_parallel


def repeat(times: int, job: Job) -> Job:
    """Run the job ``times`` times, stopping early if the flow finishes."""

    def run_repeat(ctx: Context, ctrl: Control) -> None:
        for _ in range(times):
            if ctrl.is_finished():
                return
            _call(job, ctx, ctrl)

    return run_repeat


def sequence(*args: Job) -> Job:
    """Run the jobs one after another, stopping once the flow finishes."""
    jobs = list(args)

    def run_sequence(ctx: Context, ctrl: Control) -> None:
        for job in jobs:
            if ctrl.is_finished():
                return
            _call(job, ctx, ctrl)

    return run_sequence


def wait(predicate: Predicate, sleep: float) -> Job:
    """Sleep ``sleep`` seconds between checks until the condition holds or the flow finishes."""

    def run_wait(ctx: Context, ctrl: Control) -> Any:
        while not ctrl.is_finished() and not predicate(ctx):
            time.sleep(sleep)

    return run_wait


def while_(predicate: Predicate, job: Job) -> Job:
    """Run the job again and again while the condition holds."""

    def run_while(ctx: Context, ctrl: Control) -> None:
        while not ctrl.is_finished() and predicate(ctx):
            _call(job, ctx, ctrl)

    return run_while