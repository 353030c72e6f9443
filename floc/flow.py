"""Entry points that run a flow of jobs and collect its outcome.

A job is a callable taking the flow's Context and Control. It finishes the
flow through the Control and reports an error by raising it. A predicate is a
callable taking the Context and returning a bool. Jobs are combined with the
blocks in the run, guard and pred modules into a single job, which is handed
to run():

    flow = run.sequence(
        run.background(write_to_disk),
        run.while_(pred.not_(test_computed), run.sequence(
            run.parallel(compute_something, guard.panic(compute_dangerous)),
            update_computed_flag,
        )),
        complete_with_success,
    )
    result, data, err = floc.flow.run(flow)
"""

from __future__ import annotations

from typing import Any, Callable

from floc.context import Context, new_context
from floc.control import Control, new_control
from floc.errors import InvalidJobError
from floc.result import Result

Job = Callable[[Context, Control], Any]
Predicate = Callable[[Context], bool]


def run(job: Job) -> tuple[Result, Any, BaseException | None]:
    """Run the job with a fresh Context and Control."""
    with new_context() as ctx, new_control(ctx) as ctrl:
        return run_with(ctx, ctrl, job)


def run_with(
    ctx: Context, ctrl: Control, job: Job
) -> tuple[Result, Any, BaseException | None]:
    """Run the job with the given Context and Control and return its outcome."""
    if job is None or not callable(job):
        raise InvalidJobError()

    unhandled: Exception | None = None
    try:
        job(ctx, ctrl)
    except Exception as exc:
        unhandled = exc

    result, data, err = ctrl.result()
    if result != Result.NONE:
        return result, data, err
    if unhandled is not None:
        return Result.FAILED, None, unhandled
    return Result.NONE, None, None