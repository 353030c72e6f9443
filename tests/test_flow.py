import pytest

from floc import guard
from floc.context import new_context
from floc.control import new_control
from floc.errors import InvalidJobError
from floc.flow import run, run_with
from floc.result import Result


def _summary(outcome):
    result, data, err = outcome
    return result, data, None if err is None else str(err)


def _raise(message):
    def job(ctx, ctrl):
        raise RuntimeError(message)

    return job


def _complete_then_raise(ctx, ctrl):
    ctrl.complete("done")
    raise RuntimeError("ignored")


@pytest.mark.parametrize(
    "flow, expected",
    [
        (lambda ctx, ctrl: None, (Result.NONE, None, None)),
        (guard.complete(1), (Result.COMPLETED, 1, None)),
        (guard.cancel(3.1415), (Result.CANCELED, 3.1415, None)),
        (
            guard.fail("REASON", RuntimeError("failed because of REASON")),
            (Result.FAILED, "REASON", "failed because of REASON"),
        ),
        (_raise("something happened"), (Result.FAILED, None, "something happened")),
        (_complete_then_raise, (Result.COMPLETED, "done", None)),
    ],
)
def test_run(flow, expected):
    assert _summary(run(flow)) == expected


@pytest.mark.parametrize("job", [None, 42])
def test_invalid_job_raises(job):
    with pytest.raises(InvalidJobError):
        run(job)
    with new_context() as ctx, new_control(ctx) as ctrl:
        with pytest.raises(InvalidJobError):
            run_with(ctx, ctrl, job)


def test_unhandled_error_is_returned_as_is():
    failure = RuntimeError("something happened")

    def flow(ctx, ctrl):
        raise failure

    assert run(flow)[2] is failure


def test_run_with_already_finished_control():
    ctx = new_context()
    ctrl = new_control(ctx)
    ctrl.complete(5)
    assert run_with(ctx, ctrl, guard.cancel(None)) == (Result.COMPLETED, 5, None)


def test_job_sees_context_values():
    seen = []

    def flow(ctx, ctrl):
        ctx.add_value("k", "v")
        seen.append(ctx.value("k"))
        ctrl.complete(ctx.value("k"))

    assert run(flow) == (Result.COMPLETED, "v", None)
    assert seen == ["v"]