import pytest

from floc.context import new_context
from floc.control import new_control
from floc.result import Result

SAMPLES = [None, "ABC", 123, 3.1415]

FINISHERS = {
    Result.COMPLETED: lambda ctrl, data: ctrl.complete(data),
    Result.CANCELED: lambda ctrl, data: ctrl.cancel(data),
    Result.FAILED: lambda ctrl, data: ctrl.fail(data, RuntimeError("fail")),
}


@pytest.fixture
def ctx():
    with new_context() as context:
        yield context


@pytest.fixture
def ctrl(ctx):
    with new_control(ctx) as control:
        yield control


def test_new_control_is_running(ctrl):
    assert not ctrl.is_finished()
    assert ctrl.result() == (Result.NONE, None, None)


def test_new_control_none_raises():
    with pytest.raises(ValueError):
        new_control(None)


@pytest.mark.parametrize(
    "before, expected",
    [(None, Result.CANCELED), (Result.COMPLETED, Result.COMPLETED)],
)
def test_release(ctx, before, expected):
    control = new_control(ctx)
    if before is not None:
        FINISHERS[before](control, None)
    control.release()
    assert control.is_finished()
    assert control.result()[0] == expected


@pytest.mark.parametrize("data", SAMPLES)
@pytest.mark.parametrize("expected", list(FINISHERS))
def test_finish(ctrl, expected, data):
    assert not ctrl.is_finished()
    FINISHERS[expected](ctrl, data)
    assert ctrl.is_finished()
    result, got, err = ctrl.result()
    assert (result, got) == (expected, data)
    message = None if err is None else str(err)
    assert message == ("fail" if expected is Result.FAILED else None)


def test_fail_without_error_finishes(ctrl):
    ctrl.fail(None, None)
    assert ctrl.is_finished()
    assert ctrl.result() == (Result.FAILED, None, None)


def test_first_finish_wins(ctrl):
    ctrl.complete(1)
    ctrl.cancel(2)
    ctrl.fail(3, RuntimeError("late"))
    assert ctrl.result() == (Result.COMPLETED, 1, None)


def test_finish_sets_done(ctx, ctrl):
    assert not ctx.done().is_set()
    ctrl.complete(None)
    assert ctx.done().is_set()