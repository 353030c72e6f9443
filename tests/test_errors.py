from datetime import datetime

import pytest

from floc.errors import (
    FlocError,
    InvalidJobError,
    JobTimeoutError,
    MultipleError,
    PanicError,
)


def test_invalid_job_message():
    assert str(InvalidJobError()) == "job is invalid"


def test_invalid_job_is_floc_error():
    err = InvalidJobError()
    assert isinstance(err, FlocError)
    assert str(err) == "job is invalid"


@pytest.mark.parametrize("n", range(1, 101))
def test_multiple_top(n):
    errs = [Exception(str(i)) for i in range(n)]
    err = MultipleError(errs[0], *errs[1:])
    assert str(err.top()) == str(errs[0])


@pytest.mark.parametrize("n", range(1, 101))
def test_multiple_list(n):
    errs = [Exception(str(i)) for i in range(n)]
    err = MultipleError(errs[0], *errs[1:])
    assert len(err) == n
    assert [str(e) for e in err.errors()] == [str(e) for e in errs]


def test_multiple_errors_returns_copy():
    first = Exception("a")
    err = MultipleError(first)
    err.errors().append(Exception("b"))
    assert len(err) == 1


def test_multiple_one_error_message():
    err = MultipleError(Exception("ERROR"))
    assert str(err) == "ERROR"


def test_multiple_many_errors_message():
    err = MultipleError(Exception("err1"), Exception("err2"), Exception("err3"))
    assert str(err) == '3 errors: "err1", "err2", "err3"'


def test_panic_with_error():
    cause = ValueError("ERROR")
    err = PanicError(cause)
    assert str(err) == "panic with ERROR"
    assert err.data() is cause


class _Str:
    def __init__(self, text):
        self.text = text

    def __str__(self):
        return self.text


def test_panic_with_stringer():
    data = _Str("STRING")
    err = PanicError(data)
    assert str(err) == "panic with STRING"
    assert err.data() is data


def test_panic_with_other():
    err = PanicError(42)
    assert str(err) == "panic with 42"
    assert err.data() == 42


@pytest.mark.parametrize("i", range(100))
def test_timeout_id(i):
    err = JobTimeoutError(i, datetime.now())
    assert err.job_id() == i


def test_timeout_at():
    now = datetime.now()
    err = JobTimeoutError(None, now)
    assert err.at() == now


def test_timeout_message():
    at = datetime(2020, 1, 2, 3, 4, 5)
    err = JobTimeoutError(1, at)
    assert str(err) == "1 timed out at 2020-01-02 03:04:05"