# floc

`floc` orchestrates jobs running in threads. You describe a flow out of small
jobs and building blocks, start it at one entry point and get back one result.

A job is any callable `job(ctx, ctrl)`. It receives a `floc.context.Context`
that holds shared values and a `floc.control.Control` that finishes the flow.
A job reports an error it did not handle by raising it. A predicate is any
callable `predicate(ctx)` returning a bool.

## Installation

```
pip install floc
```

## Running a flow

```python
from floc import flow, guard, pred, run

def compute(ctx, ctrl):
    ctx.add_value("answer", 42)

def is_ready(ctx):
    return ctx.value("answer") is not None

job = run.sequence(
    run.parallel(compute, guard.panic(compute)),
    run.if_(pred.not_(is_ready), guard.cancel("not ready")),
    guard.complete("done"),
)

result, data, err = flow.run(job)

if err is not None:
    print(err)
elif result.is_completed():
    print(data)
else:
    print(f"Finished with result {result} and data {data!r}")
```

`flow.run(job)` creates a fresh context and control and returns a tuple
`(result, data, err)`:

- If the flow was finished through the control, its result, data and error.
- Otherwise, if the job raised, `Result.FAILED`, `None` and the exception.
- Otherwise `Result.NONE`, `None`, `None`.

`flow.run_with(ctx, ctrl, job)` does the same with a context from
`floc.context.new_context()` (or `borrow_context(base)`) and a control from
`floc.control.new_control(ctx)` that you made yourself. Both raise
`floc.errors.InvalidJobError` if the job is `None` or not callable.

## Context and control

`Context` keeps the current underlying context of a flow under a lock:
`value(key)` looks a value up (returning `None` if missing), `add_value(key, value)`
adds one, and `done()` returns a `threading.Event` that is set once the flow is
finished. The underlying contexts are `floc.context.BaseContext` objects made
with `background()`, `with_value(key, value)` and `with_cancel()`.

`Control` finishes a flow once: `complete(data)`, `cancel(data)` and
`fail(data, err)`; later calls have no effect. `is_finished()` tells whether it
has finished and `result()` returns `(result, data, err)`, with data and error
only once finished. `release()` cancels a flow that has not finished yet. Both
`Context` and `Control` can be used as context managers, which release them on
exit.

## Results

`floc.result.Result` has four values: `NONE`, `COMPLETED`, `CANCELED` and
`FAILED`, with `is_none()`, `is_completed()`, `is_canceled()`, `is_failed()`,
`is_finished()` and `is_valid()`. `str(Result.COMPLETED)` is `"Completed"`.
`floc.result.ResultMask`, built with `new_result_mask(...)`,
`empty_result_mask()` or `Result.mask()`, selects a set of results;
`str(new_result_mask(Result.CANCELED | Result.FAILED))` is `"[Canceled,Failed]"`.

## Building blocks

`floc.run` holds the blocks that shape a flow. Each returns a new job.

- `sequence(*jobs)` runs jobs one after another.
- `parallel(*jobs)` runs jobs in threads and waits for all of them. If any
  raise, it raises `floc.errors.MultipleError` holding every error.
- `background(job)` starts a job in a thread and does not wait for it.
- `if_(predicate, then_job[, else_job])` and `if_not(...)` branch on a predicate;
  they raise `ValueError` unless one or two jobs are given. `then(job)` and
  `else_(job)` return the job unchanged and only make branches easier to read.
- `while_(predicate, job)`, `repeat(times, job)` and `loop(job)` repeat a job.
- `delay(seconds, job)` waits before it starts a job.
- `wait(predicate, sleep)` polls every `sleep` seconds until the predicate holds.

Every block stops as soon as the flow is finished. When a nested job raises,
the block fails the flow with that error and raises it again.

## Guards

`floc.guard` protects jobs:

- `complete(data)`, `cancel(data)` and `fail(data, err)` return jobs that finish
  the flow.
- `panic(job)`, `ignore_panic(job)` and `on_panic(job, trigger)` catch
  exceptions the job raises. `panic` fails the flow with the exception as data
  and `floc.errors.PanicError` as the error; `on_panic` calls
  `trigger(ctx, ctrl, exc)` instead.
- `timeout(when, job_id, job)` and `on_timeout(when, job_id, job, trigger)`
  limit how long a job may take. `when(ctx, job_id)` gives the limit in seconds
  or as a `timedelta`, for example `const_timeout(0.5)`. `deadline(...)` and
  `on_deadline(...)` take a function giving a `datetime` instead, from
  `const_deadline(moment)` or `deadline_in(seconds)`. Without a trigger the flow
  fails with `job_id` as data and `floc.errors.JobTimeoutError`.
- `resume(mask, job)` lets the flow go on after the job finished it with one of
  the masked results, or with any result when the mask is empty. Other results
  are passed on to the flow.

## Predicates

`floc.pred` combines predicates: `and_`, `or_` and `xor` take at least two
(raising `ValueError` otherwise), and `not_` negates one.

## Errors

All errors in `floc.errors` derive from `FlocError`: `InvalidJobError`,
`MultipleError`, `PanicError` and `JobTimeoutError`.

## Limitations

Jobs run in ordinary threads, so nothing can stop a job by force. A timed-out
job is reported as timed out, but the guard still waits for it to return;
jobs should watch `ctrl.is_finished()` or `ctx.done()` and stop on their own.
Jobs started with `background` are not waited for at all.

## Running the tests

```
pip install -e ".[test]"
pytest
```