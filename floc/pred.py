"""Predicates for AND, OR, NOT and XOR logic.

A predicate is a callable that takes the flow's context and returns a bool.
Combined with blocks such as ``run.if_`` they make a flow non-linear.
"""

from __future__ import annotations

import operator
from functools import reduce
from typing import Any, Callable, Iterable

from floc.flow import Predicate

Fold = Callable[[Iterable[bool]], bool]


def _chain(name: str, predicates: tuple[Predicate, ...], fold: Fold) -> Predicate:
    """Combine the predicates, evaluated lazily left to right, with the fold."""
    if len(predicates) < 2:
        raise ValueError(f"{name} requires at least 2 predicates")

    def test(ctx: Any) -> bool:
        return fold(bool(predicate(ctx)) for predicate in predicates)

    return test


def _xor_all(values: Iterable[bool]) -> bool:
    return reduce(operator.ne, values)


def and_(*args: Predicate) -> Predicate:
    """Return a predicate true when every predicate is, stopping at the first false.

    Raises ValueError if fewer than two predicates are given.
    """
    return _chain("and_", args, all)


def or_(*args: Predicate) -> Predicate:
    """Return a predicate true when any predicate is, stopping at the first true.

    Raises ValueError if fewer than two predicates are given.
    """
    return _chain("or_", args, any)


def not_(predicate: Predicate) -> Predicate:
    """Return the negation of the predicate."""

    def test(ctx: Any) -> bool:
        return not predicate(ctx)

    return test


def xor(*args: Predicate) -> Predicate:
    """Return a predicate chaining the predicates with XOR, left to right.

    Raises ValueError if fewer than two predicates are given.
    """
    return _chain("xor", args, _xor_all)