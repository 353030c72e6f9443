"""Value-carrying, cancelable contexts shared by the jobs of a flow."""

from __future__ import annotations

import threading
from typing import Any, Callable


class _Canceler:
    """The done signal of a cancelable context and its cancelable children."""

    def __init__(self) -> None:
        self.event = threading.Event()
        self._lock = threading.Lock()
        self._children: set[_Canceler] = set()
        self._parent: _Canceler | None = None

    def attach(self, parent: _Canceler) -> None:
        with parent._lock:
            if not parent.event.is_set():
                parent._children.add(self)
                self._parent = parent
                return
        self.cancel()

    def cancel(self) -> None:
        with self._lock:
            if self.event.is_set():
                return
            self.event.set()
            children, self._children = self._children, set()
        for child in children:
            child.cancel()
        parent, self._parent = self._parent, None
        if parent is not None:
            with parent._lock:
                parent._children.discard(self)


class BaseContext:
    """An immutable chain of key/value pairs with a shared done signal."""

    def __init__(self) -> None:
        self._parent: BaseContext | None = None
        self._entry: tuple[Any, Any] | None = None
        self._canceler = _Canceler()

    @classmethod
    def _derive(
        cls,
        parent: BaseContext,
        entry: tuple[Any, Any] | None,
        canceler: _Canceler,
    ) -> BaseContext:
        ctx = cls.__new__(cls)
        ctx._parent = parent
        ctx._entry = entry
        ctx._canceler = canceler
        return ctx

    def value(self, key: Any) -> Any:
        """Return the value stored for key, or None if there is none."""
        node: BaseContext | None = self
        while node is not None:
            if node._entry is not None and node._entry[0] == key:
                return node._entry[1]
            node = node._parent
        return None

    def done(self) -> threading.Event:
        """Return the event that is set once this context is canceled."""
        return self._canceler.event

    def with_value(self, key: Any, value: Any) -> BaseContext:
        """Return a child context that also carries key and value."""
        if key is None:
            raise ValueError("key is None")
        return type(self)._derive(self, (key, value), self._canceler)

    def with_cancel(self) -> tuple[BaseContext, Callable[[], None]]:
        """Return a cancelable child context and the function that cancels it."""
        canceler = _Canceler()
        canceler.attach(self._canceler)
        return type(self)._derive(self, None, canceler), canceler.cancel


def background() -> BaseContext:
    """Return an empty context that is never canceled."""
    return BaseContext()


class Context:
    """Thread-safe holder of the current underlying context of a flow."""

    def __init__(self, ctx: BaseContext) -> None:
        if ctx is None:
            raise ValueError("context is None")
        self._ctx = ctx
        self._lock = threading.Lock()
        self._released = False

    def __enter__(self) -> Context:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.release()

    def release(self) -> None:
        """Mark the context as released; the underlying context stays usable."""
        with self._lock:
            self._released = True

    def ctx(self) -> BaseContext:
        """Return the current underlying context."""
        with self._lock:
            return self._ctx

    def update_ctx(self, ctx: BaseContext) -> None:
        """Replace the underlying context."""
        with self._lock:
            self._ctx = ctx

    def done(self) -> threading.Event:
        """Return the event that is set when the flow is done."""
        with self._lock:
            return self._ctx.done()

    def value(self, key: Any) -> Any:
        """Return the value stored for key, or None if there is none."""
        return self.ctx().value(key)

    def add_value(self, key: Any, value: Any) -> None:
        """Make a child context carrying key and value the current one."""
        with self._lock:
            self._ctx = self._ctx.with_value(key, value)


def borrow_context(ctx: BaseContext) -> Context:
    """Wrap the given underlying context."""
    if ctx is None:
        raise ValueError("context is None")
    return Context(ctx)


def new_context() -> Context:
    """Return a context over a fresh background context."""
    return Context(background())