"""
Listener records held by the EventManager.

A Listener wraps its callback in a weak reference so registering with the
manager does not keep the callback's owner alive. Collected callbacks are
pruned from the registry by the manager. Callbacks that cannot be weakly
referenced, such as builtin functions, are held strongly and never pruned.
"""

import inspect
import weakref
from dataclasses import dataclass
from typing import Any
from typing import Callable
from typing import Optional
from typing import Union

CALLBACK = Callable[[Any], Any]
"""
A manager side listener. Receives the single argument object an event
forwards (an EventArgsList or whatever the event's args factory built).
Returning False stops delivery to lower priority listeners.
"""


class StrongRef(object):
    """Holds a callback that does not support weak references."""

    __slots__ = ("_callback",)

    def __init__(self, callback: CALLBACK) -> None:
        self._callback = callback

    def __call__(self) -> CALLBACK:
        return self._callback


@dataclass(frozen=True)
class Listener(object):
    """A weakly held callback registered under an event name."""

    weak_callback: Union[weakref.ref[Any], weakref.WeakMethod, StrongRef]
    """Reference to the callback, dead once a weakly held callback is collected."""

    priority: int
    """Higher numbers are executed before lower numbers."""

    name: str
    """The event name or '<namespace>::*' pattern listened to."""

    @property
    def callback(self) -> Optional[CALLBACK]:
        """Get the live callback, or None if collected."""
        return self.weak_callback()


def make_weak_ref(
    callback: CALLBACK, on_collected: Optional[Callable[[], None]] = None
) -> Union[weakref.ref[Any], weakref.WeakMethod, StrongRef]:
    """Create the right kind of reference for functions, bound methods and builtins."""

    def cleanup(_: Union[weakref.ref[Any], weakref.WeakMethod]) -> None:
        if on_collected is not None:
            on_collected()

    if inspect.ismethod(callback):
        return weakref.WeakMethod(callback, cleanup)

    try:
        return weakref.ref(callback, cleanup)
    except TypeError:
        return StrongRef(callback)


def get_callable_name(callable_: Callable) -> str:
    """
    Returns the name of the callable, using class name for items with __self__,
    __qualname__ for plain functions, or str(callable_) if neither are found.
    """
    if callable_ is None:
        return "<dead reference>"
    elif hasattr(callable_, "__self__") and hasattr(callable_, "__name__"):
        return f"{callable_.__self__.__class__.__name__}.{callable_.__name__}"
    elif hasattr(callable_, "__qualname__"):
        module = getattr(callable_, "__module__", "<unknown>")
        return f"{module}.{callable_.__qualname__}"
    else:
        return str(callable_)
