"""
Exception handling policies for EventManager listeners.

A handler receives the failing callback, the event name and the exception,
then returns True to stop delivery or False to continue to the remaining
listeners. With no handler set the manager re-raises, so the error reaches
whoever dispatched the event.

    manager.set_exception_handler(handlers.log_and_continue_exception)

    collector = handlers.ExceptionCollector()
    manager.set_exception_handler(collector)
    ...
    for failure in collector.drain():
        report(failure)
"""

import logging
import sys
from dataclasses import dataclass
from dataclasses import field
from types import TracebackType
from typing import Callable
from typing import Optional

from eventline import listener


logger = logging.getLogger(__name__)


EXCEPTION_HANDLER = Callable[[listener.CALLBACK, str, Exception], bool]
"""Signature for listener exception handlers."""

STOP = True
CONTINUE = False


def _describe(callback: listener.CALLBACK, name: str, exception: Exception) -> str:
    return (
        f"{listener.get_callable_name(callback)} in '{name}': "
        f"{exception.__class__.__name__}: {exception}"
    )


def stop_and_log_exception(
    callback: listener.CALLBACK, name: str, exception: Exception
) -> bool:
    """Stop delivery and log the exception with its traceback."""
    logger.error(
        f"Listener failed, delivery stopped: {_describe(callback, name, exception)}",
        exc_info=True,
    )
    return STOP


def log_and_continue_exception(
    callback: listener.CALLBACK, name: str, exception: Exception
) -> bool:
    """Log listener errors but keep delivering."""
    logger.warning(
        f"Listener error (continuing): {_describe(callback, name, exception)}"
    )
    return CONTINUE


def silent_exception(_: listener.CALLBACK, __: str, ___: Exception) -> bool:
    """Ignore all exceptions."""
    return CONTINUE


@dataclass(frozen=True)
class ListenerFailure(object):
    """One exception recorded by an ExceptionCollector."""

    callback: str
    """Name of the listener that raised."""

    name: str
    """The event name being dispatched."""

    exception: Exception

    traceback: Optional[TracebackType]

    def __str__(self) -> str:
        return (
            f"{self.callback} in '{self.name}': "
            f"{self.exception.__class__.__name__}: {self.exception}"
        )


@dataclass
class ExceptionCollector(object):
    """
    Handler that records every listener failure and keeps delivering.
    Pass the collector itself to EventManager.set_exception_handler().

    Args:
        limit (Optional[int]): Keep at most this many failures, dropping the
            oldest. None keeps everything until drained.
    """

    limit: Optional[int] = None
    failures: list[ListenerFailure] = field(default_factory=list)

    def __call__(
        self, callback: listener.CALLBACK, name: str, exception: Exception
    ) -> bool:
        self.failures.append(
            ListenerFailure(
                callback=listener.get_callable_name(callback),
                name=name,
                exception=exception,
                traceback=sys.exc_info()[2],
            )
        )
        if self.limit is not None and len(self.failures) > self.limit:
            del self.failures[: len(self.failures) - self.limit]

        return CONTINUE

    def drain(self) -> list[ListenerFailure]:
        """Return the recorded failures and forget them."""
        drained, self.failures = self.failures, []
        return drained
