"""
# Event

A named list of listeners for one logical event.

Calling an event invokes its listeners in insertion order with the same
positional arguments. A listener returning exactly ``False`` stops the chain;
``None``, ``0``, ``""`` and other falsy values do not.

When a broker is injected and reports listeners for the event's fully
qualified name, one BrokerProxy is appended to the chain at dispatch time. The
proxy packages the arguments and hands them to ``broker.dispatch()``. The
proxy is built anew on every resolution because the broker's listeners can
change between dispatches.

Events are sealed: reading or writing anything outside the public surface
raises MemberAccessError instead of quietly creating an attribute.
"""

import logging
from collections.abc import Iterable
from collections.abc import Iterator
from typing import Any
from typing import Callable
from typing import Optional
from typing import Protocol
from typing import runtime_checkable

from eventline import args as args_
from eventline import errors
from eventline import names


logger = logging.getLogger(__name__)


LISTENER = Callable[..., Any]
"""
Any callable receiving the event's positional arguments.
Only a return value of exactly False is meaningful: it stops the chain.
"""

ARGS_FACTORY = Callable[..., Any]
"""
Builds the argument object sent to a broker from the positional arguments.
A class whose constructor takes the arguments in order is a valid factory.
"""

SCALAR_TYPES = (str, bytes, bytearray)
"""Iterable types dispatch() passes as one argument instead of unpacking."""


@runtime_checkable
class Broker(Protocol):
    """The capability an event needs from an external listener registry."""

    def has_listeners(self, name: str) -> bool:
        """Whether any listener is registered for the fully qualified name."""

    def dispatch(self, name: str, args: Any) -> None:
        """Deliver an argument object to the listeners registered for name."""


class BrokerProxy(object):
    """The listener that forwards an event's arguments to its broker."""

    __slots__ = ("name", "broker", "args_factory")

    def __init__(
        self, name: str, broker: Broker, args_factory: Optional[ARGS_FACTORY] = None
    ) -> None:
        self.name = name
        self.broker = broker
        self.args_factory = args_factory

    def __call__(self, *args: Any) -> None:
        if self.args_factory is None:
            event_args = args_.EventArgsList(args)
        else:
            # Construction errors are configuration errors, let them surface.
            event_args = self.args_factory(*args)

        logger.debug(f"Forwarding '{self.name}' to broker {self.broker!r}")
        self.broker.dispatch(self.name, event_args)

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} {self.name!r}>"


class Event(object):
    """
    An ordered, short-circuitable listener chain for one named event.

    Args:
        name (str): Declared name, optionally namespaced ('App::onStartup').
        defaults (Iterable[LISTENER]): Listeners to add on construction.
        args_factory (Optional[ARGS_FACTORY]): Builds the object handed to
            the broker. Defaults to wrapping the arguments in EventArgsList.
        parser (Optional[names.NameParser]): Name convention to parse and
            format the name with. Defaults to the '::' convention.
    """

    __slots__ = (
        "_namespace",
        "_local_name",
        "_parser",
        "_listeners",
        "_broker",
        "_args_factory",
    )

    def __init__(
        self,
        name: str,
        defaults: Iterable[LISTENER] = (),
        args_factory: Optional[ARGS_FACTORY] = None,
        parser: Optional[names.NameParser] = None,
    ) -> None:
        parser = parser or names.default_parser
        namespace, local_name = parser.parse(name)

        object.__setattr__(self, "_parser", parser)
        object.__setattr__(self, "_namespace", namespace)
        object.__setattr__(self, "_local_name", local_name)
        object.__setattr__(self, "_listeners", [])
        object.__setattr__(self, "_broker", None)
        object.__setattr__(self, "_args_factory", args_factory)

        for listener in defaults:
            self.add(listener)

    # -----Naming--------------------------------------------------------------

    @property
    def name(self) -> str:
        """The fully qualified name."""
        return self._parser.format(self._namespace, self._local_name)

    @property
    def namespace(self) -> Optional[str]:
        return self._namespace

    @property
    def local_name(self) -> str:
        return self._local_name

    @property
    def broker(self) -> Optional[Broker]:
        return self._broker

    @property
    def args_factory(self) -> Optional[ARGS_FACTORY]:
        return self._args_factory

    def inject_broker(self, broker: Broker) -> "Event":
        """
        Attach the registry consulted on every dispatch.
        A later call replaces the previous broker.
        """
        if not isinstance(broker, Broker):
            raise TypeError(
                f"{type(broker).__name__} does not provide has_listeners() and "
                f"dispatch()"
            )

        object.__setattr__(self, "_broker", broker)
        logger.debug(f"Broker {broker!r} injected into event '{self.name}'")
        return self

    # -----Dispatch------------------------------------------------------------

    def listeners(self) -> tuple[LISTENER, ...]:
        """
        Resolve the effective listener chain.

        Returns:
            tuple[LISTENER, ...]: The local listeners in insertion order,
                followed by a BrokerProxy when the broker has listeners for
                this event's name.
        """
        resolved = list(self._listeners)

        broker = self._broker
        if broker is None:
            return tuple(resolved)

        name = self.name
        if not broker.has_listeners(name):
            return tuple(resolved)

        resolved.append(BrokerProxy(name, broker, self._args_factory))
        return tuple(resolved)

    def dispatch(self, args: Any = None) -> None:
        """
        Invoke the listener chain.

        Args:
            args (Any): Positional arguments passed to every listener. None
                means no arguments. Strings, bytes and non-iterable values
                are passed as a single argument.
        Note:
            Stops at the first listener returning exactly False. Exceptions
            raised by listeners are not caught.
        """
        if args is None:
            arguments = ()
        elif isinstance(args, SCALAR_TYPES) or not isinstance(args, Iterable):
            arguments = (args,)
        else:
            arguments = tuple(args)

        for listener in self.listeners():
            if listener(*arguments) is False:
                return

    def __call__(self, *args: Any) -> None:
        self.dispatch(args)

    def add(self, listener: LISTENER) -> "Event":
        """Append a listener to the local chain."""
        self._listeners.append(self._validate(listener))
        return self

    # -----Local Listener Access-----------------------------------------------

    @staticmethod
    def _validate(listener: Any) -> LISTENER:
        if not callable(listener):
            raise errors.InvalidListenerError(
                f"Listener must be callable, got {type(listener).__name__}"
            )
        return listener

    def exists(self, index: int) -> bool:
        """Whether the local chain has a listener at index."""
        return -len(self._listeners) <= index < len(self._listeners)

    def __len__(self) -> int:
        return len(self._listeners)

    def __iter__(self) -> Iterator[LISTENER]:
        return iter(self.listeners())

    def __getitem__(self, index: int) -> LISTENER:
        if not self.exists(index):
            raise errors.ListenerIndexError(
                f"No listener at index {index} of event '{self.name}'"
            )
        return self._listeners[index]

    def __setitem__(self, index: Optional[int], listener: LISTENER) -> None:
        listener = self._validate(listener)

        if index is None or index == len(self._listeners):
            self._listeners.append(listener)
        elif self.exists(index):
            self._listeners[index] = listener
        else:
            raise errors.ListenerIndexError(
                f"Cannot assign listener at index {index} of event '{self.name}'"
            )

    def __delitem__(self, index: int) -> None:
        if self.exists(index):
            del self._listeners[index]

    # -----Member Guard--------------------------------------------------------

    def __getattr__(self, name: str) -> Any:
        # Only reached when normal lookup fails.
        raise errors.MemberAccessError(
            f"There is no property {name} in {self.__class__.__name__}"
        )

    def __setattr__(self, name: str, value: Any) -> None:
        raise errors.MemberAccessError(
            f"There is no property {name} in {self.__class__.__name__}"
        )

    def __delattr__(self, name: str) -> None:
        raise errors.MemberAccessError(
            f"There is no property {name} in {self.__class__.__name__}"
        )

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} {self.name!r} listeners={len(self)}>"
