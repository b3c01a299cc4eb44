"""
# Event Manager

Registry of listeners keyed by fully qualified event name. Satisfies the
Broker capability an Event consults on every dispatch, so any event with the
manager injected forwards its arguments here once its own listeners have run.

Listeners can be registered to an exact name ('App::onStartup') or to every
event of a namespace ('App::*'). Delivery order is priority, highest first,
then registration order. A listener returning False stops delivery.

The manager is an ordinary object: create as many as needed and inject them
explicitly, there is no global registry.
"""

import json
import logging
import os
from collections.abc import Iterable
from typing import Any
from typing import Callable
from typing import Optional
from typing import Union

from eventline import event as event_
from eventline import handlers
from eventline import listener
from eventline import names


logger = logging.getLogger(__name__)


WILDCARD = "*"


class EventManager(object):
    """
    Broker for named events.

    To manage listeners use register_listener() and unregister_listener(),
    or decorate with @manager.listen(name).

    Args:
        parser (Optional[names.NameParser]): Name convention used for events
            created by this manager and for wildcard matching.
    """

    def __init__(self, parser: Optional[names.NameParser] = None) -> None:
        self._parser = parser or names.default_parser
        self._registry: dict[str, list[listener.Listener]] = {}
        self._exception_handler: Optional[handlers.EXCEPTION_HANDLER] = None

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} names={len(self._registry)}>"

    def clear(self) -> None:
        """Drop every registered listener."""
        self._registry.clear()

    # -----Listener Management-------------------------------------------------

    def register_listener(
        self, name: str, callback: listener.CALLBACK, priority: int = 0
    ) -> None:
        """
        Register a callback to an event name.

        Args:
            name (str): Fully qualified event name (e.g. 'App::onStartup'), or
                '<namespace>::*' to receive every event in a namespace.
            callback (Callable): Receives the event's argument object. Held by
                weak reference.
            priority (int): Higher priorities are run before lower priorities.
        """
        if not callable(callback):
            raise TypeError(f"Listener must be callable, got {type(callback).__name__}")

        weak_callback = listener.make_weak_ref(
            callback, on_collected=lambda: self._on_listener_collected(name)
        )
        entry = listener.Listener(
            weak_callback=weak_callback, priority=priority, name=name
        )
        self._registry.setdefault(name, []).append(entry)

        logger.debug(
            f"Registered {listener.get_callable_name(callback)} to '{name}' "
            f"[priority={priority}]"
        )

    def unregister_listener(self, name: str, callback: listener.CALLBACK) -> None:
        """Remove a callback from an event name. Unknown callbacks are ignored."""
        if name not in self._registry:
            return

        self._registry[name] = [
            entry for entry in self._registry[name] if entry.callback != callback
        ]
        self._cleanup_name_if_empty(name)

    def listen(
        self, name: str, priority: int = 0
    ) -> Callable[[listener.CALLBACK], listener.CALLBACK]:
        """
        Decorator to register a function or static method as a listener.

        Bound methods must be registered with register_listener() once the
        instance exists.
        """

        def decorator(func: listener.CALLBACK) -> listener.CALLBACK:
            self.register_listener(name, func, priority)
            return func

        return decorator

    def set_exception_handler(
        self, handler: Optional[handlers.EXCEPTION_HANDLER]
    ) -> None:
        """
        Set the handler called when a listener raises during dispatch.

        Args:
            handler (Optional[handlers.EXCEPTION_HANDLER]):
                Callable with signature (CALLBACK, str, Exception) -> bool.
                Returns True to stop delivery, False to continue.
                Pass None to restore the default behavior (re-raise).
        """
        self._exception_handler = handler

    def _on_listener_collected(self, name: str) -> None:
        if name not in self._registry:
            return

        self._registry[name] = [
            entry for entry in self._registry[name] if entry.callback is not None
        ]
        self._cleanup_name_if_empty(name)
        logger.debug(f"Pruned collected listener from '{name}'")

    def _cleanup_name_if_empty(self, name: str) -> None:
        if name in self._registry and not self._registry[name]:
            del self._registry[name]

    # -----Broker Capability---------------------------------------------------

    def _matches(self, name: str, pattern: str) -> bool:
        """
        Check if an event name matches a registered name or wildcard pattern.

        Args:
            name (str): The fully qualified name being dispatched.
            pattern (str): The registered name to check against.
        Returns:
            bool: True if listeners under pattern should receive the event.
        """
        if name == pattern:
            return True

        wildcard_suffix = self._parser.separator + WILDCARD
        if pattern.endswith(wildcard_suffix):
            root = pattern[: -len(wildcard_suffix)]
            namespace, _ = self._parser.parse(name)
            return namespace == root

        return False

    def _matching_listeners(self, name: str) -> list[listener.Listener]:
        matching = []
        for pattern, entries in self._registry.items():
            if self._matches(name, pattern):
                matching.extend(entries)

        # sorted() is stable, equal priorities keep registration order.
        return sorted(matching, key=lambda entry: entry.priority, reverse=True)

    def has_listeners(self, name: str) -> bool:
        """Whether any live listener would receive an event with this name."""
        return any(
            entry.callback is not None for entry in self._matching_listeners(name)
        )

    def dispatch(self, name: str, args: Any) -> None:
        """
        Deliver an argument object to every listener matching name.

        Args:
            name (str): Fully qualified event name.
            args (Any): The argument object built by the dispatching event.
        Note:
            Stops at the first listener returning exactly False. Exceptions go
            to the configured exception handler, or are re-raised when none
            is set.
        """
        for entry in self._matching_listeners(name):
            callback = entry.callback
            if callback is None:
                continue

            try:
                if callback(args) is False:
                    return
            except Exception as e:
                if self._exception_handler is None:
                    raise

                stop = self._exception_handler(callback, name, e)
                if stop:
                    return

    # -----Events--------------------------------------------------------------

    def create_event(
        self,
        name: str,
        defaults: Iterable[event_.LISTENER] = (),
        args_factory: Optional[event_.ARGS_FACTORY] = None,
    ) -> event_.Event:
        """Create an Event with this manager already injected."""
        event = event_.Event(
            name, defaults=defaults, args_factory=args_factory, parser=self._parser
        )
        return event.inject_broker(self)

    # -----Introspection API---------------------------------------------------

    def get_names(self) -> list[str]:
        """Get all registered event names and patterns."""
        return sorted(self._registry.keys())

    def get_listener_count(self, name: str) -> int:
        """Number of listeners registered directly to name, including dead ones."""
        return len(self._registry.get(name, []))

    def get_live_listener_count(self, name: str) -> int:
        """Number of listeners registered directly to name that are still alive."""
        return sum(
            1 for entry in self._registry.get(name, []) if entry.callback is not None
        )

    def is_listening(self, callback: listener.CALLBACK, name: str) -> bool:
        """Check if a specific callback is registered directly to name."""
        return any(entry.callback == callback for entry in self._registry.get(name, []))

    def to_dict(self) -> dict[str, list[str]]:
        """Convert the registry to a dictionary of name -> listener descriptions."""
        data = {}
        for name in sorted(self._registry.keys()):
            described = []
            for entry in self._registry[name]:
                info = listener.get_callable_name(entry.callback)
                priority_str = (
                    f" [priority={entry.priority}]" if entry.priority != 0 else ""
                )
                described.append(f"{info}{priority_str}")

            data[name] = described

        return data

    def to_string(self) -> str:
        """Returns a string representation of the registry."""
        return json.dumps(self.to_dict(), indent=4)

    def export(self, filepath: Union[str, os.PathLike]) -> None:
        """Export the registry structure to filepath as JSON."""
        with open(filepath, "w") as outfile:
            json.dump(self.to_dict(), outfile, indent=4)
