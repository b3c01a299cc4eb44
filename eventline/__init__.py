"""
# eventline

Named events with ordered, short-circuitable listener chains that extend
themselves at dispatch time with the listeners an injected broker holds for
the event's fully qualified name.

Example:
    manager = eventline.EventManager()
    on_startup = manager.create_event("App::onStartup")
    on_startup.add(print_config)

    # Receives an EventArgsList once print_config has run.
    manager.register_listener("App::onStartup", audit_startup)

    on_startup({"debug": True})
"""

from eventline.args import EventArgs
from eventline.args import EventArgsList
from eventline.errors import ArgumentIndexError
from eventline.errors import EventlineError
from eventline.errors import InvalidListenerError
from eventline.errors import ListenerIndexError
from eventline.errors import MemberAccessError
from eventline.event import Broker
from eventline.event import BrokerProxy
from eventline.event import Event
from eventline.manager import EventManager
from eventline.names import NameParser
from eventline.names import format_name
from eventline.names import parse_name


version_major = 1
version_minor = 0
version_patch = 0
__version__ = f"{version_major}.{version_minor}.{version_patch}"

__all__ = [
    "ArgumentIndexError",
    "Broker",
    "BrokerProxy",
    "Event",
    "EventArgs",
    "EventArgsList",
    "EventManager",
    "EventlineError",
    "InvalidListenerError",
    "ListenerIndexError",
    "MemberAccessError",
    "NameParser",
    "format_name",
    "parse_name",
]
