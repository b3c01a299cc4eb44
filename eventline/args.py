"""
Argument objects handed to a broker when an event forwards its arguments.

An event without an argument factory wraps its positional arguments in an
EventArgsList so broker side listeners can count, iterate and index them the
same way an event's own listener list is accessed.
"""

from collections.abc import Iterable
from collections.abc import Iterator
from collections.abc import Sequence
from typing import Any
from typing import Union

from eventline import errors


class EventArgs(object):
    """Base for argument objects delivered through a broker."""


class EventArgsList(EventArgs, Sequence):
    """Immutable ordered container of positional event arguments."""

    __slots__ = ("_args",)

    def __init__(self, args: Iterable[Any] = ()) -> None:
        self._args = tuple(args)

    def __getitem__(self, index: Union[int, slice]) -> Any:
        if isinstance(index, slice):
            return EventArgsList(self._args[index])

        try:
            return self._args[index]
        except IndexError:
            raise errors.ArgumentIndexError(
                f"Argument index {index} is out of range for {len(self)} arguments"
            ) from None

    def __len__(self) -> int:
        return len(self._args)

    def __iter__(self) -> Iterator[Any]:
        return iter(self._args)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, EventArgsList):
            return self._args == other._args
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._args)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({list(self._args)!r})"

    def to_list(self) -> list[Any]:
        """Returns a mutable copy of the arguments."""
        return list(self._args)
