"""
Event name parsing.

A declared event name such as ``App\\Users::onCreate`` is split into a
namespace (``App\\Users``) and a local name (``onCreate``). The local name is
the trailing identifier, which must start with a letter; everything before the
non-word characters that separate it is the namespace.

The convention is held by a NameParser so applications using a different
separator or root marker can supply their own policy.
"""

import re
from dataclasses import dataclass
from dataclasses import field
from typing import Optional


DEFAULT_SEPARATOR = "::"
DEFAULT_ROOT_MARKER = "\\"
DEFAULT_PATTERN = re.compile(
    r"^(?P<namespace>.*\w+)[^\w]+(?P<name>[a-z]\w+)$",
    re.IGNORECASE | re.ASCII,
)


@dataclass(frozen=True)
class NameParser(object):
    """Splits declared names and joins them back into fully qualified names."""

    separator: str = DEFAULT_SEPARATOR
    """Placed between namespace and local name when formatting."""

    root_marker: Optional[str] = DEFAULT_ROOT_MARKER
    """Every leading occurrence is stripped before matching."""

    pattern: re.Pattern = field(default=DEFAULT_PATTERN)
    """
    Must define the ``namespace`` and ``name`` groups, and must split names
    joined with ``separator``. Checked on construction.
    """

    def __post_init__(self) -> None:
        sample = ("namespace", "name")
        if self.parse(self.format(*sample)) != sample:
            raise ValueError(
                f"Pattern {self.pattern.pattern!r} cannot split names joined "
                f"with separator {self.separator!r}"
            )

    def parse(self, raw: str) -> tuple[Optional[str], str]:
        """
        Split a declared name into its namespace and local name.

        Args:
            raw (str): The declared name, e.g. 'App::onStartup'.
        Returns:
            tuple[Optional[str], str]: (namespace, local_name). The namespace
                is None when the name is a bare identifier.
        """
        if self.root_marker:
            while raw.startswith(self.root_marker):
                raw = raw[len(self.root_marker) :]

        match = self.pattern.match(raw)
        if match:
            return match.group("namespace"), match.group("name")

        return None, raw

    def format(self, namespace: Optional[str], local_name: str) -> str:
        """Join a namespace and local name into the fully qualified name."""
        if namespace:
            return f"{namespace}{self.separator}{local_name}"
        return local_name


default_parser = NameParser()


def parse_name(raw: str) -> tuple[Optional[str], str]:
    """Split a declared name using the default '::' convention."""
    return default_parser.parse(raw)


def format_name(namespace: Optional[str], local_name: str) -> str:
    """Join a namespace and local name using the default '::' convention."""
    return default_parser.format(namespace, local_name)
