from typing import Any

import pytest


class FakeBroker(object):
    """
    Stands in for a listener registry. Names in ``names`` report listeners and
    every dispatch is recorded as a (name, args) tuple.
    """

    def __init__(self) -> None:
        self.names: set[str] = set()
        self.dispatched: list[tuple[str, Any]] = []
        self.queries: list[str] = []

    def has_listeners(self, name: str) -> bool:
        self.queries.append(name)
        return name in self.names

    def dispatch(self, name: str, args: Any) -> None:
        self.dispatched.append((name, args))


@pytest.fixture
def fake_broker() -> FakeBroker:
    return FakeBroker()
