"""Unit tests for the sealed member surface of events."""

import pytest

import eventline


def test_unknown_property_read_raises() -> None:
    """Test that reading an undefined property raises MemberAccessError."""
    event = eventline.Event("App::onSave")

    with pytest.raises(
        eventline.MemberAccessError, match="There is no property fooBar in Event"
    ):
        _ = event.fooBar


def test_unknown_property_read_raises_regardless_of_state(fake_broker) -> None:
    """Test that the guard holds once listeners and a broker are attached."""
    event = eventline.Event("App::onSave", defaults=[lambda: None])
    event.inject_broker(fake_broker)
    event()

    with pytest.raises(eventline.MemberAccessError):
        _ = event.fooBar


def test_unknown_property_write_raises() -> None:
    """Test that assigning an undefined property raises."""
    event = eventline.Event("App::onSave")

    with pytest.raises(eventline.MemberAccessError, match="fooBar"):
        event.fooBar = 1


def test_public_properties_are_read_only() -> None:
    """Test that known properties cannot be overwritten either."""
    event = eventline.Event("App::onSave")

    with pytest.raises(eventline.MemberAccessError):
        event.name = "App::onLoad"

    with pytest.raises(eventline.MemberAccessError):
        del event.namespace

    assert event.name == "App::onSave"


def test_member_access_error_is_attribute_error() -> None:
    """Test that callers relying on AttributeError still work."""
    event = eventline.Event("App::onSave")

    assert getattr(event, "fooBar", "missing") == "missing"
    assert hasattr(event, "fooBar") is False
    assert hasattr(event, "dispatch") is True
