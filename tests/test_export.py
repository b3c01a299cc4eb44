"""
Unit tests for EventManager export functionality.

Tests verify that the export method writes the registry to files in JSON
format.
"""

import json
from pathlib import Path

import eventline


def test_to_dict_describes_listeners() -> None:
    """Test that to_dict lists callables and non-default priorities."""
    manager = eventline.EventManager()

    def handler(args: eventline.EventArgsList) -> None:
        pass

    manager.register_listener("App::onSave", handler, priority=10)
    manager.register_listener("App::onLoad", handler)

    data = manager.to_dict()

    assert list(data.keys()) == ["App::onLoad", "App::onSave"]
    assert data["App::onSave"][0].endswith("handler [priority=10]")
    assert "[priority" not in data["App::onLoad"][0]


def test_to_string_is_json() -> None:
    """Test that to_string returns the registry as JSON text."""
    manager = eventline.EventManager()

    def handler(args: eventline.EventArgsList) -> None:
        pass

    manager.register_listener("App::onSave", handler)

    assert json.loads(manager.to_string()) == manager.to_dict()


def test_export_creates_valid_json_file(tmp_path: Path) -> None:
    """Test that export creates a valid JSON file with correct content."""
    manager = eventline.EventManager()

    def handler(args: eventline.EventArgsList) -> None:
        pass

    manager.register_listener("App::onSave", handler)

    output_file = tmp_path / "events.json"
    manager.export(output_file)

    with open(output_file) as f:
        data = json.load(f)

    assert data == manager.to_dict()
    assert "App::onSave" in data


def test_export_with_string_path(tmp_path: Path) -> None:
    """Test that export accepts string paths."""
    manager = eventline.EventManager()

    output_file = str(tmp_path / "events.json")
    manager.export(output_file)

    assert json.loads(Path(output_file).read_text()) == {}
