"""Tests for source loading module."""

from unittest.mock import Mock, patch

import pytest

from tap_emit.sources.command import command_manifest
from tap_emit.sources.go_test import go_test_manifest
from tap_emit.sources.loading import (
    SourceNotFoundError,
    available_source_keys,
    load_source_manifest,
)


def test_load_source_manifest_returns_command_manifest() -> None:
    """Loads command manifest by key."""
    manifest = load_source_manifest("command")

    assert manifest is command_manifest


def test_load_source_manifest_returns_go_test_manifest() -> None:
    """Loads go test manifest by key."""
    manifest = load_source_manifest("go-test")

    assert manifest is go_test_manifest


def test_load_source_manifest_raises_for_unknown_source() -> None:
    """Raises SourceNotFoundError naming the registered sources."""
    with pytest.raises(SourceNotFoundError) as exc_info:
        load_source_manifest("unknown-source")

    assert "unknown-source" in str(exc_info.value)
    assert "Available sources: ['command', 'go-test']" in str(exc_info.value)


def test_load_source_manifest_rejects_non_manifest_entry_point() -> None:
    """Entry points resolving to something else raise TypeError."""
    entry = Mock(value="somewhere:thing")
    entry.load.return_value = object()

    with (
        patch("tap_emit.sources.loading.entry_points", return_value=[entry]),
        pytest.raises(TypeError, match="not a SourceManifest"),
    ):
        load_source_manifest("broken")


def test_available_source_keys_are_sorted() -> None:
    """Lists every registered source key once, sorted."""
    assert list(available_source_keys()) == ["command", "go-test"]
