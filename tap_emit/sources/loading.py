"""Registry of result sources published through entry points."""

from collections.abc import Sequence
from importlib.metadata import entry_points
from typing import Any

from tap_emit.sources.manifest import SourceManifest

ENTRY_POINT_GROUP = "tap_emit.sources"


class SourceNotFoundError(Exception):
    """Raised when no source is registered under the requested key."""


def available_source_keys() -> Sequence[str]:
    """Return the registered source keys, sorted."""
    return sorted({entry.name for entry in entry_points(group=ENTRY_POINT_GROUP)})


def load_source_manifest(key: str) -> SourceManifest[Any]:
    """Load a source manifest by key.

    Args:
        key: The source key as registered in pyproject.toml
             (e.g., "command", "go-test")

    Returns:
        The source manifest instance

    Raises:
        SourceNotFoundError: If no source with the given key is found
        TypeError: If the entry point does not resolve to a SourceManifest

    """
    matches = entry_points(group=ENTRY_POINT_GROUP, name=key)
    if not matches:
        raise SourceNotFoundError(
            f"Source '{key}' not found. "
            f"Available sources: {list(available_source_keys())}"
        )

    entry = next(iter(matches))
    manifest = entry.load()
    if not isinstance(manifest, SourceManifest):
        raise TypeError(
            f"Entry point '{key}' ({entry.value}) is a "
            f"{type(manifest).__name__}, not a SourceManifest"
        )
    return manifest
