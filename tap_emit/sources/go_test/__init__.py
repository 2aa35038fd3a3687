"""Go test converter source module."""

from tap_emit.sources.go_test.config import GoTestSourceConfig
from tap_emit.sources.go_test.manifest import go_test_manifest
from tap_emit.sources.go_test.source import GoTestSource

__all__ = ["GoTestSource", "GoTestSourceConfig", "go_test_manifest"]
