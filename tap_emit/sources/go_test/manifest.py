"""Go test source manifest."""

from tap_emit.sources.go_test.config import GoTestSourceConfig
from tap_emit.sources.go_test.source import GoTestSource
from tap_emit.sources.manifest import SourceManifest

go_test_manifest = SourceManifest(
    config_cls=GoTestSourceConfig,
    source_factory=GoTestSource.from_config,
)
