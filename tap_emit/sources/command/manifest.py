"""Command suite source manifest."""

from tap_emit.sources.command.config import CommandSourceConfig
from tap_emit.sources.command.source import CommandSource
from tap_emit.sources.manifest import SourceManifest

command_manifest = SourceManifest(
    config_cls=CommandSourceConfig,
    source_factory=CommandSource.from_config,
)
