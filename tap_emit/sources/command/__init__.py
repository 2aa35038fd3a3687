"""Command suite source module."""

from tap_emit.sources.command.config import CommandSourceConfig
from tap_emit.sources.command.manifest import command_manifest
from tap_emit.sources.command.source import CommandSource

__all__ = ["CommandSource", "CommandSourceConfig", "command_manifest"]
