"""Source manifest definition for the plugin system."""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Generic, TypeVar

from pydantic import BaseModel

from tap_emit.sources.base import ResultSource

ConfigT = TypeVar("ConfigT", bound=BaseModel)


@dataclass(frozen=True, kw_only=True)
class SourceManifest(Generic[ConfigT]):
    """Manifest describing a source plugin.

    Holds the configuration class and the factory building the source from
    a validated configuration, so sources are only imported when selected.
    """

    config_cls: type[ConfigT]
    source_factory: Callable[[ConfigT], ResultSource]
