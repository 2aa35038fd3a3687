"""Configuration for the go test converter source."""

from pathlib import Path

from pydantic import BaseModel


class GoTestSourceConfig(BaseModel):
    """Configuration for the go test converter source."""

    # None reads the event stream from stdin
    input: Path | None = None
    verbose: bool = False
