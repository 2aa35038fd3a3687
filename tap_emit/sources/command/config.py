"""Configuration for the command suite source."""

from pathlib import Path

from pydantic import BaseModel, Field


class CommandSourceConfig(BaseModel):
    """Configuration for the command suite source."""

    suite: Path
    concurrency: int = Field(default=4, ge=1)
    # Attach captured output to passing test points as well
    verbose: bool = False
    bail_on_failure: bool = False
