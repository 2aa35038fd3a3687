"""Models for command suites loaded from YAML files."""

import re
from collections.abc import Sequence
from typing import Self

from pydantic import Field, field_validator, model_validator

from tap_emit.models.base import Model

TIMEOUT_PATTERN = re.compile(r"^(\d+(?:\.\d+)?)([smh]?)$")
TIMEOUT_UNITS = {"": 1, "s": 1, "m": 60, "h": 3600}


def parse_timeout(value: str) -> float:
    """Convert a timeout string ("300s", "5m", "1h", "90") into seconds.

    Raises:
        ValueError: If the string is not a recognised duration

    """
    match = TIMEOUT_PATTERN.match(value.strip())
    if match is None:
        raise ValueError(f"Invalid timeout '{value}' (expected e.g. '30s', '5m')")
    amount, unit = match.groups()
    return float(amount) * TIMEOUT_UNITS[unit]


class SuiteTest(Model):
    """Individual command to run as one test point."""

    __test__ = False

    name: str = Field(..., description="Test point description")
    command: Sequence[str] | str = Field(
        ..., description="Argument vector, or a string run through the shell"
    )
    cwd: str | None = Field(
        default=None, description="Working directory relative to the suite file"
    )
    timeout: str = Field(default="5m", description="Test timeout (e.g., '300s', '5m')")
    skip: str | None = Field(default=None, description="Skip reason; not run")
    todo: str | None = Field(default=None, description="TODO reason; run anyway")

    @field_validator("command")
    @classmethod
    def _command_not_empty(cls, value: Sequence[str] | str) -> Sequence[str] | str:
        if not value:
            raise ValueError("command must not be empty")
        return value

    @field_validator("timeout")
    @classmethod
    def _timeout_parses(cls, value: str) -> str:
        parse_timeout(value)
        return value

    @model_validator(mode="after")
    def _single_directive(self) -> Self:
        if self.skip is not None and self.todo is not None:
            raise ValueError("a test cannot be both skipped and todo")
        return self

    @property
    def timeout_seconds(self) -> float:
        """Timeout as a number of seconds."""
        return parse_timeout(self.timeout)


class SuiteDefinition(Model):
    """Complete command suite loaded from a YAML file."""

    version: str = Field(..., description="Suite schema version")
    tests: Sequence[SuiteTest] = Field(
        default_factory=list, description="Tests in emission order"
    )
