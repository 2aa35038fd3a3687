"""Models for `go test -json` events."""

from pydantic import BaseModel, ConfigDict, Field


class GoTestEvent(BaseModel):
    """Single line of `go test -json` output (a test2json event)."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    # RFC 3339 with nanoseconds; kept as text
    time: str | None = Field(default=None, alias="Time")
    action: str = Field(default="", alias="Action")
    package: str = Field(default="", alias="Package")
    test: str = Field(default="", alias="Test")
    elapsed: float = Field(default=0.0, alias="Elapsed")
    output: str = Field(default="", alias="Output")
