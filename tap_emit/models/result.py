"""Models for test execution results."""

from dataclasses import dataclass


@dataclass(frozen=True, kw_only=True)
class TestResult:
    """Result of a single, already-completed test execution.

    Encoded independently of every other result; `number` is its only
    identity in the stream.
    """

    __test__ = False

    number: int
    name: str
    ok: bool
    error_message: str | None = None
    exit_code: int | None = None
    output: str | None = None
