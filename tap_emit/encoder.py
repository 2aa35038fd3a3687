"""TAP version 14 protocol element formatters.

Each function writes exactly one protocol element (possibly a multi-line
diagnostic block) to a byte sink and returns nothing. The functions keep no
state between calls and validate nothing: ordering, numbering and plan
consistency are the caller's concern. Errors raised by the sink propagate
unchanged.
"""

from typing import Protocol

from tap_emit.models.result import TestResult

TAP_VERSION = 14
ENCODING = "utf-8"
YAML_INDENT = "  "
BLOCK_SCALAR_INDENT = "    "


class Sink(Protocol):
    """Append-only byte destination (file, stdout buffer, BytesIO)."""

    def write(self, data: bytes, /) -> object:
        """Write bytes to the destination."""


def _write_line(sink: Sink, line: str) -> None:
    sink.write(f"{line}\n".encode(ENCODING))


def emit_version(sink: Sink) -> None:
    """Write the `TAP version 14` header line."""
    _write_line(sink, f"TAP version {TAP_VERSION}")


def emit_plan(sink: Sink, count: int) -> None:
    """Write the plan line `1..<count>` (`1..0` means nothing planned)."""
    _write_line(sink, f"1..{count}")


def emit_test_point(sink: Sink, result: TestResult) -> None:
    """Write a test point line and, when needed, its YAML diagnostic block.

    A block is written for every failing result, and for a passing result
    only when it carries captured output. Block fields always appear in the
    order message, severity, exitcode, output.
    """
    status = "ok" if result.ok else "not ok"
    _write_line(sink, f"{status} {result.number} - {result.name}")

    if result.ok and result.output is None:
        return

    _write_line(sink, f"{YAML_INDENT}---")
    if result.error_message is not None:
        _emit_scalar(sink, "message", result.error_message)
    if not result.ok:
        _write_line(sink, f"{YAML_INDENT}severity: fail")
    if result.exit_code is not None:
        _write_line(sink, f"{YAML_INDENT}exitcode: {result.exit_code}")
    if result.output is not None:
        _emit_scalar(sink, "output", result.output)
    _write_line(sink, f"{YAML_INDENT}...")


def _emit_scalar(sink: Sink, key: str, value: str) -> None:
    # Values are not escaped: embedded quotes yield invalid YAML.
    if "\n" not in value:
        _write_line(sink, f'{YAML_INDENT}{key}: "{value}"')
        return

    lines = value.split("\n")
    if lines[-1] == "":
        lines.pop()

    _write_line(sink, f"{YAML_INDENT}{key}: |")
    for line in lines:
        _write_line(sink, f"{BLOCK_SCALAR_INDENT}{line}")


def emit_bail_out(sink: Sink, reason: str) -> None:
    """Write `Bail out! <reason>`; does not close or terminate the stream."""
    _write_line(sink, f"Bail out! {reason}")


def emit_comment(sink: Sink, text: str) -> None:
    """Write a `# <text>` comment line."""
    _write_line(sink, f"# {text}")


def emit_skip(sink: Sink, number: int, description: str, reason: str) -> None:
    """Write an `ok` test point carrying a SKIP directive."""
    _write_line(sink, f"ok {number} - {description} # SKIP {reason}")


def emit_todo(sink: Sink, number: int, description: str, reason: str) -> None:
    """Write a `not ok` test point carrying a TODO directive."""
    _write_line(sink, f"not ok {number} - {description} # TODO {reason}")


def emit_subtest(sink: Sink, name: str) -> None:
    """Write the `# Subtest: <name>` comment introducing a child stream.

    Pass the child's (indented) sink so the comment sits at the child's
    indentation level.
    """
    emit_comment(sink, f"Subtest: {name}")


class IndentedSink:
    """Sink wrapper that indents every written line by four spaces.

    Used to nest a subtest stream inside its parent. Writes are expected to
    be whole lines, which is what every `emit_*` function produces.
    """

    def __init__(self, sink: Sink) -> None:
        self._sink = sink

    def write(self, data: bytes, /) -> int:
        lines = data.split(b"\n")
        tail = lines.pop()
        indented = b"".join(b"    " + line + b"\n" for line in lines)
        if tail:
            indented += b"    " + tail
        self._sink.write(indented)
        return len(indented)
