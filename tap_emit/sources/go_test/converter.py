"""Convert `go test -json` event streams into TAP version 14.

Each package becomes a subtest of the top-level stream, emitted as soon as
its final pass/fail event arrives. Go subtests (`TestA/case`) become nested
subtests of their parent test.
"""

import logging
import re
from collections.abc import Iterable
from dataclasses import dataclass, field

from pydantic import ValidationError

from tap_emit.encoder import (
    IndentedSink,
    Sink,
    emit_comment,
    emit_plan,
    emit_skip,
    emit_subtest,
    emit_test_point,
    emit_version,
)
from tap_emit.models.result import TestResult
from tap_emit.sequence import SequenceGenerator
from tap_emit.sources.go_test.models import GoTestEvent

log = logging.getLogger(__name__)

FILE_LINE_PATTERN = re.compile(r"(\w[\w_]*\.go):(\d+):")
FRAMEWORK_PREFIXES = (
    "=== RUN",
    "=== PAUSE",
    "=== CONT",
    "--- PASS",
    "--- FAIL",
    "--- SKIP",
)


@dataclass(kw_only=True)
class _TestRecord:
    name: str
    action: str = ""
    elapsed: float = 0.0
    output: list[str] = field(default_factory=list)


@dataclass(kw_only=True)
class _PackageRecord:
    name: str
    tests: dict[str, _TestRecord] = field(default_factory=dict)
    output: list[str] = field(default_factory=list)
    failed: bool = False
    elapsed: float = 0.0


def convert_go_test(lines: Iterable[str], sink: Sink, *, verbose: bool = False) -> int:
    """Read `go test -json` lines and write a TAP document to the sink.

    Args:
        lines: Event stream, one JSON object per line
        sink: Byte destination for the TAP stream
        verbose: Attach cleaned output to passing tests too

    Returns:
        Exit code: 0 when every package passed, 1 otherwise

    """
    packages: dict[str, _PackageRecord] = {}
    sequence = SequenceGenerator()
    exit_code = 0

    emit_version(sink)

    for raw_line in lines:
        line = raw_line.rstrip("\r\n")
        if not line.strip():
            continue

        try:
            event = GoTestEvent.model_validate_json(line)
        except ValidationError:
            log.debug("Skipping unparseable event: %s", line)
            emit_comment(sink, f"unparseable: {line}")
            continue

        package = packages.get(event.package)
        if package is None:
            package = _PackageRecord(name=event.package)
            packages[event.package] = package

        if not event.test:
            match event.action:
                case "output":
                    package.output.append(event.output)
                case "pass":
                    package.elapsed = event.elapsed
                    _emit_package(sink, sequence, package, verbose)
                case "fail":
                    package.failed = True
                    package.elapsed = event.elapsed
                    _emit_package(sink, sequence, package, verbose)
                    exit_code = 1
            continue

        test = package.tests.get(event.test)
        if test is None:
            test = _TestRecord(name=event.test)
            package.tests[event.test] = test

        match event.action:
            case "output":
                test.output.append(event.output)
            case "pass" | "fail" | "skip":
                test.action = event.action
                test.elapsed = event.elapsed

    emit_plan(sink, sequence.count())
    log.info("Converted %d package(s)", sequence.count())
    return exit_code


def _emit_package(
    sink: Sink, sequence: SequenceGenerator, package: _PackageRecord, verbose: bool
) -> None:
    log.debug("Emitting package %s (%.3fs)", package.name, package.elapsed)
    child = IndentedSink(sink)
    child_sequence = SequenceGenerator()
    emit_subtest(child, package.name)

    for test in package.tests.values():
        # Nested tests are emitted by their parent
        if "/" in test.name:
            continue
        _emit_test(child, child_sequence, package, test, verbose)

    emit_plan(child, child_sequence.count())

    output = clean_test_output("".join(package.output)) if package.failed else ""
    emit_test_point(
        sink,
        TestResult(
            number=sequence.next(),
            name=package.name,
            ok=not package.failed,
            output=output or None,
        ),
    )


def _emit_test(
    sink: Sink,
    sequence: SequenceGenerator,
    package: _PackageRecord,
    test: _TestRecord,
    verbose: bool,
) -> None:
    prefix = f"{test.name}/"
    children = [
        candidate
        for candidate in package.tests.values()
        if candidate.name.startswith(prefix) and "/" not in candidate.name[len(prefix) :]
    ]

    if children:
        child = IndentedSink(sink)
        child_sequence = SequenceGenerator()
        emit_subtest(child, test.name)
        for candidate in children:
            _emit_test(child, child_sequence, package, candidate, verbose)
        emit_plan(child, child_sequence.count())
        emit_test_point(
            sink,
            TestResult(number=sequence.next(), name=test.name, ok=test.action != "fail"),
        )
        return

    name = test.name.rsplit("/", 1)[-1]
    raw_output = "".join(test.output)
    output = clean_test_output(raw_output)

    match test.action:
        case "fail":
            message = None
            if location := parse_file_line(output):
                message = f"failed at {location[0]}:{location[1]}"
            emit_test_point(
                sink,
                TestResult(
                    number=sequence.next(),
                    name=name,
                    ok=False,
                    error_message=message,
                    output=output or None,
                ),
            )
        case "skip":
            emit_skip(sink, sequence.next(), name, extract_skip_reason(raw_output))
        case _:
            emit_test_point(
                sink,
                TestResult(
                    number=sequence.next(),
                    name=name,
                    ok=True,
                    output=output if verbose and output else None,
                ),
            )


def parse_file_line(output: str) -> tuple[str, str] | None:
    """Find the first `file.go:123:` location in test output."""
    if match := FILE_LINE_PATTERN.search(output):
        return match.group(1), match.group(2)
    return None


def clean_test_output(raw: str) -> str:
    """Drop go test framework chatter and blank lines; strip the rest."""
    lines: list[str] = []
    for line in raw.split("\n"):
        trimmed = line.strip()
        if (
            not trimmed
            or trimmed.startswith(FRAMEWORK_PREFIXES)
            or trimmed in {"PASS", "FAIL"}
        ):
            continue
        lines.append(trimmed)
    return "\n".join(lines)


def extract_skip_reason(output: str) -> str:
    """Return the first line of output that is not framework chatter."""
    for line in output.split("\n"):
        trimmed = line.strip()
        if trimmed and not trimmed.startswith(FRAMEWORK_PREFIXES):
            return trimmed
    return ""
