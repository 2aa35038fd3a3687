"""Command suite source: run shell commands and report them as TAP."""

import asyncio
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Self

from tap_emit.encoder import (
    Sink,
    emit_bail_out,
    emit_plan,
    emit_skip,
    emit_test_point,
    emit_todo,
    emit_version,
)
from tap_emit.models.result import TestResult
from tap_emit.sequence import SequenceGenerator
from tap_emit.sources.base import ResultSource
from tap_emit.sources.command.config import CommandSourceConfig
from tap_emit.sources.command.loader import load_suite_definition
from tap_emit.sources.command.models import SuiteTest
from tap_emit.sources.command.runner import CommandOutcome, run_command

log = logging.getLogger(__name__)


@dataclass(frozen=True, kw_only=True)
class CommandSource(ResultSource):
    """Runs every command of a suite file, one test point per command.

    Commands run concurrently (bounded by `concurrency`) but are reported
    strictly in suite order from a single coroutine.
    """

    suite_path: Path
    concurrency: int = 4
    verbose: bool = False
    bail_on_failure: bool = False

    @classmethod
    def from_config(cls, config: CommandSourceConfig) -> Self:
        """Create source from configuration."""
        return cls(
            suite_path=config.suite,
            concurrency=config.concurrency,
            verbose=config.verbose,
            bail_on_failure=config.bail_on_failure,
        )

    async def emit(self, sink: Sink) -> int:
        """Run the suite and write its TAP document to the sink."""
        suite = await load_suite_definition(self.suite_path)
        base_dir = self.suite_path.parent
        log.info("Running %d test(s) from %s", len(suite.tests), self.suite_path)

        semaphore = asyncio.Semaphore(self.concurrency)

        async def bounded(test: SuiteTest) -> CommandOutcome:
            async with semaphore:
                return await run_command(test, base_dir)

        sequence = SequenceGenerator()
        exit_code = 0
        tasks: dict[int, asyncio.Task[CommandOutcome]] = {}
        try:
            # Header before any command starts
            emit_version(sink)
            emit_plan(sink, len(suite.tests))

            tasks = {
                index: asyncio.create_task(bounded(test))
                for index, test in enumerate(suite.tests)
                if test.skip is None
            }

            for index, test in enumerate(suite.tests):
                number = sequence.next()
                if test.skip is not None:
                    emit_skip(sink, number, test.name, test.skip)
                    continue

                outcome = await tasks[index]
                if test.todo is not None:
                    emit_todo(sink, number, test.name, test.todo)
                    continue

                result = to_test_result(number, test, outcome, verbose=self.verbose)
                emit_test_point(sink, result)
                if result.ok:
                    continue

                exit_code = 1
                if self.bail_on_failure:
                    log.info("Bailing out after failure of %s", test.name)
                    emit_bail_out(sink, f"{test.name} failed")
                    break
        finally:
            for task in tasks.values():
                task.cancel()
            await asyncio.gather(*tasks.values(), return_exceptions=True)

        log.info("Reported %d of %d test(s)", sequence.count(), len(suite.tests))
        return exit_code


def to_test_result(
    number: int, test: SuiteTest, outcome: CommandOutcome, *, verbose: bool = False
) -> TestResult:
    """Build the test point for a finished command.

    Output is attached to failing points always, and to passing points only
    in verbose mode; empty output is never attached.
    """
    if outcome.error is not None:
        message: str | None = outcome.error
    elif not outcome.ok:
        message = f"command exited with status {outcome.exit_code}"
    else:
        message = None

    output = outcome.output if outcome.output and (verbose or not outcome.ok) else None

    return TestResult(
        number=number,
        name=test.name,
        ok=outcome.ok,
        error_message=message,
        exit_code=outcome.exit_code,
        output=output,
    )
