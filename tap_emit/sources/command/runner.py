"""Run suite commands as subprocesses."""

import asyncio
import logging
import os
import signal
from contextlib import suppress
from dataclasses import dataclass
from pathlib import Path

from tap_emit.sources.command.models import SuiteTest

log = logging.getLogger(__name__)


@dataclass(frozen=True, kw_only=True)
class CommandOutcome:
    """Outcome of one command execution.

    `exit_code` is None when the command could not be started or was
    killed on timeout; `error` then describes what happened.
    """

    exit_code: int | None
    output: str
    duration: float
    error: str | None = None

    @property
    def ok(self) -> bool:
        """Whether the command ran to completion with status 0."""
        return self.exit_code == 0


async def run_command(test: SuiteTest, base_dir: Path) -> CommandOutcome:
    """Run a suite command, merging stderr into stdout.

    Args:
        test: Suite entry to execute
        base_dir: Directory `test.cwd` is resolved against

    Returns:
        Outcome with decoded output; never raises for command failures.
        On timeout the output read before the kill is kept.

    """
    loop = asyncio.get_running_loop()
    started = loop.time()
    cwd = base_dir / test.cwd if test.cwd else base_dir
    timeout = test.timeout_seconds

    log.debug("Starting %s: %s (cwd=%s)", test.name, test.command, cwd)
    try:
        if isinstance(test.command, str):
            process = await asyncio.create_subprocess_shell(
                test.command,
                cwd=cwd,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.STDOUT,
                start_new_session=True,
            )
        else:
            process = await asyncio.create_subprocess_exec(
                *test.command,
                cwd=cwd,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.STDOUT,
                start_new_session=True,
            )
    except OSError as e:
        log.warning("Could not start %s: %s", test.name, e)
        return CommandOutcome(
            exit_code=None,
            output="",
            duration=loop.time() - started,
            error=f"failed to start command: {e}",
        )

    chunks: list[bytes] = []

    async def drain() -> None:
        assert process.stdout is not None
        while chunk := await process.stdout.read(65536):
            chunks.append(chunk)
        await process.wait()

    try:
        await asyncio.wait_for(drain(), timeout=timeout)
    except TimeoutError:
        await _terminate(process)
        log.warning("%s timed out after %gs", test.name, timeout)
        return CommandOutcome(
            exit_code=None,
            output=_decode(chunks),
            duration=loop.time() - started,
            error=f"timed out after {timeout:g}s",
        )
    except asyncio.CancelledError:
        await asyncio.shield(_terminate(process))
        raise

    duration = loop.time() - started
    log.debug(
        "Finished %s: exit=%s duration=%.2fs", test.name, process.returncode, duration
    )
    return CommandOutcome(
        exit_code=process.returncode,
        output=_decode(chunks),
        duration=duration,
    )


def _decode(chunks: list[bytes]) -> str:
    return b"".join(chunks).decode(errors="replace")


async def _terminate(process: asyncio.subprocess.Process) -> None:
    # Kill the whole session so shell-spawned children die too, then reap
    if process.returncode is None:
        with suppress(ProcessLookupError):
            os.killpg(process.pid, signal.SIGKILL)
    await process.wait()
