"""Go test source: convert a `go test -json` stream into TAP."""

import asyncio
import sys
from contextlib import nullcontext
from dataclasses import dataclass
from pathlib import Path
from typing import Self, TextIO

from tap_emit.encoder import Sink
from tap_emit.sources.base import ResultSource
from tap_emit.sources.go_test.config import GoTestSourceConfig
from tap_emit.sources.go_test.converter import convert_go_test


@dataclass(frozen=True, kw_only=True)
class GoTestSource(ResultSource):
    """Reads `go test -json` events from a file or stdin."""

    input_path: Path | None = None
    verbose: bool = False

    @classmethod
    def from_config(cls, config: GoTestSourceConfig) -> Self:
        """Create source from configuration."""
        return cls(input_path=config.input, verbose=config.verbose)

    async def emit(self, sink: Sink) -> int:
        """Convert the whole event stream and write it to the sink.

        Reading is blocking, so the conversion runs in a worker thread.
        """
        return await asyncio.to_thread(self._convert, sink)

    def _convert(self, sink: Sink) -> int:
        stream: nullcontext[TextIO] | TextIO
        if self.input_path is None:
            stream = nullcontext(sys.stdin)
        else:
            stream = self.input_path.open(encoding="utf-8")

        with stream as lines:
            return convert_go_test(lines, sink, verbose=self.verbose)
