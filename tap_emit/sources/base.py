"""Abstract base class for result sources."""

from abc import ABC, abstractmethod
from dataclasses import dataclass

from tap_emit.encoder import Sink


@dataclass(frozen=True, kw_only=True)
class ResultSource(ABC):
    """Abstract base for front ends that produce results and encode them.

    A source acts as the host test runner: it owns the sequence generator,
    decides the order of protocol elements and is the only caller of the
    encoder for its stream.
    """

    @abstractmethod
    async def emit(self, sink: Sink) -> int:
        """Write a complete TAP document to the sink.

        Args:
            sink: Byte destination for the TAP stream

        Returns:
            Exit code: 0 when every test point passed, 1 otherwise

        """
