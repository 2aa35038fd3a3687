"""Monotonic test-point numbering."""


class SequenceGenerator:
    """Hands out strictly increasing 1-based test-point numbers.

    Owned by the caller for the lifetime of one TAP stream (or one subtest
    stream). Not thread-safe: callers driving tests concurrently must
    serialize access themselves.
    """

    def __init__(self) -> None:
        self._counter = 0

    def next(self) -> int:
        """Advance the counter and return the new value (first call returns 1)."""
        self._counter += 1
        return self._counter

    def count(self) -> int:
        """Return how many numbers have been handed out so far."""
        return self._counter

    def __repr__(self) -> str:
        return f"SequenceGenerator(count={self._counter})"
