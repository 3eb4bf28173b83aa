"""commitscan ScanAccumulator: opt-in profiling for log scanning.

This module provides accumulated metrics during scanning:
- Source reads and bytes read
- Scan buffer growths
- Entries decoded, and how many of them were truncated

Zero overhead when disabled (get_scan_accumulator() returns None).

Example:
    from commitscan import scan_log
    from commitscan.profiling import profiled_scan

    with profiled_scan() as metrics:
        entries = list(scan_log(log_bytes))

    print(metrics.summary())
    # {"total_ms": 1.2, "reads": 2, "bytes_read": 5120, ...}

"""

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar, Token
from dataclasses import dataclass, field
from time import perf_counter
from typing import Any


@dataclass
class ScanAccumulator:
    """Accumulated metrics during log scanning.

    Attributes:
        start_time: Profiling start timestamp.
        reads: Number of source reads that returned data.
        bytes_read: Total bytes read from sources.
        buffer_growths: Number of times a scan buffer doubled its capacity.
        entries: Number of log entries handed to callers.
        truncated_entries: Entries cut short by end of input.

    """

    start_time: float = field(default_factory=perf_counter)
    reads: int = 0
    bytes_read: int = 0
    buffer_growths: int = 0
    entries: int = 0
    truncated_entries: int = 0

    def record_read(self, size: int) -> None:
        """Record a source read of ``size`` bytes."""
        self.reads += 1
        self.bytes_read += size

    def record_growth(self) -> None:
        """Record a scan buffer growth."""
        self.buffer_growths += 1

    def record_entry(self, *, truncated: bool = False) -> None:
        """Record a decoded entry."""
        self.entries += 1
        if truncated:
            self.truncated_entries += 1

    @property
    def total_duration_ms(self) -> float:
        """Total profiling duration in milliseconds."""
        return (perf_counter() - self.start_time) * 1000

    def summary(self) -> dict[str, Any]:
        """Get summary of scan metrics.

        Returns:
            Dict with total_ms, reads, bytes_read, buffer_growths, entries,
            truncated_entries.

        """
        return {
            "total_ms": round(self.total_duration_ms, 2),
            "reads": self.reads,
            "bytes_read": self.bytes_read,
            "buffer_growths": self.buffer_growths,
            "entries": self.entries,
            "truncated_entries": self.truncated_entries,
        }


# Module-level ContextVar
_accumulator: ContextVar[ScanAccumulator | None] = ContextVar(
    "scan_accumulator",
    default=None,
)


def get_scan_accumulator() -> ScanAccumulator | None:
    """Get current accumulator (None if profiling disabled).

    Returns:
        Current ScanAccumulator or None if not in profiled context.

    """
    return _accumulator.get()


@contextmanager
def profiled_scan() -> Iterator[ScanAccumulator]:
    """Context manager for profiled scanning.

    Creates a ScanAccumulator and makes it available via
    get_scan_accumulator() for the duration of the with block.

    Yields:
        ScanAccumulator that will be populated while scanning.

    """
    acc = ScanAccumulator()
    token: Token[ScanAccumulator | None] = _accumulator.set(acc)
    try:
        yield acc
    finally:
        _accumulator.reset(token)
