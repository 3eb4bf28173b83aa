"""
commitscan: incremental commit log scanner

Decodes the output of ``git log`` into structured records (commit id, header
attributes, subject, body paragraphs) while it streams, using swappable split
strategies over a single growable buffer. Zero runtime dependencies.

Quick Start:
    >>> from commitscan import scan_log
    >>> log = b"commit abc123\\nAuthor: A B\\n\\n    Fix bug\\n"
    >>> [entry.subject for entry in scan_log(log)]
    ['Fix bug']

    >>> # Streaming from a subprocess pipe
    >>> proc = subprocess.Popen(["git", "log"], stdout=subprocess.PIPE)
    >>> for entry in scan_log(proc.stdout):
    ...     print(entry.commit_id, entry.subject, entry.pr_number)

Lower-level pieces:
    >>> from commitscan import IncrementalScanner, PatternFinder
    >>> scanner = IncrementalScanner(io.BytesIO(b"a--b--c"))
    >>> list(scanner.tokens(PatternFinder(b"--").split_through))
    [b'a', b'b', b'c']
"""

from collections.abc import Iterator
from typing import Any

from commitscan.config import (
    ScanConfig,
    get_scan_config,
    reset_scan_config,
    scan_config_context,
    set_scan_config,
)
from commitscan.entry import LogEntry
from commitscan.errors import (
    CommitScanError,
    MalformedAttributeError,
    ParseError,
    SourceError,
    SplitContractError,
    TokenTooLongError,
)
from commitscan.log import EntryState, LogEntryScanner
from commitscan.profiling import ScanAccumulator, get_scan_accumulator, profiled_scan
from commitscan.protocols import ByteSource, SplitFunc
from commitscan.scanner import IncrementalScanner
from commitscan.source import ChunkedByteSource, as_byte_source
from commitscan.split import (
    AnyByteSplitter,
    ByteClassTable,
    DelimiterSplitter,
    PatternFinder,
    SplitDecision,
)

__version__ = "0.1.0"


def scan_log(source: Any, *, config: ScanConfig | None = None) -> Iterator[LogEntry]:
    """Decode log records from ``source`` as they arrive.

    Args:
        source: Binary stream, ``bytes``, ``str`` or iterable of byte chunks
        config: Scan configuration (uses the active context config if None)

    Yields:
        LogEntry per record. The last one may have ``truncated`` set when
        the input ended mid-record.

    Raises:
        CommitScanError: On source failure or malformed input; no further
            entries follow.

    Example:
        >>> entries = list(scan_log(open("log.txt", "rb")))
    """
    yield from LogEntryScanner(source, config=config)


__all__ = [  # noqa: RUF022 (grouped by category for maintainability)
    # Version
    "__version__",
    # Core API
    "scan_log",
    "LogEntry",
    "LogEntryScanner",
    "EntryState",
    # Engine
    "IncrementalScanner",
    "ByteSource",
    "SplitFunc",
    "ChunkedByteSource",
    "as_byte_source",
    # Split strategies
    "SplitDecision",
    "ByteClassTable",
    "AnyByteSplitter",
    "DelimiterSplitter",
    "PatternFinder",
    # Errors
    "CommitScanError",
    "SourceError",
    "ParseError",
    "MalformedAttributeError",
    "TokenTooLongError",
    "SplitContractError",
    # Configuration (ContextVar-based)
    "ScanConfig",
    "get_scan_config",
    "set_scan_config",
    "reset_scan_config",
    "scan_config_context",
    # Profiling
    "ScanAccumulator",
    "profiled_scan",
    "get_scan_accumulator",
]
