"""Log-entry state machine over an incremental scanner.

Decodes ``git log`` style output into LogEntry records, one per pull:

    commit 5f3c2e1 (HEAD -> main)
    Author: A B <a@example.com>
    Date:   Mon Jan 1 12:00:00 2024 +0000

        Merge pull request #42 from user/branch

        Fix the frobnicator

        Longer explanation,
        wrapped over lines.

All per-record work happens in state handlers; each scans the shared buffer
with its own split strategy and names the next state. Nothing is read ahead
past the current record except what the scanner already buffered.

Thread Safety:
Scanner instances are single-use and not safe for concurrent calls.
Split tables and pattern finders are shared read-only between instances.

"""

from __future__ import annotations

import re
from collections.abc import Callable, Iterator
from typing import Any

from commitscan.config import ScanConfig, get_scan_config
from commitscan.entry import PR_FROM, PR_NUMBER, LogEntry
from commitscan.errors import CommitScanError, MalformedAttributeError
from commitscan.log.paragraphs import split_paragraphs, trim_line
from commitscan.log.states import TERMINAL_STATES, EntryState
from commitscan.profiling import get_scan_accumulator
from commitscan.scanner import IncrementalScanner
from commitscan.source import as_byte_source
from commitscan.split import AnyByteSplitter, DelimiterSplitter, finder_for
from commitscan.utils.logger import get_logger

logger = get_logger(__name__)

NEWLINE = b"\n"


class LogEntryScanner:
    """Pull-based decoder of log records.

    Usage:
            >>> scanner = LogEntryScanner(b"commit abc123\\nAuthor: A B\\n\\n    Fix bug\\n")
            >>> entry = scanner.next_entry()
            >>> entry.commit_id, entry.attributes, entry.subject
            ('abc123', {'Author': 'A B'}, 'Fix bug')
            >>> scanner.next_entry() is None
            True

    Iteration yields the same entries. End of input in the middle of a record
    is not an error: the partial entry is returned with ``truncated`` set.
    A malformed header raises MalformedAttributeError; after any error the
    scanner is failed and every later call re-raises that error.

    """

    __slots__ = (
        "_config",
        "_scanner",
        "_boundary",
        "_commit_id",
        "_keys",
        "_lines",
        "_pr_merge",
        "_pr_squash",
        "_handlers",
        "_finished",
        "_error",
    )

    def __init__(self, source: Any, *, config: ScanConfig | None = None) -> None:
        """Initialize scanner.

        Args:
            source: A ByteSource, or anything ``as_byte_source`` adapts
            config: Scan configuration; defaults to the active context config
        """
        self._config = config = config or get_scan_config()
        self._scanner = IncrementalScanner(
            as_byte_source(source, encoding=config.encoding),
            buffer_size=config.buffer_size,
            max_buffer_size=config.max_buffer_size,
        )

        self._boundary = finder_for(config.marker)
        self._commit_id = AnyByteSplitter(config.commit_id_terminators)
        self._keys = DelimiterSplitter(
            config.attribute_delimiters,
            config.attribute_padding,
            config.attribute_stops,
        )
        self._lines = AnyByteSplitter(NEWLINE)
        self._pr_merge = re.compile(config.pr_merge_pattern)
        self._pr_squash = re.compile(config.pr_squash_pattern) if config.pr_squash_pattern else None

        self._handlers: dict[EntryState, Callable[[LogEntry], EntryState]] = {
            EntryState.SEEK_MARKER: self._seek_marker,
            EntryState.READ_COMMIT_ID: self._read_commit_id,
            EntryState.READ_ATTRIBUTES: self._read_attributes,
            EntryState.READ_SUBJECT: self._read_subject,
            EntryState.READ_BODY: self._read_body,
        }
        self._finished = False
        self._error: CommitScanError | None = None

    @property
    def config(self) -> ScanConfig:
        return self._config

    @property
    def scanner(self) -> IncrementalScanner:
        """The underlying byte scanner."""
        return self._scanner

    def next_entry(self) -> LogEntry | None:
        """Decode the next record.

        Returns:
            The next LogEntry, or None once no marker remains before end of
            input.

        Raises:
            CommitScanError: On source failure or malformed input
        """
        if self._error is not None:
            raise self._error
        if self._finished:
            return None

        entry = LogEntry()
        state = EntryState.SEEK_MARKER
        try:
            while state not in TERMINAL_STATES:
                state = self.step(state, entry)
        except CommitScanError as exc:
            self._error = exc
            raise

        if state is EntryState.FINISHED:
            self._finished = True
            logger.debug("No more records after offset %d", self._scanner.offset)
            return None

        if entry.truncated:
            logger.debug("Record %r truncated by end of input", entry.commit_id)
        acc = get_scan_accumulator()
        if acc is not None:
            acc.record_entry(truncated=entry.truncated)
        return entry

    def step(self, state: EntryState, entry: LogEntry) -> EntryState:
        """Run the handler for ``state`` against ``entry``.

        Returns:
            The next state
        """
        handler = self._handlers.get(state)
        if handler is None:
            raise ValueError(f"no transition out of terminal state {state.name}")
        return handler(entry)

    def __iter__(self) -> Iterator[LogEntry]:
        while True:
            entry = self.next_entry()
            if entry is None:
                return
            yield entry

    # =========================================================================
    # State handlers
    # =========================================================================

    def _seek_marker(self, entry: LogEntry) -> EntryState:
        token = self._scanner.scan(self._boundary.split_just)
        # At end of input split_just hands back the unmatched tail
        if token != self._boundary.pattern:
            return EntryState.FINISHED
        return EntryState.READ_COMMIT_ID

    def _read_commit_id(self, entry: LogEntry) -> EntryState:
        token = self._scanner.scan(self._commit_id)
        if token is None:
            entry.truncated = True
            return EntryState.EMIT
        entry.commit_id = self._decode(token)

        matched = self._commit_id.last_match
        if matched is not None and matched != NEWLINE:
            # Decorations such as "(HEAD -> main)" follow the id
            self._scanner.scan(self._lines)
        return EntryState.READ_ATTRIBUTES

    def _read_attributes(self, entry: LogEntry) -> EntryState:
        keys = self._keys
        key = self._scanner.scan(keys)
        if key is None:
            entry.truncated = True
            return EntryState.EMIT

        if keys.stop is not None:
            if keys.rejected:
                raise MalformedAttributeError(
                    keys.rejected, offset=self._scanner.offset, commit_id=entry.commit_id
                )
            # Blank line ends the header block
            return EntryState.READ_SUBJECT

        if keys.delimiter is None:
            # End of input inside a line with no delimiter
            raise MalformedAttributeError(
                key, offset=self._scanner.offset, commit_id=entry.commit_id
            )

        value = self._scanner.scan(self._lines)
        entry.attributes[self._decode(key)] = self._decode(value) if value is not None else ""
        return EntryState.READ_ATTRIBUTES

    def _read_subject(self, entry: LogEntry) -> EntryState:
        paragraph, hit_eof = self._read_paragraph()
        if not paragraph:
            if hit_eof:
                entry.truncated = True
                return EntryState.EMIT
            return EntryState.READ_BODY

        match = self._pr_merge.search(paragraph)
        if match:
            entry.attributes[PR_NUMBER] = match.group(1)
            entry.attributes[PR_FROM] = match.group(2)
            # The real subject is the next paragraph
            return EntryState.READ_SUBJECT

        if self._pr_squash is not None:
            match = self._pr_squash.search(paragraph)
            if match:
                entry.attributes[PR_NUMBER] = match.group(2)
                entry.subject = match.group(1)
                return EntryState.READ_BODY

        entry.subject = paragraph
        return EntryState.READ_BODY

    def _read_body(self, entry: LogEntry) -> EntryState:
        scanner = self._scanner
        boundary = self._boundary
        parts: list[bytes] = []
        at_line_start = True
        while True:
            span = scanner.scan(boundary.split_until)
            if span is None:
                break
            if span:
                parts.append(span)
                at_line_start = span.endswith(NEWLINE)
            if at_line_start or scanner.at_eof:
                break
            # Marker inside a line ("This reverts commit ..."): keep it as text
            parts.append(scanner.scan(boundary.split_just) or b"")
            at_line_start = False

        if parts:
            entry.body = split_paragraphs(self._decode(b"".join(parts)))
        return EntryState.EMIT

    # =========================================================================
    # Helpers
    # =========================================================================

    def _read_paragraph(self) -> tuple[str, bool]:
        """Join non-blank lines up to the next blank line with single spaces.

        Returns:
            The paragraph, and whether end of input ended it
        """
        lines: list[str] = []
        hit_eof = False
        while True:
            line = self._scanner.scan(self._lines)
            if line is None:
                hit_eof = True
                break
            text = trim_line(self._decode(line))
            if not text:
                break
            lines.append(text)
        return " ".join(lines), hit_eof

    def _decode(self, raw: bytes) -> str:
        return raw.decode(self._config.encoding, self._config.decode_errors)
