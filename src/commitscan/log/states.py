"""Decoder states for the log-entry state machine.

One record is decoded by walking these states in order. Each non-terminal
state has a handler on LogEntryScanner that scans with its own split
strategy and returns the next state.
"""

from __future__ import annotations

from enum import Enum, auto


class EntryState(Enum):
    """Log-entry decoder states.

    Per record the decoder moves through:
    - SEEK_MARKER: Discard bytes through the next record marker
    - READ_COMMIT_ID: Commit id, then the rest of the marker line
    - READ_ATTRIBUTES: ``key: value`` header lines up to a blank line
    - READ_SUBJECT: First message paragraph (PR merge paragraphs re-enter)
    - READ_BODY: Remaining paragraphs up to the next marker
    - EMIT: Record complete (or cut short by end of input)
    - FINISHED: No marker before end of input; no more records

    """

    SEEK_MARKER = auto()
    READ_COMMIT_ID = auto()
    READ_ATTRIBUTES = auto()
    READ_SUBJECT = auto()
    READ_BODY = auto()
    EMIT = auto()  # Terminal: hand entry to caller
    FINISHED = auto()  # Terminal: end of records


TERMINAL_STATES = frozenset({EntryState.EMIT, EntryState.FINISHED})
