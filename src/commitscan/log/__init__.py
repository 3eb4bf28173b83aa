"""Log-entry decoding for commitscan.

This package turns a scanned byte stream into LogEntry records using an
explicit state machine.

Architecture:
log/
├── __init__.py      # Re-exports LogEntryScanner, EntryState
├── core.py          # LogEntryScanner (state handlers + pull API)
├── states.py        # EntryState enum
└── paragraphs.py    # Line trimming and paragraph splitting

Usage:
    >>> from commitscan.log import LogEntryScanner
    >>> for entry in LogEntryScanner(open("log.txt", "rb")):
    ...     print(entry.commit_id, entry.subject)

"""

from commitscan.log.core import LogEntryScanner
from commitscan.log.states import EntryState

__all__ = ["EntryState", "LogEntryScanner"]
