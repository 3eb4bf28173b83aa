"""LogEntry: one decoded record of log output.

A LogEntry is allocated fresh per record, filled in phase by phase while the
record is scanned, and handed to the caller once complete (or once end of
input cuts it short).

"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

PR_NUMBER = "prNumber"
PR_FROM = "prFrom"


@dataclass(slots=True)
class LogEntry:
    """Data extracted from one log record.

    Attributes:
        commit_id: Text following the record marker, up to the first space or
            newline
        attributes: Header ``key: value`` pairs, plus ``prNumber`` and
            ``prFrom`` when the subject carried a PR annotation
        subject: First message paragraph, joined into one line
        body: Remaining message paragraphs, in order
        truncated: True when end of input arrived before the record ended

    Examples:
            >>> entry = LogEntry(commit_id="abc123", subject="Fix bug")
            >>> entry.attributes["Author"] = "A B"
            >>> entry.pr_number is None
            True

    """

    commit_id: str = ""
    attributes: dict[str, str] = field(default_factory=dict)
    subject: str = ""
    body: list[str] = field(default_factory=list)
    truncated: bool = False

    @property
    def pr_number(self) -> str | None:
        """PR number from a merge or squash subject, if any."""
        return self.attributes.get(PR_NUMBER)

    @property
    def pr_from(self) -> str | None:
        """Source branch from a merge subject, if any."""
        return self.attributes.get(PR_FROM)

    @property
    def message(self) -> str:
        """Body paragraphs separated by blank lines."""
        return "\n\n".join(self.body)

    def to_dict(self) -> dict[str, Any]:
        """Plain-data form for JSON output."""
        return {
            "commit": self.commit_id,
            "attributes": dict(self.attributes),
            "subject": self.subject,
            "body": list(self.body),
            "truncated": self.truncated,
        }
