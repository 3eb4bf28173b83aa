"""Exception classes for commitscan.

Provides standardized exceptions for error handling throughout commitscan.
Truncated records and the end of the record stream are not errors; they are
reported through the normal pull interface.
"""

from __future__ import annotations


class CommitScanError(Exception):
    """Base exception for all commitscan errors.

    Subclass this for specific error categories.
    """

    pass


class SourceError(CommitScanError):
    """The byte source failed while the scanner was reading from it.

    The original exception is chained as ``__cause__``. Scanning stops and no
    partial record is returned.
    """

    def __init__(self, message: str, bytes_read: int = 0) -> None:
        """Initialize source error.

        Args:
            message: Error description
            bytes_read: Number of bytes read from the source before the failure
        """
        self.message = message
        self.bytes_read = bytes_read
        super().__init__(f"{message} (after {bytes_read} bytes)")


class ParseError(CommitScanError):
    """Error while decoding a log record.

    Raised when the scanner encounters input that cannot belong to a
    well-formed record. The current record is abandoned.
    """

    def __init__(
        self,
        message: str,
        offset: int | None = None,
        commit_id: str | None = None,
    ) -> None:
        """Initialize parse error with optional location.

        Args:
            message: Error description
            offset: Stream offset of the first byte after the bad input (optional)
            commit_id: Commit id of the record being decoded (optional)
        """
        self.message = message
        self.offset = offset
        self.commit_id = commit_id

        # Build formatted message
        context = []
        if commit_id:
            context.append(f"commit {commit_id}")
        if offset is not None:
            context.append(f"offset {offset}")
        location = f"[{', '.join(context)}] " if context else ""

        super().__init__(f"{location}{message}")


class MalformedAttributeError(ParseError):
    """A header line is neither ``key: value`` nor a blank terminator."""

    def __init__(
        self,
        line: bytes,
        offset: int | None = None,
        commit_id: str | None = None,
    ) -> None:
        """Initialize malformed attribute error.

        Args:
            line: The offending line, without its newline
            offset: Stream offset just past the offending line (optional)
            commit_id: Commit id of the record being decoded (optional)
        """
        self.line = line
        super().__init__(
            f"expected `key: value` line, instead of {line!r}",
            offset=offset,
            commit_id=commit_id,
        )


class TokenTooLongError(CommitScanError):
    """A split strategy needed more buffered bytes than the scanner allows."""

    def __init__(self, limit: int) -> None:
        """Initialize token-too-long error.

        Args:
            limit: The configured maximum buffer size in bytes
        """
        self.limit = limit
        super().__init__(f"token exceeds maximum buffer size of {limit} bytes")


class SplitContractError(CommitScanError):
    """A split strategy returned a decision that violates the split contract."""

    def __init__(self, split_name: str, message: str) -> None:
        """Initialize split contract error.

        Args:
            split_name: Name of the offending split strategy
            message: Description of the violation
        """
        self.split_name = split_name
        super().__init__(f"Split '{split_name}': {message}")
