"""Delimiter split strategy with skip padding and early-stop bytes.

Used for ``key: value`` header lines: the delimiter ``:`` ends the key, the
skip set `` `` swallows the padding before the value, and the stop set
``\\n`` rejects a line that ends before any delimiter.
"""

from __future__ import annotations

from commitscan.split.bytetable import NO_MATCH, byte_class_table
from commitscan.split.decision import NEED_MORE, SplitDecision


class DelimiterSplitter:
    """Split strategy over three disjoint byte sets: delimiters, skip, stop.

    Decision rules, scanning the window left to right:

    - A stop byte before any delimiter yields an empty token and consumes
      through the stop byte. The bytes before it are kept in ``rejected``.
    - A delimiter yields the bytes before it as the token and consumes the
      delimiter plus the run of skip bytes after it. A skip run reaching the
      end of the window needs more input; at end of input it consumes
      everything without a token.
    - Neither: more input, or at end of input the whole window is the token.

    Usage:
            >>> split = DelimiterSplitter(b":", b" ", b"\\n")
            >>> split(b"Author: A B\\n", at_eof=False)
            SplitDecision(consumed=8, token=b'Author', need_more=False)
            >>> split(b"\\nFix bug\\n", at_eof=False)
            SplitDecision(consumed=1, token=b'', need_more=False)

    """

    __slots__ = ("_delims", "_skips", "_stops", "_last_delim", "_last_stop", "_rejected")

    def __init__(self, delimiters: bytes, skip: bytes, stop: bytes) -> None:
        """Initialize splitter.

        Args:
            delimiters: Bytes that end a token
            skip: Padding bytes swallowed after a delimiter
            stop: Bytes that end the token early with empty content

        Raises:
            ValueError: If the three sets share a byte
        """
        self._delims = byte_class_table(bytes(delimiters))
        self._skips = byte_class_table(bytes(skip))
        self._stops = byte_class_table(bytes(stop))
        if not (
            self._delims.isdisjoint(self._skips)
            and self._delims.isdisjoint(self._stops)
            and self._skips.isdisjoint(self._stops)
        ):
            raise ValueError(
                f"delimiter, skip and stop sets must be disjoint: "
                f"{delimiters!r}, {skip!r}, {stop!r}"
            )
        self._last_delim = NO_MATCH
        self._last_stop = NO_MATCH
        self._rejected = b""

    @property
    def delimiter(self) -> bytes | None:
        """The delimiter that ended the last token, or None."""
        if self._last_delim < 0:
            return None
        return self._delims.member(self._last_delim)

    @property
    def stop(self) -> bytes | None:
        """The stop byte that ended the last scan early, or None."""
        if self._last_stop < 0:
            return None
        return self._stops.member(self._last_stop)

    @property
    def rejected(self) -> bytes:
        """Bytes discarded before the stop byte in the last early stop."""
        return self._rejected

    def __call__(self, data: bytes | bytearray | memoryview, at_eof: bool) -> SplitDecision:
        delims = self._delims.table
        stops = self._stops.table
        skips = self._skips.table
        size = len(data)

        self._last_delim = NO_MATCH
        self._last_stop = NO_MATCH
        self._rejected = b""

        i = 0
        while i < size:
            c = data[i]
            if delims[c] >= 0:
                self._last_delim = delims[c]
                break
            if stops[c] >= 0:
                self._last_stop = stops[c]
                self._rejected = bytes(data[:i])
                return SplitDecision.emit(i + 1, data[i:i])
            i += 1
        else:
            if at_eof:
                return SplitDecision.emit(size, data)
            return NEED_MORE

        # Swallow the padding after the delimiter
        j = i + 1
        while j < size and skips[data[j]] >= 0:
            j += 1

        if j >= size:
            # Trailing skip run: the value may still be coming
            if at_eof:
                return SplitDecision.skip(size)
            return NEED_MORE

        return SplitDecision.emit(j, data[:i])

    def __repr__(self) -> str:
        return (
            f"DelimiterSplitter({self._delims.members!r}, "
            f"{self._skips.members!r}, {self._stops.members!r})"
        )
