"""Split on the first occurrence of any byte from a fixed set."""

from __future__ import annotations

from commitscan.split.bytetable import NO_MATCH, byte_class_table
from commitscan.split.decision import NEED_MORE, SplitDecision


class AnyByteSplitter:
    """Split strategy ending each token at the first byte from ``members``.

    The matching byte is consumed but not part of the token. Which member
    matched is available from ``last_match`` until the next invocation.

    Usage:
            >>> split = AnyByteSplitter(b" \\n")
            >>> split(b"abc123 (HEAD)\\n", at_eof=False)
            SplitDecision(consumed=7, token=b'abc123', need_more=False)
            >>> split.last_match
            b' '

    With no byte of the set present, the whole window becomes the token at
    end of input; before end of input the splitter asks for more data.

    """

    __slots__ = ("_classes", "_last")

    def __init__(self, members: bytes) -> None:
        """Initialize splitter.

        Args:
            members: Bytes that end a token
        """
        self._classes = byte_class_table(bytes(members))
        self._last = NO_MATCH

    @property
    def members(self) -> bytes:
        return self._classes.members

    @property
    def last_match(self) -> bytes | None:
        """The member that ended the last token, or None if none did."""
        if self._last < 0:
            return None
        return self._classes.member(self._last)

    def __call__(self, data: bytes | bytearray | memoryview, at_eof: bool) -> SplitDecision:
        table = self._classes.table
        self._last = NO_MATCH
        for i, c in enumerate(data):
            last = table[c]
            if last >= 0:
                self._last = last
                return SplitDecision.emit(i + 1, data[:i])
        if at_eof:
            return SplitDecision.emit(len(data), data)
        return NEED_MORE

    def __repr__(self) -> str:
        return f"AnyByteSplitter({self.members!r})"
