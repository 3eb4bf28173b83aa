"""Protocols for commitscan.

Defines the contracts between the scanner and its collaborators: the byte
source it pulls from and the split strategies it delegates tokenizing to.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from commitscan.split.decision import SplitDecision


class ByteSource(Protocol):
    """Protocol for sequential, possibly chunked, byte streams.

    Any binary file object satisfies it. The scanner never seeks and never
    re-reads; it only calls ``read`` until an empty result signals the end
    of input.

    """

    def read(self, size: int, /) -> bytes:
        """Read up to ``size`` bytes.

        Returns:
            The bytes read; ``b""`` only at end of input. Blocking sources
            must block rather than return an empty result early.
        """
        ...


class SplitFunc(Protocol):
    """Protocol for split strategies.

    A split strategy inspects the unconsumed window of the scan buffer and
    decides how many bytes form the next token. It may ask for more input
    (``need_more``) only when ``at_eof`` is false; at end of input it must
    always make a final decision.

    Thread Safety:
        Implementations may keep "last match" state for the caller to read
        right after a token; such instances belong to a single scanner.
        Their lookup tables are immutable and shareable.

    """

    def __call__(self, data: bytes | bytearray | memoryview, at_eof: bool) -> SplitDecision:
        """Decide the next token.

        Args:
            data: The unconsumed window, usually a memoryview (borrowed for this call only)
            at_eof: True when the source has no more bytes

        Returns:
            SplitDecision describing consumption, token and more-data request
        """
        ...
