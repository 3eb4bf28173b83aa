"""SplitDecision: the result type of every split strategy.

Thread Safety:
SplitDecision is frozen (immutable) and safe to share across threads.

"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class SplitDecision:
    """Outcome of one split strategy invocation.

    Attributes:
        consumed: Bytes of the window the scanner may drop
        token: The token, or None when this decision yields no token.
            An empty token (``b""``) is still a token.
        need_more: True when the strategy cannot decide without more input.
            Only legal before end of input.

    Examples:
        >>> SplitDecision.emit(4, b"key")
        SplitDecision(consumed=4, token=b'key', need_more=False)
        >>> SplitDecision.more(3)
        SplitDecision(consumed=3, token=None, need_more=True)

    """

    consumed: int
    token: bytes | bytearray | memoryview | None = None
    need_more: bool = False

    @classmethod
    def emit(cls, consumed: int, token: bytes | bytearray | memoryview) -> SplitDecision:
        """Consume ``consumed`` bytes and yield ``token``."""
        return cls(consumed, token, False)

    @classmethod
    def skip(cls, consumed: int) -> SplitDecision:
        """Consume ``consumed`` bytes without yielding a token."""
        return cls(consumed, None, False)

    @classmethod
    def more(cls, consumed: int = 0) -> SplitDecision:
        """Drop ``consumed`` bytes known to be irrelevant, then ask for more input."""
        if consumed == 0:
            return NEED_MORE
        return cls(consumed, None, True)


# Shared zero-consume request
NEED_MORE: SplitDecision = SplitDecision(0, None, True)
