"""Incremental scanner: a growable buffer over a byte source.

The scanner repeatedly offers the unconsumed window of its buffer to the
active split strategy. When the strategy needs more input the scanner reads
from the source (compacting and doubling the buffer as needed) and asks
again; when it returns a token the scanner advances its cursor and hands the
token to the caller. The strategy can change between scan calls, which lets
one buffered source be tokenized into differently shaped pieces.

At end of input the strategy is called one last time with ``at_eof=True`` so
it can emit a trailing partial token instead of waiting forever. An empty
window at end of input is never offered to a strategy.

Strategies see the window as a ``memoryview`` over the buffer, valid only for
the duration of the call; the token is copied out once, as ``bytes``.

Thread Safety:
Scanner instances are single-use and not safe for concurrent calls.
All state is instance-local; no shared mutable state.

"""

from __future__ import annotations

from collections.abc import Iterator

from commitscan.errors import SourceError, SplitContractError, TokenTooLongError
from commitscan.profiling import get_scan_accumulator
from commitscan.protocols import ByteSource, SplitFunc
from commitscan.split.decision import SplitDecision
from commitscan.utils.logger import get_logger

logger = get_logger(__name__)

DEFAULT_BUFFER_SIZE = 4096
DEFAULT_MAX_BUFFER_SIZE = 64 * 1024 * 1024


class IncrementalScanner:
    """Pull-based tokenizer over a ByteSource.

    Usage:
            >>> from commitscan.split import AnyByteSplitter
            >>> scanner = IncrementalScanner(io.BytesIO(b"a b\\nc"))
            >>> scanner.scan(AnyByteSplitter(b" \\n"))
            b'a'
            >>> list(scanner.tokens(AnyByteSplitter(b"\\n")))
            [b'b', b'c']

    Errors:
        SourceError: ``source.read`` raised; stored and re-raised by
            every later call without invoking a strategy again.
        TokenTooLongError: a strategy needed more than ``max_buffer_size``
            buffered bytes.
        SplitContractError: a strategy returned an impossible decision.

    """

    __slots__ = (
        "split",
        "_source",
        "_buf",
        "_start",
        "_capacity",
        "_max_buffer_size",
        "_eof",
        "_error",
        "_bytes_read",
        "_offset",
    )

    def __init__(
        self,
        source: ByteSource,
        split: SplitFunc | None = None,
        *,
        buffer_size: int = DEFAULT_BUFFER_SIZE,
        max_buffer_size: int = DEFAULT_MAX_BUFFER_SIZE,
    ) -> None:
        """Initialize scanner.

        Args:
            source: Where bytes come from
            split: Default split strategy for scan calls that name none
            buffer_size: Initial buffer capacity in bytes
            max_buffer_size: Capacity limit; a strategy needing more raises
                TokenTooLongError
        """
        if buffer_size <= 0:
            raise ValueError(f"buffer_size must be positive, got {buffer_size}")
        self.split = split
        self._source = source
        self._buf = bytearray()
        self._start = 0
        self._capacity = min(buffer_size, max_buffer_size)
        self._max_buffer_size = max_buffer_size
        self._eof = False
        self._error: Exception | None = None
        self._bytes_read = 0
        # Stream offset of the cursor
        self._offset = 0

    @property
    def offset(self) -> int:
        """Number of bytes consumed from the stream so far."""
        return self._offset

    @property
    def bytes_read(self) -> int:
        """Number of bytes read from the source so far."""
        return self._bytes_read

    @property
    def buffered(self) -> int:
        """Number of read but unconsumed bytes."""
        return len(self._buf) - self._start

    @property
    def capacity(self) -> int:
        """Current buffer capacity."""
        return self._capacity

    @property
    def at_eof(self) -> bool:
        """True once the source is exhausted and every byte is consumed."""
        return self._eof and self.buffered == 0

    def scan(self, split: SplitFunc | None = None) -> bytes | None:
        """Scan the next token.

        Args:
            split: Strategy for this call; defaults to ``self.split``

        Returns:
            The token, or None at end of input. An empty token (``b""``) is
            a token, not the end.
        """
        if split is None:
            split = self.split
            if split is None:
                raise ValueError("no split strategy given and no default set")
        if self._error is not None:
            raise self._error

        while True:
            size = len(self._buf) - self._start
            if size > 0:
                consumed, token, need_more = self._split_window(split, size)
                self._start += consumed
                self._offset += consumed
                if token is not None:
                    return token
                if self._eof:
                    return None
                if not need_more and consumed > 0:
                    continue
            elif self._eof:
                return None
            self._fill()

    def tokens(self, split: SplitFunc | None = None) -> Iterator[bytes]:
        """Yield tokens until end of input.

        Args:
            split: Strategy for every token; defaults to ``self.split``

        Yields:
            Tokens as ``bytes``
        """
        while True:
            token = self.scan(split)
            if token is None:
                return
            yield token

    def _split_window(self, split: SplitFunc, size: int) -> tuple[int, bytes | None, bool]:
        """Run ``split`` over a zero-copy view of the unconsumed window.

        Every view is released before returning; the buffer cannot be
        compacted or grown while one is alive.

        Returns:
            Consumed byte count, token copied out as ``bytes``, need-more flag
        """
        with memoryview(self._buf) as view, view[self._start :] as window:
            decision = split(window, self._eof)
            self._check(split, decision, size)
            token = decision.token
            if token is not None:
                if isinstance(token, memoryview):
                    with token:
                        token = token.tobytes()
                else:
                    token = bytes(token)
        return decision.consumed, token, decision.need_more

    def _check(self, split: SplitFunc, decision: SplitDecision, size: int) -> None:
        """Reject decisions that would corrupt the cursor or block forever."""
        if 0 <= decision.consumed <= size and not (decision.need_more and self._eof):
            return
        name = getattr(split, "__qualname__", type(split).__name__)
        if decision.need_more:
            message = "requested more data at end of input"
        else:
            message = f"consumed {decision.consumed} bytes of a {size}-byte window"
        self._error = SplitContractError(name, message)
        raise self._error

    def _fill(self) -> None:
        """Read more bytes, compacting and growing the buffer first."""
        if self._start > 0:
            del self._buf[: self._start]
            self._start = 0

        acc = get_scan_accumulator()
        if len(self._buf) >= self._capacity:
            if self._capacity >= self._max_buffer_size:
                self._error = TokenTooLongError(self._max_buffer_size)
                raise self._error
            self._capacity = min(self._capacity * 2, self._max_buffer_size)
            logger.debug("Grew scan buffer to %d bytes", self._capacity)
            if acc is not None:
                acc.record_growth()

        try:
            chunk = self._source.read(self._capacity - len(self._buf))
        except Exception as exc:
            self._error = SourceError(f"byte source failed: {exc}", self._bytes_read)
            raise self._error from exc

        if not chunk:
            self._eof = True
            logger.debug("End of input after %d bytes", self._bytes_read)
            return

        self._buf += chunk
        self._bytes_read += len(chunk)
        if acc is not None:
            acc.record_read(len(chunk))
