"""Tests for IncrementalScanner: buffering, strategy swaps and failure modes."""

import io

import pytest

from commitscan.errors import SourceError, SplitContractError, TokenTooLongError
from commitscan.profiling import profiled_scan
from commitscan.scanner import IncrementalScanner
from commitscan.source import ChunkedByteSource
from commitscan.split import AnyByteSplitter, PatternFinder, SplitDecision


class CountingSplit:
    """Wraps a split strategy and counts invocations."""

    def __init__(self, split) -> None:
        self.split = split
        self.calls = 0
        self.eof_calls = 0

    def __call__(self, data, at_eof):
        self.calls += 1
        if at_eof:
            self.eof_calls += 1
        return self.split(data, at_eof)


class FailingSource:
    """Returns the given chunks, then raises OSError."""

    def __init__(self, *chunks: bytes) -> None:
        self.chunks = list(chunks)
        self.reads = 0

    def read(self, size: int) -> bytes:
        self.reads += 1
        if self.chunks:
            return self.chunks.pop(0)
        raise OSError("pipe closed")


class RaisingSource:
    """Raises the given exception on every read."""

    def __init__(self, exc: Exception) -> None:
        self.exc = exc
        self.reads = 0

    def read(self, size: int) -> bytes:
        self.reads += 1
        raise self.exc


class TestScanning:
    """Basic token production."""

    def test_default_split(self) -> None:
        scanner = IncrementalScanner(io.BytesIO(b"a\nb\nc"), AnyByteSplitter(b"\n"))
        assert scanner.scan() == b"a"
        assert scanner.scan() == b"b"
        assert scanner.scan() == b"c"
        assert scanner.scan() is None

    def test_tokens_iterator(self) -> None:
        scanner = IncrementalScanner(io.BytesIO(b"a\nb\n"))
        assert list(scanner.tokens(AnyByteSplitter(b"\n"))) == [b"a", b"b"]

    def test_tokens_are_bytes(self) -> None:
        scanner = IncrementalScanner(io.BytesIO(b"a\n"))
        assert type(scanner.scan(AnyByteSplitter(b"\n"))) is bytes

    def test_empty_token_is_not_end(self) -> None:
        scanner = IncrementalScanner(io.BytesIO(b"\n\nx"))
        split = AnyByteSplitter(b"\n")
        assert scanner.scan(split) == b""
        assert scanner.scan(split) == b""
        assert scanner.scan(split) == b"x"
        assert scanner.scan(split) is None

    def test_empty_source(self) -> None:
        scanner = IncrementalScanner(io.BytesIO(b""))
        assert scanner.scan(AnyByteSplitter(b"\n")) is None
        assert scanner.at_eof

    def test_missing_split_raises(self) -> None:
        scanner = IncrementalScanner(io.BytesIO(b"x"))
        with pytest.raises(ValueError, match="split"):
            scanner.scan()

    def test_invalid_buffer_size(self) -> None:
        with pytest.raises(ValueError):
            IncrementalScanner(io.BytesIO(b""), buffer_size=0)


class TestStrategySwaps:
    """One buffered source, several token shapes."""

    def test_swap_between_calls(self) -> None:
        scanner = IncrementalScanner(io.BytesIO(b"junk\ncommit abc (HEAD)\nAuthor: A\n"))
        lines = AnyByteSplitter(b"\n")
        words = AnyByteSplitter(b" \n")

        assert scanner.scan(PatternFinder(b"commit ").split_just) == b"commit "
        assert scanner.scan(words) == b"abc"
        assert words.last_match == b" "
        assert scanner.scan(lines) == b"(HEAD)"
        assert scanner.scan(lines) == b"Author: A"
        assert scanner.scan(lines) is None

    def test_offset_tracks_consumed_bytes(self) -> None:
        scanner = IncrementalScanner(io.BytesIO(b"ab\ncd\n"))
        lines = AnyByteSplitter(b"\n")
        scanner.scan(lines)
        assert scanner.offset == 3
        scanner.scan(lines)
        assert scanner.offset == 6

    @pytest.mark.parametrize("chunk", [1, 2, 3, 5, 64])
    def test_chunking_does_not_change_tokens(self, chunk: int) -> None:
        data = b"commit abc\nAuthor: A B\n\n    Fix bug\n"
        chunks = [data[i : i + chunk] for i in range(0, len(data), chunk)]
        scanner = IncrementalScanner(ChunkedByteSource(chunks), buffer_size=2)
        assert list(scanner.tokens(AnyByteSplitter(b"\n"))) == data.split(b"\n")[:-1]


class TestEndOfInput:
    """Strategies get one final say at EOF and never see an empty window."""

    def test_final_call_sees_eof(self) -> None:
        split = CountingSplit(AnyByteSplitter(b"\n"))
        scanner = IncrementalScanner(io.BytesIO(b"tail"))
        assert scanner.scan(split) == b"tail"
        assert split.eof_calls == 1

    def test_empty_window_at_eof_not_offered(self) -> None:
        split = CountingSplit(AnyByteSplitter(b"\n"))
        scanner = IncrementalScanner(io.BytesIO(b"a\n"))
        assert scanner.scan(split) == b"a"
        calls = split.calls
        assert scanner.scan(split) is None
        assert scanner.scan(split) is None
        assert split.calls == calls

    def test_no_token_at_eof_ends_scan(self) -> None:
        def drop_at_eof(data, at_eof):
            if at_eof:
                return SplitDecision.skip(len(data))
            return SplitDecision.more()

        scanner = IncrementalScanner(io.BytesIO(b"x"))
        assert scanner.scan(drop_at_eof) is None
        assert scanner.at_eof


class TestBufferGrowth:
    """The buffer doubles until it holds the token, up to a limit."""

    def test_grows_for_long_token(self) -> None:
        scanner = IncrementalScanner(io.BytesIO(b"x" * 100 + b"\n"), buffer_size=4)
        with profiled_scan() as acc:
            assert scanner.scan(AnyByteSplitter(b"\n")) == b"x" * 100
        assert scanner.capacity >= 101
        assert acc.buffer_growths > 0
        assert acc.bytes_read == 101

    def test_token_too_long(self) -> None:
        scanner = IncrementalScanner(io.BytesIO(b"x" * 100), buffer_size=4, max_buffer_size=16)
        with pytest.raises(TokenTooLongError) as exc_info:
            scanner.scan(AnyByteSplitter(b"\n"))
        assert exc_info.value.limit == 16
        # The scanner stays failed
        with pytest.raises(TokenTooLongError):
            scanner.scan(AnyByteSplitter(b"\n"))

    def test_discarding_search_does_not_grow(self) -> None:
        """split_just drops bytes that cannot start a match, so noise never piles up."""
        data = b"y" * 10_000 + b"commit "
        scanner = IncrementalScanner(io.BytesIO(data), buffer_size=16, max_buffer_size=64)
        assert scanner.scan(PatternFinder(b"commit ").split_just) == b"commit "


class TestSourceFailure:
    """Source errors propagate immediately and stick."""

    def test_source_error_wraps_os_error(self) -> None:
        scanner = IncrementalScanner(FailingSource(b"a\nb"))
        lines = AnyByteSplitter(b"\n")
        assert scanner.scan(lines) == b"a"
        with pytest.raises(SourceError) as exc_info:
            scanner.scan(lines)
        assert isinstance(exc_info.value.__cause__, OSError)
        assert exc_info.value.bytes_read == 3

    def test_no_strategy_call_after_failure(self) -> None:
        source = FailingSource()
        split = CountingSplit(AnyByteSplitter(b"\n"))
        scanner = IncrementalScanner(source)
        with pytest.raises(SourceError):
            scanner.scan(split)
        with pytest.raises(SourceError):
            scanner.scan(split)
        assert split.calls == 0
        assert source.reads == 1

    @pytest.mark.parametrize("exc", [ValueError("bad chunk"), RuntimeError("gone")])
    def test_any_read_failure_is_a_source_error(self, exc: Exception) -> None:
        source = RaisingSource(exc)
        scanner = IncrementalScanner(source)
        with pytest.raises(SourceError) as exc_info:
            scanner.scan(AnyByteSplitter(b"\n"))
        assert exc_info.value.__cause__ is exc
        with pytest.raises(SourceError):
            scanner.scan(AnyByteSplitter(b"\n"))
        assert source.reads == 1


class TestZeroCopyWindow:
    """Strategies read the buffer in place; only tokens are copied."""

    def test_strategy_sees_view_of_scanner_buffer(self) -> None:
        seen = []

        def record(data, at_eof):
            seen.append((type(data), data.obj))
            return AnyByteSplitter(b"\n")(data, at_eof)

        scanner = IncrementalScanner(io.BytesIO(b"a\nb\n"))
        assert list(scanner.tokens(record)) == [b"a", b"b"]
        assert seen
        assert all(kind is memoryview and obj is scanner._buf for kind, obj in seen)

    def test_window_token_is_copied(self) -> None:
        """A token that is the window itself outlives the call as bytes."""
        scanner = IncrementalScanner(io.BytesIO(b"tail"))
        token = scanner.scan(lambda data, at_eof: SplitDecision.emit(len(data), data))
        assert type(token) is bytes
        assert token == b"tail"

    def test_large_record_then_small_records(self) -> None:
        """Growth and compaction keep working after many view-backed tokens."""
        data = b"x" * 5000 + b"\n" + b"ab\n" * 300
        chunks = [data[i : i + 7] for i in range(0, len(data), 7)]
        scanner = IncrementalScanner(ChunkedByteSource(chunks), buffer_size=4)
        tokens = list(scanner.tokens(AnyByteSplitter(b"\n")))
        assert tokens == [b"x" * 5000] + [b"ab"] * 300
        assert scanner.at_eof


class TestSplitContract:
    """Decisions that break the contract are reported, not looped on."""

    def test_need_more_at_eof(self) -> None:
        scanner = IncrementalScanner(io.BytesIO(b"abc"))
        with pytest.raises(SplitContractError, match="end of input"):
            scanner.scan(lambda data, at_eof: SplitDecision.more())

    def test_consumed_past_window(self) -> None:
        scanner = IncrementalScanner(io.BytesIO(b"abc"))
        with pytest.raises(SplitContractError, match="consumed 10"):
            scanner.scan(lambda data, at_eof: SplitDecision.emit(10, b""))

    def test_error_names_the_strategy(self) -> None:
        scanner = IncrementalScanner(io.BytesIO(b"abc"))
        with pytest.raises(SplitContractError) as exc_info:
            scanner.scan(lambda data, at_eof: SplitDecision(-1))
        assert "lambda" in exc_info.value.split_name
