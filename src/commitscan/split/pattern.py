"""Exact substring search with the Boyer-Moore algorithm.

PatternFinder locates a fixed byte pattern in a buffer and derives three
split strategies from the search:

- ``split_until``: token is everything before the match; the match itself
  stays in the buffer (used to find the next record boundary).
- ``split_through``: token is everything before the match; the match is
  consumed.
- ``split_just``: token is the match itself.

References:
    http://en.wikipedia.org/wiki/Boyer-Moore_string_search_algorithm
    http://www.cs.utexas.edu/~moore/publications/fstrpos.pdf (1-based indexing)

Thread Safety:
PatternFinder holds no mutable state; one instance can serve any number of
scanners. ``finder_for`` hands out cached shared instances.

"""

from __future__ import annotations

from functools import lru_cache

from commitscan.split.decision import NEED_MORE, SplitDecision


class PatternFinder:
    """Boyer-Moore search for a fixed, non-empty byte pattern.

    Tables:
        ``bad_char_skip[b]`` is the distance between the last byte of the
        pattern and the rightmost occurrence of ``b`` in ``pattern[:-1]``, or
        ``len(pattern)`` when ``b`` does not occur there. On a mismatch against
        byte ``b`` the frame can shift at least that far.

        ``good_suffix_skip[i]`` is how far the frame can shift when
        ``pattern[i + 1:]`` matched but ``pattern[i]`` did not. Either the
        matched suffix recurs earlier in the pattern (shift to align the
        recurrence; "mississi" has "issi" again at index 1, so the entry for
        position 3 is 3 + 4 == 7), or part of it is a prefix of the pattern
        (shift to align that prefix; in "abcxxxabc" the trailing "abc" is a
        prefix, so the entry for position 3 is 6 + 5 == 11).

    Usage:
            >>> finder = PatternFinder(b"commit ")
            >>> finder.find(b"xx\\ncommit abc")
            (True, 3)
            >>> finder.split_until(b"body\\ncommit def", at_eof=False)
            SplitDecision(consumed=5, token=b'body\\n', need_more=False)

    """

    __slots__ = ("_pattern", "_last", "_bad_char_skip", "_good_suffix_skip")

    def __init__(self, pattern: bytes) -> None:
        """Build skip tables for ``pattern``.

        Args:
            pattern: The bytes to search for

        Raises:
            ValueError: If the pattern is empty
        """
        if not pattern:
            raise ValueError("pattern must not be empty")
        self._pattern = bytes(pattern)
        self._last = len(pattern) - 1
        self._bad_char_skip = self._build_bad_char_skip()
        self._good_suffix_skip = self._build_good_suffix_skip()

    def _build_bad_char_skip(self) -> tuple[int, ...]:
        pattern = self._pattern
        last = self._last
        # Bytes not in the pattern can skip one pattern's length.
        skip = [len(pattern)] * 256
        # Stop before the last byte so it never has a zero distance to itself.
        for i in range(last):
            skip[pattern[i]] = last - i
        return tuple(skip)

    def _build_good_suffix_skip(self) -> tuple[int, ...]:
        pattern = self._pattern
        last = self._last
        skip = [0] * len(pattern)

        # First pass: shift to the next index which starts a prefix of pattern.
        last_prefix = last
        for i in range(last, -1, -1):
            if pattern.startswith(pattern[i + 1 :]):
                last_prefix = i + 1
            # last_prefix is the shift, (last - i) is len(suffix)
            skip[i] = last_prefix + last - i

        # Second pass: repeats of the pattern's suffix, starting from the front.
        for i in range(last):
            len_suffix = _longest_common_suffix(pattern, pattern[1 : i + 1])
            if pattern[i - len_suffix] != pattern[last - len_suffix]:
                # (last - i) is the shift, len_suffix is len(suffix)
                skip[last - len_suffix] = len_suffix + last - i

        return tuple(skip)

    @property
    def pattern(self) -> bytes:
        return self._pattern

    @property
    def bad_char_skip(self) -> tuple[int, ...]:
        return self._bad_char_skip

    @property
    def good_suffix_skip(self) -> tuple[int, ...]:
        return self._good_suffix_skip

    def find(self, data: bytes | bytearray | memoryview) -> tuple[bool, int]:
        """Search ``data`` for the first occurrence of the pattern.

        Args:
            data: Buffer to search

        Returns:
            ``(True, index)`` of the first match, or ``(False, excluded)``
            where ``excluded`` is the number of leading bytes that cannot
            start a match, however the data continues.
        """
        pattern = self._pattern
        last = self._last
        bad_char_skip = self._bad_char_skip
        good_suffix_skip = self._good_suffix_skip
        size = len(data)

        i = last
        while i < size:
            # Compare backwards from the end until the first unmatching byte.
            j = last
            while j >= 0 and data[i] == pattern[j]:
                i -= 1
                j -= 1
            if j < 0:
                return True, i + 1
            i += max(bad_char_skip[data[i]], good_suffix_skip[j])

        # i - last is the next alignment the search would have tried
        return False, min(i - last, size)

    def split_until(self, data: bytes | bytearray | memoryview, at_eof: bool) -> SplitDecision:
        """Token is everything before the pattern; the pattern is left unconsumed."""
        found, index = self.find(data)
        if found:
            return SplitDecision.emit(index, data[:index])
        if at_eof:
            return SplitDecision.emit(len(data), data)
        # The unmatched prefix is part of the token
        return NEED_MORE

    def split_through(self, data: bytes | bytearray | memoryview, at_eof: bool) -> SplitDecision:
        """Token is everything before the pattern; the pattern is consumed."""
        found, index = self.find(data)
        if found:
            return SplitDecision.emit(index + len(self._pattern), data[:index])
        if at_eof:
            return SplitDecision.emit(len(data), data)
        return NEED_MORE

    def split_just(self, data: bytes | bytearray | memoryview, at_eof: bool) -> SplitDecision:
        """Token is the pattern itself; everything before it is discarded.

        At end of input without a match the trailing bytes are returned as
        the token, so callers compare the token against ``pattern``.
        """
        found, index = self.find(data)
        if found:
            end = index + len(self._pattern)
            return SplitDecision.emit(end, data[index:end])
        if at_eof:
            return SplitDecision.emit(len(data), data)
        # Nothing before the excluded count can start a match
        return SplitDecision.more(index)

    def __len__(self) -> int:
        return len(self._pattern)

    def __repr__(self) -> str:
        return f"PatternFinder({self._pattern!r})"


def _longest_common_suffix(a: bytes, b: bytes) -> int:
    i = 0
    limit = min(len(a), len(b))
    while i < limit and a[-1 - i] == b[-1 - i]:
        i += 1
    return i


@lru_cache(maxsize=32)
def finder_for(pattern: bytes) -> PatternFinder:
    """Return the shared PatternFinder for ``pattern``."""
    return PatternFinder(pattern)
