"""Byte classification tables for O(1) split decisions.

A ByteClassTable maps every byte value to its index in a small member set,
or -1 when the byte is not a member. Tables are tuples built once and never
mutated, so identical member sets share one cached instance.

Usage:
    from commitscan.split.bytetable import byte_class_table

    table = byte_class_table(b" \\n")
    table.index(ord("\\n"))  # 1
    ord("x") in table        # False

"""

from __future__ import annotations

from functools import lru_cache

NO_MATCH = -1


class ByteClassTable:
    """Immutable 256-entry byte-to-member-index table.

    When a byte appears more than once in ``members`` its last position wins.

    Thread Safety:
        Immutable after construction. Safe to share across threads.

    """

    __slots__ = ("_members", "_table")

    def __init__(self, members: bytes) -> None:
        """Build the table.

        Args:
            members: The byte set; order defines member indices
        """
        table = [NO_MATCH] * 256
        for i, c in enumerate(members):
            table[c] = i
        self._members = bytes(members)
        self._table: tuple[int, ...] = tuple(table)

    @property
    def members(self) -> bytes:
        """The configured byte set."""
        return self._members

    @property
    def table(self) -> tuple[int, ...]:
        """The raw lookup table (256 entries)."""
        return self._table

    def index(self, byte: int) -> int:
        """Return the member index of ``byte``, or -1."""
        return self._table[byte]

    def member(self, index: int) -> bytes:
        """Return member ``index`` as a one-byte string."""
        return self._members[index : index + 1]

    def isdisjoint(self, other: ByteClassTable) -> bool:
        """True when no byte belongs to both tables."""
        return not set(self._members) & set(other._members)

    def __contains__(self, byte: object) -> bool:
        if not isinstance(byte, int) or not 0 <= byte < 256:
            return False
        return self._table[byte] >= 0

    def __len__(self) -> int:
        return len(self._members)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ByteClassTable):
            return NotImplemented
        return self._table == other._table

    def __hash__(self) -> int:
        return hash(self._table)

    def __repr__(self) -> str:
        return f"ByteClassTable({self._members!r})"


@lru_cache(maxsize=64)
def byte_class_table(members: bytes) -> ByteClassTable:
    """Return the shared table for ``members``.

    Args:
        members: The byte set (must be ``bytes``, it is the cache key)

    Returns:
        Cached ByteClassTable
    """
    return ByteClassTable(members)
