"""Split strategies for the incremental scanner.

Each strategy looks at the unconsumed scan window plus an end-of-input flag
and returns a SplitDecision. The scanner swaps strategies between scan calls,
so one buffered source can be tokenized into differently shaped pieces.

Architecture:
split/
├── __init__.py     # Re-exports
├── decision.py     # SplitDecision result type
├── bytetable.py    # ByteClassTable (256-entry byte classification)
├── any_byte.py     # AnyByteSplitter: first byte of a set
├── delimiter.py    # DelimiterSplitter: delimiter, skip padding, early stop
└── pattern.py      # PatternFinder: Boyer-Moore until/through/just

"""

from commitscan.split.any_byte import AnyByteSplitter
from commitscan.split.bytetable import ByteClassTable, byte_class_table
from commitscan.split.decision import NEED_MORE, SplitDecision
from commitscan.split.delimiter import DelimiterSplitter
from commitscan.split.pattern import PatternFinder, finder_for

__all__ = [
    "NEED_MORE",
    "AnyByteSplitter",
    "ByteClassTable",
    "DelimiterSplitter",
    "PatternFinder",
    "SplitDecision",
    "byte_class_table",
    "finder_for",
]
