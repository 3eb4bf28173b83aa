"""Paragraph helpers for commit message text.

Log tools indent message lines; paragraphs are runs of non-blank lines
separated by blank ones. Leading spaces are trimmed from every line.
"""

from __future__ import annotations

PADDING = " "


def trim_line(line: str) -> str:
    """Strip the leading indentation of a message line."""
    return line.lstrip(PADDING)


def split_paragraphs(text: str) -> list[str]:
    """Split message text into paragraphs.

    Lines are left-trimmed and joined with ``\\n`` within a paragraph; blank
    lines separate paragraphs and never produce empty ones.

    Args:
        text: Message text, lines separated by ``\\n``

    Returns:
        Paragraphs in order

    Example:
        >>> split_paragraphs("    First line\\n    wraps\\n\\n    Second\\n")
        ['First line\\nwraps', 'Second']
    """
    paragraphs: list[str] = []
    current: list[str] = []
    for line in text.split("\n"):
        line = trim_line(line)
        if line:
            current.append(line)
        elif current:
            paragraphs.append("\n".join(current))
            current = []
    if current:
        paragraphs.append("\n".join(current))
    return paragraphs
