"""Benchmark fixtures and configuration."""

from __future__ import annotations

import pytest


@pytest.fixture
def large_log() -> bytes:
    """Generate a large git log (~250KB) mixing merge, squash and plain records."""
    records = []
    for i in range(1000):
        if i % 3 == 0:
            subject = f"    Merge pull request #{i} from user/branch-{i}\n\n    Fix issue {i}\n"
        elif i % 3 == 1:
            subject = f"    Add feature {i} (#{i})\n"
        else:
            subject = f"    Tidy module {i}\n"
        records.append(
            f"commit {i:040x}\n"
            f"Author: Dev {i} <dev{i}@example.com>\n"
            f"Date:   Mon Jan 1 12:00:00 2024 +0000\n"
            f"\n"
            f"{subject}"
            f"\n"
            f"    Body paragraph for record {i},\n"
            f"    wrapped over two lines.\n"
            f"\n"
            f"    This reverts commit {i:07x}.\n"
            f"\n"
        )
    return "".join(records).encode()


@pytest.fixture
def noisy_haystack() -> bytes:
    """One marker at the end of ~1MB of near-miss noise."""
    return b"comma commits commi\n" * 50_000 + b"commit "


@pytest.fixture
def log_after_large_body() -> bytes:
    """One ~2MB commit body followed by 20,000 small records."""
    large = b"commit " + b"f" * 40 + b"\nAuthor: A\n\n    Big\n\n" + b"    body line\n" * 150_000
    small = b"".join(
        b"commit %040x\nAuthor: A\n\n    Small %d\n\n" % (i, i) for i in range(20_000)
    )
    return large + small
