"""Benchmark log scanning and raw pattern search.

Run with:
    pytest benchmarks/benchmark_scan.py -v --benchmark-only
"""

import io

import pytest

from commitscan import ScanConfig, scan_log
from commitscan.scanner import IncrementalScanner
from commitscan.source import ChunkedByteSource
from commitscan.split import AnyByteSplitter, PatternFinder


@pytest.mark.benchmark(group="scan-log")
def test_benchmark_scan_log_bytes(benchmark, large_log):
    """Decode a large log held in memory."""
    entries = benchmark(lambda: list(scan_log(large_log)))
    assert len(entries) == 1000


@pytest.mark.benchmark(group="scan-log")
def test_benchmark_scan_log_small_reads(benchmark, large_log):
    """Decode the same log delivered in pipe-sized 512-byte reads."""
    chunks = [large_log[i : i + 512] for i in range(0, len(large_log), 512)]
    config = ScanConfig(buffer_size=512)

    def scan_chunked():
        return list(scan_log(ChunkedByteSource(chunks), config=config))

    entries = benchmark(scan_chunked)
    assert len(entries) == 1000


@pytest.mark.benchmark(group="search")
def test_benchmark_pattern_finder(benchmark, noisy_haystack):
    """Boyer-Moore search over near-miss noise."""
    finder = PatternFinder(b"commit ")
    found, index = benchmark(finder.find, noisy_haystack)
    assert found
    assert index == len(noisy_haystack) - 7


@pytest.mark.benchmark(group="search")
def test_benchmark_bytes_find(benchmark, noisy_haystack):
    """bytes.find over the same input (baseline for ratio)."""
    index = benchmark(noisy_haystack.find, b"commit ")
    assert index == len(noisy_haystack) - 7


@pytest.mark.benchmark(group="split")
def test_benchmark_line_tokens(benchmark, large_log):
    """Line tokenizing through the incremental scanner."""
    lines = AnyByteSplitter(b"\n")

    def tokenize():
        return sum(1 for _ in IncrementalScanner(io.BytesIO(large_log)).tokens(lines))

    assert benchmark(tokenize) == large_log.count(b"\n")


@pytest.mark.benchmark(group="scan-log")
def test_benchmark_small_records_after_large_body(benchmark, log_after_large_body):
    """Records after one huge body scan at the same per-record cost as before it."""
    entries = benchmark.pedantic(lambda: list(scan_log(log_after_large_body)), rounds=3)
    assert len(entries) == 20_001
    assert len(entries[0].body) == 1
