"""ContextVar-based scan configuration for commitscan.

Provides thread-local configuration using Python's ContextVars (PEP 567).
A LogEntryScanner reads the active config once, at construction time, and
builds its split strategies from it. Nothing format-specific (the record
marker, the header byte sets, the PR regexes) is hard-coded in the engine.

Thread Safety:
    ContextVars are thread-local by design. Each thread has independent storage,
    so no locks are needed and race conditions are impossible.

Usage:
    # Explicit config
    scanner = LogEntryScanner(source, config=ScanConfig(marker=b"commit "))

    # Ambient config for everything created in a block
    with scan_config_context(ScanConfig(pr_squash_pattern=None)):
        entries = list(scan_log(source))

"""

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class ScanConfig:
    """Immutable scan configuration.

    Frozen dataclass ensures thread-safety (immutable after creation).

    Attributes:
        marker: Byte sequence that starts every record
        commit_id_terminators: Bytes that end the commit id on the marker line
        attribute_delimiters: Bytes separating a header key from its value
        attribute_padding: Bytes skipped between the delimiter and the value
        attribute_stops: Bytes that end a header line with no key
        pr_merge_pattern: Regex for merge subjects; group 1 is the PR number,
            group 2 the source branch
        pr_squash_pattern: Regex for squash subjects; group 1 is the subject,
            group 2 the PR number. None disables squash detection.
        encoding: Text encoding of the log output
        decode_errors: Error handler passed to ``bytes.decode``
        buffer_size: Initial scan buffer capacity in bytes
        max_buffer_size: Largest token the scanner will buffer

    """

    marker: bytes = b"commit "
    commit_id_terminators: bytes = b" \n"
    attribute_delimiters: bytes = b":"
    attribute_padding: bytes = b" "
    attribute_stops: bytes = b"\n"
    pr_merge_pattern: str = r"Merge .*#(\d+) from ([^ ]+)"
    pr_squash_pattern: str | None = r"(.+) +\(#(\d+)\)$"
    encoding: str = "utf-8"
    decode_errors: str = "replace"
    buffer_size: int = 4096
    max_buffer_size: int = 64 * 1024 * 1024

    def __post_init__(self) -> None:
        if not self.marker:
            raise ValueError("marker must not be empty")
        if self.buffer_size <= 0:
            raise ValueError(f"buffer_size must be positive, got {self.buffer_size}")
        if self.max_buffer_size < self.buffer_size:
            raise ValueError(
                f"max_buffer_size ({self.max_buffer_size}) is smaller than "
                f"buffer_size ({self.buffer_size})"
            )

    @classmethod
    def from_dict(cls, config_dict: dict) -> "ScanConfig":
        """Create ScanConfig from dictionary.

        Useful when config comes from external sources (TOML files, CLI
        wrappers). String values for byte fields are encoded as UTF-8.

        Only includes keys that are valid ScanConfig fields; unknown keys
        are silently ignored.

        Args:
            config_dict: Dictionary with config values. Keys should match
                ScanConfig attribute names.

        Returns:
            New ScanConfig instance with values from dict.

        Example:
            >>> config = ScanConfig.from_dict({
            ...     "marker": "commit ",
            ...     "buffer_size": 8192,
            ...     "unknown_key": "ignored",
            ... })
            >>> config.marker
            b'commit '

        """
        valid_fields = {f.name for f in cls.__dataclass_fields__.values()}
        filtered = {}
        for key, value in config_dict.items():
            if key not in valid_fields:
                continue
            if key in _BYTE_FIELDS and isinstance(value, str):
                value = value.encode("utf-8")
            filtered[key] = value
        return cls(**filtered)


_BYTE_FIELDS = frozenset(
    {
        "marker",
        "commit_id_terminators",
        "attribute_delimiters",
        "attribute_padding",
        "attribute_stops",
    }
)

# Module-level default config (reused, never recreated)
_DEFAULT_CONFIG: ScanConfig = ScanConfig()

# Thread-local configuration via ContextVar
_scan_config: ContextVar[ScanConfig] = ContextVar(
    "scan_config",
    default=_DEFAULT_CONFIG,
)


def get_scan_config() -> ScanConfig:
    """Get current scan configuration (thread-local).

    Returns:
        The active ScanConfig for this thread/context.

    """
    return _scan_config.get()


def set_scan_config(config: ScanConfig) -> None:
    """Set scan configuration for current context.

    Args:
        config: ScanConfig instance to use for this context.

    """
    _scan_config.set(config)


def reset_scan_config() -> None:
    """Reset to default configuration.

    Reuses the module-level _DEFAULT_CONFIG singleton, avoiding allocation.

    """
    _scan_config.set(_DEFAULT_CONFIG)


@contextmanager
def scan_config_context(config: ScanConfig) -> Iterator[None]:
    """Context manager for temporary config changes.

    Args:
        config: ScanConfig to use within the context.

    Yields:
        None

    Example:
        >>> with scan_config_context(ScanConfig(pr_squash_pattern=None)):
        ...     entries = list(scan_log(b"commit abc\\n"))
        >>> # Automatically reset to previous config

    Thread Safety:
        Only affects the current thread's context. Properly restores previous
        config even if an exception is raised.

    """
    previous = _scan_config.get()
    _scan_config.set(config)
    try:
        yield
    finally:
        _scan_config.set(previous)


__all__ = [
    "ScanConfig",
    "get_scan_config",
    "set_scan_config",
    "reset_scan_config",
    "scan_config_context",
]
