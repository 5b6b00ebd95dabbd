"""
Consolidated Utilities

Helper functions shared by the registry, the exporter and the CLI.

Sections:
- Logging and timing utilities
- Filesystem and path operations
- File loading helpers and read-only JSON values
"""

import functools
import json
import logging
import sys
import time
from collections.abc import Callable
from datetime import datetime
from pathlib import Path
from types import MappingProxyType
from typing import Any, Mapping, Optional

# =============================================================================
# Logging and Timing Utilities
# =============================================================================

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def setup_logging(
    verbose: bool,
    command: Optional[str] = None,
    enable_file_logging: bool = False,
    level: Optional[str] = None,
) -> Optional[Path]:
    """
    Configure logging with optional timestamped file output.

    Args:
        verbose: Enable debug-level logging if True
        command: CLI command name for log file naming
        enable_file_logging: Create timestamped log files when True
        level: Explicit level name (e.g. from COUNTRYFACTS_LOG_LEVEL), ignored when verbose

    Returns:
        Path of the log file if file logging was enabled, otherwise None
    """
    if verbose:
        log_level = logging.DEBUG
    else:
        log_level = logging.getLevelName((level or "INFO").upper())
        if not isinstance(log_level, int):
            log_level = logging.INFO

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    log_file = None

    if enable_file_logging:
        logs_dir = ensure_directory(Path("logs"))
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        log_file = logs_dir / f"{command or 'countryfacts'}_{timestamp}.log"
        handlers.append(logging.FileHandler(log_file, encoding='utf-8'))

    logging.basicConfig(
        level=log_level,
        format=LOG_FORMAT,
        datefmt="%H:%M:%S",
        handlers=handlers,
        force=True
    )
    return log_file


def timer(func: Callable) -> Callable:
    """Decorator to time function execution."""
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        start_time = time.perf_counter()
        result = func(*args, **kwargs)
        elapsed = time.perf_counter() - start_time
        logging.getLogger(func.__module__).debug(f"{func.__name__} completed in {elapsed:.3f} seconds")
        return result
    return wrapper


# =============================================================================
# Filesystem and Path Operations
# =============================================================================

def ensure_directory(path: Path) -> Path:
    """
    Ensure directory exists, creating it if necessary.

    Args:
        path: Directory path to ensure

    Returns:
        Path object for the directory
    """
    path.mkdir(parents=True, exist_ok=True)
    return path


# =============================================================================
# File Loading Helpers and Read-only Values
# =============================================================================

def _reject_duplicate_keys(pairs: list[tuple[str, Any]]) -> dict[str, Any]:
    result: dict[str, Any] = {}
    for key, value in pairs:
        if key in result:
            raise ValueError(f"Duplicate key {key!r}")
        result[key] = value
    return result


def load_json_file(file_path: Path, allow_duplicate_keys: bool = True) -> Any:
    """
    Load JSON file with error handling.

    Args:
        file_path: Path to JSON file
        allow_duplicate_keys: When False, a repeated object key is an error
            instead of silently keeping the last value

    Returns:
        Parsed JSON content

    Raises:
        FileNotFoundError: If file doesn't exist
        ValueError: If file is not valid JSON or repeats a key
    """
    if not file_path.exists():
        raise FileNotFoundError(f"JSON file not found: {file_path}")

    hook = None if allow_duplicate_keys else _reject_duplicate_keys
    try:
        with open(file_path, encoding='utf-8') as f:
            return json.load(f, object_pairs_hook=hook)
    except ValueError as e:
        raise ValueError(f"Invalid JSON in {file_path}: {e}") from e


def freeze(value: Any) -> Any:
    """
    Make parsed JSON read-only all the way down.

    Objects become ``MappingProxyType`` views and arrays become tuples;
    scalars are returned unchanged.
    """
    if isinstance(value, Mapping):
        return MappingProxyType({key: freeze(item) for key, item in value.items()})
    if isinstance(value, (list, tuple)):
        return tuple(freeze(item) for item in value)
    return value


def thaw(value: Any) -> Any:
    """Inverse of ``freeze``: fresh plain dicts and lists, safe to modify or serialize"""
    if isinstance(value, Mapping):
        return {key: thaw(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [thaw(item) for item in value]
    return value
