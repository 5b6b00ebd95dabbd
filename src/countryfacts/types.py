"""
Exception hierarchy for the country dataset.

Loading the dataset and looking records up can fail in a small number of
well-defined ways. Each failure has its own exception type so callers can
tell a missing file apart from an unknown code or a malformed record.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Union


class CountryDataError(Exception):
    """Base exception for country dataset operations."""
    pass


class DatasetLoadError(CountryDataError):
    """The dataset file could not be read or parsed."""
    def __init__(self, path: Optional[Union[str, Path]], message: str):
        self.path = str(path) if path is not None else None
        super().__init__(f"Failed to load country dataset ({self.path}): {message}")


class UnknownCountryError(CountryDataError, KeyError):
    """No record is stored under the requested code."""
    def __init__(self, code: str):
        self.code = code
        super().__init__(f"Unknown country code: {code!r}")

    def __str__(self) -> str:
        return self.args[0]


class MalformedRecordError(CountryDataError):
    """The stored record is an error placeholder rather than country data.

    The dataset keeps such placeholders verbatim (e.g. ``PS``), so a typed
    view cannot be built for them.
    """
    def __init__(self, code: Optional[str], message: str):
        self.code = code
        self.placeholder = message
        super().__init__(f"Record {code!r} is malformed: {message}")
