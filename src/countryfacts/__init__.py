"""
Country dataset: descriptive metadata keyed by ISO 3166-1 alpha-2 code.

Usage:
    from countryfacts import get_country, CountryRegistry

    france = get_country("FR")          # read-only raw record, or None
    france["currency"]["code"]          # 'EUR'

    CountryRegistry.get("PS")           # {'error': '...'} placeholder, kept as stored
    CountryRegistry.get_record("JP")    # typed CountryRecord view
    thaw(france)                        # mutable dict copy
"""

__version__ = "1.0.0"

from .config.countries import CountryRegistry, get_country
from .domain.models import CountryRecord, is_error_record
from .types import (
    CountryDataError,
    DatasetLoadError,
    MalformedRecordError,
    UnknownCountryError,
)
from .utils import thaw


def get_countries():
    """Read-only mapping of every code to its raw record"""
    return CountryRegistry.countries()


__all__ = [
    "__version__",
    "CountryRegistry",
    "CountryRecord",
    "get_country",
    "get_countries",
    "is_error_record",
    "thaw",
    "CountryDataError",
    "DatasetLoadError",
    "MalformedRecordError",
    "UnknownCountryError",
]
