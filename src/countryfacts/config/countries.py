"""
Global Country Registry

Read-only access to the country dataset: a mapping from a two-letter
country code (ISO 3166-1 alpha-2, plus a few non-standard territory codes
such as XK) to a record of descriptive metadata.

The dataset is loaded from JSON once, on first use, and shared by the whole
process. Records are returned exactly as stored but frozen: objects are
read-only mappings and arrays are tuples (``utils.thaw`` gives a mutable
copy). Field presence varies per record and at least one entry (PS) is an
error placeholder of the form ``{"error": "..."}``; callers that need a
country record must check for it (see ``CountryRegistry.is_error_record``
and ``CountryRegistry.get_record``).
"""

import logging
from collections import Counter
from pathlib import Path
from typing import Any, Mapping, Optional, Union

from ..domain.models import CountryRecord, is_error_record
from ..types import DatasetLoadError, MalformedRecordError, UnknownCountryError
from ..utils import freeze, load_json_file, timer
from .settings import PACKAGED_DATA_FILE, Config

logger = logging.getLogger(__name__)


class CountryRegistry:
    """Global registry for country lookups"""

    _countries: Optional[Mapping[str, Any]] = None
    _source: Optional[Path] = None

    @staticmethod
    @timer
    def load_countries(path: Optional[Union[str, Path]] = None) -> Mapping[str, Any]:
        """
        Read a dataset file into a mapping that is read-only all the way down.

        Args:
            path: JSON file to read; defaults to the configured dataset
                (COUNTRYFACTS_DATA_FILE) or the packaged one

        Returns:
            Read-only mapping of code -> raw record; nested objects are
            MappingProxyType views and arrays are tuples

        Raises:
            DatasetLoadError: If the file is missing or unreadable, is not
                valid JSON, repeats a key, or is not a JSON object
        """
        if path is None:
            path = Config().dataset.data_file
        path = Path(path)

        try:
            data = load_json_file(path, allow_duplicate_keys=False)
        except OSError as e:
            raise DatasetLoadError(path, str(e)) from e
        except ValueError as e:
            raise DatasetLoadError(path, str(e)) from e

        if not isinstance(data, dict):
            raise DatasetLoadError(path, f"top level must be an object, got {type(data).__name__}")

        placeholders = sorted(code for code, record in data.items() if is_error_record(record))
        logger.debug(f"Loaded {len(data)} country records from {path}")
        if placeholders:
            logger.debug(f"Error placeholders in dataset: {', '.join(placeholders)}")

        return freeze(data)

    @classmethod
    def countries(cls) -> Mapping[str, Any]:
        """Get the process-wide dataset, loading it on first access"""
        if cls._countries is None:
            cls.reload()
        return cls._countries

    @classmethod
    def reload(cls, path: Optional[Union[str, Path]] = None) -> Mapping[str, Any]:
        """Replace the process-wide dataset with the contents of ``path``"""
        source = Path(path) if path is not None else Config().dataset.data_file
        cls._countries = cls.load_countries(source)
        cls._source = source
        return cls._countries

    @classmethod
    def source(cls) -> Path:
        """Path the current dataset was read from"""
        cls.countries()
        return cls._source or PACKAGED_DATA_FILE

    @staticmethod
    def normalize_code(code: str) -> str:
        """Strip and upper-case a country code (``' fr '`` -> ``'FR'``)"""
        if not isinstance(code, str):
            raise TypeError(f"Country code must be a string, got {type(code).__name__}")
        return code.strip().upper()

    @classmethod
    def get(cls, code: str) -> Optional[Any]:
        """
        Get the raw record stored under a country code.

        Args:
            code: Two-letter code, case-insensitive

        Returns:
            The stored record (possibly an error placeholder), or None
        """
        return cls.countries().get(cls.normalize_code(code))

    @classmethod
    def require(cls, code: str) -> Any:
        """Like ``get`` but raises UnknownCountryError for a missing code"""
        record = cls.get(code)
        if record is None:
            raise UnknownCountryError(code)
        return record

    @classmethod
    def get_record(cls, code: str) -> CountryRecord:
        """
        Get a typed view of a country record.

        Raises:
            UnknownCountryError: If no record is stored under the code
            MalformedRecordError: If the stored record is an error placeholder
        """
        key = cls.normalize_code(code)
        return CountryRecord.from_raw(cls.require(key), code=key)

    @staticmethod
    def is_error_record(record: Any) -> bool:
        """True when a stored record is an error placeholder"""
        return is_error_record(record)

    @classmethod
    def list_codes(cls) -> list[str]:
        """Get sorted list of all dataset keys"""
        return sorted(cls.countries().keys())

    @classmethod
    def list_countries(cls) -> list[CountryRecord]:
        """Get typed views of every well-formed record, in key order"""
        records = []
        for code in cls.list_codes():
            try:
                records.append(CountryRecord.from_raw(cls.countries()[code], code=code))
            except MalformedRecordError as e:
                logger.warning(f"Skipping {code}: {e.placeholder}")
        return records

    @classmethod
    def list_regions(cls) -> list[str]:
        """Get list of all regions named by well-formed records"""
        regions = set(
            record.get("region") for record in cls.countries().values()
            if isinstance(record, Mapping) and isinstance(record.get("region"), str)
        )
        return sorted(regions)

    @classmethod
    def count_by_region(cls) -> dict[str, int]:
        """Count well-formed records per region, sorted by region name"""
        counts = Counter(country.region for country in cls.list_countries() if country.region)
        return dict(sorted(counts.items()))

    @classmethod
    def get_countries_by_region(cls, region: str) -> list[CountryRecord]:
        """Get all countries in a specific region"""
        return [country for country in cls.list_countries()
                if country.region and country.region.lower() == region.lower()]

    @classmethod
    def validate_country_code(cls, code: str) -> bool:
        """Check if a country code is present in the dataset"""
        return cls.get(code) is not None


def get_country(code: str) -> Optional[Any]:
    """Module-level shortcut for ``CountryRegistry.get``"""
    return CountryRegistry.get(code)


def __getattr__(name: str) -> Any:
    # COUNTRIES is loaded on first access so COUNTRYFACTS_DATA_FILE is honoured
    if name == "COUNTRIES":
        return CountryRegistry.countries()
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
