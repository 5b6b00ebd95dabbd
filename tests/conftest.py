import json
import logging

import pytest

from countryfacts.config.countries import CountryRegistry

ENV_VARS = (
    "COUNTRYFACTS_DATA_FILE",
    "COUNTRYFACTS_REQUIRED_FIELDS",
    "COUNTRYFACTS_LOG_LEVEL",
    "ENVIRONMENT",
)

SMALL_DATASET = {
    "AA": {
        "name": "Alphaland",
        "isoAlpha2": "AA",
        "isoAlpha3": "AAA",
        "numericCode": "001",
        "region": "Europe",
        "capital": "Alpha City",
        "currency": {"code": "ALP", "symbol": "α", "name": "Alpha Mark"},
        "drivingSide": "right",
    },
    "BB": {"error": "Failed to retrieve a valid response after retries."},
    "CC": {
        "name": "Gammastan",
        "isoAlpha2": "CC",
        "isoAlpha3": "CCC",
        "numericCode": "003",
        "region": "Asia",
        "capital": "N/A",
        "holidays": "N/A",
    },
}


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Unset dataset variables; anything a test or .env sets is undone afterwards."""
    for name in ENV_VARS:
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
    yield


@pytest.fixture(autouse=True)
def reset_registry():
    CountryRegistry._countries = None
    CountryRegistry._source = None
    yield
    CountryRegistry._countries = None
    CountryRegistry._source = None


@pytest.fixture(autouse=True)
def restore_root_logger():
    """Drop the handlers setup_logging attaches to the root logger."""
    root = logging.getLogger()
    level = root.level
    yield
    for handler in list(root.handlers):
        if type(handler) in (logging.StreamHandler, logging.FileHandler):
            root.removeHandler(handler)
            handler.close()
    root.setLevel(level)


@pytest.fixture
def small_dataset_file(tmp_path):
    path = tmp_path / "small.json"
    path.write_text(json.dumps(SMALL_DATASET, ensure_ascii=False), encoding="utf-8")
    return path


@pytest.fixture
def packaged_countries():
    return CountryRegistry.countries()
