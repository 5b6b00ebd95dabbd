import logging

import pytest

import countryfacts
from countryfacts.config import countries as countries_module
from countryfacts.config.countries import CountryRegistry, get_country
from countryfacts.config.settings import PACKAGED_DATA_FILE
from countryfacts.types import (
    CountryDataError,
    DatasetLoadError,
    MalformedRecordError,
    UnknownCountryError,
)
from countryfacts.utils import thaw

PS_PLACEHOLDER = {"error": "Failed to retrieve a valid response after retries."}


class TestLookup:
    def test_france(self):
        france = CountryRegistry.get("FR")
        assert france["isoAlpha3"] == "FRA"
        assert france["capital"] == "Paris"
        assert france["currency"]["code"] == "EUR"

    @pytest.mark.parametrize("code", ["fr", " FR ", "Fr"])
    def test_codes_are_normalized(self, code):
        assert CountryRegistry.get(code) is CountryRegistry.get("FR")

    def test_unknown_code_returns_none(self):
        assert CountryRegistry.get("ZZ") is None
        assert get_country("ZZ") is None

    def test_placeholder_is_returned_as_stored(self):
        record = CountryRegistry.get("PS")
        assert record == PS_PLACEHOLDER
        assert CountryRegistry.is_error_record(record)
        assert not CountryRegistry.is_error_record(CountryRegistry.get("FR"))

    def test_non_string_code(self):
        with pytest.raises(TypeError):
            CountryRegistry.get(250)

    def test_require_unknown(self):
        with pytest.raises(UnknownCountryError) as exc_info:
            CountryRegistry.require("ZZ")
        assert exc_info.value.code == "ZZ"
        assert str(exc_info.value) == "Unknown country code: 'ZZ'"

    def test_unknown_error_is_also_key_error(self):
        with pytest.raises(KeyError):
            CountryRegistry.require("ZZ")

    def test_get_record(self):
        japan = CountryRegistry.get_record("jp")
        assert japan.iso_alpha2 == "JP"
        assert japan.capital == "Tokyo"
        assert japan.currency_code == "JPY"

    def test_get_record_placeholder(self):
        with pytest.raises(MalformedRecordError) as exc_info:
            CountryRegistry.get_record("PS")
        assert exc_info.value.code == "PS"
        assert exc_info.value.placeholder == PS_PLACEHOLDER["error"]
        assert isinstance(exc_info.value, CountryDataError)

    def test_validate_country_code(self):
        assert CountryRegistry.validate_country_code("de")
        assert CountryRegistry.validate_country_code("PS")
        assert not CountryRegistry.validate_country_code("QQ")

    def test_package_shortcuts(self):
        assert countryfacts.get_country("FR")["name"] == "France"
        assert countryfacts.get_countries() is CountryRegistry.countries()

    def test_module_level_countries(self):
        assert countries_module.COUNTRIES["FR"]["isoAlpha3"] == "FRA"
        with pytest.raises(AttributeError):
            countries_module.NOT_THERE


class TestDataset:
    def test_packaged_source(self):
        assert CountryRegistry.source() == PACKAGED_DATA_FILE

    def test_mapping_is_read_only(self, packaged_countries):
        with pytest.raises(TypeError):
            packaged_countries["FR"] = {}

    def test_records_are_read_only(self):
        france = CountryRegistry.get("FR")
        with pytest.raises(TypeError):
            france["capital"] = "Lyon"
        with pytest.raises(TypeError):
            france["currency"]["code"] = "FRF"
        with pytest.raises(AttributeError):
            france["holidays"].append("Another holiday")
        assert CountryRegistry.get("FR")["capital"] == "Paris"
        assert CountryRegistry.get("FR")["currency"]["code"] == "EUR"

    def test_module_level_records_are_read_only(self):
        with pytest.raises(TypeError):
            countries_module.COUNTRIES["PS"]["error"] = "fixed"

    def test_thawed_copy_is_independent(self):
        france = thaw(CountryRegistry.get("FR"))
        france["capital"] = "Lyon"
        france["holidays"].append("Another holiday")
        assert CountryRegistry.get("FR")["capital"] == "Paris"
        assert "Another holiday" not in CountryRegistry.get("FR")["holidays"]

    def test_loaded_once(self):
        assert CountryRegistry.countries() is CountryRegistry.countries()

    def test_keys_match_iso_alpha2(self, packaged_countries):
        for code, record in packaged_countries.items():
            if CountryRegistry.is_error_record(record):
                continue
            assert record["isoAlpha2"] == code

    def test_records_share_one_shape(self, packaged_countries):
        expected = set(packaged_countries["FR"]) - {"localName"}
        for code, record in packaged_countries.items():
            if CountryRegistry.is_error_record(record):
                continue
            assert set(record) - {"localName"} == expected, code

    def test_unknown_values_keep_their_type(self):
        bouvet = CountryRegistry.get("BV")
        assert bouvet["gdp"] == "N/A"
        assert bouvet["holidays"] == ()
        assert bouvet["neighborCountries"] == ()
        assert CountryRegistry.get("ZW")["neighborCountries"] == ("BW", "MZ", "ZA", "ZM")

    def test_non_standard_code(self):
        kosovo = CountryRegistry.get("XK")
        assert kosovo["name"] == "Kosovo"
        assert kosovo["isoAlpha3"] == "XKX"

    def test_list_codes(self):
        codes = CountryRegistry.list_codes()
        assert codes == sorted(codes)
        assert len(codes) == len(set(codes))
        assert {"FR", "PS", "XK", "US"} <= set(codes)

    def test_list_countries_skips_placeholders(self, caplog):
        with caplog.at_level(logging.WARNING):
            records = CountryRegistry.list_countries()
        codes = [r.iso_alpha2 for r in records]
        assert "PS" not in codes
        assert len(records) == len(CountryRegistry.list_codes()) - 1
        assert "Skipping PS" in caplog.text

    def test_list_regions(self):
        assert CountryRegistry.list_regions() == [
            "Africa", "Americas", "Antarctic", "Asia", "Europe", "Oceania",
        ]

    def test_countries_by_region(self):
        europe = CountryRegistry.get_countries_by_region("europe")
        assert europe
        assert all(country.region == "Europe" for country in europe)
        assert "FR" in {country.iso_alpha2 for country in europe}

    def test_unknown_region(self):
        assert CountryRegistry.get_countries_by_region("Atlantis") == []

    def test_count_by_region(self):
        counts = CountryRegistry.count_by_region()
        assert list(counts) == CountryRegistry.list_regions()
        assert sum(counts.values()) == len(CountryRegistry.list_codes()) - 1
        assert counts["Europe"] == len(CountryRegistry.get_countries_by_region("Europe"))


class TestLoading:
    def test_reload_from_file(self, small_dataset_file):
        CountryRegistry.reload(small_dataset_file)
        assert CountryRegistry.source() == small_dataset_file
        assert CountryRegistry.list_codes() == ["AA", "BB", "CC"]
        assert CountryRegistry.get("aa")["capital"] == "Alpha City"

    def test_data_file_from_environment(self, monkeypatch, small_dataset_file):
        monkeypatch.setenv("COUNTRYFACTS_DATA_FILE", str(small_dataset_file))
        assert CountryRegistry.get("FR") is None
        assert CountryRegistry.get("CC")["name"] == "Gammastan"

    def test_missing_file(self, tmp_path):
        with pytest.raises(DatasetLoadError) as exc_info:
            CountryRegistry.load_countries(tmp_path / "missing.json")
        assert exc_info.value.path == str(tmp_path / "missing.json")

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text('{"FR": {', encoding="utf-8")
        with pytest.raises(DatasetLoadError, match="Invalid JSON"):
            CountryRegistry.load_countries(path)

    def test_duplicate_keys_rejected(self, tmp_path):
        path = tmp_path / "dupes.json"
        path.write_text('{"FR": {"name": "France"}, "FR": {"name": "Again"}}', encoding="utf-8")
        with pytest.raises(DatasetLoadError, match="Duplicate key 'FR'"):
            CountryRegistry.load_countries(path)

    def test_top_level_must_be_object(self, tmp_path):
        path = tmp_path / "list.json"
        path.write_text('[{"isoAlpha2": "FR"}]', encoding="utf-8")
        with pytest.raises(DatasetLoadError, match="top level must be an object"):
            CountryRegistry.load_countries(path)

    def test_directory_is_a_load_error(self, tmp_path):
        with pytest.raises(DatasetLoadError) as exc_info:
            CountryRegistry.load_countries(tmp_path)
        assert isinstance(exc_info.value.__cause__, OSError)

    def test_reload_from_directory(self, tmp_path):
        with pytest.raises(DatasetLoadError):
            CountryRegistry.reload(tmp_path)
