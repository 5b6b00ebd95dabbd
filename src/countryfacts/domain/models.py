"""
Dataset Domain Models

Pydantic views over the raw country records. The raw dataset enforces
nothing, so every field is optional and unknown fields are kept. Values
whose shape does not match the declared type (for example a ``"N/A"``
string where an object is expected) are exposed as ``None`` on the typed
view; the raw mapping from the registry still carries them unchanged, and
``CountryRecord.to_raw`` gives back the record it was built from.
"""

from typing import Any, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr, field_validator

from ..types import MalformedRecordError
from ..utils import freeze, thaw
from .enums import DrivingSide, IssueSeverity

ERROR_KEY = "error"


def is_error_record(raw: Any) -> bool:
    """True for a placeholder mapping such as ``{"error": "..."}``."""
    return isinstance(raw, Mapping) and set(raw.keys()) == {ERROR_KEY}


def _dict_or_none(value: Any) -> Any:
    return value if isinstance(value, Mapping) else None


def _list_or_none(value: Any) -> Any:
    return value if isinstance(value, (list, tuple)) else None


def _str_or_none(value: Any) -> Any:
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return None


class _Lenient(BaseModel):
    model_config = ConfigDict(frozen=True, extra="allow", populate_by_name=True)


class Currency(_Lenient):
    """Currency in circulation."""
    code: Optional[str] = Field(None, description="ISO 4217 code")
    symbol: Optional[str] = Field(None, description="Display symbol")
    name: Optional[str] = Field(None, description="English name")


class HeadOfState(_Lenient):
    title: Optional[str] = None
    name: Optional[str] = None


class Government(_Lenient):
    """Form of government and office holders."""
    type: Optional[str] = Field(None, description="Form of government")
    political_lean: Optional[str] = Field(None, alias="politicalLean")
    heads_of_state: list[HeadOfState] = Field(default_factory=list, alias="headsOfState")

    @field_validator("heads_of_state", mode="before")
    @classmethod
    def _only_mappings(cls, value: Any) -> Any:
        if not isinstance(value, (list, tuple)):
            return []
        return [item for item in value if isinstance(item, Mapping)]


class Area(_Lenient):
    value: Optional[Any] = None
    unit: Optional[str] = None


class GDP(_Lenient):
    nominal: Optional[Any] = None
    per_capita: Optional[Any] = Field(None, alias="perCapita")


class CountryRecord(_Lenient):
    """Typed view of one country record."""
    # Identifiers
    name: Optional[str] = Field(None, description="Common English name")
    official_name: Optional[str] = Field(None, alias="officialName")
    local_name: Optional[str] = Field(None, alias="localName")
    flag: Optional[str] = Field(None, description="Flag emoji")
    iso_alpha2: Optional[str] = Field(None, alias="isoAlpha2")
    iso_alpha3: Optional[str] = Field(None, alias="isoAlpha3")
    numeric_code: Optional[str] = Field(None, alias="numericCode")
    dialing_code: Optional[str] = Field(None, alias="dialingCode")

    # Localization
    first_language: Optional[str] = Field(None, alias="firstLanguage")
    other_languages: Optional[list[Any]] = Field(None, alias="otherLanguages")
    date_format: Optional[str] = Field(None, alias="dateFormat")
    time_format: Optional[str] = Field(None, alias="timeFormat")

    # Governance
    government: Optional[Government] = None

    # Geography and economy
    region: Optional[str] = None
    subregion: Optional[str] = None
    capital: Optional[str] = None
    population: Optional[Any] = None
    area: Optional[Area] = None
    gdp: Optional[GDP] = None
    currency: Optional[Currency] = None

    # Miscellany
    time_zone: Optional[Any] = Field(None, alias="timeZone")
    driving_side: Optional[str] = Field(None, alias="drivingSide")
    internet_tld: Optional[str] = Field(None, alias="internetTLD")
    emergency_numbers: Optional[dict[str, Any]] = Field(None, alias="emergencyNumbers")
    holidays: Optional[list[Any]] = None
    national_animal: Optional[str] = Field(None, alias="nationalAnimal")
    national_dish: Optional[str] = Field(None, alias="nationalDish")
    tourism_highlights: Optional[list[Any]] = Field(None, alias="tourismHighlights")
    major_exports: Optional[list[Any]] = Field(None, alias="majorExports")
    major_imports: Optional[list[Any]] = Field(None, alias="majorImports")
    life_expectancy: Optional[Any] = Field(None, alias="lifeExpectancy")
    literacy_rate: Optional[Any] = Field(None, alias="literacyRate")
    climate: Optional[str] = None
    religions: Optional[list[Any]] = None
    neighbor_countries: Optional[list[Any]] = Field(None, alias="neighborCountries")
    visa_requirement: Optional[str] = Field(None, alias="visaRequirement")
    notable_facts: Optional[list[Any]] = Field(None, alias="notableFacts")

    _raw: Optional[Mapping[str, Any]] = PrivateAttr(default=None)

    @field_validator("government", "area", "gdp", "currency", "emergency_numbers", mode="before")
    @classmethod
    def _objects(cls, value: Any) -> Any:
        return _dict_or_none(value)

    @field_validator(
        "other_languages", "holidays", "tourism_highlights", "major_exports",
        "major_imports", "religions", "neighbor_countries", "notable_facts",
        mode="before",
    )
    @classmethod
    def _lists(cls, value: Any) -> Any:
        return _list_or_none(value)

    @field_validator(
        "name", "official_name", "local_name", "flag", "iso_alpha2", "iso_alpha3",
        "numeric_code", "dialing_code", "first_language", "date_format",
        "time_format", "region", "subregion", "capital", "driving_side",
        "internet_tld", "national_animal", "national_dish", "climate",
        "visa_requirement",
        mode="before",
    )
    @classmethod
    def _strings(cls, value: Any) -> Any:
        return _str_or_none(value)

    @classmethod
    def from_raw(cls, raw: Mapping[str, Any], code: Optional[str] = None) -> "CountryRecord":
        """
        Build a typed view from a raw dataset record.

        Args:
            raw: Record as stored in the dataset
            code: Dataset key, used in error messages

        Raises:
            MalformedRecordError: If the record is an error placeholder
        """
        if is_error_record(raw):
            raise MalformedRecordError(code, str(raw[ERROR_KEY]))
        if not isinstance(raw, Mapping):
            raise MalformedRecordError(code, f"expected an object, got {type(raw).__name__}")
        record = cls.model_validate(thaw(raw))
        record._raw = freeze(raw)
        return record

    def to_raw(self) -> dict[str, Any]:
        """
        Get the record under dataset key names.

        A view built by ``from_raw`` returns a mutable copy of the record it
        was built from, sentinels and original value types included. Views
        constructed directly are dumped by alias, omitting unset fields.
        """
        if self._raw is not None:
            return thaw(self._raw)
        return self.model_dump(by_alias=True, exclude_unset=True)

    @property
    def currency_code(self) -> Optional[str]:
        return self.currency.code if self.currency else None

    @property
    def traffic_side(self) -> Optional[DrivingSide]:
        """drivingSide as an enum, None for sentinels such as "N/A"."""
        try:
            return DrivingSide((self.driving_side or "").lower())
        except ValueError:
            return None


class DataIssue(BaseModel):
    """One data-quality finding from the audit."""
    code: str = Field(..., description="Dataset key the finding belongs to")
    field: Optional[str] = Field(None, description="Offending field, if any")
    message: str = Field(..., description="Human-readable description")
    severity: IssueSeverity = Field(default=IssueSeverity.ERROR)

    model_config = ConfigDict(frozen=True)
