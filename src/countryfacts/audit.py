"""
Data-quality audit for the country dataset.

The dataset enforces no schema, so this module reports how far each record
is from the expected shape without changing or rejecting anything:

- error placeholders (``{"error": "..."}``) are reported as errors
- a key that differs from the record's own ``isoAlpha2`` is an error
- a missing or empty required identifier (name, isoAlpha3, numericCode) is an error
- list fields that are not lists of strings are warnings
- "N/A"-style sentinels in top-level fields are informational

Findings are meant for the people maintaining the data; consumers still
handle placeholders themselves.
"""

import logging
from collections import defaultdict
from dataclasses import dataclass, field
from typing import Any, Iterable, Mapping, Optional

from .config.countries import CountryRegistry
from .config.settings import DEFAULT_REQUIRED_FIELDS, Config
from .domain.enums import IssueSeverity
from .domain.models import ERROR_KEY, DataIssue, is_error_record

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = DEFAULT_REQUIRED_FIELDS

STRING_LIST_FIELDS = (
    "otherLanguages",
    "holidays",
    "tourismHighlights",
    "majorExports",
    "majorImports",
    "religions",
    "neighborCountries",
    "notableFacts",
)

SENTINELS = frozenset({"n/a", "na", "unknown", "none", "not available", "-", ""})


def is_sentinel(value: Any) -> bool:
    """True for placeholder strings used in place of missing data."""
    return isinstance(value, str) and value.strip().lower() in SENTINELS


def _is_empty(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, (list, tuple, Mapping)):
        return not value
    return False


def check_record(
    code: str,
    record: Any,
    required_fields: Iterable[str] = REQUIRED_FIELDS,
) -> list[DataIssue]:
    """
    Check a single record.

    Args:
        code: Dataset key the record is stored under
        record: Raw record
        required_fields: Identifiers that must be present and non-empty

    Returns:
        Findings for the record, empty if it looks well-formed
    """
    if is_error_record(record):
        return [DataIssue(
            code=code,
            field=ERROR_KEY,
            message=f"error placeholder instead of country data: {record[ERROR_KEY]}",
            severity=IssueSeverity.ERROR,
        )]

    if not isinstance(record, Mapping):
        return [DataIssue(
            code=code,
            message=f"record is a {type(record).__name__}, expected an object",
            severity=IssueSeverity.ERROR,
        )]

    issues = []

    iso_alpha2 = record.get("isoAlpha2")
    if iso_alpha2 != code:
        issues.append(DataIssue(
            code=code,
            field="isoAlpha2",
            message=f"key {code!r} does not match isoAlpha2 {iso_alpha2!r}",
            severity=IssueSeverity.ERROR,
        ))

    for name in required_fields:
        if _is_empty(record.get(name)) or is_sentinel(record.get(name)):
            issues.append(DataIssue(
                code=code,
                field=name,
                message=f"required field {name!r} is missing or empty",
                severity=IssueSeverity.ERROR,
            ))

    for name in STRING_LIST_FIELDS:
        if name not in record:
            continue
        value = record[name]
        if not isinstance(value, (list, tuple)) or not all(isinstance(item, str) for item in value):
            issues.append(DataIssue(
                code=code,
                field=name,
                message=f"{name!r} should be a list of strings, got {value!r}",
                severity=IssueSeverity.WARNING,
            ))

    for name, value in record.items():
        if name in required_fields:
            continue
        if is_sentinel(value):
            issues.append(DataIssue(
                code=code,
                field=name,
                message=f"sentinel value {value!r}",
                severity=IssueSeverity.INFO,
            ))

    return issues


@dataclass
class AuditReport:
    """Findings of one audit run over the dataset."""
    record_count: int
    issues: list[DataIssue] = field(default_factory=list)

    def _count(self, severity: IssueSeverity) -> int:
        return sum(1 for issue in self.issues if issue.severity == severity)

    @property
    def error_count(self) -> int:
        return self._count(IssueSeverity.ERROR)

    @property
    def warning_count(self) -> int:
        return self._count(IssueSeverity.WARNING)

    @property
    def info_count(self) -> int:
        return self._count(IssueSeverity.INFO)

    @property
    def ok(self) -> bool:
        """True when no error-level finding was recorded"""
        return self.error_count == 0

    @property
    def malformed_codes(self) -> list[str]:
        """Keys whose record is an error placeholder"""
        return sorted({issue.code for issue in self.issues if issue.field == ERROR_KEY})

    def by_code(self, severity: Optional[IssueSeverity] = None) -> dict[str, list[DataIssue]]:
        grouped: dict[str, list[DataIssue]] = defaultdict(list)
        for issue in self.issues:
            if severity is None or issue.severity == severity:
                grouped[issue.code].append(issue)
        return dict(sorted(grouped.items()))

    def summary(self) -> dict[str, Any]:
        return {
            'records': self.record_count,
            'errors': self.error_count,
            'warnings': self.warning_count,
            'info': self.info_count,
            'malformed': self.malformed_codes,
            'ok': self.ok,
        }


def audit_dataset(
    countries: Optional[Mapping[str, Any]] = None,
    required_fields: Optional[Iterable[str]] = None,
) -> AuditReport:
    """
    Audit every record in a dataset.

    Args:
        countries: Mapping to audit; defaults to the loaded registry dataset
        required_fields: Identifiers that must be present and non-empty;
            defaults to the configured list (COUNTRYFACTS_REQUIRED_FIELDS)

    Returns:
        AuditReport with all findings
    """
    if countries is None:
        countries = CountryRegistry.countries()
    if required_fields is None:
        required_fields = Config().dataset.required_fields
    required_fields = tuple(required_fields)

    report = AuditReport(record_count=len(countries))
    for code in sorted(countries):
        report.issues.extend(check_record(code, countries[code], required_fields))

    logger.info(
        f"Audited {report.record_count} records: {report.error_count} errors, "
        f"{report.warning_count} warnings, {report.info_count} sentinel values"
    )
    for code in report.malformed_codes:
        logger.warning(f"Record {code} is an error placeholder and should be regenerated")

    return report
