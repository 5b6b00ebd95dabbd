"""
Domain Models and Types

Typed views over the country dataset and the enumerations shared across
the package.

Models:
- CountryRecord: Typed view of one record (Currency, Government, Area, GDP nested)
- DataIssue: One finding of the data-quality audit

Enums:
- DrivingSide: Side of the road traffic keeps to
- ExportFormat: Dataset export formats (json, yaml)
- IssueSeverity: Audit finding severity (error, warning, info)
"""

from .enums import DrivingSide, ExportFormat, IssueSeverity
from .models import (
    GDP,
    Area,
    CountryRecord,
    Currency,
    DataIssue,
    Government,
    HeadOfState,
    is_error_record,
)

__all__ = [
    "CountryRecord", "Currency", "Government", "HeadOfState", "Area", "GDP",
    "DataIssue", "is_error_record",
    "DrivingSide", "ExportFormat", "IssueSeverity"
]
