"""
Dataset Enumerations

Small enums shared by the models, the audit report and the CLI.
"""

from enum import Enum
from pathlib import Path


class DrivingSide(str, Enum):
    """Side of the road traffic keeps to."""
    LEFT = "left"
    RIGHT = "right"


class ExportFormat(str, Enum):
    """Serialization formats for dataset export."""
    JSON = "json"           # Same layout as the packaged dataset
    YAML = "yaml"           # Human-friendly review format

    @classmethod
    def from_extension(cls, path: str) -> 'ExportFormat':
        """Infer format from file extension"""
        ext = Path(path).suffix.lower()
        mapping = {
            '.json': cls.JSON,
            '.yaml': cls.YAML,
            '.yml': cls.YAML,
        }
        return mapping.get(ext, cls.JSON)


class IssueSeverity(str, Enum):
    """Severity of a data-quality finding."""
    ERROR = "error"         # Record unusable for its key (placeholder, missing identifiers)
    WARNING = "warning"     # Field has an unexpected shape
    INFO = "info"           # Sentinel value in place of data
