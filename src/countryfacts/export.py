"""
Export functionality for the country dataset.

Writes the dataset (or any subset of it) as JSON, in the same layout as the
packaged file, or as YAML for review. Records are written exactly as stored,
error placeholders included.
"""

import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Mapping, Optional, Union

import yaml

from .domain.enums import ExportFormat
from .utils import ensure_directory, thaw

logger = logging.getLogger(__name__)

EXPORT_SOURCE = "countryfacts"


def to_json(countries: Mapping[str, Any], indent: Optional[int] = 2) -> str:
    """Serialize a dataset mapping (or a single record) to JSON text, non-ASCII kept as-is"""
    return json.dumps(thaw(countries), ensure_ascii=False, indent=indent)


def from_json(text: str) -> dict[str, Any]:
    """Parse JSON text produced by ``to_json``"""
    data = json.loads(text)
    if not isinstance(data, dict):
        raise ValueError(f"Expected a JSON object, got {type(data).__name__}")
    return data


def to_yaml(countries: Mapping[str, Any]) -> str:
    """Serialize a dataset mapping (or a single record) to YAML text, key order kept"""
    return yaml.safe_dump(
        thaw(countries),
        allow_unicode=True,
        sort_keys=False,
        default_flow_style=False,
    )


def _with_metadata(countries: Mapping[str, Any]) -> dict[str, Any]:
    return {
        "metadata": {
            "generated": datetime.now(timezone.utc).isoformat(),
            "source": EXPORT_SOURCE,
            "record_count": len(countries),
        },
        "countries": thaw(countries),
    }


def dump_countries(
    countries: Mapping[str, Any],
    output_path: Union[str, Path],
    export_format: Optional[Union[str, ExportFormat]] = None,
    include_metadata: bool = False,
) -> Path:
    """
    Write a dataset mapping to disk.

    Args:
        countries: Mapping of code -> record
        output_path: Output file path
        export_format: json or yaml; inferred from the extension when omitted
        include_metadata: Wrap the records as {"metadata": ..., "countries": ...}

    Returns:
        Path written to
    """
    output_path = Path(output_path)
    if export_format is None:
        format_enum = ExportFormat.from_extension(str(output_path))
    else:
        format_enum = ExportFormat(str(getattr(export_format, "value", export_format)).lower())

    ensure_directory(output_path.parent)
    payload = _with_metadata(countries) if include_metadata else thaw(countries)

    if format_enum == ExportFormat.JSON:
        text = to_json(payload) + "\n"
    elif format_enum == ExportFormat.YAML:
        text = to_yaml(payload)
    else:
        raise ValueError(f"Unsupported export format: {export_format}")

    output_path.write_text(text, encoding="utf-8")
    logger.info(f"Exported {len(countries)} records to {output_path} ({format_enum.value})")
    return output_path
