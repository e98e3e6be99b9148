"""
Sheet loading for Sheetwright.

Parses raw character sheets from mappings and from JSON or YAML files.
"""

import json
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import structlog
import yaml
from pydantic import ValidationError

from sheetwright.errors import SheetLoadError, StructuralError
from sheetwright.sheet.models import RawCharacterSheet

logger = structlog.get_logger(__name__)

YAML_SUFFIXES = {".yaml", ".yml"}


def parse_raw_sheet(data: Mapping[str, Any]) -> RawCharacterSheet:
    """
    Validate a mapping as a raw character sheet.

    Args:
        data: Sheet document using the stored camelCase field names

    Returns:
        The validated sheet

    Raises:
        StructuralError: If a required field is missing, has the wrong type,
            or an unknown attribute name is present
    """
    try:
        return RawCharacterSheet.model_validate(data)
    except ValidationError as e:
        error = StructuralError.from_validation_error(e)
        logger.warning("sheet_structural_error", errors=error.errors)
        raise error from e


def read_sheet_document(file_path: Path) -> dict[str, Any]:
    """
    Read a sheet document from a JSON or YAML file.

    The format is chosen by file extension; anything other than .yaml/.yml is
    read as JSON.

    Args:
        file_path: Path to the file

    Returns:
        The decoded document

    Raises:
        SheetLoadError: If the file cannot be read or decoded, or is not a mapping
    """
    try:
        with open(file_path, encoding="utf-8") as f:
            if file_path.suffix.lower() in YAML_SUFFIXES:
                data = yaml.safe_load(f)
            else:
                data = json.load(f)
    except FileNotFoundError:
        raise SheetLoadError(f"File not found: {file_path}")
    except yaml.YAMLError as e:
        raise SheetLoadError(f"YAML parsing error in {file_path}: {e}")
    except json.JSONDecodeError as e:
        raise SheetLoadError(f"JSON parsing error in {file_path}: {e}")
    except OSError as e:
        raise SheetLoadError(f"Error reading {file_path}: {e}")

    if not isinstance(data, dict):
        raise SheetLoadError(f"Sheet document must be a mapping in {file_path}")

    return data


def load_sheet_file(file_path: Path) -> RawCharacterSheet:
    """
    Load and validate a raw character sheet from a file.

    Raises:
        SheetLoadError: If the file cannot be read or decoded
        StructuralError: If the document is not a valid sheet
    """
    sheet = parse_raw_sheet(read_sheet_document(file_path))
    logger.debug("sheet_loaded", file=str(file_path), level=sheet.level)
    return sheet
