"""Input validation logic using Pydantic models."""

from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from schemas.packaging import PackagingRequest
from schemas.settings import PackagerSettings
from seavan.exceptions import InvalidInputError


def validate_request(**fields: Any) -> PackagingRequest:
    """Validate packaging request fields.

    Args:
        **fields: PackagingRequest field values

    Returns:
        Validated PackagingRequest object

    Raises:
        InvalidInputError: If validation fails
    """
    try:
        return PackagingRequest.model_validate(fields)
    except ValidationError as e:
        raise InvalidInputError(format_pydantic_error("packaging request", e)) from e


def load_settings(path: Path | None = None) -> PackagerSettings:
    """Load and validate a YAML settings file.

    Args:
        path: Path to settings file, or None for built-in defaults

    Returns:
        Validated PackagerSettings object

    Raises:
        InvalidInputError: If the file is missing, is not valid YAML or
            fails validation
    """
    if path is None:
        return PackagerSettings()

    if not path.is_file():
        raise InvalidInputError(f"Settings file not found: {path}")

    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise InvalidInputError(f"Invalid YAML in {path.name}: {e}") from e

    # An empty file means "no overrides"
    if data is None:
        data = {}

    if not isinstance(data, dict):
        raise InvalidInputError(
            f"Expected YAML object in {path}, got {type(data).__name__}"
        )

    try:
        return PackagerSettings.model_validate(data)
    except ValidationError as e:
        raise InvalidInputError(format_pydantic_error(path.name, e)) from e


def format_pydantic_error(source: str, error: ValidationError) -> str:
    """Format Pydantic ValidationError for CLI output.

    Args:
        source: Name of the file or object being validated
        error: Pydantic ValidationError

    Returns:
        Formatted error message string
    """
    errors = error.errors()
    if len(errors) == 1:
        e = errors[0]
        field_path = " -> ".join(str(loc) for loc in e["loc"])
        return (
            f"Validation error in {source}:\n"
            f"  Field: {field_path}\n"
            f"  Error: {e['msg']}\n"
            f"  Input: {e.get('input', 'N/A')}"
        )
    else:
        lines = [f"Validation errors in {source}:"]
        for e in errors:
            field_path = " -> ".join(str(loc) for loc in e["loc"])
            lines.append(f"  - {field_path}: {e['msg']}")
        return "\n".join(lines)
