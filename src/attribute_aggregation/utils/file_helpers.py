"""File helpers for loading validated JSON configuration.

Provides:
- require_file_exists: fail early with a readable message
- load_validated_json: read JSON and validate it against a pydantic model,
  flattening validation errors into one ConfigurationError
"""

from __future__ import annotations

__all__ = [
    "format_validation_errors",
    "load_validated_json",
    "require_file_exists",
]

import json
from pathlib import Path
from typing import TypeVar

from pydantic import BaseModel, ValidationError

from attribute_aggregation.exceptions import ConfigurationError

ModelT = TypeVar("ModelT", bound=BaseModel)


def require_file_exists(path: Path, *, file_type: str) -> None:
    """Raise ConfigurationError if path does not exist.

    Args:
        path: File to check.
        file_type: Human-readable file description for the error message.
    """
    if not path.exists():
        raise ConfigurationError(f"No {file_type} file found at {path}")


def format_validation_errors(error: ValidationError) -> str:
    """Render pydantic validation errors as an indented bullet list."""
    lines = []
    for item in error.errors():
        loc = ".".join(str(x) for x in item["loc"])
        lines.append(f"  - {loc}: {item['msg']}")
    return "\n".join(lines)


def load_validated_json(
    path: Path,
    model: type[ModelT],
    *,
    file_type: str,
    recovery_hint: str | None = None,
    encoding: str = "utf-8",
) -> ModelT:
    """Load a JSON file and validate it against a pydantic model.

    Args:
        path: JSON file to read.
        model: Pydantic model class to validate against.
        file_type: Human-readable file description for error messages.
        recovery_hint: Optional hint appended to validation errors.
        encoding: File encoding.

    Returns:
        Validated model instance.

    Raises:
        ConfigurationError: If the file cannot be read, is not JSON, or fails validation.
    """
    try:
        with path.open(encoding=encoding) as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"Invalid JSON in {file_type} file {path}: {e}") from e
    except OSError as e:
        raise ConfigurationError(f"Could not read {file_type} file {path}: {e}") from e

    try:
        return model.model_validate(data)
    except ValidationError as e:
        message = f"Invalid {file_type} in {path}:\n{format_validation_errors(e)}"
        if recovery_hint:
            message = f"{message}\n{recovery_hint}"
        raise ConfigurationError(message) from e
