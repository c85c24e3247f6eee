"""Shared file utilities for xacml-pep.

Provides common utilities used by configuration and TLS setup:
- require_file_exists: Fail with a helpful message when a file is missing
- resolve_path: Expand ~ and resolve to an absolute path
- load_json_file: Load a JSON file with consistent error messages
- load_validated_json: Load a JSON file and validate it against a Pydantic model
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

# Type variable for Pydantic models
T = TypeVar("T", bound=BaseModel)

__all__ = [
    "format_validation_errors",
    "load_json_file",
    "load_validated_json",
    "require_file_exists",
    "resolve_path",
]


def resolve_path(path: str | Path) -> Path:
    """Expand user home and resolve a path to an absolute path."""
    return Path(path).expanduser().resolve()


def require_file_exists(file_path: Path, file_type: str = "file") -> None:
    """Raise FileNotFoundError with helpful message if file doesn't exist.

    Args:
        file_path: Path to check.
        file_type: Description for error message (e.g., "configuration", "CA bundle").

    Raises:
        FileNotFoundError: If file doesn't exist.
    """
    if file_path.exists():
        return
    raise FileNotFoundError(f"{file_type.capitalize()} file not found at {file_path}.")


def format_validation_errors(error: ValidationError) -> str:
    """Render a Pydantic ValidationError as one indented line per problem.

    Args:
        error: The validation error to render.

    Returns:
        Lines of the form "  - loc: msg" joined by newlines.
    """
    lines = []
    for item in error.errors():
        loc = ".".join(str(x) for x in item["loc"]) or "(root)"
        lines.append(f"  - {loc}: {item['msg']}")
    return "\n".join(lines)


def load_json_file(file_path: Path, file_type: str = "file", encoding: str | None = "utf-8") -> Any:
    """Read and parse a JSON file.

    Raises:
        ValueError: If the file cannot be read or is not valid JSON.
    """
    try:
        with open(file_path, "r", encoding=encoding) as f:
            return json.load(f)
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in {file_type} file {file_path}: {e}") from e
    except OSError as e:
        raise ValueError(f"Could not read {file_type} file {file_path}: {e}") from e


def load_validated_json(
    file_path: Path,
    model_class: type[T],
    file_type: str = "file",
    recovery_hint: str | None = None,
    encoding: str | None = "utf-8",
) -> T:
    """Parse a JSON file into a pydantic model.

    Args:
        file_path: JSON file to read.
        model_class: Model the parsed document must satisfy.
        file_type: Label used in error messages (e.g. "client config").
        recovery_hint: Text appended to validation failures.
        encoding: File encoding.

    Returns:
        The validated model.

    Raises:
        ValueError: If JSON is invalid or validation fails.
    """
    data = load_json_file(file_path, file_type, encoding)

    try:
        return model_class.model_validate(data)
    except ValidationError as e:
        hint = f"\n\n{recovery_hint}" if recovery_hint else ""
        raise ValueError(
            f"Invalid {file_type} configuration in {file_path}:\n" + format_validation_errors(e) + hint
        ) from e
