"""Parse stored API definition text according to its declared file type."""

import json
from typing import Any

import yaml

SUPPORTED_FILE_TYPES = ("json", "yaml", "yml")


class LoadError(Exception):
    """A document could not be fetched or parsed; nothing can be rendered."""


def parse_document(text: str, file_type: str) -> Any:
    """Parse JSON or YAML text into plain dicts/lists/scalars.

    Raises LoadError for unsupported file types and parse failures.
    """
    file_type = file_type.lower()
    if file_type not in SUPPORTED_FILE_TYPES:
        raise LoadError(f"Unsupported file type: {file_type}")

    try:
        if file_type == "json":
            return json.loads(text)
        return yaml.safe_load(text)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise LoadError(f"Failed to parse content: {e}") from e
