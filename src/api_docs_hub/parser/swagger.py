"""OpenAPI / Swagger operation listing.

Reads the paths of a normalized OpenAPI 3.x or Swagger 2.0 document
without validating it.
"""

from typing import Any

from .base import OperationSummary

# Path-item keys that are not operations
NON_OPERATION_KEYS = {"parameters", "servers", "summary", "description", "$ref"}


def list_operations(document: Any) -> list[OperationSummary]:
    """List every operation in an OpenAPI/Swagger document."""
    if not isinstance(document, dict):
        return []

    paths = document.get("paths")
    if not isinstance(paths, dict):
        return []

    operations = []
    for path, methods in paths.items():
        if not isinstance(methods, dict):
            continue
        for method, operation in methods.items():
            if method in NON_OPERATION_KEYS or not isinstance(operation, dict):
                continue

            operations.append(
                OperationSummary(
                    method=str(method).upper(),
                    path=str(path),
                    summary=str(operation.get("summary") or ""),
                )
            )

    return operations
