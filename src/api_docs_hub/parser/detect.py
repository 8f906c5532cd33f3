"""Auto-detect the dialect of a parsed API definition and normalize it."""

import logging
from typing import Any

from pydantic import BaseModel

from .convert import convert_postman

logger = logging.getLogger(__name__)

POSTMAN = "postman"
OPENAPI = "openapi"
UNKNOWN = "unknown"

POSTMAN_SCHEMA_MARKER = "getpostman.com"


def detect_format(document: Any) -> str:
    """Detect the format of a parsed API document.

    Returns: 'postman', 'openapi' (OpenAPI or Swagger), or 'unknown'.
    """
    if not isinstance(document, dict):
        return UNKNOWN

    info = document.get("info")
    if isinstance(info, dict):
        schema = info.get("schema")
        if isinstance(schema, str) and POSTMAN_SCHEMA_MARKER in schema:
            return POSTMAN

    if "openapi" in document or "swagger" in document:
        return OPENAPI

    return UNKNOWN


class NormalizedDocument(BaseModel):
    format: str
    content: Any
    warnings: list[str] = []


def normalize_document(document: Any) -> NormalizedDocument:
    """Turn any supported document into something the viewer can render.

    Postman collections are converted; OpenAPI/Swagger and unknown
    documents are returned as the same object, untouched.
    """
    fmt = detect_format(document)

    if fmt == POSTMAN:
        logger.info("Detected Postman Collection, converting to OpenAPI")
        result = convert_postman(document)
        return NormalizedDocument(format=fmt, content=result.spec.to_document(), warnings=result.warnings)

    if fmt == OPENAPI:
        logger.info("Detected OpenAPI/Swagger document")
        return NormalizedDocument(format=fmt, content=document)

    logger.warning("Unknown document format, rendering as-is")
    return NormalizedDocument(
        format=fmt,
        content=document,
        warnings=["Unknown document format: rendering as-is, the reference may be incomplete"],
    )
