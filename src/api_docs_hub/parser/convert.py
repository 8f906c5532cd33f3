"""Postman Collection -> OpenAPI 3.0 converter.

Walks the collection tree and emits one operation per request. Bodies
and responses are approximated with fixed generic schemas; nothing is
inferred from samples.
"""

import logging
import re
from urllib.parse import SplitResult, urlsplit

from pydantic import BaseModel

from .base import Info, OpenApiSpec, Operation, Parameter, ParamSchema, Response, Server
from .postman import Folder, Leaf, PostmanCollection, load_collection

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.example.com"
DEFAULT_TITLE = "API Documentation"
DEFAULT_DESCRIPTION = "Converted from Postman Collection"
DEFAULT_VERSION = "1.0.0"
SERVER_DESCRIPTION = "Base URL (extracted from Postman collection)"
BODY_METHODS = ("post", "put", "patch")

_TEMPLATE_TOKEN = re.compile(r"{{.*?}}")
_SCHEME = re.compile(r"^[A-Za-z][A-Za-z0-9+.\-]*$")
_DEFAULT_PORTS = {"http": 80, "https": 443, "ws": 80, "wss": 443, "ftp": 21}


class ConversionResult(BaseModel):
    """Converted spec plus the diagnostics collected along the way."""

    spec: OpenApiSpec
    warnings: list[str] = []


def parse_url(raw: str) -> SplitResult | None:
    """Parse an absolute URL, substituting {{template}} tokens first.

    Returns None when the URL has no scheme or no usable host.
    """
    candidate = _TEMPLATE_TOKEN.sub("placeholder", raw.strip())
    try:
        parts = urlsplit(candidate)
        parts.port  # raises ValueError on a non-numeric or out-of-range port
    except ValueError:
        return None
    if not _SCHEME.match(parts.scheme) or not parts.hostname:
        return None
    if any(ch.isspace() for ch in parts.netloc):
        return None
    return parts


def origin(parts: SplitResult) -> str:
    """scheme://host[:port] of a parsed URL, default ports omitted."""
    host = parts.hostname
    if ":" in host:
        host = f"[{host}]"
    port = parts.port
    if port is not None and _DEFAULT_PORTS.get(parts.scheme.lower()) != port:
        host = f"{host}:{port}"
    return f"{parts.scheme.lower()}://{host}"


def derive_path(name: str) -> str:
    """Path segment for a folder or request name: '/' + lowercased, whitespace -> '-'."""
    return "/" + re.sub(r"\s+", "-", name.lower())


def extract_base_url(items: list[Folder | Leaf]) -> str:
    """Origin of the first request, in pre-order, whose URL parses."""
    base_url = _first_origin(items)
    return base_url or DEFAULT_BASE_URL


def _first_origin(items: list[Folder | Leaf]) -> str | None:
    for item in items:
        if isinstance(item, Leaf):
            parts = parse_url(item.request.raw_url)
            if parts is not None:
                return origin(parts)
        else:
            found = _first_origin(item.items)
            if found is not None:
                return found
    return None


def convert_postman(document: dict) -> ConversionResult:
    """Convert a parsed Postman Collection document to an OpenAPI spec."""
    collection, warnings = load_collection(document)
    result = convert_collection(collection)
    result.warnings = warnings + result.warnings
    return result


def convert_collection(collection: PostmanCollection) -> ConversionResult:
    info = collection.info
    warnings: list[str] = []
    paths = _walk(collection.items, "", {}, warnings)

    spec = OpenApiSpec(
        info=Info(
            title=info.name or DEFAULT_TITLE,
            description=info.description or DEFAULT_DESCRIPTION,
            version=info.version or DEFAULT_VERSION,
        ),
        servers=[Server(url=extract_base_url(collection.items), description=SERVER_DESCRIPTION)],
        paths=paths,
    )
    logger.debug("Converted '%s': %d paths, %d warnings", spec.info.title, len(paths), len(warnings))
    return ConversionResult(spec=spec, warnings=warnings)


def _walk(
    items: list[Folder | Leaf],
    base_path: str,
    paths: dict[str, dict[str, Operation]],
    warnings: list[str],
) -> dict[str, dict[str, Operation]]:
    """Recursively add operations for items under base_path (supports folders)."""
    for item in items:
        if isinstance(item, Folder):
            _walk(item.items, base_path + derive_path(item.name), paths, warnings)
            continue

        method = item.request.method.lower()
        path = derive_path(item.name)
        raw_url = item.request.raw_url
        if raw_url:
            parts = parse_url(raw_url)
            if parts is not None:
                path = parts.path or "/"
            else:
                warnings.append(f"Invalid URL in '{item.name}': {raw_url}")

        full_path = base_path + path
        operations = paths.setdefault(full_path, {})
        if method in operations:
            warnings.append(
                f"Duplicate operation {method.upper()} {full_path}: "
                f"'{item.name}' replaces '{operations[method].summary}'"
            )
        operations[method] = _build_operation(item, method, full_path)
    return paths


def _build_operation(item: Leaf, method: str, full_path: str) -> Operation:
    request = item.request
    operation = Operation(
        summary=item.name,
        description=item.description or request.description or f"{method.upper()} {full_path}",
        responses=_generic_responses(),
    )

    if request.query is not None:
        operation.parameters = [
            Parameter(name=q.key, location="query", required=False, schema_=ParamSchema(example=q.value))
            for q in request.query
            if q.key is not None
        ]

    if method in BODY_METHODS and request.body is not None:
        operation.request_body = {
            "content": {
                "application/json": {
                    "schema": {
                        "type": "object",
                        "properties": {
                            "data": {
                                "type": "string",
                                "example": request.body.raw or "Request body data",
                            },
                        },
                    },
                },
            },
        }
    return operation


def _generic_responses() -> dict[str, Response]:
    return {
        "200": Response(
            description="Successful response",
            content={
                "application/json": {
                    "schema": {
                        "type": "object",
                        "properties": {"message": {"type": "string", "example": "Success"}},
                    },
                },
            },
        ),
        "400": Response(description="Bad request"),
        "500": Response(description="Internal server error"),
    }
