"""OpenAPI document models produced by normalization.

Converted Postman collections are built from these models and dumped
into a plain OpenAPI 3.0 document for the reference viewer.
"""

from pydantic import BaseModel, ConfigDict, Field

OPENAPI_VERSION = "3.0.3"


class Info(BaseModel):
    title: str
    description: str
    version: str


class Server(BaseModel):
    url: str
    description: str


class ParamSchema(BaseModel):
    type: str = "string"
    example: str | None = None


class Parameter(BaseModel):
    """A single query parameter taken from a Postman URL."""

    model_config = ConfigDict(populate_by_name=True)

    name: str
    location: str = Field("query", alias="in")
    required: bool = False
    schema_: ParamSchema = Field(default_factory=ParamSchema, alias="schema")


class Response(BaseModel):
    description: str
    content: dict | None = None


class Operation(BaseModel):
    """A single OpenAPI operation (one method under one path)."""

    model_config = ConfigDict(populate_by_name=True)

    summary: str
    description: str
    responses: dict[str, Response]
    parameters: list[Parameter] | None = None
    request_body: dict | None = Field(None, alias="requestBody")


class Components(BaseModel):
    schemas: dict = {}
    parameters: dict = {}


class OpenApiSpec(BaseModel):
    openapi: str = OPENAPI_VERSION
    info: Info
    servers: list[Server]
    paths: dict[str, dict[str, Operation]] = {}
    components: Components = Field(default_factory=Components)

    def to_document(self) -> dict:
        """Dump to a plain OpenAPI document with its wire key names."""
        return self.model_dump(by_alias=True, exclude_none=True)


class OperationSummary(BaseModel):
    """One row of an operation listing for a normalized document."""

    method: str  # GET / POST / PUT / DELETE / PATCH / ...
    path: str
    summary: str
