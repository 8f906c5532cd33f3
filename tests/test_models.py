from api_docs_hub.parser.base import (
    Info,
    OpenApiSpec,
    Operation,
    OperationSummary,
    Parameter,
    ParamSchema,
    Response,
    Server,
)


def _spec(**overrides) -> OpenApiSpec:
    defaults = dict(
        info=Info(title="T", description="D", version="1.0.0"),
        servers=[Server(url="https://api.example.com", description="Base URL")],
    )
    defaults.update(overrides)
    return OpenApiSpec(**defaults)


class TestParameter:
    def test_defaults(self):
        p = Parameter(name="limit")
        assert p.location == "query"
        assert p.required is False
        assert p.schema_.type == "string"

    def test_dump_uses_wire_names(self):
        p = Parameter(name="limit", schema_=ParamSchema(example="10"))
        assert p.model_dump(by_alias=True) == {
            "name": "limit",
            "in": "query",
            "required": False,
            "schema": {"type": "string", "example": "10"},
        }

    def test_accepts_wire_names(self):
        p = Parameter(**{"name": "id", "in": "path", "required": True, "schema": {"type": "string"}})
        assert p.location == "path"
        assert p.required is True


class TestOpenApiSpec:
    def test_empty_spec_document(self):
        doc = _spec().to_document()
        assert doc == {
            "openapi": "3.0.3",
            "info": {"title": "T", "description": "D", "version": "1.0.0"},
            "servers": [{"url": "https://api.example.com", "description": "Base URL"}],
            "paths": {},
            "components": {"schemas": {}, "parameters": {}},
        }

    def test_optional_operation_fields_omitted(self):
        op = Operation(summary="S", description="D", responses={"400": Response(description="Bad request")})
        doc = _spec(paths={"/x": {"get": op}}).to_document()
        assert doc["paths"]["/x"]["get"] == {
            "summary": "S",
            "description": "D",
            "responses": {"400": {"description": "Bad request"}},
        }

    def test_request_body_alias(self):
        op = Operation(summary="S", description="D", responses={}, request_body={"content": {}})
        assert op.model_dump(by_alias=True, exclude_none=True)["requestBody"] == {"content": {}}

    def test_specs_do_not_share_paths(self):
        a, b = _spec(), _spec()
        a.paths["/x"] = {}
        assert b.paths == {}


class TestOperationSummary:
    def test_minimal(self):
        s = OperationSummary(method="GET", path="/pets", summary="List")
        assert (s.method, s.path, s.summary) == ("GET", "/pets", "List")
