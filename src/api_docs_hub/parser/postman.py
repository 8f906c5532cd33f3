"""Postman Collection v2.x models.

Parses an exported collection into a tree of Folder / Leaf items.
Auth blocks, scripts and saved responses are not modeled.
"""

from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, BeforeValidator, Field, ValidationError


def _to_text(value: Any) -> Any:
    if isinstance(value, bool):
        return str(value).lower()
    if isinstance(value, (int, float)):
        return str(value)
    return value


def _description_text(value: Any) -> Any:
    # Postman may store descriptions as {"content": ..., "type": "text/markdown"}
    if isinstance(value, dict):
        return value.get("content")
    return value


def _version_text(value: Any) -> Any:
    # v2.0 exports carry version as {"major": 1, "minor": 0, "patch": 0}
    if isinstance(value, dict):
        return ".".join(str(value.get(k, 0)) for k in ("major", "minor", "patch"))
    return _to_text(value)


Text = Annotated[str, BeforeValidator(_to_text)]
Description = Annotated[str | None, BeforeValidator(_description_text)]


class KeyValue(BaseModel):
    key: Text | None = None
    value: Text | None = None


class PostmanUrl(BaseModel):
    raw: str = ""
    host: str | list[Any] | None = None
    path: str | list[Any] | None = None
    query: list[KeyValue] | None = None


class PostmanBody(BaseModel):
    mode: str = "raw"
    raw: str | None = None
    formdata: list[Any] | str | None = None


class PostmanRequest(BaseModel):
    method: str = "GET"
    url: str | PostmanUrl | None = None
    header: list[Any] | str | None = None  # raw "Key: value" lines are allowed
    body: PostmanBody | None = None
    description: Description = None

    @property
    def raw_url(self) -> str:
        if isinstance(self.url, PostmanUrl):
            return self.url.raw
        return self.url or ""

    @property
    def query(self) -> list[KeyValue] | None:
        if isinstance(self.url, PostmanUrl):
            return self.url.query
        return None


class Leaf(BaseModel):
    """An item that performs a request."""

    kind: Literal["leaf"] = "leaf"
    name: Text = ""
    description: Description = None
    request: PostmanRequest


class Folder(BaseModel):
    """An item that only groups other items."""

    kind: Literal["folder"] = "folder"
    name: Text = ""
    description: Description = None
    items: list["PostmanItem"] = []


PostmanItem = Annotated[Union[Folder, Leaf], Field(discriminator="kind")]

Folder.model_rebuild()


class CollectionInfo(BaseModel):
    name: Text = ""
    description: Description = None
    version: Annotated[str | None, BeforeValidator(_version_text)] = None
    schema_: str = Field("", alias="schema")


class PostmanCollection(BaseModel):
    info: CollectionInfo
    items: list[PostmanItem] = []
    variable: list[KeyValue] = []


def load_collection(document: dict) -> tuple[PostmanCollection, list[str]]:
    """Build a PostmanCollection from a parsed document.

    Malformed items are skipped. Returns the collection and one
    diagnostic per skipped item.
    """
    warnings: list[str] = []
    info = document.get("info")
    try:
        collection_info = CollectionInfo.model_validate(info if isinstance(info, dict) else {})
    except ValidationError:
        warnings.append("Collection info is malformed, using defaults")
        collection_info = CollectionInfo()

    variables = []
    for var in document.get("variable") or []:
        try:
            variables.append(KeyValue.model_validate(var))
        except ValidationError:
            warnings.append(f"Skipped malformed variable: {var!r}")

    collection = PostmanCollection(
        info=collection_info,
        items=_parse_items(document.get("item") or [], warnings),
        variable=variables,
    )
    return collection, warnings


def _parse_items(raw_items: Any, warnings: list[str]) -> list[Folder | Leaf]:
    """Recursively classify raw items (supports folders)."""
    if not isinstance(raw_items, list):
        warnings.append("Skipped item list that is not a sequence")
        return []

    items: list[Folder | Leaf] = []
    for raw in raw_items:
        if not isinstance(raw, dict):
            warnings.append(f"Skipped malformed item: {raw!r}")
            continue
        name = raw.get("name") or ""
        if "request" in raw:
            request = raw["request"]
            if isinstance(request, str):
                request = {"url": request}
            try:
                items.append(
                    Leaf.model_validate(
                        {"name": name, "description": raw.get("description"), "request": request}
                    )
                )
            except ValidationError as e:
                warnings.append(f"Skipped request '{name}': {e.error_count()} invalid field(s)")
        elif "item" in raw:
            try:
                folder = Folder.model_validate({"name": name, "description": raw.get("description")})
            except ValidationError:
                warnings.append(f"Skipped folder with malformed name: {name!r}")
                continue
            folder.items = _parse_items(raw["item"], warnings)
            items.append(folder)
        else:
            warnings.append(f"Skipped item '{name}': neither a request nor a folder")
    return items
