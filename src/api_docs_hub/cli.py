"""CLI entry point for api-docs-hub."""

import json
import logging
from pathlib import Path

import click
import yaml

from api_docs_hub.docs import DocsService, LoadResult, Message, UploadError
from api_docs_hub.parser.detect import normalize_document
from api_docs_hub.parser.loader import LoadError, parse_document
from api_docs_hub.parser.swagger import list_operations
from api_docs_hub.render import render_html
from api_docs_hub.slug import slugify
from api_docs_hub.store.records import RecordStore, RecordStoreError
from api_docs_hub.store.storage import LocalStorage

DEFAULT_DATA_DIR = Path.home() / ".api-docs"
RECORDS_FILE = "config_files.json"


def _build_service(data_dir: Path) -> DocsService:
    return DocsService(
        storage=LocalStorage(data_dir / "storage"),
        records=RecordStore(data_dir / RECORDS_FILE),
    )


def _echo_messages(messages: list[Message]) -> None:
    labels = {"success": "", "warning": "Warning: ", "error": "Error: "}
    for message in messages:
        click.echo(f"{labels[message.type]}{message.text}", err=message.type != "success")


def _dump(document, fmt: str) -> str:
    if fmt == "yaml":
        return yaml.safe_dump(document, sort_keys=False, allow_unicode=True)
    return json.dumps(document, indent=2, ensure_ascii=False, default=str) + "\n"


def _write_or_echo(text: str, output: Path | None) -> None:
    if output is None:
        click.echo(text, nl=False)
        return
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(text, encoding="utf-8")
    click.echo(f"Saved to {output}", err=True)


def _format_size(size: int) -> str:
    for unit in ("Bytes", "KB", "MB"):
        if size < 1024:
            return f"{round(size, 2):g} {unit}"
        size /= 1024
    return f"{round(size, 2):g} GB"


def _load_or_exit(ctx: click.Context, api: str | None) -> LoadResult:
    result = ctx.obj.load(api)
    _echo_messages(result.messages)
    if not result.ok:
        ctx.exit(1)
    return result


@click.group()
@click.option(
    "--data-dir",
    default=DEFAULT_DATA_DIR,
    envvar="API_DOCS_HOME",
    show_default=True,
    type=click.Path(file_okay=False, path_type=Path),
    help="Directory holding uploaded files and their records.",
)
@click.option("-v", "--verbose", is_flag=True, help="Log pipeline details to stderr.")
@click.pass_context
def main(ctx: click.Context, data_dir: Path, verbose: bool):
    """API Docs Hub: upload API definitions and render them as interactive docs."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.ERROR,
        format="%(levelname)s %(name)s: %(message)s",
    )
    ctx.obj = _build_service(data_dir)


@main.command()
@click.argument("title")
@click.argument("file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--user", "user_id", default=None, envvar="API_DOCS_USER", help="Owner recorded with the upload.")
@click.pass_obj
def upload(service: DocsService, title: str, file: Path, user_id: str | None):
    """Upload an OpenAPI/Swagger or Postman Collection file."""
    click.echo(f"Uploading {file}...")
    try:
        record = service.upload(title, file, user_id=user_id)
    except UploadError as e:
        raise click.ClickException(str(e)) from e
    click.echo("File uploaded successfully!")
    click.echo(f"View it with: api-docs show {slugify(record.title)}")


@main.command("list")
@click.pass_obj
def list_docs(service: DocsService):
    """List uploaded API documentation, newest first."""
    try:
        records = service.list_docs()
    except RecordStoreError as e:
        raise click.ClickException(str(e)) from e

    if not records:
        click.echo("No API documentation uploaded yet.")
        return

    for record in records:
        click.echo(
            f"{slugify(record.title)}\t{record.file_type.upper()}\t"
            f"{_format_size(record.file_size)}\t{record.uploaded_at}\t{record.title}"
        )


@main.command()
@click.argument("api", required=False)
@click.option("-o", "--output", default=None, type=click.Path(path_type=Path), help="Write the normalized document here.")
@click.option("--format", "fmt", default="json", type=click.Choice(["json", "yaml"]), help="Output format.")
@click.pass_context
def show(ctx: click.Context, api: str | None, output: Path | None, fmt: str):
    """Load a document by slug (default: first uploaded) and print it normalized to OpenAPI."""
    result = _load_or_exit(ctx, api)

    operations = list_operations(result.content)
    click.echo(f"Found {len(operations)} operations.", err=True)
    for op in operations:
        click.echo(f"  {op.method} {op.path}  {op.summary}".rstrip(), err=True)
    _write_or_echo(_dump(result.content, fmt), output)


@main.command()
@click.argument("api", required=False)
@click.option("-o", "--output", required=True, type=click.Path(path_type=Path), help="Output HTML file.")
@click.option("--theme", default="default", help="Viewer theme.")
@click.option("--layout", default="modern", type=click.Choice(["modern", "classic"]), help="Viewer layout.")
@click.option("--sidebar/--no-sidebar", default=True, help="Show the viewer sidebar.")
@click.pass_context
def render(ctx: click.Context, api: str | None, output: Path, theme: str, layout: str, sidebar: bool):
    """Render a document as a standalone interactive reference page."""
    result = _load_or_exit(ctx, api)

    page = render_html(result.title, result.content, theme=theme, layout=layout, show_sidebar=sidebar)
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(page, encoding="utf-8")
    click.echo(f"Reference page saved to {output}")


@main.command()
@click.argument("doc_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("-o", "--output", default=None, type=click.Path(path_type=Path), help="Write the normalized document here.")
@click.option("--format", "fmt", default="json", type=click.Choice(["json", "yaml"]), help="Output format.")
def convert(doc_path: Path, output: Path | None, fmt: str):
    """Normalize a local file to OpenAPI without uploading it."""
    file_type = doc_path.suffix.lstrip(".").lower()
    try:
        document = parse_document(doc_path.read_text(encoding="utf-8"), file_type)
    except LoadError as e:
        raise click.ClickException(str(e)) from e

    normalized = normalize_document(document)
    click.echo(f"Detected format: {normalized.format}", err=True)
    _echo_messages([Message(type="warning", text=w) for w in normalized.warnings])
    _write_or_echo(_dump(normalized.content, fmt), output)
