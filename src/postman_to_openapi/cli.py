"""CLI entry point for postman-to-openapi."""

import logging
from pathlib import Path

import click

from postman_to_openapi.converter import ParseError, serialize
from postman_to_openapi.generator.openapi import build_openapi
from postman_to_openapi.generator.validator import validate_files
from postman_to_openapi.parser.detect import detect_format
from postman_to_openapi.parser.postman import decode_collection, normalize_collection

logger = logging.getLogger(__name__)


def _resolve_format(fmt: str, output: Path | None) -> str:
    """Pick the output format, guessing from the output suffix for 'auto'."""
    if fmt != "auto":
        return fmt
    if output is not None and output.suffix.lower() == ".json":
        return "json"
    return "yaml"


def _warn_if_not_postman(data) -> None:
    kind = detect_format(data)
    logger.debug("Detected input format: %s", kind)
    if kind != "postman":
        click.echo(f"Warning: input does not look like a Postman collection (detected: {kind}).", err=True)


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
def main(verbose: bool):
    """Postman to OpenAPI: convert Postman collections to OpenAPI 3.0 documents."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@main.command("convert")
@click.argument("collection_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("-o", "--output", default=None, type=click.Path(dir_okay=False, path_type=Path), help="Output file path. Prints to stdout when omitted.")
@click.option("--format", "fmt", default="auto", type=click.Choice(["auto", "yaml", "json"]), help="Output format.")
@click.option("--check", is_flag=True, help="Validate the emitted document.")
def convert_cmd(collection_path: Path, output: Path | None, fmt: str, check: bool):
    """Convert a Postman collection file to OpenAPI."""
    fmt = _resolve_format(fmt, output)
    click.echo(f"Converting {collection_path} (format: {fmt})...", err=True)

    text = collection_path.read_text(encoding="utf-8")
    try:
        data = decode_collection(text)
    except ParseError as e:
        raise click.ClickException(str(e)) from e
    _warn_if_not_postman(data)
    document = build_openapi(normalize_collection(data))

    operations = sum(len(methods) for methods in document["paths"].values())
    click.echo(f"Found {len(document['paths'])} paths, {operations} operations.", err=True)

    result = serialize(document, fmt)

    if check:
        errors = validate_files({f"openapi.{fmt}": result})
        if errors:
            raise click.ClickException("Validation failed:\n" + "\n".join(errors.values()))

    if output is None:
        click.echo(result)
        return

    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(result + ("" if result.endswith("\n") else "\n"), encoding="utf-8")
    click.echo(f"OpenAPI document saved to {output}", err=True)


@main.command("check")
@click.argument("doc_paths", nargs=-1, required=True, type=click.Path(exists=True, dir_okay=False, path_type=Path))
def check_cmd(doc_paths: tuple[Path, ...]):
    """Validate emitted OpenAPI .json/.yaml files."""
    files = {str(p): p.read_text(encoding="utf-8") for p in doc_paths}
    errors = validate_files(files)

    for filename in files:
        if filename in errors:
            click.echo(f"  FAIL {filename}\n{errors[filename]}")
        else:
            click.echo(f"  OK   {filename}")

    if errors:
        raise click.ClickException(f"{len(errors)} of {len(files)} files failed validation.")
