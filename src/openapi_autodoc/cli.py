"""CLI entry point for openapi-autodoc."""

import importlib
import sys
from pathlib import Path

import click
import yaml

from openapi_autodoc.docs import Documentation
from openapi_autodoc.export import detect_format, dump_document, load_document
from openapi_autodoc.schema.merge import merge_route_schema, merge_schema
from openapi_autodoc.settings import Settings
from openapi_autodoc.utilities.logging import configure_logging

FORMATS = ["auto", "json", "yaml"]


def _load_target(target: str) -> Documentation:
    """Import 'package.module:attribute' and return the Documentation it names."""
    module_name, _, attr = target.partition(":")
    if not module_name or not attr:
        raise click.BadParameter("expected 'module:attribute'", param_hint="TARGET")

    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        raise click.BadParameter(f"cannot import module '{module_name}': {e}", param_hint="TARGET") from e

    try:
        obj = getattr(module, attr)
    except AttributeError as e:
        raise click.BadParameter(f"module '{module_name}' has no attribute '{attr}'", param_hint="TARGET") from e

    # allow factories returning a Documentation
    if callable(obj) and not isinstance(obj, Documentation):
        obj = obj()
    if not isinstance(obj, Documentation):
        raise click.BadParameter(f"'{target}' is not a Documentation instance", param_hint="TARGET")
    return obj


def _read_document(path: Path) -> dict:
    try:
        return load_document(path)
    except (yaml.YAMLError, ValueError) as e:
        raise click.ClickException(f"cannot read {path}: {e}") from e


def _write(schema: dict, output: Path | None, fmt: str) -> None:
    if fmt == "auto":
        fmt = detect_format(output) if output else "json"
    text = dump_document(schema, fmt)

    if output is None:
        click.echo(text, nl=False)
        return
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(text, encoding="utf-8")
    click.echo(f"OpenAPI document saved to {output}", err=True)


@click.group()
@click.option("--log-level", default=None, type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]), help="Override AUTODOC_LOG_LEVEL.")
def main(log_level: str | None):
    """Build OpenAPI 3.0 documents from typed route handlers."""
    configure_logging(log_level or Settings().log_level)


@main.command()
@click.argument("target")
@click.option("-o", "--output", default=None, type=click.Path(path_type=Path), help="Output file (stdout if omitted).")
@click.option("--format", "fmt", default="auto", type=click.Choice(FORMATS), help="Output format.")
@click.option("--merge", "overrides", multiple=True, type=click.Path(exists=True, path_type=Path), help="Override document to deep-merge; repeatable.")
@click.option("--app-dir", default=".", type=click.Path(file_okay=False, path_type=Path), help="Directory added to sys.path before importing TARGET.")
def generate(target: str, output: Path | None, fmt: str, overrides: tuple[Path, ...], app_dir: Path):
    """Export the document of TARGET ('module:attribute' of a Documentation)."""
    if str(app_dir.resolve()) not in sys.path:
        sys.path.insert(0, str(app_dir.resolve()))
    docs = _load_target(target)
    for path in overrides:
        docs.merge_schema(_read_document(path))
    _write(docs.finalize(), output, fmt)


@main.command()
@click.argument("base", type=click.Path(exists=True, path_type=Path))
@click.argument("overrides", nargs=-1, required=True, type=click.Path(exists=True, path_type=Path))
@click.option("-o", "--output", default=None, type=click.Path(path_type=Path), help="Output file (stdout if omitted).")
@click.option("--route", default=None, help="Merge the overrides into paths[ROUTE] only.")
@click.option("--format", "fmt", default="auto", type=click.Choice(FORMATS), help="Output format.")
def merge(base: Path, overrides: tuple[Path, ...], output: Path | None, route: str | None, fmt: str):
    """Deep-merge OVERRIDES into the BASE document."""
    schema = _read_document(base)
    for path in overrides:
        custom = _read_document(path)
        if route:
            merge_route_schema(schema, route, custom)
        else:
            merge_schema(schema, custom)
    _write(schema, output, fmt)
