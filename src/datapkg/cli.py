"""datapkg CLI — inspect and edit data package descriptors.

Usage:
    datapkg validate datapackage.json
    datapkg names datapackage.json
    datapkg show datapackage.yaml
    datapkg add datapackage.json --resource '{"name": "extra", "path": "extra.csv"}'
    datapkg remove datapackage.json extra
"""

import json
from pathlib import Path
from typing import Optional

import typer
from dotenv import load_dotenv
from pydantic import ValidationError

from datapkg.config import LOG_LEVELS, get_settings
from datapkg.errors import PackageError
from datapkg.log import setup_logging
from datapkg.package import Package, load
from datapkg.resource import ResourceFactory, get_factory

load_dotenv()

app = typer.Typer(help="Inspect and edit data package descriptors.", no_args_is_help=True)

FactoryOption = typer.Option(None, "--factory", "-f", help="Resource factory: validated or unchecked")


def _factory(name: Optional[str]) -> ResourceFactory:
    if name is None:
        return get_settings().factory()
    try:
        return get_factory(name)
    except ValueError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(2)


def _load(path: Path, factory: Optional[str]) -> Package:
    try:
        return load(path, _factory(factory))
    except (PackageError, FileNotFoundError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)


def _save(pkg: Package, path: Path) -> None:
    pkg.save_descriptor(path, indent=get_settings().json_indent)


@app.callback()
def _main(
    log_level: Optional[str] = typer.Option(None, "--log-level", help="DEBUG, INFO, WARNING, ERROR"),
):
    try:
        settings = get_settings()
    except ValidationError as e:
        typer.echo(f"Error: invalid DATAPKG_* settings: {e}", err=True)
        raise typer.Exit(2)
    level = (log_level or settings.log_level).upper()
    if level not in LOG_LEVELS:
        typer.echo(f"Error: unknown log level {log_level!r}", err=True)
        raise typer.Exit(2)
    setup_logging(level)


@app.command("validate")
def validate_cmd(path: Path = typer.Argument(..., help="Descriptor file"), factory: Optional[str] = FactoryOption):
    pkg = _load(path, factory)
    typer.echo(f"valid: {len(pkg)} resources")


@app.command("names")
def names_cmd(path: Path = typer.Argument(..., help="Descriptor file"), factory: Optional[str] = FactoryOption):
    pkg = _load(path, factory)
    for name in pkg.resource_names():
        typer.echo(name)


@app.command("show")
def show_cmd(path: Path = typer.Argument(..., help="Descriptor file"), factory: Optional[str] = FactoryOption):
    pkg = _load(path, factory)
    typer.echo(pkg.to_json(indent=get_settings().json_indent))


@app.command("add")
def add_cmd(
    path: Path = typer.Argument(..., help="Descriptor file"),
    resource: str = typer.Option(..., "--resource", "-r", help="Resource descriptor as JSON"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Write here instead of PATH"),
    factory: Optional[str] = FactoryOption,
):
    pkg = _load(path, factory)
    try:
        raw = json.loads(resource)
        added = pkg.add_resource(raw)
    except json.JSONDecodeError as e:
        typer.echo(f"Error: --resource is not valid JSON: {e}", err=True)
        raise typer.Exit(1)
    except PackageError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)
    _save(pkg, output or path)
    typer.echo(f"Added {added.name}")


@app.command("remove")
def remove_cmd(
    path: Path = typer.Argument(..., help="Descriptor file"),
    name: str = typer.Argument(..., help="Resource name"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Write here instead of PATH"),
    factory: Optional[str] = FactoryOption,
):
    pkg = _load(path, factory)
    if pkg.remove_resource(name) is None:
        typer.echo(f"No resource named {name}")
        return
    _save(pkg, output or path)
    typer.echo(f"Removed {name}")


def main():
    app()


if __name__ == "__main__":
    main()
