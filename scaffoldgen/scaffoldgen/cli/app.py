"""Main CLI application."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import NoReturn, Optional

import typer
from typing_extensions import Annotated

from ..api import create_generator
from ..core.errors import ScaffoldError
from ..core.models import Request, Response
from ..core.settings import get_settings
from ..repository.yamlio import dump_yaml
from .parsers import parse_file_mode, parse_param, parse_values_file

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="scaffoldgen",
    help="Render code scaffolds from generator specs and Jinja2 templates.",
    no_args_is_help=True,
)

SpecFileOption = Annotated[
    str,
    typer.Option(
        "--spec-file",
        help="Render spec file name inside TARGET_DIR (default: generated-main.yaml).",
        metavar="FILE",
    ),
]


@app.callback()
def configure(
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Enable verbose logging.",
        ),
    ] = False,
) -> None:
    """Configure logging for all commands."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="[%(levelname)s] %(message)s",
    )


def _report(response: Response) -> None:
    """Print one line per file result and exit non-zero on failure."""
    for result in response.rendered_files:
        status = "ok" if result.success else "FAILED"
        typer.echo(f"{status:6} {result.relative_path}")
        for error in result.errors:
            typer.echo(f"       {error}", err=True)
    for error in response.errors:
        typer.echo(f"error: {error}", err=True)
    if not response.success:
        raise typer.Exit(code=1)


def _fail(exc: ScaffoldError) -> NoReturn:
    typer.echo(f"error: {exc}", err=True)
    raise typer.Exit(code=1)


@app.command("list")
def list_generators(
    source_dir: Annotated[str, typer.Argument(help="Generator directory.")],
) -> None:
    """List the generators available in SOURCE_DIR."""
    try:
        names = create_generator().find_generator_names(source_dir)
    except ScaffoldError as exc:
        _fail(exc)
    for name in names:
        typer.echo(name)


@app.command("spec")
def show_spec(
    source_dir: Annotated[str, typer.Argument(help="Generator directory.")],
    name: Annotated[str, typer.Argument(help="Generator name.")],
) -> None:
    """Print the spec of generator NAME as YAML."""
    try:
        spec = create_generator().obtain_generator_spec(source_dir, name)
    except ScaffoldError as exc:
        _fail(exc)
    typer.echo(dump_yaml(spec.model_dump(mode="json", exclude_defaults=True)), nl=False)


@app.command("defaults")
def write_defaults(
    source_dir: Annotated[str, typer.Argument(help="Generator directory.")],
    target_dir: Annotated[str, typer.Argument(help="Output directory.")],
    name: Annotated[str, typer.Argument(help="Generator name.")],
    spec_file: SpecFileOption = "",
) -> None:
    """Write a render spec pre-filled with the generator's defaults."""
    request = Request(source_dir=source_dir, target_dir=target_dir, render_spec_file=spec_file)
    _report(create_generator().write_render_spec_with_defaults(request, name))


@app.command("values")
def write_values(
    source_dir: Annotated[str, typer.Argument(help="Generator directory.")],
    target_dir: Annotated[str, typer.Argument(help="Output directory.")],
    name: Annotated[str, typer.Argument(help="Generator name.")],
    params: Annotated[
        Optional[list[str]],
        typer.Option(
            "--param",
            "-p",
            help="Parameter value (format: KEY=VALUE). Repeatable.",
            metavar="KEY=VALUE",
        ),
    ] = None,
    values_file: Annotated[
        Optional[Path],
        typer.Option(
            "--values",
            help="YAML file with a mapping of parameter values; --param entries win.",
            metavar="FILE",
        ),
    ] = None,
    spec_file: SpecFileOption = "",
) -> None:
    """Validate parameter values and write them as a render spec."""
    parameters = parse_values_file(values_file) if values_file else {}
    parameters.update(parse_param(p) for p in params or [])
    logger.debug(f"Parameters supplied: {sorted(parameters)}")

    request = Request(source_dir=source_dir, target_dir=target_dir, render_spec_file=spec_file)
    _report(create_generator().write_render_spec_with_values(request, name, parameters))


@app.command("render")
def render(
    source_dir: Annotated[str, typer.Argument(help="Generator directory.")],
    target_dir: Annotated[str, typer.Argument(help="Output directory.")],
    spec_file: SpecFileOption = "",
    file_mode: Annotated[
        str,
        typer.Option(
            "--mode",
            help="File permissions in octal (default: 0644).",
            metavar="OCTAL",
        ),
    ] = "",
) -> None:
    """Render the generator recorded in TARGET_DIR's render spec."""
    settings = get_settings()
    if file_mode:
        settings = settings.model_copy(update={"file_mode": parse_file_mode(file_mode)})

    request = Request(source_dir=source_dir, target_dir=target_dir, render_spec_file=spec_file)
    _report(create_generator(settings).render(request))


def main() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
