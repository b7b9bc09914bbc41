"""CLI application entry point for iconspec.

This module provides the main CLI interface using Typer.
"""

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Annotated, Any

import typer
from pydantic import ValidationError

from iconspec import __version__
from iconspec.cli.output import (
    console,
    create_progress,
    print_build_summary,
    print_changes,
    print_document_info,
    print_error,
    print_header,
    print_issues,
    print_presets,
    print_step,
    print_success,
    print_written,
)
from iconspec.config import (
    IconSpecSettings,
    LoggingConfig,
    OutputConfig,
    ProcessingConfig,
)
from iconspec.core import (
    IconPipeline,
    IconValidator,
    PresetExpander,
    SvgCompiler,
    get_default_registry,
)
from iconspec.domain import CompileSuccess, ExpandOptions, IconSpecExpanded
from iconspec.exceptions import DocumentLoadError, DocumentSaveError, IconSpecError
from iconspec.io import DocumentReader, IconWriter, safe_file_stem
from iconspec.samples import all_samples, get_sample, list_samples
from iconspec.utils import configure_logging

# Create the Typer app
app = typer.Typer(
    name="iconspec",
    help="Expand, validate and compile icon drafts into deterministic SVG.",
    add_completion=False,
    no_args_is_help=True,
)


@dataclass
class CliState:
    """Options shared by every command."""

    quiet: bool = False
    verbose: bool = False
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"[bold blue]iconspec[/bold blue] v{__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    ctx: typer.Context,
    log_file: Annotated[
        Path | None,
        typer.Option(
            "--log-file",
            help="Write detailed logs to file",
        ),
    ] = None,
    log_level: Annotated[
        str,
        typer.Option(
            "--log-level",
            help="Logging level (DEBUG|INFO|WARNING|ERROR)",
        ),
    ] = "WARNING",
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Verbose console output",
        ),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Minimal console output",
        ),
    ] = False,
    _version: Annotated[  # noqa: ARG001
        bool | None,
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
) -> None:
    """Expand, validate and compile icon drafts into deterministic SVG."""
    if verbose and quiet:
        print_error("Cannot use --verbose and --quiet together")
        raise typer.Exit(code=1)

    if verbose and log_level.upper() == "WARNING":
        log_level = "INFO"

    try:
        logging_config = LoggingConfig(log_file=log_file, log_level=log_level)
    except ValidationError as e:
        print_error("Invalid logging options", details=_first_errors(e))
        raise typer.Exit(code=1) from None

    configure_logging(
        log_file=logging_config.log_file,
        console_level=logging_config.log_level,
        file_level=logging_config.file_log_level,
        quiet=quiet,
    )
    ctx.obj = CliState(quiet=quiet, verbose=verbose, logging=logging_config)


def _state(ctx: typer.Context) -> CliState:
    return ctx.obj if isinstance(ctx.obj, CliState) else CliState()


def _load(path: Path, quiet: bool) -> DocumentReader:
    """Load a document, exiting with code 1 on failure."""
    if not quiet:
        print_step("Loading document")

    reader = DocumentReader(path)
    try:
        reader.load()
    except DocumentLoadError as e:
        print_error(f"Could not load document: {e.reason}", details=str(path))
        raise typer.Exit(code=1) from None

    if not quiet:
        name = reader.data.get("name")
        print_document_info(str(path), reader.kind, name if isinstance(name, str) else None)
    return reader


def _expanded_document(
    reader: DocumentReader,
    settings: IconSpecSettings,
    quiet: bool,
) -> Any:
    """Return the reader's document as an expanded spec document.

    Drafts are expanded with the configured defaults first; anything else is
    passed through untouched for the validator to judge.
    """
    if reader.kind != "draft":
        return reader.data

    if not quiet:
        print_step("Expanding draft")
    try:
        result = PresetExpander().expand(
            reader.data, ExpandOptions(**settings.expand.model_dump())
        )
    except ValidationError as e:
        print_error("Draft does not match the draft schema", details=_first_errors(e))
        raise typer.Exit(code=1) from None

    if not quiet:
        print_changes(result.changes)
    return result.expanded


def _first_errors(error: ValidationError, limit: int = 5) -> str:
    lines = []
    for err in error.errors(include_url=False)[:limit]:
        loc = ".".join(str(part) for part in err["loc"])
        lines.append(f"{loc}: {err['msg']}")
    return "\n  ".join(lines)


def _icon_name(document: Any, fallback: str) -> str:
    if isinstance(document, IconSpecExpanded):
        return document.name
    if isinstance(document, dict) and isinstance(document.get("name"), str):
        return document["name"]
    return fallback


@app.command()
def presets(ctx: typer.Context) -> None:
    """List the built-in presets."""
    state = _state(ctx)
    if not state.quiet:
        print_header(__version__)
    print_presets(get_default_registry())


@app.command()
def samples(
    ctx: typer.Context,
    name: Annotated[
        str | None,
        typer.Option(
            "--name",
            "-n",
            help="Print the named sample draft as JSON",
        ),
    ] = None,
    output: Annotated[
        Path | None,
        typer.Option(
            "--output",
            "-o",
            help="Write sample drafts as JSON files into this directory",
        ),
    ] = None,
) -> None:
    """List, print or write the built-in sample drafts."""
    state = _state(ctx)

    if name is not None:
        draft = get_sample(name)
        if draft is None:
            print_error(
                f"Unknown sample: {name}",
                details=f"Available: {', '.join(list_samples())}",
            )
            raise typer.Exit(code=1)
        drafts = [draft]
    else:
        drafts = all_samples()

    if output is not None:
        writer = IconWriter(output)
        try:
            for draft in drafts:
                path = writer.write_json(draft, Path(f"{draft['name']}.json"))
                if not state.quiet:
                    print_written(str(path))
        except DocumentSaveError as e:
            print_error(f"Could not save sample: {e.reason}")
            raise typer.Exit(code=1) from None
        return

    if name is not None:
        typer.echo(json.dumps(drafts[0], indent=2))
        return

    for sample_name in list_samples():
        typer.echo(sample_name)


@app.command()
def expand(
    ctx: typer.Context,
    draft: Annotated[
        Path,
        typer.Argument(
            help="Path to a draft JSON document",
            show_default=False,
        ),
    ],
    output: Annotated[
        Path | None,
        typer.Option(
            "--output",
            "-o",
            help="Output path (default: {name}.expanded.json next to the draft)",
        ),
    ] = None,
    normalize: Annotated[
        bool,
        typer.Option(
            "--normalize/--no-normalize",
            help="Canonicalize viewBox and number formatting",
        ),
    ] = True,
    snap: Annotated[
        bool,
        typer.Option(
            "--snap/--no-snap",
            help="Snap geometry to the preset grid",
        ),
    ] = True,
    defaults: Annotated[
        bool,
        typer.Option(
            "--defaults/--no-defaults",
            help="Fill missing export settings",
        ),
    ] = True,
) -> None:
    """Expand a draft against its preset and write the expanded spec.

    Example:
        iconspec expand search.json

    This will write search.expanded.json next to search.json.
    """
    state = _state(ctx)
    if not state.quiet:
        print_header(__version__)

    reader = _load(draft, state.quiet)

    if not state.quiet:
        print_step("Expanding draft")
    options = ExpandOptions(
        normalize=normalize,
        snap_to_grid=snap,
        fill_missing_defaults=defaults,
    )
    try:
        result = PresetExpander().expand(reader.data, options)
    except ValidationError as e:
        print_error("Draft does not match the draft schema", details=_first_errors(e))
        raise typer.Exit(code=1) from None

    if not state.quiet:
        print_changes(result.changes)

    if output is None:
        output = IconWriter().get_output_path(draft, ".expanded.json")
    try:
        path = IconWriter().write_json(result.expanded.to_dict(), output)
    except DocumentSaveError as e:
        print_error(f"Could not save expanded spec: {e.reason}")
        raise typer.Exit(code=1) from None

    if not state.quiet:
        print_written(str(path))


@app.command()
def validate(
    ctx: typer.Context,
    spec: Annotated[
        Path,
        typer.Argument(
            help="Path to an expanded spec (drafts are expanded first)",
            show_default=False,
        ),
    ],
    as_json: Annotated[
        bool,
        typer.Option(
            "--json",
            help="Print the validation result as JSON",
        ),
    ] = False,
) -> None:
    """Validate an expanded spec; exits with code 1 on any error."""
    state = _state(ctx)
    quiet = state.quiet or as_json
    settings = IconSpecSettings(logging=state.logging)

    if not quiet:
        print_header(__version__)

    reader = _load(spec, quiet)
    document = _expanded_document(reader, settings, quiet)

    result = IconValidator(epsilon=settings.validation.grid_epsilon).validate(document)

    if as_json:
        typer.echo(json.dumps(result.to_dict(), indent=2))
    elif not state.quiet:
        print_step("Validating")
        print_issues(result.issues)
        if result.valid:
            print_success("Valid")

    if not result.valid:
        raise typer.Exit(code=1)


@app.command(name="compile")
def compile_command(
    ctx: typer.Context,
    spec: Annotated[
        Path,
        typer.Argument(
            help="Path to an expanded spec (drafts are expanded first)",
            show_default=False,
        ),
    ],
    output: Annotated[
        Path | None,
        typer.Option(
            "--output",
            "-o",
            help="Output directory (default: next to the spec)",
        ),
    ] = None,
    color: Annotated[
        str | None,
        typer.Option(
            "--color",
            "-c",
            help="Replace currentColor with this color",
        ),
    ] = None,
    minified: Annotated[
        bool,
        typer.Option(
            "--minified",
            "-m",
            help="Write the minified SVG",
        ),
    ] = False,
) -> None:
    """Compile an expanded spec into SVG.

    Example:
        iconspec compile search.expanded.json --color "#111827"
    """
    state = _state(ctx)
    settings = IconSpecSettings(
        output=OutputConfig(output_dir=output, color=color, minified=minified),
        logging=state.logging,
    )
    if not state.quiet:
        print_header(__version__)

    reader = _load(spec, state.quiet)
    document = _expanded_document(reader, settings, state.quiet)

    if not state.quiet:
        print_step("Compiling")
    result = SvgCompiler(epsilon=settings.validation.grid_epsilon).compile(document)
    if not isinstance(result, CompileSuccess):
        print_issues(result.issues)
        print_error(f"Compilation blocked by {len(result.issues)} error(s)")
        raise typer.Exit(code=1)

    writer = IconWriter(settings.output.output_dir or spec.parent)
    try:
        path = writer.write_svg(
            result,
            _icon_name(document, spec.stem),
            color=settings.output.color,
            minified=settings.output.minified,
        )
    except DocumentSaveError as e:
        print_error(f"Could not save SVG: {e.reason}")
        raise typer.Exit(code=1) from None

    if not state.quiet:
        print_written(str(path))


@app.command()
def build(
    ctx: typer.Context,
    drafts: Annotated[
        list[Path],
        typer.Argument(
            help="Paths to draft JSON documents",
            show_default=False,
        ),
    ],
    output: Annotated[
        Path | None,
        typer.Option(
            "--output",
            "-o",
            help="Output directory (default: next to each draft)",
        ),
    ] = None,
    workers: Annotated[
        int | None,
        typer.Option(
            "--workers",
            "-j",
            help="Number of parallel workers (default: auto)",
            min=1,
        ),
    ] = None,
    color: Annotated[
        str | None,
        typer.Option(
            "--color",
            "-c",
            help="Replace currentColor with this color",
        ),
    ] = None,
    minified: Annotated[
        bool,
        typer.Option(
            "--minified",
            "-m",
            help="Write the minified SVG",
        ),
    ] = False,
    write_expanded: Annotated[
        bool,
        typer.Option(
            "--write-expanded",
            help="Also write each expanded spec as JSON",
        ),
    ] = False,
) -> None:
    """Expand, validate and compile drafts into SVG files.

    Example:
        iconspec build icons/*.json -o build/ -j 4

    Exits with code 1 if any draft fails to build.
    """
    state = _state(ctx)
    settings = IconSpecSettings(
        output=OutputConfig(
            output_dir=output,
            color=color,
            minified=minified,
            write_expanded=write_expanded,
        ),
        processing=ProcessingConfig(max_workers=workers),
        logging=state.logging,
    )

    if not state.quiet:
        print_header(__version__)
        print_step(f"Loading {len(drafts)} draft(s)")

    documents: list[dict[str, Any]] = []
    for path in drafts:
        reader = DocumentReader(path)
        try:
            documents.append(reader.load())
        except DocumentLoadError as e:
            print_error(f"Could not load document: {e.reason}", details=str(path))
            raise typer.Exit(code=1) from None

    pipeline = IconPipeline(settings)

    try:
        if not state.quiet:
            print_step("Building")
            with create_progress() as progress:
                task_id = progress.add_task("Building", total=len(documents))

                def update_progress(completed: int, *_: object) -> None:
                    progress.update(task_id, completed=completed)

                results, stats = pipeline.build_many(
                    documents,
                    max_workers=workers,
                    progress_callback=update_progress,
                )
        else:
            results, stats = pipeline.build_many(documents, max_workers=workers)
    except KeyboardInterrupt:
        console.print("\nCancelled")
        raise typer.Exit(code=130) from None  # Standard Unix SIGINT exit code

    try:
        for path, result in zip(drafts, results, strict=True):
            if not result.get("ok"):
                continue
            writer = IconWriter(settings.output.output_dir or path.parent)
            svg = result["svgMinified"] if settings.output.minified else result["svg"]
            written = writer.write_markup(svg, result["name"], color=settings.output.color)
            if state.verbose:
                print_written(str(written))
            if settings.output.write_expanded:
                writer.write_json(
                    result["expanded"],
                    Path(f"{safe_file_stem(result['name'])}.expanded.json"),
                )
    except IconSpecError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from None

    if not state.quiet:
        print_build_summary(stats)

    if stats.failed_count:
        raise typer.Exit(code=1)


def cli() -> None:
    """Entry point for the CLI application."""
    app()


def main() -> None:
    """Entry point for the CLI application (alias for cli)."""
    cli()


if __name__ == "__main__":
    cli()
