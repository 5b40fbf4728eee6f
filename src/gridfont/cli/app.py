"""CLI application entry point for gridfont.

This module provides the main CLI interface using Typer.
"""

from pathlib import Path
from typing import Annotated

import typer

from gridfont import __version__
from gridfont.cli.output import (
    console,
    create_progress,
    print_cancellation_notice,
    print_corpus_info,
    print_error,
    print_generated,
    print_header,
    print_report,
    print_step,
    print_success,
)
from gridfont.config import GridfontSettings, get_default_settings, load_settings
from gridfont.core import GENERATORS, FontCompiler
from gridfont.exceptions import (
    ConfigurationError,
    FontSaveError,
    GlyphCompileError,
    GridfontError,
    ValidationFailedError,
)
from gridfont.io import write_glyph_files

# Create the Typer app
app = typer.Typer(
    name="gridfont",
    help="Compile pixel-grid glyph sources into TrueType and WOFF2 fonts.",
    add_completion=False,
    no_args_is_help=True,
)

ConfigOption = Annotated[
    Path | None,
    typer.Option(
        "--config",
        "-c",
        help="Path to font-config.json (default: built-in settings)",
    ),
]
LogFileOption = Annotated[
    Path | None,
    typer.Option(
        "--log-file",
        help="Write detailed logs to file",
    ),
]
LogLevelOption = Annotated[
    str | None,
    typer.Option(
        "--log-level",
        help="Console logging level (DEBUG|INFO|WARNING|ERROR)",
    ),
]
QuietOption = Annotated[
    bool,
    typer.Option(
        "--quiet",
        "-q",
        help="Minimal console output",
    ),
]
DirectoriesArgument = Annotated[
    list[Path] | None,
    typer.Argument(
        help="Glyph directories to read (default: corpus.glyphDirs from the config)",
        show_default=False,
    ),
]


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"[bold blue]Gridfont[/bold blue] v{__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
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
    """Compile pixel-grid glyph sources into TrueType and WOFF2 fonts."""


def _load_settings(
    config: Path | None,
    log_file: Path | None = None,
    log_level: str | None = None,
    workers: int | None = None,
) -> GridfontSettings:
    """Load the configuration file and apply command-line overrides.

    Raises:
        typer.Exit: If the configuration cannot be loaded
    """
    try:
        settings = load_settings(config) if config is not None else get_default_settings()
    except ConfigurationError as e:
        print_error(f"Invalid configuration: {e.source}", details=e.reason)
        raise typer.Exit(code=1)

    logging_updates: dict[str, object] = {}
    if log_file is not None:
        logging_updates["log_file"] = log_file
    if log_level is not None:
        logging_updates["log_level"] = log_level.upper()

    updates: dict[str, object] = {}
    if logging_updates:
        updates["logging"] = settings.logging.model_copy(update=logging_updates)
    if workers is not None:
        updates["processing"] = settings.processing.model_copy(update={"max_workers": workers})

    return settings.model_copy(update=updates) if updates else settings


@app.command()
def validate(
    directories: DirectoriesArgument = None,
    config: ConfigOption = None,
    log_file: LogFileOption = None,
    log_level: LogLevelOption = None,
    quiet: QuietOption = False,
) -> None:
    """Check a glyph corpus and list every problem found.

    Exits with status 1 if any error is reported. Warnings alone do not
    fail validation.

    Example:
        gridfont validate glyphs/ascii glyphs/ligatures
    """
    settings = _load_settings(config, log_file, log_level)

    if not quiet:
        print_header(__version__)
        print_step("Reading glyphs")

    compiler = FontCompiler(settings, quiet=quiet)
    dirs = directories or settings.glyph_dirs()
    corpus = compiler.load(dirs)

    if not quiet:
        print_corpus_info(dirs, len(corpus.glyphs), len(corpus.failures))
        print_step("Validating")

    report = compiler.validate(corpus)
    if not quiet or not report.is_valid:
        print_report(report)

    if not report.is_valid:
        raise typer.Exit(code=1)


@app.command()
def build(
    directories: DirectoriesArgument = None,
    output: Annotated[
        Path | None,
        typer.Option(
            "--output",
            "-o",
            help="Output directory (default: build/ under the project root)",
        ),
    ] = None,
    workers: Annotated[
        int | None,
        typer.Option(
            "--workers",
            "-j",
            help="Number of worker processes for glyph compilation",
            min=1,
        ),
    ] = None,
    config: ConfigOption = None,
    log_file: LogFileOption = None,
    log_level: LogLevelOption = None,
    quiet: QuietOption = False,
) -> None:
    """Validate a glyph corpus and compile it into fonts.

    Writes <Family>-Regular.ttf and .woff2, plus the Bold pair when bold
    derivation is enabled or the corpus carries bold glyphs. Nothing is
    written if validation fails.

    Example:
        gridfont build --config font-config.json -o dist
    """
    settings = _load_settings(config, log_file, log_level, workers)
    output_dir = output if output is not None else settings.resolve(Path("build"))

    if not quiet:
        print_header(__version__)
        print_step("Building")

    compiler = FontCompiler(settings, quiet=quiet)

    try:
        if not quiet:
            with create_progress() as progress:
                task_id = progress.add_task("Compiling", total=None)

                def update_progress(completed: int, total: int, *_: object) -> None:
                    progress.update(task_id, completed=completed, total=total)

                stats = compiler.build(
                    output_dir=output_dir,
                    directories=directories or None,
                    progress_callback=update_progress,
                )
        else:
            stats = compiler.build(output_dir=output_dir, directories=directories or None)
    except ValidationFailedError as e:
        print_error("Corpus failed validation; no fonts were written")
        print_report(e.report)
        raise typer.Exit(code=1)
    except GlyphCompileError as e:
        print_error(f"Could not compile glyph '{e.label}'", details=e.reason)
        raise typer.Exit(code=1)
    except FontSaveError as e:
        print_error(f"Could not save font: {e.path}", details=e.reason)
        raise typer.Exit(code=1)
    except GridfontError as e:
        print_error(str(e))
        raise typer.Exit(code=1)
    except KeyboardInterrupt:
        if not quiet:
            print_cancellation_notice()
        raise typer.Exit(code=130) from None  # Standard Unix SIGINT exit code

    if not quiet:
        print_success(stats)


@app.command()
def generate(
    set_name: Annotated[
        str,
        typer.Argument(
            help=f"Glyph set to generate ({'|'.join(GENERATORS)})",
            show_default=False,
        ),
    ],
    output: Annotated[
        Path | None,
        typer.Option(
            "--output",
            "-o",
            help="Directory for the .glyph files (default: glyphs/<set> under the project root)",
        ),
    ] = None,
    config: ConfigOption = None,
    quiet: QuietOption = False,
) -> None:
    """Write a generated glyph set as .glyph source files.

    Example:
        gridfont generate braille -o glyphs/braille
    """
    generator = GENERATORS.get(set_name)
    if generator is None:
        print_error(
            f"Unknown glyph set: {set_name}",
            details=f"Valid values: {', '.join(GENERATORS)}",
        )
        raise typer.Exit(code=1)

    settings = _load_settings(config)
    output_dir = output if output is not None else settings.resolve(Path("glyphs") / set_name)

    try:
        glyphs = generator(settings.grid)
        paths = write_glyph_files(glyphs, output_dir)
    except ConfigurationError as e:
        print_error(f"Cannot generate {set_name}", details=e.reason)
        raise typer.Exit(code=1)
    except OSError as e:
        print_error(f"Could not write to {output_dir}", details=e.strerror or str(e))
        raise typer.Exit(code=1)

    if not quiet:
        print_generated(set_name, paths, output_dir)


def cli() -> None:
    """Entry point for the CLI application."""
    app()


def main() -> None:
    """Entry point for the CLI application (alias for cli)."""
    cli()


if __name__ == "__main__":
    cli()
