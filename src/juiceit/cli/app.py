"""Main CLI application."""

import logging
import sys
from pathlib import Path
from typing import Annotated

import anyio
import structlog
import typer
from rich.console import Console
from rich.progress import BarColumn, Progress, SpinnerColumn, TaskID, TaskProgressColumn, TextColumn

from juiceit import __version__
from juiceit.config import RipOptions, Settings, get_settings, resolve_options
from juiceit.core.job import RipJob
from juiceit.encoder.parser import EncodeProgress
from juiceit.exceptions import JuiceItError
from juiceit.ripper.sequencer import Sequencer

app = typer.Typer(
    name="juiceit",
    help="Rip every title from a DVD into MP4 files using HandBrakeCLI.",
    add_completion=False,
    rich_markup_mode="rich",
)

console = Console()
err_console = Console(stderr=True)
log = structlog.get_logger()


def configure_logging(settings: Settings, verbose: bool = False) -> None:
    """Configure structured logging."""
    level = logging.DEBUG if verbose else logging.getLevelName(settings.log_level)

    processors: list[structlog.types.Processor] = [
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if settings.log_json:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty()))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )


def version_callback(value: bool) -> None:
    """Show version and exit."""
    if value:
        console.print(f"[bold blue]juiceit[/] version [green]{__version__}[/]")
        raise typer.Exit()


@app.command()
def rip(
    output: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Output directory (default: current directory)"),
    ] = None,
    dvd_source: Annotated[
        str | None,
        typer.Option(
            "--dvdSource",
            "--dvd-source",
            help="DVD source device (e.g., /dev/disk5). Auto-detected when omitted.",
        ),
    ] = None,
    quality: Annotated[
        float,
        typer.Option("--quality", "-q", min=0, max=51, help="Encoding quality (lower is better)"),
    ] = 20,
    deinterlace: Annotated[
        bool,
        typer.Option("--deinterlace/--no-deinterlace", help="Add the deinterlace filter"),
    ] = True,
    subtitles: Annotated[
        int,
        typer.Option("--subtitles", min=1, help="Subtitle track number"),
    ] = 1,
    sub_lang: Annotated[
        str,
        typer.Option("--sub-lang", help="Subtitle language code"),
    ] = "eng",
    verbose: Annotated[
        bool,
        typer.Option("--verbose", help="Enable debug logging"),
    ] = False,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-v",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = None,
) -> None:
    """Rip all titles from a DVD.

    Each title is written to [cyan]Track_<n>.mp4[/] in the output directory.

    Example: [green]juiceit --output ~/Movies/Disc --dvdSource /dev/disk5[/]
    """
    settings = get_settings()
    configure_logging(settings, verbose)

    try:
        options = resolve_options(
            settings,
            output=output,
            dvd_source=dvd_source,
            quality=quality,
            deinterlace=deinterlace,
            subtitles=subtitles,
            sub_lang=sub_lang,
        )
        console.print(f"[bold blue]juiceit[/] - ripping to [cyan]{options.output_dir}[/]")
        ripped = anyio.run(_run_rip, settings, options)
    except JuiceItError as e:
        err_console.print(f"[red]Error during ripping:[/] {e.message}")
        raise typer.Exit(e.exit_code) from e

    console.print(f"[green]Ripping complete![/] {len(ripped)} title(s) saved to {options.output_dir}")


async def _run_rip(settings: Settings, options: RipOptions) -> list[Path]:
    """Execute the rip with a progress line per title."""
    sequencer = Sequencer(settings, options)

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        BarColumn(),
        TaskProgressColumn(),
        console=console,
    ) as progress:
        tasks: dict[int, TaskID] = {}

        def on_title_start(job: RipJob, total: int) -> None:
            tasks[job.title_index] = progress.add_task(
                f"Ripping {job.output_name} ({job.title_index}/{total})",
                total=100,
            )

        def on_progress(job: RipJob, info: EncodeProgress) -> None:
            progress.update(tasks[job.title_index], completed=info.percent)

        def on_title_done(job: RipJob, output_path: Path) -> None:
            progress.update(
                tasks[job.title_index],
                completed=100,
                description=f"[green]{output_path.name}[/]",
            )

        return await sequencer.run(
            on_title_start=on_title_start,
            on_progress=on_progress,
            on_title_done=on_title_done,
        )


def main() -> None:
    """Entry point for the CLI. Shows help when run without arguments."""
    app(args=sys.argv[1:] or ["--help"])


if __name__ == "__main__":
    main()
