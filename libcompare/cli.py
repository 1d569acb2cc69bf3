import logging
from pathlib import Path
from typing import List, Optional

import typer
from rich.prompt import Prompt
from rich.table import Table

from .config import EXPORT_FORMATS, config, console, save_config
from .errors import LibCompareError
from .export import comparison_to_csv, comparison_to_xml, songs_to_csv, songs_to_xml, write_report
from .matching import best_effort_missing, compare_libraries
from .models import ComparisonBundle, ScoredTrack, TrackRecord
from .parsing import load_tracks, scan_music_folder

app = typer.Typer(help="Compare a reference music catalog against your local collection.")

config_app = typer.Typer(help="Edit or show configuration")

logger = logging.getLogger(__name__)


def _setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else getattr(logging, config["LOG_LEVEL"], logging.WARNING)
    logging.basicConfig(level=level, format="%(levelname)s: %(message)s")


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
):
    _setup_logging(verbose)


def _load_or_exit(path: str, label: str) -> List[TrackRecord]:
    try:
        tracks = load_tracks(path)
    except LibCompareError as e:
        console.print(f"[bold red]Could not load {label} catalog:[/bold red] {e}")
        raise typer.Exit(1)
    console.print(f"[green]Loaded {len(tracks)} {label} track(s) from {Path(path).name}[/green]")
    return tracks


def _summary_table(bundle: ComparisonBundle, reference_total: int, local_total: int) -> Table:
    table = Table(title="Comparison summary")
    table.add_column("Set", style="cyan")
    table.add_column("Tracks", justify="right")
    table.add_row("Reference catalog", str(reference_total))
    table.add_row("Local catalog", str(local_total))
    table.add_row("Common", f"[green]{len(bundle.common)}[/green]")
    table.add_row("Reference only", f"[yellow]{len(bundle.reference_only)}[/yellow]")
    table.add_row("Local only", f"[magenta]{len(bundle.local_only)}[/magenta]")
    return table


def _write_reports(
    bundle: ComparisonBundle, scored: Optional[List[ScoredTrack]], fmt: str, output_dir: Path
) -> List[Path]:
    formats = ("csv", "xml") if fmt == "both" else (fmt,)
    written: List[Path] = []
    for ext in formats:
        if ext == "csv":
            reports = {
                "music_comparison": comparison_to_csv(
                    bundle.common, bundle.local_only, other_label=config["OTHER_SECTION_LABEL"]
                ),
                "reference_only_songs": songs_to_csv(bundle.reference_only),
                "local_only_songs": songs_to_csv(bundle.local_only),
            }
            if scored is not None:
                reports["best_effort_missing"] = songs_to_csv(scored)
        else:
            reports = {
                "music_comparison": comparison_to_xml(bundle.common, bundle.local_only),
                "reference_only_songs": songs_to_xml(bundle.reference_only),
                "local_only_songs": songs_to_xml(bundle.local_only),
            }
            if scored is not None:
                reports["best_effort_missing"] = songs_to_xml(scored)
        for name, data in reports.items():
            written.append(write_report(data, output_dir / f"{name}.{ext}"))
    return written


@app.command(name="compare")
def compare(
    reference: str = typer.Argument(..., help="Reference catalog export (CSV or XML)"),
    local: str = typer.Argument(..., help="Local catalog export (CSV or XML) or a music folder"),
    fmt: Optional[str] = typer.Option(
        None,
        "--format",
        help="Report format: csv, xml or both. Defaults to EXPORT_FORMAT from config.",
        case_sensitive=False,
    ),
    output: Optional[str] = typer.Option(
        None, "--output", help="Directory for the reports. Defaults to OUTPUT_DIR from config."
    ),
    scored: bool = typer.Option(
        False, "--scored", help="Also write best-effort missing tracks with their match scores"
    ),
    quiet: bool = typer.Option(False, "--quiet", help="Only print the summary table"),
):
    """
    Compare two catalogs and write common, reference-only and local-only reports.

    Examples:
      libcompare compare spotify.xml local.csv
      libcompare compare spotify.csv ~/Music/Incoming --format both --output /tmp/reports
    """
    fmt_lc = (fmt or config["EXPORT_FORMAT"]).strip().lower()
    if fmt_lc not in EXPORT_FORMATS:
        console.print(f"[red]Unknown format '{fmt}'. Use one of: {', '.join(EXPORT_FORMATS)}[/red]")
        raise typer.Exit(2)

    reference_tracks = _load_or_exit(reference, "reference")
    local_tracks = _load_or_exit(local, "local")

    bundle = compare_libraries(reference_tracks, local_tracks)
    scored_missing = best_effort_missing(reference_tracks, local_tracks) if scored else None

    console.print(_summary_table(bundle, len(reference_tracks), len(local_tracks)))
    if not quiet:
        for track in bundle.reference_only:
            console.print(f"  [yellow]-[/yellow] {track.title} - {track.artist}")
        for track in bundle.local_only:
            console.print(f"  [magenta]+[/magenta] {track.title} - {track.artist}")

    output_dir = Path(output).expanduser() if output else config["OUTPUT_DIR"]
    try:
        written = _write_reports(bundle, scored_missing, fmt_lc, output_dir)
    except (LibCompareError, OSError) as e:
        console.print(f"[bold red]Error writing reports:[/bold red] {e}")
        raise typer.Exit(1)
    for path in written:
        console.print(f"[bold green]✓ Wrote:[/bold green] {path}")


@app.command(name="scan")
def scan(folder: str = typer.Argument(..., help="Folder of music files (not recursive)")):
    """List the tracks a folder scan produces (file name without extension as title)."""
    try:
        tracks = scan_music_folder(folder)
    except LibCompareError as e:
        console.print(f"[bold red]{e}[/bold red]")
        raise typer.Exit(1)
    for track in tracks:
        console.print(f"  {track.title}")
    console.print(f"[green]Scanned {len(tracks)} song(s) from {folder}[/green]")


@config_app.command(name="show")
def config_show():
    """Show current configuration values."""
    for k, v in config.items():
        console.print(f"[cyan]{k}[/cyan]=[white]{v}[/white]")


@config_app.command(name="edit")
def config_edit():
    """Interactively set output folder, report format and CSV section label."""
    output_dir = Prompt.ask("[bold]Directory for reports[/bold]", default=str(config["OUTPUT_DIR"]))
    fmt = Prompt.ask(
        "[bold]Default report format[/bold]", choices=list(EXPORT_FORMATS), default=config["EXPORT_FORMAT"]
    )
    label = Prompt.ask(
        "[bold]Label for the second CSV section[/bold]", default=config["OTHER_SECTION_LABEL"]
    )
    data = dict(config)
    data.update({"OUTPUT_DIR": output_dir, "EXPORT_FORMAT": fmt, "OTHER_SECTION_LABEL": label})
    path = save_config(data)
    console.print(f"[bold green]Configuration saved to {path}[/bold green]")


# Mount sub-apps
app.add_typer(config_app, name="config")


if __name__ == "__main__":
    app()
