"""Rich command-line interface powered by Typer."""

from __future__ import annotations

import logging
import time
import warnings
from pathlib import Path

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel
from rich.progress import BarColumn, Progress, TextColumn, TimeElapsedColumn

from tile_rebuilder.config import RebuildConfig
from tile_rebuilder.errors import DecodeError, EncodeError, OutputCollisionWarning
from tile_rebuilder.image_io import (
    check_source,
    default_output_path,
    load_image,
    normalise_format,
    resolve_output_path,
    save_image,
)
from tile_rebuilder.solver_greedy import rebuild

app = typer.Typer(
    name="tile-rebuilder",
    help="Rebuild an image from square tiles, each painted with a unique random colour.",
    add_completion=False,
    rich_markup_mode="rich",
)
console = Console()


def _setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=False, markup=True)],
    )


def _usage_error(ctx: typer.Context, message: str) -> typer.Exit:
    console.print(message, style="red", markup=False)
    console.print(ctx.get_usage(), markup=False)
    return typer.Exit(code=1)


# Defaults come from RebuildConfig - single source of truth
_DEFAULTS = RebuildConfig()


@app.command()
def main(
    ctx: typer.Context,
    source: Path = typer.Option(
        ..., "--source", "-s", help="Source image (.png or .jpg)",
    ),
    output: Path | None = typer.Option(
        None, "--output", "-o",
        help="Output path; defaults to output_<source name> in the current directory",
    ),
    output_format: str | None = typer.Option(
        _DEFAULTS.output_format, "--output-format", "-f",
        help="'png' or 'jpg'; defaults to the source format",
    ),
    tile_edge: int = typer.Option(
        _DEFAULTS.tile_edge, "--tile-edge", "-t", help="Tile side length in pixels",
    ),
    margin: float = typer.Option(
        _DEFAULTS.closeness_margin, "--margin", "-m",
        help="Accept the first palette colour within this distance",
    ),
    seed: int | None = typer.Option(
        _DEFAULTS.seed, "--seed", help="Palette seed (None = random)",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
) -> None:
    """Rebuild SOURCE with one unique random colour per tile."""
    _setup_logging(verbose)
    logger = logging.getLogger("tile_rebuilder")
    t_total = time.perf_counter()

    try:
        source_format = check_source(source)
        cfg = RebuildConfig(
            tile_edge=tile_edge,
            closeness_margin=margin,
            seed=seed,
            output_format=(
                normalise_format(output_format) if output_format else source_format
            ),
        )
    except ValueError as exc:  # InputError included
        raise _usage_error(ctx, str(exc)) from exc

    if output is None:
        output = default_output_path(source, cfg.output_format, cfg.output_prefix)
    else:
        output = output.with_suffix(cfg.output_format)
    # the collision is already logged; keep it off stderr
    with warnings.catch_warnings():
        warnings.simplefilter("ignore", OutputCollisionWarning)
        output = resolve_output_path(output)

    try:
        image = load_image(source)
    except DecodeError as exc:
        console.print(f"[red]Error while decoding the source file:[/red] {escape(str(exc))}")
        raise typer.Exit(code=1) from exc

    h, w = image.shape[:2]
    console.print(Panel.fit(
        f"[bold]TILE REBUILDER[/bold]\n"
        f"Source: {source.name}  |  {w}x{h}\n"
        f"Tile edge: {cfg.tile_edge}  |  Margin: {cfg.closeness_margin}",
        border_style="cyan",
    ))

    with Progress(
        TextColumn("[cyan]Pixels coloured"),
        BarColumn(),
        TextColumn("{task.completed}/{task.total}"),
        TimeElapsedColumn(),
        console=console,
        transient=True,
    ) as progress:
        task = progress.add_task("rebuild", total=w * h)
        result = rebuild(
            image, cfg,
            on_progress=lambda done, _total: progress.update(task, completed=done),
        )

    logger.info(
        "%d tiles, mean tile error %.1f", result.layout.count, result.mean_error,
    )

    try:
        output.parent.mkdir(parents=True, exist_ok=True)
        save_image(result.canvas, output, cfg.output_format)
    except (EncodeError, OSError) as exc:
        console.print(f"[red]Error while writing the output file:[/red] {escape(str(exc))}")
        raise typer.Exit(code=1) from exc

    elapsed = time.perf_counter() - t_total
    console.print(
        f"[green]✓[/green] Saved to {output}  "
        f"[dim]{result.layout.count} tiles  error={result.mean_error:.1f}"
        f"  time={elapsed:.2f}s[/dim]"
    )


if __name__ == "__main__":
    app()
