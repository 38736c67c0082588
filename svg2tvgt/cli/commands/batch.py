"""Batch command - convert multiple SVG files."""

from __future__ import annotations

import concurrent.futures
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.progress import Progress

from svg2tvgt.api import ConversionResult, Svg2TvgtConverter
from svg2tvgt.cli.commands.convert import languages_option
from svg2tvgt.config import DPI_RANGE, Config

console = Console()


def read_batch_file(batch_file: Path) -> list[Path]:
    """Read input paths from a list file, one per line; '#' starts a comment."""
    paths: list[Path] = []
    with open(batch_file, encoding="utf-8") as f:
        for line in f:
            line = line.strip()
            if line and not line.startswith("#"):
                paths.append(Path(line))
    return paths


@click.command()
@click.argument("inputs", nargs=-1, type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--output-dir", "-o", type=click.Path(file_okay=False, path_type=Path), required=True, help="Output directory")
@click.option("--batch-file", type=click.Path(exists=True, dir_okay=False, path_type=Path), help="File containing list of inputs")
@click.option("--suffix", help="Output filename suffix [default: .tvgt]")
@click.option("-j", "--jobs", type=click.IntRange(min=1), help="Parallel jobs [default: 4]")
@click.option("--dpi", type=click.IntRange(*DPI_RANGE), help="Resolution for absolute units")
@click.option("--languages", callback=languages_option, help="Comma-separated languages for systemLanguage [default: en]")
@click.option("--continue-on-error", is_flag=True, help="Continue processing on errors")
@click.pass_context
def batch(
    ctx: click.Context,
    inputs: tuple[Path, ...],
    output_dir: Path,
    batch_file: Optional[Path],
    suffix: Optional[str],
    jobs: Optional[int],
    dpi: Optional[int],
    languages: Optional[list[str]],
    continue_on_error: bool,
) -> None:
    """Convert multiple SVG files to TinyVG text.

    INPUTS: Paths to SVG files (supports glob patterns via shell).
    """
    config = ctx.obj.get("config") or Config.load()
    suffix = suffix or config.suffix
    jobs = jobs or config.jobs

    all_inputs: list[Path] = list(inputs)
    if batch_file:
        all_inputs.extend(read_batch_file(batch_file))

    if not all_inputs:
        console.print("[red]Error:[/red] No input files specified")
        raise SystemExit(1)

    output_dir.mkdir(parents=True, exist_ok=True)

    converter = Svg2TvgtConverter(config=config, dpi=dpi, languages=languages)

    results: list[ConversionResult] = []
    success_count = 0
    error_count = 0

    def process_file(input_path: Path) -> ConversionResult:
        output_path = output_dir / f"{input_path.stem}{suffix}"
        return converter.convert_file(input_path, output_path)

    with Progress(console=console) as progress:
        task = progress.add_task("[green]Converting...", total=len(all_inputs))

        with concurrent.futures.ThreadPoolExecutor(max_workers=jobs) as executor:
            future_to_path = {executor.submit(process_file, p): p for p in all_inputs}

            for future in concurrent.futures.as_completed(future_to_path):
                input_path = future_to_path[future]
                try:
                    result = future.result()
                    results.append(result)
                    if result.success:
                        success_count += 1
                    else:
                        error_count += 1
                        if not continue_on_error:
                            console.print(f"[red]Error in {input_path}:[/red] {'; '.join(result.errors)}")
                except Exception as e:
                    error_count += 1
                    if not continue_on_error:
                        console.print(f"[red]Error processing {input_path}:[/red] {e}")
                finally:
                    progress.advance(task)

    console.print()
    console.print("[bold]Batch complete:[/bold]")
    console.print(f"  [green]Success:[/green] {success_count}")
    console.print(f"  [red]Failed:[/red] {error_count}")
    console.print(f"  [blue]Output:[/blue] {output_dir}")

    if error_count > 0 and not continue_on_error:
        raise SystemExit(1)
