"""
CLI Entry Point: Exposes the gtools functionality via command line.
"""

import logging
from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from . import __version__
from .config import Environment, GtoolsSettings
from .errors import GtoolsError
from .io.bed import parse_and_merge_bed, parse_cn_file
from .io.output import FrequencyWriter, VariantTableWriter, WindowBedWriter
from .io.panel import flag_panel_variants, parse_panel_frequencies
from .io.vcf import read_variants
from .models.core import Genotype, TriState, VariantFilter
from .utils.logging import setup_logging

app = typer.Typer(help="gtools: genomic coordinate parsing and reconciliation")
console = Console()
logger = logging.getLogger(__name__)


def _settings(verbose: bool) -> GtoolsSettings:
    settings = GtoolsSettings.from_environment(Environment())
    setup_logging(verbose=verbose or settings.verbose, log_file=settings.log_file)
    logger.debug("Settings: %s", settings)
    return settings


def _fail(e: Exception) -> typer.Exit:
    console.print(f"[bold red]Error: {escape(str(e))}[/bold red]")
    return typer.Exit(code=1)


@app.callback()
def main():
    """
    gtools: genomic coordinate parsing and reconciliation
    """
    pass


@app.command()
def version():
    """Print the gtools version."""
    console.print(f"py-gtools {__version__}")


@app.command("merge-bed")
def merge_bed(
    bed_file: Path = typer.Argument(..., help="BED or BEDgraph file"),
    window_size: int | None = typer.Option(
        None, "--window-size", "-k", help="Merged intervals per window (default: GTOOLS_WINDOW_SIZE or 10)"
    ),
    output: Path | None = typer.Option(None, "--output", "-o", help="Output BED file"),
    verbose: bool = typer.Option(False, "--verbose", "-V", help="Enable verbose debug logging"),
):
    """
    Merge the intervals of a BED file and group them into windows.
    """
    try:
        settings = _settings(verbose)
        k = settings.window_size if window_size is None else window_size
        windows = parse_and_merge_bed(settings.resolve(bed_file), k)
    except (GtoolsError, ValueError) as e:
        raise _fail(e) from e

    n_windows = sum(len(w) for w in windows.values())
    if output:
        with WindowBedWriter(output) as writer:
            writer.write_all(windows)
        console.print(f"Wrote [bold]{n_windows}[/bold] windows to {output}")
    else:
        for chrom_windows in windows.values():
            for window in chrom_windows:
                typer.echo(f"{window.span.to_bed()}\t{len(window)}")


@app.command("copy-number")
def copy_number(
    cn_file: Path = typer.Argument(..., help="BEDgraph file of integer copy-number calls"),
    chrom: str | None = typer.Option(None, "--chrom", "-c", help="Only report this chromosome"),
    verbose: bool = typer.Option(False, "--verbose", "-V", help="Enable verbose debug logging"),
):
    """
    Summarize the copy-number calls of a CN file per chromosome.
    """
    try:
        settings = _settings(verbose)
        index = parse_cn_file(settings.resolve(cn_file), chrom=chrom)
    except (GtoolsError, ValueError) as e:
        raise _fail(e) from e

    table = Table(title=f"Copy-number calls in {cn_file.name}")
    table.add_column("Chromosome")
    table.add_column("Calls", justify="right")
    table.add_column("Bases", justify="right")
    table.add_column("Copy numbers")

    # Bases count each distinct interval once, however many calls it carries
    summary: dict[str, tuple[int, int, set[int]]] = {}
    for interval in index.intervals:
        cns = index[interval]
        n_calls, n_bases, values = summary.get(interval.chrom, (0, 0, set()))
        summary[interval.chrom] = (n_calls + len(cns), n_bases + interval.length, values | set(cns))

    for name, (n_calls, n_bases, values) in summary.items():
        table.add_row(name, str(n_calls), str(n_bases), ",".join(str(cn) for cn in sorted(values)))
    console.print(table)


@app.command()
def annotate(
    vcf_files: list[Path] = typer.Argument(..., help="VCF file(s) to annotate"),
    panel: Path = typer.Option(..., "--panel", "-p", help="Reference panel VCF"),
    chrom: str = typer.Option(..., "--chrom", "-c", help="Chromosome to annotate"),
    genotype: Genotype | None = typer.Option(None, "--genotype", "-g", help="Only keep this genotype"),
    db: TriState | None = typer.Option(None, "--db", help="Only keep variants in (true) or not in (false) dbSNP"),
    output: Path | None = typer.Option(None, "--output", "-o", help="Output TSV"),
    threads: int | None = typer.Option(None, "--threads", "-t", help="Files to decode in parallel"),
    verbose: bool = typer.Option(False, "--verbose", "-V", help="Enable verbose debug logging"),
):
    """
    Flag the variants of one chromosome that also appear in a reference panel.
    """
    try:
        settings = _settings(verbose)
        variant_filter = VariantFilter(chrom=chrom, genotype=genotype, db_membership=db)
        variants = read_variants(
            [settings.resolve(p) for p in vcf_files],
            variant_filter,
            n_jobs=threads or settings.threads,
        )
        n_in_panel = flag_panel_variants(variants, settings.resolve(panel), chrom)
    except (GtoolsError, ValueError) as e:
        raise _fail(e) from e

    if output:
        with VariantTableWriter(output) as writer:
            for variant in variants:
                writer.write(variant)
    console.print(
        f"[bold]{n_in_panel}[/bold] of {len(variants)} variants on {chrom} are in the panel"
    )


@app.command()
def frequencies(
    panel_files: list[Path] = typer.Argument(..., help="Reference panel VCF file(s)"),
    output: Path = typer.Option(..., "--output", "-o", help="Output TSV of tag and frequency"),
    threads: int | None = typer.Option(None, "--threads", "-t", help="Files to decode in parallel"),
    verbose: bool = typer.Option(False, "--verbose", "-V", help="Enable verbose debug logging"),
):
    """
    Compute the fraction of panel files reporting each variant.
    """
    try:
        settings = _settings(verbose)
        freqs = parse_panel_frequencies(
            [settings.resolve(p) for p in panel_files], n_jobs=threads or settings.threads
        )
    except (GtoolsError, ValueError) as e:
        raise _fail(e) from e

    with FrequencyWriter(output) as writer:
        writer.write_all(freqs)
    console.print(f"Wrote frequencies of [bold]{len(freqs)}[/bold] variants to {output}")


if __name__ == "__main__":
    app()
