"""
BED, BEDgraph and copy-number file parsers.

All three formats share the same layout: whitespace-delimited columns
chrom, start, stop (0-based, half-open), optionally followed by a value
column. Comment ('#'), 'track' and 'browser' lines are skipped.
"""

import logging
from pathlib import Path

from ..chromosomes import ChromosomeOrder, NATURAL_ORDER
from ..core.copy_number import CopyNumberIndex
from ..core.intervals import merge_by_chromosome, partition_windows
from ..errors import GtoolsError, InvalidWindowSizeError, MalformedLineError
from ..models.core import CopyNumberCall, GenomicInterval, ValuedInterval, Window
from ..utils.logging import timed
from .text import iter_fields, open_text

logger = logging.getLogger(__name__)

__all__ = ["parse_and_merge_bed", "parse_bed", "parse_bedgraph", "parse_cn_file"]

_SKIP_PREFIXES = ("#", "track", "browser")


def _read_rows(path: Path, min_columns: int):
    """
    Yield (line number, interval, fields) for every data line.

    Rows are validated here, before callers apply a chromosome filter, so a
    malformed line fails the file whatever the filter.
    """
    with open_text(path) as handle:
        for line_number, fields in iter_fields(handle, _SKIP_PREFIXES):
            if len(fields) < min_columns:
                raise MalformedLineError(
                    path, line_number, f"expected at least {min_columns} columns, got {len(fields)}"
                )
            try:
                interval = GenomicInterval(
                    chrom=fields[0], start=int(fields[1]), stop=int(fields[2])
                )
            except (ValueError, GtoolsError) as e:
                raise MalformedLineError(path, line_number, f"bad interval: {e}") from e
            yield line_number, interval, fields


def parse_bed(path: Path | str, chrom: str | None = None) -> list[GenomicInterval]:
    """
    Parse a BED/BEDgraph file into intervals (first three columns).

    Args:
        path: BED file.
        chrom: If given, only return intervals on this chromosome.
    """
    path = Path(path)
    intervals = [
        interval
        for _, interval, _ in _read_rows(path, 3)
        if chrom is None or interval.chrom == chrom
    ]
    logger.info("Read %d intervals from %s", len(intervals), path)
    return intervals


def parse_bedgraph(path: Path | str, chrom: str | None = None) -> list[ValuedInterval]:
    """Like parse_bed, but keep the float value in column 4."""
    path = Path(path)
    result = []
    for line_number, interval, fields in _read_rows(path, 4):
        try:
            value = float(fields[3])
        except ValueError as e:
            raise MalformedLineError(path, line_number, f"bad value '{fields[3]}'") from e
        if chrom is None or interval.chrom == chrom:
            result.append(ValuedInterval(interval=interval, value=value))
    logger.info("Read %d BEDgraph records from %s", len(result), path)
    return result


def parse_cn_file(
    path: Path | str, chrom: str | None = None, order: ChromosomeOrder = NATURAL_ORDER
) -> CopyNumberIndex:
    """
    Parse a BEDgraph-style copy-number profile.

    Column 4 must hold a non-negative integer copy number. Calls are not
    merged; an interval listed twice keeps both calls.
    """
    path = Path(path)
    calls = []
    for line_number, interval, fields in _read_rows(path, 4):
        try:
            call = CopyNumberCall(interval=interval, copy_number=int(fields[3]))
        except ValueError as e:
            # pydantic's ValidationError is a ValueError too
            raise MalformedLineError(path, line_number, f"bad copy number '{fields[3]}'") from e
        calls.append(call)
    index = CopyNumberIndex(calls, chrom=chrom, order=order)
    logger.info("Read %d copy-number calls from %s", len(index), path)
    return index


def parse_and_merge_bed(
    path: Path | str, window_size: int, order: ChromosomeOrder = NATURAL_ORDER
) -> dict[str, list[Window]]:
    """
    Parse a BED file, merge its intervals per chromosome, and group the
    merged intervals into windows of `window_size`.

    Returns:
        Chromosome name to windows, chromosomes in `order`.
    """
    if isinstance(window_size, bool) or not isinstance(window_size, int) or window_size <= 0:
        raise InvalidWindowSizeError(window_size)

    with timed(f"Merging {path}", logger):
        merged = merge_by_chromosome(parse_bed(path), order)
        windows = partition_windows(merged, window_size)

    logger.info(
        "Merged %s into %d intervals and %d windows over %d chromosomes",
        path,
        sum(len(v) for v in merged.values()),
        sum(len(v) for v in windows.values()),
        len(windows),
    )
    return windows
