"""
Interval merging and windowing.

Intervals are 0-based and half-open. Two intervals on the same chromosome
are merged when they overlap or are book-ended ([10, 20) and [20, 30) merge
into [10, 30)); a gap of one base or more keeps them apart.
"""

import logging
from collections import defaultdict
from collections.abc import Iterable, Mapping

from ..chromosomes import ChromosomeOrder, NATURAL_ORDER
from ..errors import InvalidWindowSizeError
from ..models.core import GenomicInterval, Window

logger = logging.getLogger(__name__)

__all__ = [
    "group_by_chromosome",
    "merge_by_chromosome",
    "merge_intervals",
    "partition_windows",
]


def merge_intervals(intervals: Iterable[GenomicInterval]) -> list[GenomicInterval]:
    """
    Merge intervals on a single chromosome into maximal disjoint spans.

    Args:
        intervals: Intervals, in any order, all on the same chromosome.

    Returns:
        Merged intervals sorted by start. Gaps between input intervals are
        preserved; nested intervals collapse into the outer one.

    Raises:
        ValueError: If the intervals span more than one chromosome.
    """
    ordered = sorted(intervals, key=lambda iv: (iv.start, iv.stop))
    if not ordered:
        return []

    chrom = ordered[0].chrom
    merged: list[GenomicInterval] = []
    run_start, run_stop = ordered[0].start, ordered[0].stop

    for interval in ordered[1:]:
        if interval.chrom != chrom:
            raise ValueError(
                f"merge_intervals expects one chromosome, got {chrom} and {interval.chrom}"
            )
        if interval.start <= run_stop:
            run_stop = max(run_stop, interval.stop)
        else:
            merged.append(GenomicInterval(chrom=chrom, start=run_start, stop=run_stop))
            run_start, run_stop = interval.start, interval.stop

    merged.append(GenomicInterval(chrom=chrom, start=run_start, stop=run_stop))
    return merged


def group_by_chromosome(
    intervals: Iterable[GenomicInterval], order: ChromosomeOrder = NATURAL_ORDER
) -> dict[str, list[GenomicInterval]]:
    """Group intervals by chromosome; keys follow `order`, values keep input order."""
    groups: dict[str, list[GenomicInterval]] = defaultdict(list)
    for interval in intervals:
        groups[interval.chrom].append(interval)
    return {chrom: groups[chrom] for chrom in order.sorted(groups)}


def merge_by_chromosome(
    intervals: Iterable[GenomicInterval], order: ChromosomeOrder = NATURAL_ORDER
) -> dict[str, list[GenomicInterval]]:
    """Group intervals by chromosome and merge each group."""
    return {
        chrom: merge_intervals(group)
        for chrom, group in group_by_chromosome(intervals, order).items()
    }


def partition_windows(
    merged: Mapping[str, list[GenomicInterval]], window_size: int
) -> dict[str, list[Window]]:
    """
    Split each chromosome's merged intervals into windows of `window_size`.

    Every chromosome is handled independently: its intervals are grouped
    into runs of `window_size` consecutive intervals, the last window
    holding whatever remains. Concatenating a chromosome's windows gives
    back its merged intervals unchanged.

    Args:
        merged: Chromosome name to merged, start-sorted intervals.
        window_size: Number of intervals per window.

    Returns:
        Chromosome name to windows, keys in the same order as `merged`.

    Raises:
        InvalidWindowSizeError: If window_size is not positive.
    """
    if isinstance(window_size, bool) or not isinstance(window_size, int) or window_size <= 0:
        raise InvalidWindowSizeError(window_size)

    windows: dict[str, list[Window]] = {}
    for chrom, intervals in merged.items():
        windows[chrom] = [
            Window(chrom=chrom, intervals=intervals[i : i + window_size])
            for i in range(0, len(intervals), window_size)
        ]
        logger.debug(
            "%s: %d merged intervals -> %d windows", chrom, len(intervals), len(windows[chrom])
        )
    return windows
