"""
Copy-number index: a multi-valued association from interval to CN call.
"""

from collections import defaultdict
from collections.abc import Iterable, Iterator

from intervaltree import IntervalTree

from ..chromosomes import ChromosomeOrder, NATURAL_ORDER
from ..models.core import CopyNumberCall, GenomicInterval


class CopyNumberIndex:
    """
    Copy-number calls keyed by interval.

    The same interval may carry several calls (overlapping source regions),
    so lookups return lists. Iteration yields (interval, copy_number) pairs
    in interval order; calls on equal intervals keep their source order.
    No merging is performed.
    """

    def __init__(
        self,
        calls: Iterable[CopyNumberCall],
        chrom: str | None = None,
        order: ChromosomeOrder = NATURAL_ORDER,
    ):
        self.chrom = chrom
        self._by_interval: dict[GenomicInterval, list[int]] = defaultdict(list)
        for call in calls:
            if chrom is not None and call.interval.chrom != chrom:
                continue
            self._by_interval[call.interval].append(call.copy_number)

        self._intervals = sorted(self._by_interval, key=lambda iv: iv.sort_key(order))
        self._trees: dict[str, IntervalTree] = defaultdict(IntervalTree)
        for interval in self._intervals:
            # Empty intervals cover no position and IntervalTree rejects them
            if interval.length:
                self._trees[interval.chrom].addi(interval.start, interval.stop, interval)

    def __getitem__(self, interval: GenomicInterval) -> list[int]:
        return list(self._by_interval.get(interval, []))

    def __contains__(self, interval: object) -> bool:
        return interval in self._by_interval

    def __iter__(self) -> Iterator[tuple[GenomicInterval, int]]:
        for interval in self._intervals:
            for cn in self._by_interval[interval]:
                yield interval, cn

    def __len__(self) -> int:
        return sum(len(cns) for cns in self._by_interval.values())

    @property
    def intervals(self) -> list[GenomicInterval]:
        """Distinct intervals, sorted."""
        return list(self._intervals)

    @property
    def chromosomes(self) -> list[str]:
        return list(dict.fromkeys(interval.chrom for interval in self._intervals))

    def calls_at(self, chrom: str, position: int) -> list[int]:
        """Copy numbers of every interval covering a 0-based position."""
        tree = self._trees.get(chrom)
        if tree is None:
            return []
        result = []
        for hit in sorted(tree.at(position), key=lambda hit: (hit.begin, hit.end)):
            result.extend(self._by_interval[hit.data])
        return result
