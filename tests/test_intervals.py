"""Tests for interval merging and window partitioning."""

import pytest

from gtools.chromosomes import ChromosomeOrder
from gtools.core.intervals import merge_by_chromosome, merge_intervals, partition_windows
from gtools.errors import InvalidWindowSizeError, UnknownChromosomeError
from gtools.models.core import GenomicInterval


def iv(chrom, start, stop):
    return GenomicInterval(chrom=chrom, start=start, stop=stop)


class TestMergeIntervals:
    def test_overlapping_coalesce_disjoint_stay_apart(self):
        merged = merge_intervals([iv("chr1", 30, 40), iv("chr1", 15, 25), iv("chr1", 10, 20)])
        assert merged == [iv("chr1", 10, 25), iv("chr1", 30, 40)]

    def test_book_ended_intervals_merge(self):
        assert merge_intervals([iv("chr1", 10, 20), iv("chr1", 20, 30)]) == [iv("chr1", 10, 30)]

    def test_one_base_gap_is_preserved(self):
        intervals = [iv("chr1", 10, 20), iv("chr1", 21, 30)]
        assert merge_intervals(intervals) == intervals

    def test_nested_collapse_into_outer(self):
        merged = merge_intervals([iv("chr1", 10, 100), iv("chr1", 20, 30), iv("chr1", 50, 60)])
        assert merged == [iv("chr1", 10, 100)]

    def test_contained_interval_does_not_shrink_span(self):
        merged = merge_intervals([iv("chr1", 0, 50), iv("chr1", 10, 20), iv("chr1", 45, 60)])
        assert merged == [iv("chr1", 0, 60)]

    def test_empty_and_single(self):
        assert merge_intervals([]) == []
        assert merge_intervals([iv("chr1", 5, 9)]) == [iv("chr1", 5, 9)]

    def test_idempotent(self):
        merged = merge_intervals([iv("chr1", 1, 5), iv("chr1", 3, 8), iv("chr1", 20, 30), iv("chr1", 40, 41)])
        assert merge_intervals(merged) == merged

    def test_mixed_chromosomes_rejected(self):
        with pytest.raises(ValueError):
            merge_intervals([iv("chr1", 1, 5), iv("chr2", 3, 8)])


def test_merge_by_chromosome_orders_chromosomes_naturally():
    merged = merge_by_chromosome(
        [iv("chr10", 0, 5), iv("chr2", 10, 20), iv("chr2", 15, 30), iv("chr1", 7, 9)]
    )
    assert list(merged) == ["chr1", "chr2", "chr10"]
    assert merged["chr2"] == [iv("chr2", 10, 30)]


def test_merge_by_chromosome_explicit_order():
    order = ChromosomeOrder(["chr2", "chr1"])
    assert list(merge_by_chromosome([iv("chr1", 0, 1), iv("chr2", 0, 1)], order)) == ["chr2", "chr1"]
    with pytest.raises(UnknownChromosomeError):
        merge_by_chromosome([iv("chr3", 0, 1)], order)


class TestPartitionWindows:
    def setup_method(self):
        self.merged = [iv("chr1", i * 10, i * 10 + 5) for i in range(7)]

    def test_remainder_goes_in_last_window(self):
        windows = partition_windows({"chr1": self.merged}, 3)
        assert [len(w) for w in windows["chr1"]] == [3, 3, 1]
        assert [i for w in windows["chr1"] for i in w.intervals] == self.merged

    def test_exact_multiple(self):
        windows = partition_windows({"chr1": self.merged[:6]}, 2)
        assert [len(w) for w in windows["chr1"]] == [2, 2, 2]

    def test_window_larger_than_input(self):
        windows = partition_windows({"chr1": self.merged}, 100)
        assert len(windows["chr1"]) == 1
        assert windows["chr1"][0].span == iv("chr1", 0, 65)

    def test_chromosomes_are_independent(self):
        merged = {"chr1": self.merged, "chr2": [iv("chr2", 0, 1), iv("chr2", 5, 6)]}
        windows = partition_windows(merged, 3)
        assert list(windows) == ["chr1", "chr2"]
        assert [len(w) for w in windows["chr2"]] == [2]
        assert all(w.chrom == "chr2" for w in windows["chr2"])

    @pytest.mark.parametrize("k", [0, -1, -10])
    def test_non_positive_window_size(self, k):
        with pytest.raises(InvalidWindowSizeError):
            partition_windows({"chr1": self.merged}, k)

    def test_empty_input(self):
        assert partition_windows({}, 3) == {}
        assert partition_windows({"chr1": []}, 3) == {"chr1": []}
