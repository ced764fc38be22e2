"""
Core module for gtools.

Provides interval merging and windowing, the copy-number index, and
cross-file variant matching and frequency aggregation.
"""

from .copy_number import CopyNumberIndex
from .intervals import group_by_chromosome, merge_by_chromosome, merge_intervals, partition_windows
from .variants import aggregate_frequencies, set_panel_flags

__all__ = [
    "CopyNumberIndex",
    "aggregate_frequencies",
    "group_by_chromosome",
    "merge_by_chromosome",
    "merge_intervals",
    "partition_windows",
    "set_panel_flags",
]
