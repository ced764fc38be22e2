"""
gtools - Genomic coordinate parsing and reconciliation.

This package reads BED/BEDgraph, copy-number, VCF and haplotype-matrix
text files into typed models, merges intervals into fixed-count windows,
and matches and aggregates variants across files.

Example usage:
    $ gtools merge-bed regions.bed -k 10 -o windows.bed
    $ gtools frequencies panel1.vcf panel2.vcf -o freqs.tsv
"""

__version__ = "1.0.0"

from .chromosomes import ChromosomeOrder
from .core import (
    CopyNumberIndex,
    aggregate_frequencies,
    merge_by_chromosome,
    merge_intervals,
    partition_windows,
    set_panel_flags,
)
from .errors import (
    GtoolsError,
    InputFileNotFoundError,
    InvalidIntervalError,
    InvalidWindowSizeError,
    MalformedLineError,
    UnknownChromosomeError,
    UnreadableFileError,
)
from .models.core import (
    CopyNumberCall,
    GenomicInterval,
    Genotype,
    TriState,
    ValuedInterval,
    Variant,
    VariantFilter,
    Window,
)

__all__ = [
    "__version__",
    "ChromosomeOrder",
    "CopyNumberCall",
    "CopyNumberIndex",
    "GenomicInterval",
    "Genotype",
    "GtoolsError",
    "InputFileNotFoundError",
    "InvalidIntervalError",
    "InvalidWindowSizeError",
    "MalformedLineError",
    "TriState",
    "UnknownChromosomeError",
    "UnreadableFileError",
    "ValuedInterval",
    "Variant",
    "VariantFilter",
    "Window",
    "aggregate_frequencies",
    "merge_by_chromosome",
    "merge_intervals",
    "partition_windows",
    "set_panel_flags",
]
