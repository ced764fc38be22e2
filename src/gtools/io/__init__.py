"""
I/O module for gtools.

Provides parsers for BED/BEDgraph/CN, VCF and haplotype-matrix files, and
tab-delimited writers for the results.
"""

from .bed import parse_and_merge_bed, parse_bed, parse_bedgraph, parse_cn_file
from .hapmatrix import parse_real_hap_matrix, parse_sim_hap_matrix
from .output import FrequencyWriter, OutputWriter, VariantTableWriter, WindowBedWriter
from .panel import flag_panel_variants, parse_panel_frequencies
from .vcf import (
    GatkDialect,
    SamtoolsDialect,
    VcfDialect,
    detect_dialect,
    read_variants,
    read_variants_per_file,
    read_vcf,
)

__all__ = [
    "FrequencyWriter",
    "GatkDialect",
    "OutputWriter",
    "SamtoolsDialect",
    "VariantTableWriter",
    "VcfDialect",
    "WindowBedWriter",
    "detect_dialect",
    "flag_panel_variants",
    "parse_and_merge_bed",
    "parse_bed",
    "parse_bedgraph",
    "parse_cn_file",
    "parse_panel_frequencies",
    "parse_real_hap_matrix",
    "parse_sim_hap_matrix",
    "read_variants",
    "read_variants_per_file",
    "read_vcf",
]
