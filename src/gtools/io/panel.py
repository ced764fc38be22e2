"""
Reference-panel operations that read their panel from VCF files.
"""

import logging
from collections.abc import Sequence
from pathlib import Path

from ..core.variants import aggregate_frequencies, set_panel_flags
from ..models.core import Variant, VariantFilter
from ..utils.logging import log_call
from .vcf import read_variants_per_file, read_vcf

logger = logging.getLogger(__name__)

__all__ = ["flag_panel_variants", "parse_panel_frequencies"]


@log_call(logger)
def flag_panel_variants(variants: Sequence[Variant], panel_file: Path | str, chrom: str) -> int:
    """
    Set in_reference_panel on `variants` from the panel variants on `chrom`.

    Variants on other chromosomes can never match and end up FALSE.

    Returns:
        Number of variants found in the panel.
    """
    panel = read_vcf(panel_file, VariantFilter(chrom=chrom))
    n_in_panel = set_panel_flags(variants, panel)
    logger.info(
        "%d of %d variants are in the panel %s (%s)",
        n_in_panel,
        len(variants),
        panel_file,
        chrom,
    )
    return n_in_panel


@log_call(logger)
def parse_panel_frequencies(panel_files: Sequence[Path | str], n_jobs: int = 1) -> dict[str, float]:
    """
    Read panel VCFs and report, per variant tag, the fraction of files
    that contain the variant.
    """
    per_file = read_variants_per_file(panel_files, n_jobs=n_jobs)
    frequencies = aggregate_frequencies(per_file)
    logger.info("Computed frequencies of %d variants over %d files", len(frequencies), len(per_file))
    return frequencies
