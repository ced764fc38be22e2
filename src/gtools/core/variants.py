"""
Cross-file variant reconciliation.

set_panel_flags marks which variants of one call set also appear in a
reference panel; aggregate_frequencies turns several panel files into a
frequency per variant. Both compare variants by identity, the
(chrom, pos, ref, alt) tuple.
"""

import logging
from collections import Counter
from collections.abc import Iterable, Sequence

from ..models.core import TriState, Variant

logger = logging.getLogger(__name__)

__all__ = ["aggregate_frequencies", "set_panel_flags"]


def set_panel_flags(variants: Sequence[Variant], panel: Iterable[Variant]) -> int:
    """
    Set in_reference_panel on every variant according to the panel.

    A variant is flagged TRUE when the panel holds a record with the same
    (chrom, pos, ref, alt), FALSE otherwise. Variants are modified in place;
    their order and all other fields are left untouched.

    Args:
        variants: Primary call set.
        panel: Reference panel variants.

    Returns:
        Number of variants flagged TRUE.
    """
    panel_keys = {v.key for v in panel}

    n_in_panel = 0
    for variant in variants:
        found = variant.key in panel_keys
        variant.in_reference_panel = TriState.from_bool(found)
        n_in_panel += found

    logger.debug(
        "%d of %d variants found in a panel of %d variants",
        n_in_panel,
        len(variants),
        len(panel_keys),
    )
    return n_in_panel


def aggregate_frequencies(per_file: Sequence[Iterable[Variant]]) -> dict[str, float]:
    """
    Compute the fraction of panel files reporting each variant.

    Frequency = (number of files containing the variant) / (number of files).
    A variant listed more than once in the same file counts once for it.

    Args:
        per_file: One variant collection per panel file.

    Returns:
        Variant tag ('chrom_pos_ref_alt') to frequency in [0, 1], in order of
        first appearance.
    """
    n_files = len(per_file)
    if n_files == 0:
        return {}

    counts: Counter[str] = Counter()
    for variants in per_file:
        counts.update(list(dict.fromkeys(v.tag for v in variants)))

    return {tag: n / n_files for tag, n in counts.items()}
