"""
Chromosome ordering.

Chromosome names are not ordered lexically ("chr2" must sort before
"chr10"). ChromosomeOrder ranks names either by an explicit table supplied
by the caller, or by the natural order: numbered chromosomes numerically,
then X, Y, then the mitochondrial chromosome, then any other contig by name.
"""

import re
from collections.abc import Iterable

from .errors import UnknownChromosomeError

__all__ = ["NATURAL_ORDER", "ChromosomeOrder", "natural_chrom_key", "strip_chr_prefix"]

_SEX_AND_MITO = {"X": 1, "Y": 2, "M": 3, "MT": 3}


def strip_chr_prefix(chrom: str) -> str:
    """Remove a leading 'chr' prefix (case-insensitive)."""
    return re.sub(r"^chr", "", chrom, flags=re.IGNORECASE)


def natural_chrom_key(chrom: str) -> tuple[int, int, str]:
    """
    Sort key for the natural chromosome order.

    Returns a (group, rank, name) tuple: group 0 holds numbered chromosomes
    ranked by number, group 1 holds X/Y/M, group 2 everything else by name.
    """
    base = strip_chr_prefix(chrom)
    if base.isdigit():
        return (0, int(base), chrom)
    upper = base.upper()
    if upper in _SEX_AND_MITO:
        return (1, _SEX_AND_MITO[upper], chrom)
    return (2, 0, chrom)


class ChromosomeOrder:
    """
    Ranks chromosome names.

    Without a table, the natural order is used and every name is accepted.
    With a table, names are ranked by their position in it and names missing
    from it raise UnknownChromosomeError.
    """

    def __init__(self, names: Iterable[str] | None = None):
        self._rank: dict[str, int] | None = None
        if names is not None:
            self._rank = {}
            for name in names:
                self._rank.setdefault(name, len(self._rank))

    def key(self, chrom: str) -> tuple:
        if self._rank is None:
            return natural_chrom_key(chrom)
        try:
            return (self._rank[chrom],)
        except KeyError:
            raise UnknownChromosomeError(chrom) from None

    def sorted(self, chroms: Iterable[str]) -> list[str]:
        """Return the distinct chromosome names in this order."""
        return sorted(set(chroms), key=self.key)

    def __repr__(self) -> str:
        if self._rank is None:
            return "ChromosomeOrder(natural)"
        return f"ChromosomeOrder({list(self._rank)})"


NATURAL_ORDER = ChromosomeOrder()
