"""
Core data models for gtools.
"""

from enum import Enum
from functools import total_ordering

from pydantic import BaseModel, ConfigDict, Field, model_validator

from ..chromosomes import ChromosomeOrder, NATURAL_ORDER
from ..errors import InvalidIntervalError


class TriState(str, Enum):
    """
    A flag that distinguishes "not yet checked" from a definite answer.
    """
    UNKNOWN = "unknown"
    TRUE = "true"
    FALSE = "false"

    @classmethod
    def from_bool(cls, value: bool) -> "TriState":
        return cls.TRUE if value else cls.FALSE

    @property
    def is_known(self) -> bool:
        return self is not TriState.UNKNOWN


class Genotype(str, Enum):
    """Genotype class of a called variant."""
    HET = "het"
    HOM_ALT = "hom_alt"
    OTHER = "other"


@total_ordering
class GenomicInterval(BaseModel):
    """
    Represents a 0-based, half-open genomic interval [start, stop).

    Intervals are ordered by chromosome (natural order, so chr2 < chr10),
    then start, then stop. Use sort_key() to order by an explicit
    ChromosomeOrder instead.
    """
    model_config = ConfigDict(frozen=True)

    chrom: str
    start: int = Field(ge=0, description="0-based start position (inclusive)")
    stop: int = Field(ge=0, description="0-based stop position (exclusive)")

    @model_validator(mode="after")
    def validate_interval(self) -> "GenomicInterval":
        if self.start > self.stop:
            raise InvalidIntervalError(self.chrom, self.start, self.stop)
        return self

    @classmethod
    def parse(cls, region: str) -> "GenomicInterval":
        """Build an interval from a 'chrom:start-stop' region string."""
        chrom, sep, coords = region.rpartition(":")
        start, dash, stop = coords.partition("-")
        if not sep or not dash:
            raise ValueError(f"Region must look like chrom:start-stop, got '{region}'")
        return cls(chrom=chrom, start=int(start.replace(",", "")), stop=int(stop.replace(",", "")))

    @property
    def length(self) -> int:
        return self.stop - self.start

    def sort_key(self, order: ChromosomeOrder = NATURAL_ORDER) -> tuple:
        return (order.key(self.chrom), self.start, self.stop)

    def overlaps(self, other: "GenomicInterval") -> bool:
        """True if both intervals share at least one base."""
        if self.chrom != other.chrom:
            return False
        return self.start < other.stop and other.start < self.stop

    def abuts(self, other: "GenomicInterval") -> bool:
        """True if the intervals are book-ended, e.g. [10, 20) and [20, 30)."""
        if self.chrom != other.chrom:
            return False
        return self.stop == other.start or other.stop == self.start

    def contains(self, position: int) -> bool:
        """Check if a 0-based position falls within this interval."""
        return self.start <= position < self.stop

    def to_bed(self) -> str:
        return f"{self.chrom}\t{self.start}\t{self.stop}"

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, GenomicInterval):
            return NotImplemented
        return self.sort_key() < other.sort_key()

    def __str__(self) -> str:
        return f"{self.chrom}:{self.start}-{self.stop}"


class ValuedInterval(BaseModel):
    """An interval with the numeric value from column 4 of a BEDgraph file."""
    model_config = ConfigDict(frozen=True)

    interval: GenomicInterval
    value: float


class CopyNumberCall(BaseModel):
    """An interval with an integer copy-number call."""
    model_config = ConfigDict(frozen=True)

    interval: GenomicInterval
    copy_number: int = Field(ge=0)


class Window(BaseModel):
    """
    A run of consecutive merged intervals on one chromosome.
    """
    model_config = ConfigDict(frozen=True)

    chrom: str
    intervals: list[GenomicInterval] = Field(min_length=1)

    @model_validator(mode="after")
    def validate_window(self) -> "Window":
        for interval in self.intervals:
            if interval.chrom != self.chrom:
                raise ValueError(
                    f"Interval {interval} does not belong to window chromosome {self.chrom}"
                )
        return self

    @property
    def span(self) -> GenomicInterval:
        """The interval from the first start to the last stop."""
        return GenomicInterval(
            chrom=self.chrom, start=self.intervals[0].start, stop=self.intervals[-1].stop
        )

    @property
    def covered_bases(self) -> int:
        return sum(interval.length for interval in self.intervals)

    def __len__(self) -> int:
        return len(self.intervals)


class Variant(BaseModel):
    """
    A called variant parsed from a VCF line.

    Identity is (chrom, pos, ref, alt); two records with equal identity refer
    to the same variant even when parsed from different files. The membership
    flags start UNKNOWN and are only ever set by the panel matcher.
    """
    chrom: str
    pos: int = Field(ge=1, description="1-based VCF position")
    ref: str = Field(min_length=1)
    alt: str = Field(min_length=1)
    genotype: Genotype = Genotype.OTHER
    in_reference_panel: TriState = TriState.UNKNOWN
    in_known_db: TriState = TriState.UNKNOWN
    quality: float | None = None

    # Original input metadata (optional)
    variant_id: str | None = None

    @property
    def key(self) -> tuple[str, int, str, str]:
        return (self.chrom, self.pos, self.ref, self.alt)

    @property
    def tag(self) -> str:
        """Canonical tag, e.g. 'chr1_100_A_T'."""
        return variant_tag(*self.key)


TAG_SEPARATOR = "_"


def variant_tag(chrom: str, pos: int, ref: str, alt: str) -> str:
    return TAG_SEPARATOR.join((chrom, str(pos), ref, alt))


class VariantFilter(BaseModel):
    """
    Predicate applied while parsing variants.

    Every criterion that is set must hold; unset criteria admit everything.
    The default filter admits all records.
    """
    model_config = ConfigDict(frozen=True)

    chrom: str | None = None
    genotype: Genotype | None = None
    db_membership: TriState | None = None

    def admits(self, variant: Variant) -> bool:
        if self.chrom is not None and variant.chrom != self.chrom:
            return False
        if self.genotype is not None and variant.genotype != self.genotype:
            return False
        if self.db_membership is not None and variant.in_known_db != self.db_membership:
            return False
        return True
