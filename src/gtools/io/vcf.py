"""
VCF reading.

Reads VCF files written by GATK (UnifiedGenotyper, HaplotypeCaller,
including all-positions output) and samtools/bcftools through
pysam.VariantFile. The two callers disagree on how dbSNP membership is
reported, so the field interpretation that differs between them lives in
small dialect classes selected from the file header (or declared by the
caller).

Only bi-allelic SNVs and indels are materialized; multi-allelic,
symbolic and reference-only (ALT '.') records are skipped.
"""

import logging
from collections.abc import Sequence
from pathlib import Path

import pysam

from ..errors import GtoolsError, MalformedLineError
from ..models.core import Genotype, TriState, Variant, VariantFilter
from ..parallel import ParallelProcessor
from .text import open_text

logger = logging.getLogger(__name__)

__all__ = [
    "GatkDialect",
    "SamtoolsDialect",
    "VcfDialect",
    "detect_dialect",
    "parse_genotype",
    "read_variants",
    "read_variants_per_file",
    "read_vcf",
]

MIN_COLUMNS = 8

_HET = {(0, 1), (1, 0)}
_HOM_ALT = {(1, 1)}


def parse_genotype(alleles: tuple[int | None, ...] | None) -> Genotype:
    """Classify a GT allele-index tuple as read by pysam ((0, 1), (None, None) ...)."""
    alleles = tuple(alleles or ())
    if alleles in _HET:
        return Genotype.HET
    if alleles in _HOM_ALT:
        return Genotype.HOM_ALT
    return Genotype.OTHER


class VcfDialect:
    """
    Field interpretation for one family of upstream variant callers.

    Subclasses override the pieces that differ between callers.
    """

    name = "generic"
    header_markers: tuple[str, ...] = ()

    def matches_header(self, line: str) -> bool:
        return line.startswith(self.header_markers)

    def known_db(self, record: pysam.VariantRecord) -> TriState:
        raise NotImplementedError

    def genotype(self, record: pysam.VariantRecord) -> Genotype:
        """Genotype of the first sample; OTHER when there is no GT."""
        if not len(record.samples):
            return Genotype.OTHER
        sample = record.samples[0]
        if "GT" not in sample:
            return Genotype.OTHER
        return parse_genotype(sample["GT"])

    def to_variant(self, record: pysam.VariantRecord) -> Variant | None:
        """
        Build a Variant from one record.

        Returns None for records that are not bi-allelic variants.
        """
        alts = record.alts
        if not alts or len(alts) > 1 or alts[0].startswith("<"):
            return None
        return Variant(
            chrom=record.chrom,
            pos=record.pos,
            ref=record.ref,
            alt=alts[0],
            genotype=self.genotype(record),
            in_known_db=self.known_db(record),
            quality=record.qual,
            variant_id=record.id,
        )

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class GatkDialect(VcfDialect):
    """GATK output: dbSNP hits carry the DB INFO flag and/or an rs ID."""

    name = "gatk"
    header_markers = (
        "##GATKCommandLine",
        "##UnifiedGenotyper",
        "##source=HaplotypeCaller",
        "##source=UnifiedGenotyper",
    )

    def known_db(self, record: pysam.VariantRecord) -> TriState:
        in_db = bool(record.info.get("DB", False))
        return TriState.from_bool(in_db or (record.id or "").startswith("rs"))


class SamtoolsDialect(VcfDialect):
    """samtools/bcftools mpileup output: no DB flag, any ID means dbSNP."""

    name = "samtools"
    header_markers = (
        "##samtoolsVersion",
        "##bcftoolsVersion",
        "##source=samtools",
        "##source=bcftools",
    )

    def known_db(self, record: pysam.VariantRecord) -> TriState:
        return TriState.from_bool(record.id is not None)


DIALECTS: dict[str, VcfDialect] = {d.name: d for d in (GatkDialect(), SamtoolsDialect())}
DEFAULT_DIALECT = DIALECTS["gatk"]


def detect_dialect(header_lines: Sequence[str]) -> VcfDialect:
    """Pick the dialect whose markers appear in the header; GATK otherwise."""
    for line in header_lines:
        for dialect in DIALECTS.values():
            if dialect.matches_header(line):
                return dialect
    return DEFAULT_DIALECT


def _scan_lines(path: Path) -> tuple[list[str], list[int]]:
    """
    Return the header lines of a VCF file and the line numbers of its
    records, checking the column count of every record.
    """
    header: list[str] = []
    record_lines: list[int] = []
    with open_text(path) as handle:
        for line_number, line in enumerate(handle, start=1):
            line = line.rstrip("\r\n")
            if not line:
                continue
            if line.startswith("#") and not record_lines:
                header.append(line)
                continue
            if not header or not header[-1].startswith("#CHROM"):
                raise MalformedLineError(path, line_number, "record before the '#CHROM' header line")
            n_columns = line.count("\t") + 1
            if n_columns < MIN_COLUMNS:
                raise MalformedLineError(
                    path, line_number, f"expected at least {MIN_COLUMNS} columns, got {n_columns}"
                )
            record_lines.append(line_number)
    if not header or not header[-1].startswith("#CHROM"):
        raise MalformedLineError(path, len(header) + 1, "missing '#CHROM' header line")
    return header, record_lines


def read_vcf(
    path: Path | str,
    variant_filter: VariantFilter = VariantFilter(),
    dialect: VcfDialect | str | None = None,
) -> list[Variant]:
    """
    Read the variants of one VCF file.

    Every record is decoded and checked before the filter is applied, so a
    malformed record fails the file whatever the filter.

    Args:
        path: VCF file.
        variant_filter: Records failing the filter are not materialized.
        dialect: Dialect instance or name ('gatk', 'samtools'). Detected
            from the header when None.

    Returns:
        Variants in file order.

    Raises:
        MalformedLineError: On a record that cannot be parsed.
    """
    path = Path(path)
    if isinstance(dialect, str):
        try:
            dialect = DIALECTS[dialect]
        except KeyError:
            raise ValueError(
                f"Unknown VCF dialect '{dialect}'; expected one of {sorted(DIALECTS)}"
            ) from None

    header, record_lines = _scan_lines(path)
    if dialect is None:
        dialect = detect_dialect(header)
        logger.debug("Using %s dialect for %s", dialect.name, path)

    variants: list[Variant] = []
    n_skipped = 0

    try:
        vcf = pysam.VariantFile(str(path))
    except (OSError, ValueError) as e:
        raise MalformedLineError(path, 1, f"not a readable VCF: {e}") from e

    with vcf:
        records = iter(vcf)
        for line_number in record_lines:
            try:
                record = next(records)
            except StopIteration:
                # htslib stops early on some unparseable records
                raise MalformedLineError(path, line_number, "cannot parse record") from None
            except (OSError, ValueError) as e:
                raise MalformedLineError(path, line_number, f"cannot parse record: {e}") from e

            try:
                variant = dialect.to_variant(record)
            except (ValueError, GtoolsError) as e:
                raise MalformedLineError(path, line_number, str(e)) from e

            if variant is None:
                n_skipped += 1
                continue
            if variant_filter.admits(variant):
                variants.append(variant)

    if n_skipped:
        logger.debug("Skipped %d non-biallelic records in %s", n_skipped, path)
    logger.info("Read %d variants from %s", len(variants), path)
    return variants


def _read_one(args: tuple[Path, VariantFilter]) -> list[Variant] | GtoolsError:
    path, variant_filter = args
    try:
        return read_vcf(path, variant_filter)
    except GtoolsError as e:
        return e


def read_variants(
    paths: Sequence[Path | str],
    variant_filter: VariantFilter = VariantFilter(),
    n_jobs: int = 1,
) -> list[Variant]:
    """
    Read several VCF files and concatenate their variants.

    Files are concatenated in argument order, each in file order. Files may
    be decoded in parallel (n_jobs > 1); the result is the same.

    Raises:
        GtoolsError: From the first file that fails. Its `completed`
            attribute holds the variant lists of the files before it.
    """
    return _concatenate(read_variants_per_file(paths, variant_filter, n_jobs))


def read_variants_per_file(
    paths: Sequence[Path | str],
    variant_filter: VariantFilter = VariantFilter(),
    n_jobs: int = 1,
) -> list[list[Variant]]:
    """Like read_variants, but keep one variant list per file."""
    items = [(Path(p), variant_filter) for p in paths]
    if n_jobs == 1 or len(items) <= 1:
        results: list = []
        for item in items:
            result = _read_one(item)
            results.append(result)
            if isinstance(result, GtoolsError):
                break
    else:
        processor = ParallelProcessor(n_jobs=n_jobs)
        results = processor.map(_read_one, items, description="Reading VCFs", show_progress=False)

    per_file: list[list[Variant]] = []
    for result in results:
        if isinstance(result, GtoolsError):
            result.completed = per_file
            raise result
        per_file.append(result)
    return per_file


def _concatenate(per_file: list[list[Variant]]) -> list[Variant]:
    return [variant for variants in per_file for variant in variants]
