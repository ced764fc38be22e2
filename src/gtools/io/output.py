"""
Output Writers: tab-delimited tables for windows, variants and frequencies.
"""

import csv
from collections.abc import Mapping
from pathlib import Path

from ..models.core import Variant, Window


class OutputWriter:
    """Base class for tab-delimited writers."""

    fieldnames: list[str] = []

    def __init__(self, path: Path | str, header: bool = True):
        self.path = Path(path)
        self.file = open(self.path, "w", newline="")
        self.writer = csv.writer(self.file, delimiter="\t", lineterminator="\n")
        if header and self.fieldnames:
            self.writer.writerow(self.fieldnames)

    def close(self):
        self.file.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()


class WindowBedWriter(OutputWriter):
    """Writes windows as BED lines: chrom, span start, span stop, interval count."""

    def __init__(self, path: Path | str):
        super().__init__(path, header=False)

    def write(self, window: Window):
        span = window.span
        self.writer.writerow([span.chrom, span.start, span.stop, len(window)])

    def write_all(self, windows: Mapping[str, list[Window]]):
        for chrom_windows in windows.values():
            for window in chrom_windows:
                self.write(window)


class VariantTableWriter(OutputWriter):
    """Writes variants with their genotype and membership flags."""

    fieldnames = [
        "chrom",
        "pos",
        "id",
        "ref",
        "alt",
        "qual",
        "genotype",
        "in_known_db",
        "in_reference_panel",
    ]

    def write(self, variant: Variant):
        self.writer.writerow(
            [
                variant.chrom,
                variant.pos,
                variant.variant_id or ".",
                variant.ref,
                variant.alt,
                "." if variant.quality is None else f"{variant.quality:g}",
                variant.genotype.value,
                variant.in_known_db.value,
                variant.in_reference_panel.value,
            ]
        )


class FrequencyWriter(OutputWriter):
    """Writes tag / frequency pairs."""

    fieldnames = ["tag", "frequency"]

    def write(self, tag: str, frequency: float):
        self.writer.writerow([tag, f"{frequency:.6g}"])

    def write_all(self, frequencies: Mapping[str, float]):
        for tag, frequency in frequencies.items():
            self.write(tag, frequency)
