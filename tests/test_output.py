"""Tests for the tab-delimited writers."""

import csv

from gtools.core.intervals import partition_windows
from gtools.io.output import FrequencyWriter, VariantTableWriter, WindowBedWriter
from gtools.models.core import GenomicInterval, Genotype, TriState, Variant


def test_window_bed_writer(temp_dir):
    merged = {"chr1": [GenomicInterval(chrom="chr1", start=i * 10, stop=i * 10 + 5) for i in range(3)]}
    windows = partition_windows(merged, 2)
    output = temp_dir / "windows.bed"
    with WindowBedWriter(output) as writer:
        writer.write_all(windows)
    assert output.read_text() == "chr1\t0\t15\t2\nchr1\t20\t25\t1\n"


def test_variant_table_writer(temp_dir):
    output = temp_dir / "variants.tsv"
    variants = [
        Variant(chrom="chr1", pos=100, ref="A", alt="T", genotype=Genotype.HET, quality=50.0,
                variant_id="rs1", in_known_db=TriState.TRUE, in_reference_panel=TriState.FALSE),
        Variant(chrom="chr1", pos=200, ref="C", alt="G"),
    ]
    with VariantTableWriter(output) as writer:
        for v in variants:
            writer.write(v)

    with open(output) as f:
        rows = list(csv.DictReader(f, delimiter="\t"))
    assert rows[0]["id"] == "rs1"
    assert rows[0]["qual"] == "50"
    assert rows[0]["genotype"] == "het"
    assert rows[0]["in_known_db"] == "true"
    assert rows[0]["in_reference_panel"] == "false"
    assert rows[1]["id"] == "."
    assert rows[1]["qual"] == "."
    assert rows[1]["in_reference_panel"] == "unknown"


def test_frequency_writer(temp_dir):
    output = temp_dir / "freqs.tsv"
    with FrequencyWriter(output) as writer:
        writer.write_all({"chr1_100_A_T": 2 / 3, "chr1_200_C_G": 1.0})
    assert output.read_text().splitlines() == [
        "tag\tfrequency",
        "chr1_100_A_T\t0.666667",
        "chr1_200_C_G\t1",
    ]
