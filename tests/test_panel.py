"""Tests for panel matching and frequency aggregation."""

import pytest

from conftest import vcf_record, write_vcf
from gtools.core.variants import aggregate_frequencies, set_panel_flags
from gtools.io.panel import flag_panel_variants, parse_panel_frequencies
from gtools.io.vcf import read_vcf
from gtools.models.core import Genotype, TriState, Variant


def variant(chrom, pos, ref, alt, **kwargs):
    return Variant(chrom=chrom, pos=pos, ref=ref, alt=alt, **kwargs)


class TestSetPanelFlags:
    def test_flags_and_count(self):
        primary = [
            variant("chr1", 100, "A", "T", genotype=Genotype.HET, quality=30.0),
            variant("chr1", 200, "C", "G"),
        ]
        before = [v.model_dump(exclude={"in_reference_panel"}) for v in primary]
        panel = [variant("chr1", 100, "A", "T")]

        n = set_panel_flags(primary, panel)

        assert n == 1
        assert primary[0].in_reference_panel is TriState.TRUE
        assert primary[1].in_reference_panel is TriState.FALSE
        assert [v.model_dump(exclude={"in_reference_panel"}) for v in primary] == before

    def test_alleles_must_match(self):
        primary = [variant("chr1", 100, "A", "T"), variant("chr1", 100, "A", "C"), variant("chr2", 100, "A", "T")]
        assert set_panel_flags(primary, [variant("chr1", 100, "A", "T")]) == 1
        assert [v.in_reference_panel for v in primary] == [TriState.TRUE, TriState.FALSE, TriState.FALSE]

    def test_empty_panel_sets_every_flag_false(self):
        primary = [variant("chr1", 100, "A", "T")]
        assert set_panel_flags(primary, []) == 0
        assert primary[0].in_reference_panel is TriState.FALSE

    def test_empty_primary(self):
        assert set_panel_flags([], [variant("chr1", 100, "A", "T")]) == 0


class TestAggregateFrequencies:
    def test_fraction_of_files(self):
        per_file = [
            [variant("chr1", 100, "A", "T")],
            [variant("chr1", 100, "A", "T"), variant("chr1", 300, "G", "C")],
            [variant("chr1", 200, "C", "G")],
        ]
        freqs = aggregate_frequencies(per_file)
        assert freqs["chr1_100_A_T"] == pytest.approx(2 / 3)
        assert freqs["chr1_200_C_G"] == pytest.approx(1 / 3)
        assert freqs["chr1_300_G_C"] == pytest.approx(1 / 3)
        assert all(0.0 <= f <= 1.0 for f in freqs.values())

    def test_duplicates_within_a_file_count_once(self):
        per_file = [[variant("chr1", 100, "A", "T"), variant("chr1", 100, "A", "T")], []]
        assert aggregate_frequencies(per_file) == {"chr1_100_A_T": 0.5}

    def test_different_alleles_are_different_variants(self):
        freqs = aggregate_frequencies([[variant("chr1", 100, "A", "T"), variant("chr1", 100, "A", "G")]])
        assert freqs == {"chr1_100_A_T": 1.0, "chr1_100_A_G": 1.0}

    def test_empty(self):
        assert aggregate_frequencies([]) == {}
        assert aggregate_frequencies([[], []]) == {}


@pytest.fixture
def panel_vcf(temp_dir):
    return write_vcf(
        temp_dir / "panel.vcf",
        [
            vcf_record("chr1", 100, "A", "T", fmt="GT"),
            vcf_record("chr1", 250, "T", "C", fmt="GT"),
            vcf_record("chr2", 300, "T", "TA", fmt="GT"),
        ],
    )


def test_flag_panel_variants_restricts_panel_to_chromosome(gatk_vcf, panel_vcf):
    variants = read_vcf(gatk_vcf)
    n = flag_panel_variants(variants, panel_vcf, "chr1")
    assert n == 1
    assert [v.in_reference_panel for v in variants] == [
        TriState.TRUE,
        TriState.FALSE,
        # chr2 panel records are not loaded when flagging chr1
        TriState.FALSE,
        TriState.FALSE,
    ]


def test_parse_panel_frequencies(temp_dir, panel_vcf):
    other = write_vcf(temp_dir / "other.vcf", [vcf_record("chr1", 100, "A", "T")])
    empty = write_vcf(temp_dir / "empty.vcf", [])
    freqs = parse_panel_frequencies([panel_vcf, other, empty])
    assert freqs["chr1_100_A_T"] == pytest.approx(2 / 3)
    assert freqs["chr2_300_T_TA"] == pytest.approx(1 / 3)
    assert len(freqs) == 3
