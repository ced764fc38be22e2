"""Pytest configuration and fixtures."""

import sys
import tempfile
from collections.abc import Generator
from pathlib import Path

import pytest

# Add src directory to path so tests use local code, not installed package
project_root = Path(__file__).parent.parent
src_dir = project_root / "src"
if str(src_dir) not in sys.path:
    sys.path.insert(0, str(src_dir))

VCF_COLUMNS = "#CHROM\tPOS\tID\tREF\tALT\tQUAL\tFILTER\tINFO\tFORMAT\tSAMPLE1"

VCF_FIELDS = [
    '##FILTER=<ID=PASS,Description="All filters passed">',
    '##INFO=<ID=DB,Number=0,Type=Flag,Description="dbSNP membership">',
    '##INFO=<ID=DP,Number=1,Type=Integer,Description="Total depth">',
    '##INFO=<ID=DP4,Number=4,Type=Integer,Description="Strand-specific depths">',
    '##FORMAT=<ID=GT,Number=1,Type=String,Description="Genotype">',
    '##FORMAT=<ID=DP,Number=1,Type=Integer,Description="Read depth">',
    '##FORMAT=<ID=GQ,Number=1,Type=Integer,Description="Genotype quality">',
    '##FORMAT=<ID=PL,Number=G,Type=Integer,Description="Phred-scaled likelihoods">',
    "##contig=<ID=chr1>",
    "##contig=<ID=chr2>",
]


def write_vcf(path: Path, records: list[str], meta: list[str] | None = None) -> Path:
    """Write a VCF with the given meta lines and tab-joined data records."""
    lines = ["##fileformat=VCFv4.1"] + VCF_FIELDS + (meta or []) + [VCF_COLUMNS] + records
    path.write_text("\n".join(lines) + "\n")
    return path


def vcf_record(chrom, pos, ref, alt, gt="0/1", vid=".", qual="50", info=".", fmt="GT:DP"):
    sample = ":".join(gt if key == "GT" else "12" for key in fmt.split(":"))
    return "\t".join([chrom, str(pos), vid, ref, alt, qual, "PASS", info, fmt, sample])


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def sample_bed(temp_dir: Path) -> Path:
    """BED file with overlapping intervals on three chromosomes, out of order."""
    bed = temp_dir / "regions.bed"
    bed.write_text(
        "track name=regions\n"
        "# comment\n"
        "chr10\t100\t200\n"
        "chr2\t10\t20\n"
        "chr2\t15\t25\n"
        "chr2\t30\t40\n"
        "chr2\t40\t50\n"
        "chr2\t60\t70\n"
        "\n"
        "chrX\t5\t6\n"
        "chr10\t150\t300\n"
    )
    return bed


@pytest.fixture
def sample_bedgraph(temp_dir: Path) -> Path:
    bedgraph = temp_dir / "signal.bedgraph"
    bedgraph.write_text("chr1\t0\t100\t0.5\nchr1\t100\t200\t-1.25\nchr2\t0\t50\t3\n")
    return bedgraph


@pytest.fixture
def sample_cn(temp_dir: Path) -> Path:
    cn = temp_dir / "cn.bedgraph"
    cn.write_text(
        "chr2\t0\t1000\t2\n"
        "chr1\t500\t1500\t3\n"
        "chr1\t0\t1000\t2\n"
        "chr1\t500\t1500\t4\n"
    )
    return cn


@pytest.fixture
def gatk_vcf(temp_dir: Path) -> Path:
    return write_vcf(
        temp_dir / "gatk.vcf",
        [
            vcf_record("chr1", 100, "A", "T", gt="0/1", vid="rs1", info="DB;DP=20"),
            vcf_record("chr1", 150, "G", ".", gt="0/0"),
            vcf_record("chr1", 200, "C", "G", gt="1/1", info="DP=18"),
            vcf_record("chr1", 250, "C", "G,T", gt="1/2"),
            vcf_record("chr2", 300, "T", "TA", gt="0|1", info="DB"),
            vcf_record("chr2", 400, "G", "A", gt="./.", qual="."),
        ],
        meta=['##GATKCommandLine=<ID=HaplotypeCaller,Version=3.8>'],
    )


@pytest.fixture
def samtools_vcf(temp_dir: Path) -> Path:
    return write_vcf(
        temp_dir / "samtools.vcf",
        [
            vcf_record("chr1", 100, "A", "T", gt="1/1", vid="rs1", info="DP=9;DP4=0,0,4,5", fmt="PL:GT:GQ"),
            vcf_record("chr1", 300, "G", "C", gt="0/1", info="DB;DP=9", fmt="PL:GT:GQ"),
        ],
        meta=["##samtoolsVersion=0.1.19-44428cd"],
    )
