"""
Result models for the haplotype-matrix parsers.

Each parser returns one of these fully populated, or raises.
"""

from pydantic import BaseModel, ConfigDict, Field

from .core import GenomicInterval, TriState


class SimHapMatrix(BaseModel):
    """
    Simulated clone-call data.

    frag_data[i] holds the calls ('0', '1' or '-') of fragment i starting at
    locus frag_offsets[i]; frag_truth[i] says which haplotype the fragment
    truly came from, when known. loci_truth is the true haplotype over all
    loci.
    """
    model_config = ConfigDict(frozen=True)

    n_clones: int = Field(ge=0)
    n_loci: int = Field(ge=0)
    frag_size: int = Field(ge=0)
    frag_data: list[str]
    frag_offsets: list[int]
    frag_truth: list[TriState]
    loci_truth: str

    @property
    def n_frags(self) -> int:
        return len(self.frag_data)


class RealHapMatrix(BaseModel):
    """
    Real clone-call data.

    var_calls maps a variant tag to (clone index, is homozygous) pairs.
    clone_calls[i] maps locus index to the call string seen on clone i;
    clone_intervals[i] and clone_qscores[i] describe the same clone.
    """
    model_config = ConfigDict(frozen=True)

    n_frags: int = Field(ge=0)
    n_loci: int = Field(ge=0)
    var_calls: dict[str, list[tuple[int, bool]]]
    clone_calls: list[dict[int, str]]
    clone_intervals: list[GenomicInterval]
    clone_qscores: list[float]
