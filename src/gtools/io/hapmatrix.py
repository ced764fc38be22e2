"""
Haplotype-matrix parsers.

Two line formats describe clone (fragment) calls over a set of loci.

Simulated matrix::

    N_CLONES 2
    N_LOCI 6
    FRAG_SIZE 3
    LOCI_TRUTH 010110
    0	010	1
    3	1-0	?

Each fragment line is offset<TAB>calls<TAB>truth, calls being a string
over '0', '1' and '-' and truth '0', '1' or '?' (unknown). FRAG_SIZE is
an upper bound on the length of a fragment's call string.

Real matrix::

    N_FRAGS 2
    N_LOCI 3
    VAR chr1_100_A_T 0:h,1:m
    CLONE 0 chr1 50 2000 37.5 0:A,1:T
    CLONE 1 chr1 900 4000 41.0 1:T,2:G

VAR lines list the clones calling a variant, 'h' for a heterozygous call,
'm' for a homozygous one. CLONE lines give a clone's index, interval,
quality score and per-locus calls. Every clone 0..N_FRAGS-1 must appear
exactly once.
"""

import logging
from pathlib import Path

from ..errors import GtoolsError, MalformedLineError
from ..models.core import GenomicInterval, TriState
from ..models.hapmatrix import RealHapMatrix, SimHapMatrix
from ..utils.logging import log_call
from .text import iter_fields, open_text

logger = logging.getLogger(__name__)

__all__ = ["parse_real_hap_matrix", "parse_sim_hap_matrix"]

_CALL_CHARS = set("01-")
_TRUTH = {"0": TriState.FALSE, "1": TriState.TRUE, "?": TriState.UNKNOWN}
_ZYGOSITY = {"h": False, "m": True}


def _header_int(path: Path, line_number: int, fields: list[str]) -> int:
    if len(fields) != 2:
        raise MalformedLineError(path, line_number, f"expected '{fields[0]} <n>'")
    try:
        value = int(fields[1])
    except ValueError:
        raise MalformedLineError(path, line_number, f"{fields[0]} is not an integer") from None
    if value < 0:
        raise MalformedLineError(path, line_number, f"{fields[0]} must be >= 0")
    return value


def _require(path: Path, header: dict[str, int | str], keys: tuple[str, ...]) -> None:
    missing = [k for k in keys if k not in header]
    if missing:
        raise MalformedLineError(path, 0, f"missing header line(s): {', '.join(missing)}")


@log_call(logger)
def parse_sim_hap_matrix(path: Path | str) -> SimHapMatrix:
    """
    Parse a matrix of simulated clone calls.

    Raises:
        MalformedLineError: On a bad line, a missing header, or when the
            fragment count or extents disagree with the header.
    """
    path = Path(path)
    header: dict[str, int | str] = {}
    frag_data: list[str] = []
    frag_offsets: list[int] = []
    frag_truth: list[TriState] = []

    with open_text(path) as handle:
        for line_number, fields in iter_fields(handle):
            key = fields[0]
            if key in ("N_CLONES", "N_LOCI", "FRAG_SIZE"):
                header[key] = _header_int(path, line_number, fields)
                continue
            if key == "LOCI_TRUTH":
                if len(fields) != 2 or set(fields[1]) - set("01"):
                    raise MalformedLineError(path, line_number, "LOCI_TRUTH must be a 0/1 string")
                header[key] = fields[1]
                continue

            _require(path, header, ("N_LOCI", "FRAG_SIZE"))
            if len(fields) != 3:
                raise MalformedLineError(
                    path, line_number, f"expected offset, calls, truth; got {len(fields)} fields"
                )
            offset_str, calls, truth = fields
            try:
                offset = int(offset_str)
            except ValueError:
                raise MalformedLineError(path, line_number, f"bad offset '{offset_str}'") from None
            if set(calls) - _CALL_CHARS:
                raise MalformedLineError(path, line_number, f"bad call string '{calls}'")
            if truth not in _TRUTH:
                raise MalformedLineError(path, line_number, f"bad truth value '{truth}'")
            if len(calls) > int(header["FRAG_SIZE"]):
                raise MalformedLineError(
                    path, line_number, f"fragment of {len(calls)} calls exceeds FRAG_SIZE"
                )
            if offset < 0 or offset + len(calls) > int(header["N_LOCI"]):
                raise MalformedLineError(
                    path, line_number, f"fragment [{offset}, {offset + len(calls)}) exceeds N_LOCI"
                )
            frag_offsets.append(offset)
            frag_data.append(calls)
            frag_truth.append(_TRUTH[truth])

    _require(path, header, ("N_CLONES", "N_LOCI", "FRAG_SIZE", "LOCI_TRUTH"))
    if len(frag_data) != header["N_CLONES"]:
        raise MalformedLineError(
            path, 0, f"N_CLONES is {header['N_CLONES']} but {len(frag_data)} fragments were read"
        )
    if len(str(header["LOCI_TRUTH"])) != header["N_LOCI"]:
        raise MalformedLineError(path, 0, "LOCI_TRUTH length does not match N_LOCI")

    return SimHapMatrix(
        n_clones=int(header["N_CLONES"]),
        n_loci=int(header["N_LOCI"]),
        frag_size=int(header["FRAG_SIZE"]),
        frag_data=frag_data,
        frag_offsets=frag_offsets,
        frag_truth=frag_truth,
        loci_truth=str(header["LOCI_TRUTH"]),
    )


def _split_pairs(path: Path, line_number: int, text: str) -> list[tuple[str, str]]:
    pairs = []
    for item in text.split(","):
        left, sep, right = item.partition(":")
        if not sep or not left or not right:
            raise MalformedLineError(path, line_number, f"bad 'index:value' item '{item}'")
        pairs.append((left, right))
    return pairs


@log_call(logger)
def parse_real_hap_matrix(path: Path | str) -> RealHapMatrix:
    """
    Parse a matrix of real clone calls.

    Raises:
        MalformedLineError: On a bad line, a missing header, or an
            inconsistent set of clones.
    """
    path = Path(path)
    header: dict[str, int | str] = {}
    var_calls: dict[str, list[tuple[int, bool]]] = {}
    clones: dict[int, tuple[dict[int, str], GenomicInterval, float]] = {}

    with open_text(path) as handle:
        for line_number, fields in iter_fields(handle):
            key = fields[0]
            if key in ("N_FRAGS", "N_LOCI"):
                header[key] = _header_int(path, line_number, fields)
                continue

            _require(path, header, ("N_FRAGS", "N_LOCI"))
            n_frags, n_loci = int(header["N_FRAGS"]), int(header["N_LOCI"])
            try:
                if key == "VAR":
                    if len(fields) != 3:
                        raise ValueError("expected 'VAR <tag> <clone>:<h|m>,...'")
                    calls = []
                    for clone, zygosity in _split_pairs(path, line_number, fields[2]):
                        if int(clone) not in range(n_frags):
                            raise ValueError(f"clone index {clone} out of range")
                        calls.append((int(clone), _ZYGOSITY[zygosity]))
                    var_calls.setdefault(fields[1], []).extend(calls)

                elif key == "CLONE":
                    if len(fields) not in (6, 7):
                        raise ValueError(
                            "expected 'CLONE <idx> <chrom> <start> <stop> <qscore> [calls]'"
                        )
                    idx = int(fields[1])
                    if idx not in range(n_frags):
                        raise ValueError(f"clone index {idx} out of range")
                    if idx in clones:
                        raise ValueError(f"clone {idx} listed twice")
                    interval = GenomicInterval(
                        chrom=fields[2], start=int(fields[3]), stop=int(fields[4])
                    )
                    calls_by_locus: dict[int, str] = {}
                    if len(fields) == 7:
                        for locus, call in _split_pairs(path, line_number, fields[6]):
                            if int(locus) not in range(n_loci):
                                raise ValueError(f"locus {locus} out of range")
                            calls_by_locus[int(locus)] = call
                    clones[idx] = (calls_by_locus, interval, float(fields[5]))

                else:
                    raise ValueError(f"unknown record type '{key}'")
            except MalformedLineError:
                raise
            except KeyError as e:
                raise MalformedLineError(path, line_number, f"bad zygosity {e}") from None
            except (ValueError, GtoolsError) as e:
                raise MalformedLineError(path, line_number, str(e)) from e

    _require(path, header, ("N_FRAGS", "N_LOCI"))
    missing = sorted(set(range(int(header["N_FRAGS"]))) - set(clones))
    if missing:
        raise MalformedLineError(path, 0, f"no CLONE line for clone(s) {missing}")

    ordered = [clones[i] for i in range(int(header["N_FRAGS"]))]
    logger.info(
        "Read %d clones and %d variants from %s", len(ordered), len(var_calls), path
    )
    return RealHapMatrix(
        n_frags=int(header["N_FRAGS"]),
        n_loci=int(header["N_LOCI"]),
        var_calls=var_calls,
        clone_calls=[c[0] for c in ordered],
        clone_intervals=[c[1] for c in ordered],
        clone_qscores=[c[2] for c in ordered],
    )
