"""
Data models for gtools.

Provides Pydantic models for intervals, variants, filters and parsed matrices.
"""

from .core import (
    CopyNumberCall,
    GenomicInterval,
    Genotype,
    TriState,
    ValuedInterval,
    Variant,
    VariantFilter,
    Window,
    variant_tag,
)
from .hapmatrix import RealHapMatrix, SimHapMatrix

__all__ = [
    "CopyNumberCall",
    "GenomicInterval",
    "Genotype",
    "RealHapMatrix",
    "SimHapMatrix",
    "TriState",
    "ValuedInterval",
    "Variant",
    "VariantFilter",
    "Window",
    "variant_tag",
]
