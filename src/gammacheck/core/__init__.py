"""Core data structures, constants and errors."""

from gammacheck.core.constants import (
    CONFIDENCE_DECISION,
    FLOAT_EPS,
    INTEGRITY_DECISION,
    MIN_BINS,
    REGION_OFFSET,
    SHAPE_RATIO_LIMIT,
    SHRINK_PER_ROUND,
    SMOOTHING_ROUNDS,
    SMOOTHING_WINDOW,
)
from gammacheck.core.errors import (
    GammaCheckError,
    InvalidInputError,
    InvalidWidthError,
    ResourceExhaustionError,
    SpectrumFileError,
)
from gammacheck.core.regions import Region, RegionList
from gammacheck.core.spectra import validate_spectrum

__all__ = [
    "CONFIDENCE_DECISION",
    "FLOAT_EPS",
    "INTEGRITY_DECISION",
    "MIN_BINS",
    "REGION_OFFSET",
    "SHAPE_RATIO_LIMIT",
    "SHRINK_PER_ROUND",
    "SMOOTHING_ROUNDS",
    "SMOOTHING_WINDOW",
    "GammaCheckError",
    "InvalidInputError",
    "InvalidWidthError",
    "ResourceExhaustionError",
    "SpectrumFileError",
    "Region",
    "RegionList",
    "validate_spectrum",
]
