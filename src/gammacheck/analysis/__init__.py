"""Photopeak region finding, peak scoring and spectrum matching."""

from gammacheck.analysis.peak_area import peak_area
from gammacheck.analysis.peak_integrity import peak_integrity, peak_widths
from gammacheck.analysis.peak_matcher import match_peak, region_width
from gammacheck.analysis.region_finder import (
    find_regions,
    scan_boundaries,
    second_difference,
    smoothed_second_difference,
)
from gammacheck.analysis.spectrum_matcher import (
    MatchOutcome,
    MatchResult,
    SpectrumMatcher,
    match_spectra,
    spectrum_energy,
)

__all__ = [
    "peak_area",
    "peak_integrity",
    "peak_widths",
    "match_peak",
    "region_width",
    "find_regions",
    "scan_boundaries",
    "second_difference",
    "smoothed_second_difference",
    "MatchOutcome",
    "MatchResult",
    "SpectrumMatcher",
    "match_spectra",
    "spectrum_energy",
]
