"""
Spectrum Matching

Decides whether a test gamma spectrum carries the photopeak signature of a
reference spectrum. Regions are located in the reference (after background
subtraction), each region of the test spectrum is checked for shape
integrity and area agreement, and the per-region results are aggregated
into a verdict.

Example
-------
>>> matcher = SpectrumMatcher(background=background_cps)
>>> result = matcher.match(test_cps, reference_cps, bins=1024, threshold=0.1)
>>> if result.outcome is MatchOutcome.DETECTED:
...     print(result.summary())
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Sequence, Union

import numpy as np

from gammacheck.analysis.peak_area import peak_area
from gammacheck.analysis.peak_integrity import peak_integrity
from gammacheck.analysis.peak_matcher import match_peak
from gammacheck.analysis.region_finder import find_regions
from gammacheck.core.constants import CONFIDENCE_DECISION, INTEGRITY_DECISION, MIN_BINS
from gammacheck.core.errors import InvalidInputError, ResourceExhaustionError
from gammacheck.core.regions import RegionList
from gammacheck.core.spectra import validate_spectrum

logger = logging.getLogger(__name__)

ArrayLike = Union[Sequence[float], np.ndarray]


class MatchOutcome(Enum):
    """Programmatic outcome of a spectrum match."""

    DETECTED = "detected"
    NOT_DETECTED = "not_detected"
    RESOURCE_FAILURE = "resource_failure"


@dataclass
class MatchResult:
    """
    Result of matching a test spectrum against a reference.

    Attributes
    ----------
    outcome : MatchOutcome
        Detected, not detected, or failed during region finding
    confidence : float
        Sum of matched region areas as a fraction of spectrum energy
    integrity : float
        Sum of region widths whose test peak shape is sound
    integrity_ratio : float
        integrity / bins
    bins : int
        Number of channels analysed
    spectrum_energy : float
        Integrated area of the reference spectrum
    regions : RegionList
        Regions located in the reference spectrum
    error : str, optional
        Failure message when outcome is RESOURCE_FAILURE
    """

    outcome: MatchOutcome
    confidence: float = 0.0
    integrity: float = 0.0
    integrity_ratio: float = 0.0
    bins: int = 0
    spectrum_energy: float = 0.0
    regions: RegionList = field(default_factory=RegionList)
    error: Optional[str] = None

    @property
    def detected(self) -> bool:
        """True only for a successful match."""
        return self.outcome is MatchOutcome.DETECTED

    @property
    def failed(self) -> bool:
        """True when the analysis could not complete."""
        return self.outcome is MatchOutcome.RESOURCE_FAILURE

    @property
    def result(self) -> Optional[int]:
        """1 for a match, 0 for no match, None when the analysis failed."""
        if self.failed:
            return None
        return 1 if self.detected else 0

    @property
    def integrity_good(self) -> bool:
        """Advisory: peak shapes are sound across the spectrum."""
        return self.integrity_ratio > INTEGRITY_DECISION

    @property
    def region_integrity_fraction(self) -> float:
        """Sound region width as a fraction of the width covered by regions."""
        covered = sum(region.width for region in self.regions)
        if covered == 0:
            return 0.0
        return self.integrity / covered

    def summary(self) -> str:
        """Human-readable commentary on the match."""
        if self.failed:
            return f"Analysis failed: {self.error}"

        lines: List[str] = [
            f"Regions analysed: {self.regions.count}",
            f"Match confidence: {self.confidence:.4f}",
            f"Integrity ratio: {self.integrity_ratio:.4f}",
        ]
        if self.integrity_good:
            lines.append("Peak integrity is good across the spectrum")
        else:
            lines.append(
                "Peak integrity is poor. Check for interference or tampering in test sample."
            )
        if self.detected:
            lines.append("Fissile material detected in sample.")
        else:
            lines.append("No fissile material detected in sample.")
        return "\n".join(lines)


def _validate_parameters(bins: int, threshold: float) -> None:
    if isinstance(bins, bool) or not isinstance(bins, (int, np.integer)):
        raise InvalidInputError(f"bins must be an integer, got {bins!r}")
    if bins <= 0:
        raise InvalidInputError(f"range error: bins = {bins}, bins must be a positive integer")
    if bins < MIN_BINS:
        raise InvalidInputError(
            f"range error: bins = {bins}, region finding needs at least {MIN_BINS} channels"
        )
    if threshold is None or not math.isfinite(threshold) or threshold <= 0.0 or threshold >= 1.0:
        raise InvalidInputError(
            f"range error: threshold = {threshold}, "
            f"threshold must be greater than zero and less than one"
        )


def spectrum_energy(reference: ArrayLike, bins: int) -> float:
    """Integrated reference area over an even number of channels (odd bins drop the last)."""
    width = bins - 1 if bins % 2 != 0 else bins
    return peak_area(reference, width)


class SpectrumMatcher:
    """
    Matches test spectra against a reference, with an optional background.

    The matcher holds no per-call state; one instance can serve any number
    of calls as long as the spectra are not modified during a call.
    """

    def __init__(self, background: Optional[ArrayLike] = None):
        """
        Parameters
        ----------
        background : array-like, optional
            Time-normalized background spectrum subtracted from the
            reference before region finding. None means no background.
        """
        self.background = background

    def match(
        self,
        test: ArrayLike,
        reference: ArrayLike,
        bins: int,
        threshold: float,
    ) -> MatchResult:
        """
        Compare a test spectrum with the reference region by region.

        Parameters
        ----------
        test, reference : array-like
            Time-normalized spectra of at least ``bins`` channels
        bins : int
            Number of channels to analyse (at least MIN_BINS)
        threshold : float
            Fractional area tolerance, strictly between 0 and 1

        Returns
        -------
        MatchResult
            DETECTED when confidence exceeds CONFIDENCE_DECISION,
            NOT_DETECTED otherwise, RESOURCE_FAILURE when region finding
            could not allocate its working memory.

        Raises
        ------
        InvalidInputError
            Before any computation, for a missing or malformed spectrum,
            bins out of range or threshold outside (0, 1).
        """
        _validate_parameters(bins, threshold)
        test_counts = validate_spectrum(test, bins, "test")
        ref_counts = validate_spectrum(reference, bins, "reference")
        background = None
        if self.background is not None:
            background = validate_spectrum(self.background, bins, "background")

        energy = spectrum_energy(ref_counts, bins)

        try:
            regions = find_regions(ref_counts, background, bins)
        except ResourceExhaustionError as exc:
            logger.error(f"Region finding failed: {exc}")
            return MatchResult(
                outcome=MatchOutcome.RESOURCE_FAILURE,
                bins=bins,
                spectrum_energy=energy,
                error=str(exc),
            )

        if not regions:
            logger.warning("Unable to identify peaks in reference data")

        confidence = 0.0
        integrity = 0.0
        for region in regions:
            region_integrity = peak_integrity(test_counts, region)
            region_confidence = match_peak(test_counts, ref_counts, region, energy, threshold)
            logger.debug(
                f"{region}: integrity {region_integrity:.1f}, confidence {region_confidence:.4f}"
            )
            integrity += region_integrity
            confidence += region_confidence

        integrity_ratio = integrity / bins
        if integrity_ratio > INTEGRITY_DECISION:
            logger.info("Peak integrity is good across the spectrum")
        else:
            logger.info("Peak integrity is poor. Check for interference or tampering in test sample.")

        if confidence > CONFIDENCE_DECISION:
            logger.info("Fissile material detected in sample.")
            outcome = MatchOutcome.DETECTED
        else:
            logger.info("No fissile material detected in sample.")
            outcome = MatchOutcome.NOT_DETECTED

        return MatchResult(
            outcome=outcome,
            confidence=confidence,
            integrity=integrity,
            integrity_ratio=integrity_ratio,
            bins=bins,
            spectrum_energy=energy,
            regions=regions,
        )


def match_spectra(
    test: ArrayLike,
    reference: ArrayLike,
    background: Optional[ArrayLike],
    bins: int,
    threshold: float,
) -> MatchResult:
    """Functional form of :meth:`SpectrumMatcher.match`."""
    return SpectrumMatcher(background=background).match(test, reference, bins, threshold)
