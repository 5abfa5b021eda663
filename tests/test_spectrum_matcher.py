"""
Tests for the spectrum matching pipeline.

Covers input validation, the end-to-end verdict on synthetic single-peak
spectra, and the resource failure channel.
"""

import logging
import math

import numpy as np
import pytest

from gammacheck import match_spectra
from gammacheck.analysis import region_finder, spectrum_matcher
from gammacheck.analysis.region_finder import find_regions
from gammacheck.analysis.spectrum_matcher import (
    MatchOutcome,
    MatchResult,
    SpectrumMatcher,
    spectrum_energy,
)
from gammacheck.core.constants import MIN_BINS
from gammacheck.core.errors import InvalidInputError, ResourceExhaustionError
from gammacheck.core.regions import RegionList


def gaussian(bins=100, center=50, amplitude=1000.0, sigma=2.0):
    x = np.arange(bins, dtype=float)
    return amplitude * np.exp(-(x - center) ** 2 / (2 * sigma ** 2))


@pytest.fixture
def reference():
    return gaussian()


@pytest.fixture
def no_region_search(monkeypatch):
    """Fail the test if region finding is reached."""

    def forbidden(*args, **kwargs):
        raise AssertionError("find_regions should not be called")

    monkeypatch.setattr(spectrum_matcher, "find_regions", forbidden)


class TestEndToEnd:
    """Tests on identical and scaled single-peak spectra."""

    def test_identical_spectra_match(self, reference):
        """Identical test and reference is a detection."""
        result = SpectrumMatcher(background=np.zeros(100)).match(
            reference.copy(), reference, 100, 0.1
        )

        assert result.outcome is MatchOutcome.DETECTED
        assert result.detected
        assert result.result == 1
        assert result.confidence > 0.95
        assert result.regions.count == 1

    def test_identical_peak_is_sound(self, reference):
        """Every region of an undisturbed test spectrum scores full width."""
        result = SpectrumMatcher().match(reference.copy(), reference, 100, 0.1)

        covered = sum(region.width for region in result.regions)
        assert result.integrity == pytest.approx(covered)
        assert result.region_integrity_fraction == pytest.approx(1.0)
        assert result.integrity_ratio == pytest.approx(covered / 100)

    def test_half_area_does_not_match(self, reference):
        """A test peak with half the reference area is not a detection."""
        result = SpectrumMatcher().match(0.5 * reference, reference, 100, 0.1)

        assert result.outcome is MatchOutcome.NOT_DETECTED
        assert not result.detected
        assert result.result == 0
        assert result.confidence == 0.0

    def test_small_excess_matches(self, reference):
        """A test area within the threshold still matches."""
        result = SpectrumMatcher().match(1.05 * reference, reference, 100, 0.1)
        assert result.detected

    def test_tampered_peak(self, reference):
        """A spike on the test peak leaves the area match but spoils integrity."""
        test = reference.copy()
        peak = find_regions(reference, None, 100)[0].peak
        test[peak] += 2000.0

        result = SpectrumMatcher().match(test, reference, 100, 0.9)

        assert result.integrity == 0.0
        assert not result.integrity_good

    def test_flat_reference(self):
        """No regions in the reference means no detection."""
        result = SpectrumMatcher().match(np.full(100, 3.0), np.full(100, 3.0), 100, 0.1)

        assert result.outcome is MatchOutcome.NOT_DETECTED
        assert result.regions.count == 0
        assert result.confidence == 0.0

    def test_background_only_reference(self, reference):
        """A reference identical to the background has nothing to match."""
        result = SpectrumMatcher(background=reference.copy()).match(
            reference.copy(), reference, 100, 0.1
        )
        assert result.outcome is MatchOutcome.NOT_DETECTED

    def test_odd_bins(self):
        """Odd bin counts drop the last channel from the spectrum energy."""
        reference = gaussian(bins=101)
        result = SpectrumMatcher().match(reference.copy(), reference, 101, 0.1)

        assert result.spectrum_energy == pytest.approx(spectrum_energy(reference[:100], 100))
        assert result.detected

    def test_functional_form(self, reference):
        """match_spectra agrees with SpectrumMatcher.match."""
        expected = SpectrumMatcher().match(reference.copy(), reference, 100, 0.1)
        result = match_spectra(reference.copy(), reference, None, 100, 0.1)

        assert result.outcome is expected.outcome
        assert result.confidence == expected.confidence
        assert result.regions.boundaries == expected.regions.boundaries

    def test_matcher_is_reusable(self, reference):
        """No state carries over between calls."""
        matcher = SpectrumMatcher()
        first = matcher.match(reference.copy(), reference, 100, 0.1)
        matcher.match(0.5 * reference, reference, 100, 0.1)
        again = matcher.match(reference.copy(), reference, 100, 0.1)

        assert again.confidence == first.confidence
        assert again.integrity == first.integrity

    def test_logs_verdict(self, reference, caplog):
        """The verdict commentary is logged at INFO."""
        with caplog.at_level(logging.INFO, logger="gammacheck"):
            SpectrumMatcher().match(reference.copy(), reference, 100, 0.1)
        assert "Fissile material detected in sample." in caplog.text


class TestInputValidation:
    """Invalid input is rejected before any computation."""

    def test_missing_test(self, reference, no_region_search):
        with pytest.raises(InvalidInputError):
            SpectrumMatcher().match(None, reference, 100, 0.1)

    def test_missing_reference(self, reference, no_region_search):
        with pytest.raises(InvalidInputError):
            SpectrumMatcher().match(reference, None, 100, 0.1)

    @pytest.mark.parametrize("threshold", [0.0, 1.0, -0.5, 1.5, math.nan])
    def test_threshold_out_of_range(self, reference, threshold, no_region_search):
        with pytest.raises(InvalidInputError):
            SpectrumMatcher().match(reference, reference, 100, threshold)

    @pytest.mark.parametrize("bins", [0, -1])
    def test_non_positive_bins(self, reference, bins, no_region_search):
        with pytest.raises(InvalidInputError):
            SpectrumMatcher().match(reference, reference, bins, 0.1)

    def test_bins_below_minimum(self, no_region_search):
        counts = gaussian(bins=MIN_BINS - 1, center=15)
        with pytest.raises(InvalidInputError):
            SpectrumMatcher().match(counts, counts, MIN_BINS - 1, 0.1)

    def test_non_integer_bins(self, reference, no_region_search):
        with pytest.raises(InvalidInputError):
            SpectrumMatcher().match(reference, reference, 100.0, 0.1)

    def test_short_spectrum(self, reference, no_region_search):
        with pytest.raises(InvalidInputError):
            SpectrumMatcher().match(reference[:50], reference, 100, 0.1)

    def test_short_background(self, reference, no_region_search):
        with pytest.raises(InvalidInputError):
            SpectrumMatcher(background=np.zeros(10)).match(reference, reference, 100, 0.1)

    def test_non_finite_counts(self, reference, no_region_search):
        test = reference.copy()
        test[3] = np.inf
        with pytest.raises(InvalidInputError):
            SpectrumMatcher().match(test, reference, 100, 0.1)

    def test_invalid_input_is_value_error(self, reference):
        with pytest.raises(ValueError):
            SpectrumMatcher().match(reference, reference, 100, 1.0)


class TestResourceFailure:
    """Region-finding allocation failure is its own outcome."""

    def test_resource_failure_outcome(self, reference, monkeypatch):
        def exhausted(*args, **kwargs):
            raise ResourceExhaustionError("no memory for smoothing arena")

        monkeypatch.setattr(spectrum_matcher, "find_regions", exhausted)

        result = SpectrumMatcher().match(reference.copy(), reference, 100, 0.1)

        assert result.outcome is MatchOutcome.RESOURCE_FAILURE
        assert result.failed
        assert not result.detected
        assert result.result is None
        assert "no memory" in result.error
        assert "Analysis failed" in result.summary()

    def test_failure_during_smoothing_round(self, reference, monkeypatch):
        """Memory running out mid-smoothing is reported, not raised."""
        box_sum = region_finder._box_sum
        calls = []

        def fail_third_round(source, target):
            calls.append(target.size)
            if len(calls) == 3:
                raise MemoryError
            box_sum(source, target)

        monkeypatch.setattr(region_finder, "_box_sum", fail_third_round)

        result = SpectrumMatcher().match(reference.copy(), reference, 100, 0.1)

        assert result.outcome is MatchOutcome.RESOURCE_FAILURE
        assert result.result is None
        assert result.error


class TestMatchResult:
    """Tests for the result record."""

    def test_summary_detected(self):
        result = MatchResult(
            outcome=MatchOutcome.DETECTED,
            confidence=0.99,
            integrity=99.0,
            integrity_ratio=0.99,
            bins=100,
        )
        text = result.summary()
        assert "Peak integrity is good across the spectrum" in text
        assert "Fissile material detected in sample." in text

    def test_summary_not_detected(self):
        result = MatchResult(outcome=MatchOutcome.NOT_DETECTED, integrity_ratio=0.2, bins=100)
        text = result.summary()
        assert "Peak integrity is poor" in text
        assert "No fissile material detected in sample." in text

    def test_empty_regions_fraction(self):
        result = MatchResult(outcome=MatchOutcome.NOT_DETECTED, regions=RegionList())
        assert result.region_integrity_fraction == 0.0
