"""
Peak integrity checking.

Samples can be disturbed by interference from nearby sources, poor test
conditions (temperature, humidity) or deliberate manipulation. A clean
photopeak is close to Gaussian, whose FWTM/FWHM ratio is about 1.82; a
distorted one is sharper at the top or broader at the base.
"""

from __future__ import annotations

from typing import Sequence, Tuple, Union

import numpy as np

from gammacheck.core.constants import FLOAT_EPS, SHAPE_RATIO_LIMIT
from gammacheck.core.regions import Region


def _walk_out(
    counts: np.ndarray,
    region: Region,
    left: int,
    right: int,
    level: float,
) -> Tuple[int, int]:
    """Move left/right outward from their start until counts drop below level."""
    while left >= region.left and counts[left] >= level:
        left -= 1
    while right <= region.right and counts[right] >= level:
        right += 1
    return left, right


def peak_widths(test: Union[Sequence[float], np.ndarray], region: Region) -> Tuple[int, int]:
    """
    Full widths at half and tenth maximum of the test peak in a region.

    The scan starts at the peak channel and stops at the first channel below
    the level on each side (or one past the region boundary). The tenth
    maximum scan continues from where the half maximum scan stopped.

    Returns
    -------
    tuple of int
        (fwhm, fwtm) in channels
    """
    counts = np.asarray(test, dtype=float)
    height = counts[region.peak]

    left, right = _walk_out(counts, region, region.peak, region.peak, height / 2.0)
    fwhm = right - left

    left, right = _walk_out(counts, region, left, right, height / 10.0)
    fwtm = right - left

    return fwhm, fwtm


def peak_integrity(test: Union[Sequence[float], np.ndarray], region: Region) -> float:
    """
    Score whether the test peak in a region has an undisturbed shape.

    Parameters
    ----------
    test : array-like
        Time-normalized test spectrum
    region : Region
        Region located in the reference spectrum

    Returns
    -------
    float
        The region's full width (right - left + 1) when FWTM/FWHM is at
        most SHAPE_RATIO_LIMIT, or when the peak is too small to test;
        0.0 otherwise.
    """
    full_integrity = float(region.width)

    peak_height = float(np.asarray(test, dtype=float)[region.peak])
    # Too small to test, assume ok
    if peak_height / 2.0 < FLOAT_EPS or peak_height / 10.0 < FLOAT_EPS:
        return full_integrity

    fwhm, fwtm = peak_widths(test, region)
    if fwhm == 0:
        return 0.0

    if fwtm / fwhm <= SHAPE_RATIO_LIMIT:
        return full_integrity
    return 0.0
