"""Region-by-region peak area matching."""

from __future__ import annotations

from typing import Sequence, Union

import numpy as np

from gammacheck.analysis.peak_area import peak_area
from gammacheck.core.constants import FLOAT_EPS
from gammacheck.core.regions import Region

ArrayLike = Union[Sequence[float], np.ndarray]


def region_width(region: Region) -> int:
    """Channels from one boundary minimum to the next, rounded up to even."""
    width = region.right - region.left
    if width % 2 != 0:
        width += 1
    return width


def match_peak(
    test: ArrayLike,
    reference: ArrayLike,
    region: Region,
    spectrum_energy: float,
    threshold: float,
) -> float:
    """
    Score whether the test peak area matches the reference within tolerance.

    The test area must lie within [rpeak*(1-threshold), rpeak*(1+threshold)].
    Both bounds are checked as ratios against 1 (plus float epsilon), not by
    subtraction.

    Parameters
    ----------
    test, reference : array-like
        Time-normalized spectra
    region : Region
        Region to compare
    spectrum_energy : float
        Integrated area of the whole reference spectrum
    threshold : float
        Fractional tolerance in (0, 1)

    Returns
    -------
    float
        rpeak / spectrum_energy on a match, else 0.0. Also 0.0 when the
        spectrum energy, test area or upper bound is (near) zero.
    """
    if abs(spectrum_energy) < FLOAT_EPS:
        return 0.0

    width = region_width(region)
    rpeak = peak_area(np.asarray(reference, dtype=float)[region.left:], width)
    tpeak = peak_area(np.asarray(test, dtype=float)[region.left:], width)

    lower = rpeak - rpeak * threshold
    upper = rpeak + rpeak * threshold

    if abs(tpeak) <= FLOAT_EPS:
        return 0.0
    lower_ok = lower / tpeak <= 1.0 + FLOAT_EPS

    if abs(upper) <= FLOAT_EPS:
        return 0.0
    upper_ok = tpeak / upper <= 1.0 + FLOAT_EPS

    if lower_ok and upper_ok:
        return rpeak / spectrum_energy
    return 0.0
