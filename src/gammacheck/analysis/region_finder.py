"""
Region Finder

Locates candidate photopeak regions in a reference spectrum using a
Mariscotti-style smoothed second-difference search:

1. Background-subtracted curvature d(j) = 2*n(j+1) - n(j) - n(j+2)
2. SMOOTHING_ROUNDS rounds of SMOOTHING_WINDOW-point box summation
3. Alternating min/max scan of the smoothed curve

The output alternates boundary and peak channels (min, max, ..., min) and
is consumed as overlapping (left, peak, right) triples.

References
----------
M.A. Mariscotti, "A method for automatic identification of peaks in the
presence of background and its application to spectrum analysis",
Nuclear Instruments and Methods 50 (1967) 309-320.
"""
from __future__ import annotations

import logging
from typing import List, Optional, Sequence, Union

import numpy as np

from gammacheck.core.constants import (
    MIN_BINS,
    REGION_OFFSET,
    SHRINK_PER_ROUND,
    SMOOTHING_ROUNDS,
    SMOOTHING_WINDOW,
)
from gammacheck.core.errors import InvalidInputError, ResourceExhaustionError
from gammacheck.core.regions import RegionList
from gammacheck.core.spectra import validate_spectrum

logger = logging.getLogger(__name__)

ArrayLike = Union[Sequence[float], np.ndarray]


def second_difference(net: np.ndarray, out: Optional[np.ndarray] = None) -> np.ndarray:
    """
    Negated second difference: 2*n[j+1] - n[j] - n[j+2], length n-2.

    When ``out`` is given the result is accumulated into it without
    temporaries.
    """
    if out is None:
        return 2 * net[1:-1] - net[:-2] - net[2:]
    np.multiply(net[1:-1], 2, out=out)
    np.subtract(out, net[:-2], out=out)
    np.subtract(out, net[2:], out=out)
    return out


def _box_sum(source: np.ndarray, target: np.ndarray) -> None:
    """target[k] = source[k] + ... + source[k + SMOOTHING_WINDOW - 1], in place."""
    length = target.size
    np.copyto(target, source[:length])
    for t in range(1, SMOOTHING_WINDOW):
        np.add(target, source[t:t + length], out=target)


def smoothed_second_difference(
    reference: ArrayLike,
    background: Optional[ArrayLike],
    bins: int,
    rounds: int = SMOOTHING_ROUNDS,
) -> np.ndarray:
    """
    Background-subtracted second difference after box-sum smoothing.

    All rounds share one two-row working arena sized to the first (longest)
    sequence; each round sums one row straight into the other.

    Returns
    -------
    np.ndarray
        Length ``bins - 2 - rounds * SHRINK_PER_ROUND``. Element k is centred
        on channel ``k + 1 + 3 * rounds``.

    Raises
    ------
    InvalidInputError
        If bins is too small for the requested smoothing, or a spectrum is
        missing, too short or non-finite.
    ResourceExhaustionError
        If memory runs out while building or smoothing the curve.
    """
    n0 = bins - 2
    final_length = n0 - rounds * SHRINK_PER_ROUND
    if final_length < 1:
        raise InvalidInputError(
            f"bins = {bins} is too small for {rounds} smoothing rounds"
        )

    ref = validate_spectrum(reference, bins, "reference")
    bkg = validate_spectrum(background, bins, "background", optional=True)

    try:
        arena = np.empty((2, n0), dtype=float)

        # Peaks from the background radiation are not of interest
        net = ref - bkg
        second_difference(net, out=arena[0, :n0])

        length = n0
        src = 0
        for _ in range(rounds):
            dst = 1 - src
            new_length = length - SHRINK_PER_ROUND
            _box_sum(arena[src, :length], arena[dst, :new_length])
            src, length = dst, new_length

        return arena[src, :length].copy()
    except MemoryError as exc:
        logger.error(f"Ran out of memory smoothing {bins} channels")
        raise ResourceExhaustionError(
            f"Unable to allocate region finder working memory for {bins} channels"
        ) from exc


def scan_boundaries(smoothed: np.ndarray, offset: int = REGION_OFFSET) -> List[int]:
    """
    Alternating min/max scan of a smoothed curvature sequence.

    Starts seeking a minimum. A minimum is recorded where a value is below
    its successor, a maximum where it is above its successor; each detection
    flips the mode. A scan that ends while seeking a minimum after at least
    one detection is closed with the last scanned index.
    """
    channels: List[int] = []
    seeking_min = True
    last = len(smoothed) - 1

    for i in range(last):
        if seeking_min:
            if smoothed[i] < smoothed[i + 1]:
                channels.append(i + offset)
                seeking_min = False
        elif smoothed[i] > smoothed[i + 1]:
            channels.append(i + offset)
            seeking_min = True

    if seeking_min and channels:
        channels.append(last + offset)

    return channels


def find_regions(
    reference: ArrayLike,
    background: Optional[ArrayLike],
    bins: int,
) -> RegionList:
    """
    Locate candidate photopeak regions in a reference spectrum.

    Parameters
    ----------
    reference : array-like
        Time-normalized reference counts
    background : array-like or None
        Time-normalized background counts, subtracted before the search.
        None means no background.
    bins : int
        Number of channels to use; must be at least MIN_BINS

    Returns
    -------
    RegionList
        Boundaries min, max, min, ..., min; empty when nothing was found

    Raises
    ------
    InvalidInputError
        If bins < MIN_BINS or a spectrum is shorter than bins
    ResourceExhaustionError
        If the working arena cannot be allocated
    """
    if bins < MIN_BINS:
        raise InvalidInputError(
            f"bins = {bins} is below the minimum of {MIN_BINS} channels "
            f"needed for region finding"
        )

    smoothed = smoothed_second_difference(reference, background, bins)
    regions = RegionList.from_channels(scan_boundaries(smoothed))

    logger.debug(f"Region map (min, max, min, max, ..., min): {regions.boundaries}")
    return regions
