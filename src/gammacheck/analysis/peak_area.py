"""
Peak area integration.

Composite Simpson's rule over unit-spaced channels. The two-channel case
is (y0 + y1) / 3.
"""

from __future__ import annotations

from typing import Sequence, Union

import numpy as np

from gammacheck.core.errors import InvalidWidthError


def peak_area(channels: Union[Sequence[float], np.ndarray], width: int) -> float:
    """
    Integrate the first ``width`` samples of ``channels``.

    Parameters
    ----------
    channels : array-like
        Channel counts starting at the left edge of the peak
    width : int
        Number of samples to integrate; must be even and at least 2.
        Callers round odd widths up (or down for whole spectra) beforehand.

    Returns
    -------
    float
        (y0 + 4*sum(y_odd) + 2*sum(y_even) + y_last) / 3, summing odd
        offsets 1..width-3 and even offsets 2..width-2.

    Raises
    ------
    InvalidWidthError
        If width is odd, below 2, or longer than ``channels``.
    """
    if width % 2 != 0:
        raise InvalidWidthError(f"Peak width must be an even number of channels, got {width}")
    if width < 2:
        raise InvalidWidthError(f"Peak width must be at least 2 channels, got {width}")

    y = np.asarray(channels, dtype=float)
    if y.size < width:
        raise InvalidWidthError(
            f"Peak width {width} exceeds the {y.size} channels available"
        )

    if width == 2:
        return float((y[0] + y[1]) / 3)

    sum_odd = y[1:width - 1:2].sum()
    sum_even = y[2:width - 1:2].sum()

    return float((y[0] + 4 * sum_odd + 2 * sum_even + y[width - 1]) / 3)
