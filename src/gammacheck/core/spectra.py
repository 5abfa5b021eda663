"""Validation of spectrum arguments."""

from __future__ import annotations

from typing import Optional, Sequence, Union

import numpy as np

from gammacheck.core.errors import InvalidInputError

ArrayLike = Union[Sequence[float], np.ndarray]


def validate_spectrum(
    values: Optional[ArrayLike],
    bins: int,
    name: str,
    optional: bool = False,
) -> np.ndarray:
    """
    Check a spectrum and return its first ``bins`` channels as floats.

    Parameters
    ----------
    values : array-like or None
        Time-normalized counts
    bins : int
        Number of channels required
    name : str
        Spectrum role used in error messages ("test", "reference", ...)
    optional : bool
        If True, None is accepted and returned as all zeros

    Raises
    ------
    InvalidInputError
        If the spectrum is missing, not one-dimensional, shorter than bins
        or contains non-finite counts.
    """
    if values is None:
        if optional:
            return np.zeros(bins)
        raise InvalidInputError(f"{name} spectrum is missing, no {name} data to check")
    data = np.asarray(values, dtype=float)
    if data.ndim != 1:
        raise InvalidInputError(f"{name} spectrum must be one-dimensional")
    if data.size < bins:
        raise InvalidInputError(
            f"{name} spectrum has {data.size} channels, expected at least {bins}"
        )
    data = data[:bins]
    if not np.all(np.isfinite(data)):
        raise InvalidInputError(f"{name} spectrum contains non-finite counts")
    return data
