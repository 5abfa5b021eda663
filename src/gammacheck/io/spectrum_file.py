"""
Plain-text spectrum files.

Format: whitespace-separated values. The first two are integer acquisition
start and end times in seconds; the remaining values are channel counts,
lowest energy first. Counts are normalized to counts per second on read.

Example:
    1443340800 1443344400
    0 12 15 42 ...
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Sequence, Union

import numpy as np

from gammacheck.core.errors import SpectrumFileError

logger = logging.getLogger(__name__)

# SpectrumFileError.code values
BAD_BINS = 1
MISSING_FILENAME = 2
UNREADABLE = 4
TOO_FEW_BINS = 5
ZERO_ACQUISITION_TIME = 6


def read_spectrum_file(filepath: Optional[Union[str, Path]], bins: int) -> np.ndarray:
    """
    Read a spectrum file and normalize counts by acquisition time.

    Parameters
    ----------
    filepath : str or Path
        Spectrum file
    bins : int
        Number of channels to read; extra values are ignored

    Returns
    -------
    np.ndarray
        ``bins`` count rates (counts / (end - start))

    Raises
    ------
    SpectrumFileError
        With ``code`` set to the failure kind (see module constants)
    """
    if bins <= 0:
        raise SpectrumFileError(
            f"range error: bins = {bins}, bins must be positive integer", BAD_BINS
        )
    if filepath is None or str(filepath) == "":
        raise SpectrumFileError("spectrum file name is empty", MISSING_FILENAME)

    filepath = Path(filepath)
    try:
        tokens = filepath.read_text(errors="replace").split()
    except OSError as exc:
        raise SpectrumFileError(
            f"unable to open file {filepath}", UNREADABLE, str(filepath)
        ) from exc

    if len(tokens) < 2:
        raise SpectrumFileError(
            f"{filepath} is missing the acquisition start and end times",
            UNREADABLE,
            str(filepath),
        )
    try:
        start = int(tokens[0])
        end = int(tokens[1])
    except ValueError as exc:
        raise SpectrumFileError(
            f"{filepath} has malformed acquisition times: {tokens[0]!r} {tokens[1]!r}",
            UNREADABLE,
            str(filepath),
        ) from exc

    elapsed = end - start
    if elapsed == 0:
        raise SpectrumFileError(
            f"unable to normalise data in {filepath}, time is 0",
            ZERO_ACQUISITION_TIME,
            str(filepath),
        )

    values = tokens[2:2 + bins]
    if len(values) < bins:
        raise SpectrumFileError(
            f"not enough bins in file {filepath}: expected {bins}, read {len(values)} before EOF",
            TOO_FEW_BINS,
            str(filepath),
        )
    try:
        counts = np.array([float(v) for v in values], dtype=float)
    except ValueError as exc:
        raise SpectrumFileError(
            f"{filepath} contains non-numeric counts", UNREADABLE, str(filepath)
        ) from exc

    logger.debug(f"Read {bins} channels from {filepath} over {elapsed} s")
    return counts / float(elapsed)


def write_spectrum_file(
    filepath: Union[str, Path],
    counts: Union[Sequence[float], np.ndarray],
    start: int,
    end: int,
) -> Path:
    """
    Write raw counts with acquisition times in the format read above.

    Returns
    -------
    Path
        The written file
    """
    filepath = Path(filepath)
    lines = [f"{int(start)} {int(end)}"]
    lines.extend(repr(float(c)) for c in np.asarray(counts, dtype=float))
    filepath.write_text("\n".join(lines) + "\n")
    return filepath
