"""Exception hierarchy for gammacheck."""

from __future__ import annotations

from typing import Optional


class GammaCheckError(Exception):
    """Base class for all gammacheck errors."""
    pass


class InvalidInputError(GammaCheckError, ValueError):
    """Raised at entry when a spectrum, bin count or threshold is unusable.

    Nothing has been computed when this is raised, so the caller can fix the
    arguments and call again.
    """
    pass


class InvalidWidthError(InvalidInputError):
    """Raised when a peak area is requested over an odd or too short width."""
    pass


class ResourceExhaustionError(GammaCheckError):
    """Raised when the region finder cannot allocate its working arena."""
    pass


class SpectrumFileError(GammaCheckError):
    """Raised when a spectrum file cannot be read or normalised.

    Attributes
    ----------
    code : int
        Failure kind: 1 bad bin count, 2 missing file name, 4 file could
        not be opened or parsed, 5 fewer counts than bins, 6 zero
        acquisition time.
    path : str, optional
        File that failed.
    """

    def __init__(self, message: str, code: int, path: Optional[str] = None):
        super().__init__(message)
        self.code = code
        self.path = path
