"""gammacheck package entry."""

from importlib.metadata import PackageNotFoundError, version

from gammacheck.analysis.spectrum_matcher import (
    MatchOutcome,
    MatchResult,
    SpectrumMatcher,
    match_spectra,
)
from gammacheck.core.errors import (
    GammaCheckError,
    InvalidInputError,
    InvalidWidthError,
    ResourceExhaustionError,
)

__all__ = [
    "__version__",
    "MatchOutcome",
    "MatchResult",
    "SpectrumMatcher",
    "match_spectra",
    "GammaCheckError",
    "InvalidInputError",
    "InvalidWidthError",
    "ResourceExhaustionError",
]

try:
    __version__ = version("gammacheck")
except PackageNotFoundError:  # running from a checkout without metadata
    __version__ = "0.1.0"
