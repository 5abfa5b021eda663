"""Spectrum file input/output."""

from gammacheck.io.spectrum_file import read_spectrum_file, write_spectrum_file

__all__ = ["read_spectrum_file", "write_spectrum_file"]
