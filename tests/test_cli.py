"""Tests for the gammacheck command line."""

import numpy as np
import pytest

from gammacheck.analysis import spectrum_matcher
from gammacheck.cli.app import ExitCode, build_parser, main
from gammacheck.core.errors import ResourceExhaustionError
from gammacheck.io.spectrum_file import write_spectrum_file

BINS = 100


def gaussian(center=50, amplitude=1000.0, sigma=2.0):
    x = np.arange(BINS, dtype=float)
    return amplitude * np.exp(-(x - center) ** 2 / (2 * sigma ** 2))


@pytest.fixture
def spectrum_files(tmp_path):
    """Reference, matching test, half-area test and background files (10 s each)."""
    reference = gaussian()
    return {
        "reference": write_spectrum_file(tmp_path / "reference.txt", 10 * reference, 0, 10),
        "test": write_spectrum_file(tmp_path / "test.txt", 10 * reference, 0, 10),
        "half": write_spectrum_file(tmp_path / "half.txt", 5 * reference, 0, 10),
        "background": write_spectrum_file(tmp_path / "background.txt", np.zeros(BINS), 0, 10),
    }


def _argv(files, test="test", threshold="0.1", bins=str(BINS)):
    return [str(files[test]), str(files["reference"]), str(files["background"]), bins, threshold]


class TestParser:
    """Tests for argument parsing."""

    def test_arguments(self, tmp_path):
        args = build_parser().parse_args(["t", "r", "b", "100", "0.2"])
        assert args.bins == 100
        assert args.threshold == pytest.approx(0.2)
        assert not args.verbose

    @pytest.mark.parametrize("bins", ["0", "-4", "many"])
    def test_bad_bins_is_usage_error(self, bins):
        with pytest.raises(SystemExit) as excinfo:
            build_parser().parse_args(["t", "r", "b", bins, "0.2"])
        assert excinfo.value.code == ExitCode.USAGE

    def test_missing_arguments(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["t", "r"])


class TestMain:
    """Tests for exit codes of main."""

    def test_match(self, spectrum_files, capsys):
        assert main(_argv(spectrum_files)) == ExitCode.MATCH
        assert "Fissile material detected in sample." in capsys.readouterr().out

    def test_no_match(self, spectrum_files, capsys):
        assert main(_argv(spectrum_files, test="half")) == ExitCode.NO_MATCH
        assert "No fissile material detected in sample." in capsys.readouterr().out

    @pytest.mark.parametrize("threshold", ["0", "1", "1.5"])
    def test_threshold_out_of_range(self, spectrum_files, threshold):
        assert main(_argv(spectrum_files, threshold=threshold)) == ExitCode.INVALID_INPUT

    def test_bins_below_minimum(self, spectrum_files):
        assert main(_argv(spectrum_files, bins="20")) == ExitCode.INVALID_INPUT

    def test_unreadable_test_file(self, spectrum_files, tmp_path):
        spectrum_files["missing"] = tmp_path / "missing.txt"
        assert main(_argv(spectrum_files, test="missing")) == ExitCode.BAD_TEST_FILE

    def test_unreadable_reference_file(self, spectrum_files, tmp_path):
        bad = tmp_path / "bad_reference.txt"
        bad.write_text("5 5\n1 2 3\n")
        spectrum_files["reference"] = bad
        assert main(_argv(spectrum_files)) == ExitCode.BAD_REFERENCE_FILE

    def test_unreadable_background_file(self, spectrum_files, tmp_path):
        short = tmp_path / "short_background.txt"
        short.write_text("0 10\n1 2 3\n")
        spectrum_files["background"] = short
        assert main(_argv(spectrum_files)) == ExitCode.BAD_BACKGROUND_FILE

    def test_resource_failure(self, spectrum_files, monkeypatch):
        def exhausted(*args, **kwargs):
            raise ResourceExhaustionError("no memory")

        monkeypatch.setattr(spectrum_matcher, "find_regions", exhausted)
        assert main(_argv(spectrum_files)) == ExitCode.RESOURCE_FAILURE
