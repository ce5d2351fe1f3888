"""
tests/test_cli.py -- Tests for the main.py command-line entry point.

getpass and the DGA pipeline are patched so the commands run without a
terminal or network. Output is captured with capsys.
"""

import json
from unittest.mock import patch

import pytest

import main

_GOLDEN_SHA256 = "6d6e611cb463e9148240057782e20b3099f0d4f3accc05320a18225413d83f6e"


@pytest.fixture(autouse=True)
def _no_root_logging_config():
    # basicConfig would bind a root handler to capsys's temporary stderr.
    with patch("main._configure_logging"):
        yield


class TestSaltCommand:
    """Tests for the salt subcommand."""

    def test_default_length(self, capsys):
        """Default of 10 bytes prints 20 hex characters."""
        assert main.main(["salt"]) == 0
        assert len(capsys.readouterr().out.strip()) == 20

    def test_explicit_length(self, capsys):
        """--bytes controls the salt length."""
        assert main.main(["salt", "--bytes", "4"]) == 0
        assert len(capsys.readouterr().out.strip()) == 8


class TestHashCommand:
    """Tests for the hash subcommand."""

    def test_json_output_matches_golden_value(self, capsys):
        """Known password and salt print the pinned digest as JSON."""
        with patch("main.getpass.getpass", return_value="hunter2"):
            assert main.main(["hash", "--salt", "0011223344", "--json"]) == 0
        out = json.loads(capsys.readouterr().out)
        assert out == {"salt": "0011223344", "algorithm": "sha256", "hash": _GOLDEN_SHA256}

    def test_generates_salt_when_missing(self, capsys):
        """Without --salt a fresh salt is drawn and reported."""
        with patch("main.getpass.getpass", return_value="hunter2"):
            assert main.main(["hash", "--json"]) == 0
        out = json.loads(capsys.readouterr().out)
        assert len(out["salt"]) == 20

    def test_unsupported_algorithm_exits_1(self, capsys):
        """An unknown digest name is reported on stderr with exit code 1."""
        with patch("main.getpass.getpass", return_value="hunter2"):
            assert main.main(["hash", "--algorithm", "rot13", "--salt", "00"]) == 1
        assert "[!]" in capsys.readouterr().err


class TestVerifyCommand:
    """Tests for the verify subcommand."""

    def test_match_exits_0(self, capsys):
        """Correct password exits 0."""
        with patch("main.getpass.getpass", return_value="hunter2"):
            code = main.main(["verify", "--salt", "0011223344", "--hash", _GOLDEN_SHA256])
        assert code == 0
        assert "matches" in capsys.readouterr().out

    def test_mismatch_exits_1(self, capsys):
        """Wrong password exits 1."""
        with patch("main.getpass.getpass", return_value="hunter3"):
            code = main.main(["verify", "--salt", "0011223344", "--hash", _GOLDEN_SHA256])
        assert code == 1
        assert "does not match" in capsys.readouterr().out


class TestAnnotationsCommand:
    """Tests for the annotations subcommand and bare invocation."""

    def test_filters_are_passed_through(self, capsys):
        """Repeated --filter flags become one criteria dict."""
        entries = [{"name": "islet", "source": "ENCODE"}]
        with patch("main.dga_annotations", return_value=entries) as mock_dga:
            assert main.main(["annotations", "--filter", "source=ENCODE", "--filter", "status=released"]) == 0
        mock_dga.assert_called_once_with({"source": "ENCODE", "status": "released"}, url=None)
        assert json.loads(capsys.readouterr().out) == entries

    def test_malformed_filter_exits_1(self, capsys):
        """A filter without '=' fails before any fetch."""
        with patch("main.dga_annotations") as mock_dga:
            assert main.main(["annotations", "--filter", "source"]) == 1
        mock_dga.assert_not_called()

    @pytest.mark.parametrize("argv", [[], ["--help"]])
    def test_no_command_prints_help(self, argv, capsys):
        """No subcommand (or --help) prints usage."""
        if argv:
            with pytest.raises(SystemExit):
                main.main(argv)
        else:
            assert main.main(argv) == 0
        assert "datareg" in capsys.readouterr().out
