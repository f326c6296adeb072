"""
Integration tests for sha256kit.

Tests the command-line entry point end to end:
- Stream, buffer and both modes
- Digest checking
- Standard input
- Unreadable files and exit codes
"""

import io
import logging
import sys

import pytest

import sha256kit
from sha256kit.main import main, configure_logging, EXIT_OK, EXIT_MISMATCH, EXIT_UNREADABLE


ABC_DIGEST = "ba7816bf8f01cfea414140de5dae2223b00361a396177a9cb410ff61f20015ad"


@pytest.fixture
def abc_file(tmp_path):
    path = tmp_path / "abc.txt"
    path.write_bytes(b"abc")
    return str(path)


class TestPackageAPI:
    """Public API re-exported from the package root."""

    def test_hash_bytes_and_stream(self):
        assert sha256kit.hash_bytes(b"abc") == ABC_DIGEST
        assert sha256kit.hash_stream(sha256kit.BytesChunkReader(b"abc")) == ABC_DIGEST

    def test_error_exported(self):
        assert issubclass(sha256kit.InputSourceUnavailable, Exception)


class TestCLI:
    """Tests for the sha256kit command."""

    def test_stream_mode(self, abc_file, capsys):
        assert main([abc_file]) == EXIT_OK
        out = capsys.readouterr().out
        assert out == f"{ABC_DIGEST}  {abc_file}\n"

    def test_buffer_mode(self, abc_file, capsys):
        assert main(["--mode", "buffer", abc_file]) == EXIT_OK
        assert ABC_DIGEST in capsys.readouterr().out

    def test_both_modes(self, abc_file, capsys):
        assert main(["--mode", "both", abc_file]) == EXIT_OK
        lines = capsys.readouterr().out.splitlines()
        assert lines == [
            f"{ABC_DIGEST}  {abc_file} (stream)",
            f"{ABC_DIGEST}  {abc_file} (buffer)",
        ]

    def test_check_ok(self, abc_file, capsys):
        assert main(["--check", ABC_DIGEST.upper(), abc_file]) == EXIT_OK
        assert f"{abc_file}: OK" in capsys.readouterr().out

    def test_check_failed(self, abc_file, capsys):
        wrong = "0" * 64
        assert main(["--check", wrong, abc_file]) == EXIT_MISMATCH
        assert f"{abc_file}: FAILED" in capsys.readouterr().out

    def test_malformed_check_is_usage_error(self, abc_file):
        with pytest.raises(SystemExit) as info:
            main(["--check", "xyz", abc_file])
        assert info.value.code == 2

    def test_missing_file(self, tmp_path, capsys):
        """Unreadable input is reported; no digest is printed for it."""
        missing = str(tmp_path / "missing.txt")
        assert main([missing]) == EXIT_UNREADABLE
        captured = capsys.readouterr()
        assert captured.out == ""
        assert "Input source unavailable" in captured.err

    def test_missing_file_does_not_stop_others(self, abc_file, tmp_path, capsys):
        missing = str(tmp_path / "missing.txt")
        assert main([missing, abc_file]) == EXIT_UNREADABLE
        assert ABC_DIGEST in capsys.readouterr().out

    def test_stdin(self, monkeypatch, capsys):
        monkeypatch.setattr(sys, "stdin", io.TextIOWrapper(io.BytesIO(b"abc")))
        assert main(["-"]) == EXIT_OK
        assert capsys.readouterr().out == f"{ABC_DIGEST}  -\n"


class TestLoggingConfig:
    """Tests for log level selection."""

    def test_env_level(self, monkeypatch):
        monkeypatch.setenv("SHA256KIT_LOG_LEVEL", "debug")
        calls = []
        monkeypatch.setattr(logging, "basicConfig", lambda **kw: calls.append(kw))
        configure_logging(0)
        assert calls[0]["level"] == logging.DEBUG

    def test_verbose_overrides_env(self, monkeypatch):
        monkeypatch.setenv("SHA256KIT_LOG_LEVEL", "error")
        calls = []
        monkeypatch.setattr(logging, "basicConfig", lambda **kw: calls.append(kw))
        configure_logging(1)
        assert calls[0]["level"] == logging.DEBUG

    def test_unknown_level_falls_back(self, monkeypatch):
        monkeypatch.setenv("SHA256KIT_LOG_LEVEL", "chatty")
        calls = []
        monkeypatch.setattr(logging, "basicConfig", lambda **kw: calls.append(kw))
        configure_logging(0)
        assert calls[0]["level"] == logging.WARNING
