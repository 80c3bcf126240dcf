#!/usr/bin/env python3
"""Tests for validate_config script."""

from validate_config import main, validate_config_file


class TestValidateConfigFile:
    """Tests for validate_config_file function."""

    def test_valid_returns_no_errors(self, tmp_path):
        path = tmp_path / "valid.yaml"
        path.write_text("historyColumns:\n  odometer: 4\n")
        assert validate_config_file(path) == []

    def test_invalid_returns_errors(self, tmp_path):
        path = tmp_path / "invalid.yaml"
        path.write_text("historyColumns:\n  odometer: many\n")
        errors = validate_config_file(path)
        assert len(errors) == 1
        assert "odometer" in errors[0]


class TestMain:
    """Tests for the command-line entry point."""

    def test_reports_ok_and_fail(self, tmp_path, capsys):
        good = tmp_path / "good.yaml"
        good.write_text("scheduleColumns:\n  plate: 0\n")
        bad = tmp_path / "bad.yaml"
        bad.write_text("bogus: 1\n")
        assert main([str(good), str(bad)]) == 1
        out = capsys.readouterr().out
        assert "OK: good.yaml" in out
        assert "FAIL: bad.yaml" in out

    def test_all_valid(self, tmp_path):
        good = tmp_path / "good.yaml"
        good.write_text("")
        assert main([str(good)]) == 0

    def test_usage_without_arguments(self, capsys):
        assert main([]) == 1
        assert "Usage" in capsys.readouterr().out
