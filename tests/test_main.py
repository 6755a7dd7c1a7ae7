"""Tests for main module."""

import io
import sys
from unittest.mock import patch

import pytest

from adventure_scribe.commands.registry import COMMANDS
from adventure_scribe.main import check_configuration, expand_document, main


class TestCheckConfiguration:
    """Tests for check_configuration function."""

    def test_no_providers(self, mock_env_empty, capsys):
        """Missing keys are reported and the check fails."""
        assert check_configuration() is False

        captured = capsys.readouterr()
        assert "[WARNING] No AI provider configured" in captured.out

    def test_all_providers(self, mock_env_full, capsys):
        assert check_configuration() is True

        captured = capsys.readouterr()
        assert "[OK] anthropic: configured" in captured.out
        assert "[OK] openai: configured" in captured.out
        assert "[OK] All configuration validated" in captured.out


class TestExpandDocument:
    """Tests for expand_document function."""

    def test_expands_file(self, tmp_path, mock_env_empty, capsys):
        """Expanded text goes to stdout and the summary to stderr."""
        document = tmp_path / "chapter1.txt"
        document.write_text("Ambush!\n/add-monster Goblin\n/unknown-command foo\n", encoding="utf-8")

        assert expand_document(str(document)) == 0

        captured = capsys.readouterr()
        assert captured.out.startswith("Ambush!\n<div")
        assert captured.out.endswith("\n/unknown-command foo\n")
        assert "[WARNING] /unknown-command foo: UnknownCommand" in captured.err
        assert "[OK] Expanded 1 of 2 commands" in captured.err

    def test_reads_stdin(self, mock_env_empty, capsys):
        with patch.object(sys, "stdin", io.StringIO("No commands here.")):
            assert expand_document("-") == 0

        captured = capsys.readouterr()
        assert captured.out == "No commands here."
        assert "[OK] Expanded 0 of 0 commands" in captured.err

    def test_missing_file(self, tmp_path, mock_env_empty, capsys):
        assert expand_document(str(tmp_path / "missing.txt")) == 1

        captured = capsys.readouterr()
        assert "[ERROR] Cannot read" in captured.err


class TestMain:
    """Tests for main() argument handling."""

    def test_check_flag_exits_with_status(self, mock_env_empty):
        with pytest.raises(SystemExit) as exc_info:
            main(["--check"])

        assert exc_info.value.code == 1

    def test_commands_flag(self, capsys):
        """--commands lists every command and exits."""
        with pytest.raises(SystemExit) as exc_info:
            main(["--commands"])

        assert exc_info.value.code == 0
        captured = capsys.readouterr()
        assert "Available commands:" in captured.out
        assert captured.out.count("  /") == len(COMMANDS)

    def test_expand_flag(self, tmp_path, mock_env_empty, capsys):
        document = tmp_path / "notes.txt"
        document.write_text("/add-spell Fireball", encoding="utf-8")

        with (
            patch.object(sys, "argv", ["main", "--expand", str(document), "--timeout-ms", "500"]),
            pytest.raises(SystemExit) as exc_info,
        ):
            main()

        assert exc_info.value.code == 0
        assert "Fireball" in capsys.readouterr().out

    def test_rejects_non_positive_timeout(self, tmp_path, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main(["--expand", str(tmp_path / "x.txt"), "--timeout-ms", "0"])

        assert exc_info.value.code == 1
        assert "--timeout-ms must be positive" in capsys.readouterr().err

    def test_serve_flag_runs_server(self):
        with patch("adventure_scribe.main.run_server") as run_server:
            main(["--serve"])

        run_server.assert_called_once()

    def test_no_flags_prints_help(self, capsys):
        main([])

        assert "usage:" in capsys.readouterr().out
