from unittest.mock import patch

import pytest

from structgen import __main__


class TestCmdFunctions:
    @patch("structgen.struct_codegen.main.main")
    def test_cmd_codegen_success(self, mock_main):
        result = __main__.cmd_codegen(["app", "secret", "production"])
        assert result == 0
        mock_main.assert_called_once_with(["app", "secret", "production"])

    @patch("structgen.struct_codegen.main.main")
    def test_cmd_codegen_failure(self, mock_main):
        mock_main.side_effect = SystemExit(2)
        result = __main__.cmd_codegen([])
        assert result == 2

    @patch("structgen.struct_codegen.main.main")
    def test_cmd_codegen_error_message(self, mock_main, capsys):
        mock_main.side_effect = SystemExit("Error: introspect failed: boom")
        result = __main__.cmd_codegen(["app", "secret", "production"])
        assert result == 1
        assert "introspect failed: boom" in capsys.readouterr().err

    @patch("structgen.snapshot.main")
    def test_cmd_snapshot_success(self, mock_main):
        result = __main__.cmd_snapshot(["app", "secret", "staging"])
        assert result == 0
        mock_main.assert_called_once()

    @patch("structgen.snapshot.main")
    def test_cmd_snapshot_failure(self, mock_main):
        mock_main.side_effect = SystemExit(1)
        result = __main__.cmd_snapshot([])
        assert result == 1

    @patch("structgen.struct_codegen.main.verify_main")
    def test_cmd_verify_success(self, mock_main):
        result = __main__.cmd_verify([])
        assert result == 0
        mock_main.assert_called_once_with([])

    @patch("structgen.struct_codegen.main.verify_main")
    def test_cmd_verify_stale(self, mock_main):
        mock_main.side_effect = SystemExit("2 generated file(s) are out of date; rerun codegen")
        result = __main__.cmd_verify([])
        assert result == 1

    @patch("structgen.clean.main")
    def test_cmd_clean_success(self, mock_main):
        result = __main__.cmd_clean(["--dry-run"])
        assert result == 0
        mock_main.assert_called_once_with(["--dry-run"])

    @patch("structgen.clean.main")
    def test_cmd_clean_failure(self, mock_main):
        mock_main.side_effect = SystemExit(1)
        result = __main__.cmd_clean([])
        assert result == 1

    @patch("structgen.clean.main")
    def test_cmd_clean_exit_none(self, mock_main):
        mock_main.side_effect = SystemExit(None)
        assert __main__.cmd_clean([]) == 0


class TestMain:
    def test_main_help(self):
        with patch("sys.argv", ["structgen"]), patch("builtins.print") as mock_print:
            result = __main__.main()
            assert result == 0
            mock_print.assert_called()

    def test_main_help_flag(self, capsys):
        with patch("sys.argv", ["structgen", "--help"]):
            assert __main__.main() == 0
        out = capsys.readouterr().out
        for name in __main__.COMMANDS:
            assert name in out

    def test_main_unknown_command(self, capsys):
        with patch("sys.argv", ["structgen", "unknown"]):
            result = __main__.main()
        assert result == 1
        assert "Unknown command: unknown" in capsys.readouterr().out

    @patch("structgen.clean.main")
    def test_main_dispatches(self, mock_main):
        with patch("sys.argv", ["structgen", "clean", "--dry-run"]):
            result = __main__.main()
        assert result == 0
        mock_main.assert_called_once_with(["--dry-run"])

    def test_main_codegen_end_to_end(self, snapshot_path, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        argv = ["structgen", "codegen", "app", "secret", "offline", "--snapshot", str(snapshot_path)]
        with patch("sys.argv", argv):
            assert __main__.main() == 0
        assert (tmp_path / "structs" / "structMap.go").is_file()

        with patch("sys.argv", ["structgen", "verify"]):
            assert __main__.main() == 0

    @pytest.mark.parametrize("command", ["codegen", "snapshot"])
    def test_main_missing_arguments(self, command, capsys):
        with patch("sys.argv", ["structgen", command]):
            assert __main__.main() == 2
        assert "usage:" in capsys.readouterr().err
