"""
Tests for the command line entry point with the bundled configuration.
"""

import pytest

import main


@pytest.fixture(autouse=True)
def english(monkeypatch):
    monkeypatch.delenv("LC_ALL", raising=False)
    monkeypatch.setenv("LANG", "en_US.UTF-8")


class TestMain:

    def test_batch(self, capsys):
        assert main.main(["--batch", "version", "greet world 3", "unknown"]) == 0
        out = capsys.readouterr().out
        assert "1.0.0 released at 2024-06-01" in out
        assert "name = world\ntimes = 3\n" in out
        assert "No such command: unknown" in out

    def test_bundled_config_has_no_construction_errors(self, capsys):
        main.main(["--batch", "help"])
        out = capsys.readouterr().out
        assert "Errors/Warnings" not in out
        assert "Show help information" in out

    def test_complete(self, capsys):
        assert main.main(["--complete", "greet "]) == 0
        out = capsys.readouterr().out
        assert "replace [6:6]" in out
        assert "world\tthe whole world" in out
        assert "me\tyourself" in out

    def test_batch_exit(self):
        with pytest.raises(SystemExit) as exc_info:
            main.main(["--batch", "exit", "version"])
        assert exc_info.value.code == 0

    def test_missing_config(self, tmp_path, capsys):
        assert main.main(["--config", str(tmp_path / "missing.yaml"), "--batch", "help"]) == 1
        assert "missing.yaml" in capsys.readouterr().err
