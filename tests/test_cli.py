"""Tests für CLI-Argument-Parsing mit Typer."""

from unittest.mock import patch

import pytest
from typer.testing import CliRunner

import config
from utils.preferences import load_config_file
from whisper_paste import app

runner = CliRunner()


@pytest.fixture(autouse=True)
def isolated(temp_config, clean_env, monkeypatch):
    """Keine echten .env-Dateien, kein Logging ins Home-Verzeichnis."""
    import whisper_paste

    monkeypatch.setattr(whisper_paste, "load_environment", lambda: None)
    monkeypatch.setattr(whisper_paste, "setup_logging", lambda debug=False: None)


class TestApiKeyOption:
    def test_saves_key(self):
        result = runner.invoke(app, ["--api-key", "sk-cli-key"])
        assert result.exit_code == 0
        assert "API-Key gespeichert" in result.output
        assert load_config_file()["api_key"] == "sk-cli-key"

    def test_empty_key_is_rejected(self):
        result = runner.invoke(app, ["--api-key", "  "])
        assert result.exit_code == 1
        assert not config.CONFIG_FILE.exists()


class TestSetup:
    def test_interactive_setup_saves_key(self):
        result = runner.invoke(app, ["--setup"], input="sk-interactive\n")
        assert result.exit_code == 0
        assert load_config_file()["api_key"] == "sk-interactive"

    def test_keep_existing_key(self):
        runner.invoke(app, ["--api-key", "sk-existing-key"])
        result = runner.invoke(app, ["--setup"], input="n\n")
        assert result.exit_code == 0
        assert "unverändert" in result.output
        assert load_config_file()["api_key"] == "sk-existing-key"

    def test_replace_existing_key(self):
        runner.invoke(app, ["--api-key", "sk-existing-key"])
        result = runner.invoke(app, ["--setup"], input="y\nsk-replaced\n")
        assert result.exit_code == 0
        assert load_config_file()["api_key"] == "sk-replaced"


class TestDaemonStart:
    def test_missing_api_key_exits(self):
        """Ohne Key: Exit 1, Daemon wird nicht gestartet."""
        with patch("whisper_paste.run_daemon") as mock_run:
            result = runner.invoke(app, [])
        assert result.exit_code == 1
        mock_run.assert_not_called()

    def test_uses_config_defaults(self, monkeypatch):
        monkeypatch.setenv("OPENAI_API_KEY", "sk-env")
        with patch("whisper_paste.run_daemon") as mock_run:
            result = runner.invoke(app, [])
        assert result.exit_code == 0
        mock_run.assert_called_once_with(
            hotkey="ctrl+shift+r", model="whisper-1", api_key="sk-env"
        )

    def test_cli_overrides(self, monkeypatch):
        monkeypatch.setenv("OPENAI_API_KEY", "sk-env")
        with patch("whisper_paste.run_daemon") as mock_run:
            result = runner.invoke(
                app, ["--hotkey", "ctrl+alt+space", "--model", "gpt-4o-transcribe"]
            )
        assert result.exit_code == 0
        kwargs = mock_run.call_args.kwargs
        assert kwargs["hotkey"] == "ctrl+alt+space"
        assert kwargs["model"] == "gpt-4o-transcribe"

    def test_env_overrides(self, monkeypatch):
        monkeypatch.setenv("OPENAI_API_KEY", "sk-env")
        monkeypatch.setenv("WHISPER_PASTE_MODEL", "gpt-4o-mini-transcribe")
        monkeypatch.setenv("WHISPER_PASTE_HOTKEY", "f19")
        with patch("whisper_paste.run_daemon") as mock_run:
            runner.invoke(app, [])
        kwargs = mock_run.call_args.kwargs
        assert kwargs["model"] == "gpt-4o-mini-transcribe"
        assert kwargs["hotkey"] == "f19"

    def test_invalid_hotkey_exits(self, monkeypatch):
        """Ungültiger Hotkey → Konfigurationsfehler, Exit 1."""
        monkeypatch.setenv("OPENAI_API_KEY", "sk-env")
        with patch("whisper_platform.get_paster"):
            result = runner.invoke(app, ["--hotkey", "ctrl+banana"])
        assert result.exit_code == 1
