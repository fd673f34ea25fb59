"""
Gemeinsame Test-Fixtures für whisper-paste.

Diese Fixtures isolieren Tests von externen Abhängigkeiten:
- Dateisystem (config.toml, .env, Logdatei)
- Umgebungsvariablen (API-Key, Modell, Hotkey)
- Audio-Hardware (sounddevice/PortAudio)

Shared Fake-Fixtures:
- fake_sounddevice: Ersetzt sounddevice in audio.recording
"""

import sys
from pathlib import Path

import numpy as np
import pytest

# Projekt-Root zum Python-Path hinzufügen
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))


# =============================================================================
# Fake sounddevice
# =============================================================================


class FakePortAudioError(Exception):
    """Entspricht sounddevice.PortAudioError."""


class FakeInputStream:
    """InputStream ohne Hardware: liefert die vorbereiteten Blöcke beim start()."""

    def __init__(self, device, samplerate, channels, dtype, callback):
        self._device = device
        self.samplerate = samplerate
        self.channels = channels
        self.dtype = dtype
        self.callback = callback
        self.started = False
        self.stopped = False
        self.closed = False

    def start(self):
        if self._device.fail_start:
            raise FakePortAudioError("device busy")
        self.started = True
        for block in self._device.blocks:
            self.callback(block, len(block), None, self._device.status)

    def stop(self):
        self.stopped = True

    def close(self):
        self.closed = True


class FakeSoundDevice:
    """Minimaler Ersatz für das sounddevice-Modul."""

    PortAudioError = FakePortAudioError

    def __init__(self):
        self.device = {
            "name": "Fake Mic",
            "default_samplerate": 16000.0,
            "max_input_channels": 1,
        }
        self.blocks: list[np.ndarray] = []
        self.status = None
        self.fail_build = False
        self.fail_start = False
        self.streams: list[FakeInputStream] = []

    def configure(self, rate: float, channels: int, blocks) -> "FakeSoundDevice":
        self.device = {
            "name": "Fake Mic",
            "default_samplerate": rate,
            "max_input_channels": channels,
        }
        self.blocks = [np.asarray(b, dtype=np.float32) for b in blocks]
        return self

    def query_devices(self, kind=None):
        if self.device is None:
            raise FakePortAudioError("Error querying device -1")
        return self.device

    def InputStream(self, samplerate, channels, dtype, callback):
        if self.fail_build:
            raise FakePortAudioError("Invalid number of channels")
        stream = FakeInputStream(self, samplerate, channels, dtype, callback)
        self.streams.append(stream)
        return stream


@pytest.fixture
def fake_sounddevice(monkeypatch):
    """
    Ersetzt sounddevice in audio.recording durch FakeSoundDevice.

    Usage:
        fake_sounddevice.configure(48000, 2, [block1, block2])
    """
    import audio.recording

    fake = FakeSoundDevice()
    monkeypatch.setattr(audio.recording, "_sounddevice", lambda: fake)
    return fake


# =============================================================================
# Environment & Isolation Fixtures
# =============================================================================


@pytest.fixture
def mock_env(monkeypatch):
    """Setzt einen Test-API-Key für isolierte Tests."""
    monkeypatch.setenv("OPENAI_API_KEY", "sk-test-key-openai")


@pytest.fixture
def clean_env(monkeypatch):
    """Entfernt OPENAI_API_KEY und alle WHISPER_PASTE_* Variablen."""
    import os

    monkeypatch.delenv("OPENAI_API_KEY", raising=False)
    for key in list(os.environ.keys()):
        if key.startswith("WHISPER_PASTE_"):
            monkeypatch.delenv(key, raising=False)


@pytest.fixture
def temp_config(tmp_path, monkeypatch):
    """
    Ersetzt alle Benutzer-Dateipfade durch ein temporäres Verzeichnis.

    Verhindert, dass Tests die echte ~/.whisper_paste/config.toml lesen
    oder überschreiben.
    """
    import config

    user_dir = tmp_path / ".whisper_paste"
    monkeypatch.setattr(config, "USER_CONFIG_DIR", user_dir)
    monkeypatch.setattr(config, "CONFIG_FILE", user_dir / "config.toml")
    monkeypatch.setattr(config, "ENV_FILE", user_dir / ".env")
    monkeypatch.setattr(config, "LOG_DIR", user_dir / "logs")
    monkeypatch.setattr(config, "LOG_FILE", user_dir / "logs" / "whisper_paste.log")
    return user_dir
