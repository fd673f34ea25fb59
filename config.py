"""Zentrale Konfiguration für whisper-paste.

Gemeinsame Konstanten für Audio, Hotkey-Polling und Pfade.
Vermeidet Duplikation zwischen Modulen.
"""

from pathlib import Path

# =============================================================================
# Audio-Konfiguration
# =============================================================================

# Whisper erwartet Audio mit 16kHz – Geräte liefern oft 44.1/48kHz
TARGET_SAMPLE_RATE = 16000

# Konstante für Audio-Konvertierung (float32 → int16)
INT16_MAX = 32767
INT16_MIN = -32768

# Live-Waveform: ~0.1s bei 16kHz, nur für die Anzeige
WAVEFORM_SIZE = 2048

# =============================================================================
# Intervalle (Sekunden)
# =============================================================================

HOTKEY_POLL_INTERVAL = 0.03   # Tastatur-Status abfragen
DEBOUNCE_INTERVAL = 0.5       # verhindert Auto-Repeat Doppelauslösung
CAPTURE_POLL_INTERVAL = 0.05  # Aufnahme-Loop prüft Stop-Signal
BROADCAST_INTERVAL = 0.05     # Waveform-Kopie für die Anzeige
STOP_WATCH_INTERVAL = 0.03    # Session-Stop → Aufnahme-Stop
PASTE_DELAY = 0.1             # Clipboard-Sync vor dem Einfügen

# =============================================================================
# Defaults
# =============================================================================

DEFAULT_MODEL = "whisper-1"
DEFAULT_HOTKEY = "ctrl+shift+r"
API_KEY_PLACEHOLDER = "sk-your-key-here"

# =============================================================================
# Lokale Pfade
# =============================================================================

# User-Verzeichnis für Konfiguration und Logs
USER_CONFIG_DIR = Path.home() / ".whisper_paste"
CONFIG_FILE = USER_CONFIG_DIR / "config.toml"
ENV_FILE = USER_CONFIG_DIR / ".env"

LOG_DIR = USER_CONFIG_DIR / "logs"
LOG_FILE = LOG_DIR / "whisper_paste.log"


__all__ = [
    # Audio
    "TARGET_SAMPLE_RATE",
    "INT16_MAX",
    "INT16_MIN",
    "WAVEFORM_SIZE",
    # Intervalle
    "HOTKEY_POLL_INTERVAL",
    "DEBOUNCE_INTERVAL",
    "CAPTURE_POLL_INTERVAL",
    "BROADCAST_INTERVAL",
    "STOP_WATCH_INTERVAL",
    "PASTE_DELAY",
    # Defaults
    "DEFAULT_MODEL",
    "DEFAULT_HOTKEY",
    "API_KEY_PLACEHOLDER",
    # Paths
    "USER_CONFIG_DIR",
    "CONFIG_FILE",
    "ENV_FILE",
    "LOG_DIR",
    "LOG_FILE",
]
