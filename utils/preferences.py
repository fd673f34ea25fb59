"""Persistente Einstellungen für whisper-paste.

Speichert API-Key, Modell und Hotkey in ~/.whisper_paste/config.toml.
Der API-Key aus der Umgebung (OPENAI_API_KEY) hat Vorrang vor der Datei.
"""

import json
import logging
import os
import tomllib
from dataclasses import dataclass
from pathlib import Path

import config

logger = logging.getLogger("whisper_paste")


class ConfigError(ValueError):
    """Konfiguration unvollständig (z.B. kein API-Key)."""


@dataclass(frozen=True)
class Config:
    api_key: str
    model: str = config.DEFAULT_MODEL
    hotkey: str = config.DEFAULT_HOTKEY


def config_path() -> Path:
    """Pfad zur config.toml (zur Laufzeit gelesen, damit Tests patchen können)."""
    return config.CONFIG_FILE


def load_config_file(path: Path | None = None) -> dict:
    """Lädt die TOML-Datei als dict. Fehlende oder kaputte Datei → {}."""
    path = path or config_path()
    if not path.exists():
        return {}
    try:
        return tomllib.loads(path.read_text(encoding="utf-8"))
    except (tomllib.TOMLDecodeError, OSError, UnicodeDecodeError) as e:
        logger.warning(f"config.toml ungültig, ignoriere: {e}")
        return {}


def _toml_value(value) -> str:
    # JSON-Strings/Zahlen/Bools sind gültige TOML-Basiswerte
    return json.dumps(value, ensure_ascii=False)


def _dump_config(table: dict) -> str:
    lines = []
    for key, value in table.items():
        if isinstance(value, (str, int, float, bool)):
            lines.append(f"{key} = {_toml_value(value)}")
        else:
            logger.warning(f"config.toml: '{key}' wird beim Speichern verworfen")
    return "\n".join(lines) + "\n"


def save_api_key(key: str, path: Path | None = None) -> Path:
    """Speichert/aktualisiert den API-Key, andere Einträge bleiben erhalten.

    Returns:
        Pfad der geschriebenen Datei
    """
    path = path or config_path()
    path.parent.mkdir(parents=True, exist_ok=True)

    table = load_config_file(path)
    table["api_key"] = key
    path.write_text(_dump_config(table), encoding="utf-8")
    logger.info(f"API-Key gespeichert: {path}")
    return path


def mask_api_key(key: str) -> str:
    """Zeigt nur Anfang und Ende des Keys, z.B. 'sk-abcd...wxyz'."""
    return f"{key[:7]}...{key[-4:] if len(key) > 4 else ''}"


def get_saved_api_key(path: Path | None = None) -> str | None:
    """API-Key aus der Datei (ohne ENV), Platzhalter zählt nicht."""
    key = load_config_file(path).get("api_key")
    if not isinstance(key, str) or not key or key == config.API_KEY_PLACEHOLDER:
        return None
    return key


def load_config(path: Path | None = None) -> Config:
    """Lädt die Konfiguration: ENV > config.toml > Defaults.

    Raises:
        ConfigError: Wenn kein API-Key gefunden wird oder nur der Platzhalter
    """
    table = load_config_file(path)

    api_key = os.getenv("OPENAI_API_KEY") or table.get("api_key")
    if not api_key:
        raise ConfigError(
            "Kein API-Key gefunden.\n\n"
            "Ausführen:  whisper-paste --setup\n"
            "  oder:     whisper-paste --api-key sk-your-key\n"
            '  oder:     export OPENAI_API_KEY="sk-your-key"'
        )
    if api_key == config.API_KEY_PLACEHOLDER:
        raise ConfigError("API-Key ist noch der Platzhalter. Ausführen: whisper-paste --setup")

    return Config(
        api_key=str(api_key),
        model=str(table.get("model") or config.DEFAULT_MODEL),
        hotkey=str(table.get("hotkey") or config.DEFAULT_HOTKEY),
    )


__all__ = [
    "Config",
    "ConfigError",
    "config_path",
    "get_saved_api_key",
    "load_config",
    "load_config_file",
    "mask_api_key",
    "save_api_key",
]
