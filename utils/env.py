""".env-Unterstützung für whisper-paste (python-dotenv).

Priorität (höchste zuerst):
1) Prozess-Umgebung (`os.environ`)
2) User-Config `~/.whisper_paste/.env`
3) Lokale `.env` im Arbeitsverzeichnis
"""

import logging
import os
from pathlib import Path

from dotenv import dotenv_values

logger = logging.getLogger("whisper_paste")


def load_environment() -> None:
    """Übernimmt Werte aus den .env-Dateien, ohne gesetzte Variablen zu überschreiben."""
    from config import ENV_FILE

    merged: dict[str, str] = {}
    # Lokal zuerst, dann User-Datei (User gewinnt)
    for env_path in (Path(".env"), ENV_FILE):
        if not env_path.exists():
            continue
        merged.update(
            {key: value for key, value in dotenv_values(env_path).items() if value is not None}
        )

    loaded = [key for key in merged if key not in os.environ]
    for key in loaded:
        os.environ[key] = merged[key]

    if loaded:
        logger.debug(f".env geladen: {', '.join(sorted(loaded))}")


__all__ = ["load_environment"]
