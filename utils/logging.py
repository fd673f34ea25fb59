"""Logging-Setup für whisper-paste.

Alles unter dem Logger "whisper_paste" landet in einer rotierenden
Logdatei; mit --debug zusätzlich auf stderr. Nutzer-Meldungen
(log/error) gehen immer direkt auf stderr.
"""

import logging
import sys
import tempfile
import uuid
from logging.handlers import RotatingFileHandler
from pathlib import Path

logger = logging.getLogger("whisper_paste")

# Aktuelle Aufnahme-Session, als Präfix in Log-Zeilen
_session_id: str = ""

_FILE_FORMAT = logging.Formatter("%(asctime)s [%(levelname)s] %(threadName)s: %(message)s")
_STDERR_FORMAT = logging.Formatter("[%(levelname)s] %(message)s")

LOG_MAX_BYTES = 1_000_000
LOG_BACKUP_COUNT = 3


def new_session_id() -> str:
    """Vergibt eine neue 8-stellige Session-ID (bei jedem Aufnahmestart)."""
    global _session_id
    _session_id = uuid.uuid4().hex[:8]
    return _session_id


def get_session_id() -> str:
    """Session-ID der laufenden bzw. letzten Aufnahme."""
    return _session_id or new_session_id()


def get_logger() -> logging.Logger:
    return logger


def _open_log_file(candidates: list[Path]) -> tuple[RotatingFileHandler, Path] | None:
    """Erster beschreibbarer Logpfad aus candidates."""
    for path in candidates:
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            handler = RotatingFileHandler(
                path, maxBytes=LOG_MAX_BYTES, backupCount=LOG_BACKUP_COUNT, encoding="utf-8"
            )
        except OSError as e:
            print(f"Log-Datei nicht beschreibbar ({path}): {e}", file=sys.stderr)
            continue
        handler.setLevel(logging.DEBUG)
        handler.setFormatter(_FILE_FORMAT)
        return handler, path
    return None


def setup_logging(debug: bool = False) -> Path | None:
    """Richtet Datei- und optional stderr-Logging ein.

    Mehrfacher Aufruf ändert nur das Level.

    Returns:
        Pfad der Logdatei, None wenn nur auf stderr geloggt wird
    """
    from config import LOG_FILE

    level = logging.DEBUG if debug else logging.INFO
    logger.setLevel(level)
    if logger.handlers:
        return None

    opened = _open_log_file([LOG_FILE, Path(tempfile.gettempdir()) / LOG_FILE.name])
    if opened is not None:
        file_handler, log_path = opened
        logger.addHandler(file_handler)
    else:
        log_path = None

    # Ohne Logdatei immer stderr, damit Fehler nicht verloren gehen
    if debug or log_path is None:
        stderr_handler = logging.StreamHandler(sys.stderr)
        stderr_handler.setLevel(level)
        stderr_handler.setFormatter(_STDERR_FORMAT)
        logger.addHandler(stderr_handler)

    return log_path


def log(message: str) -> None:
    """Status-Meldung für den Nutzer (stderr)."""
    print(message, file=sys.stderr)


def error(message: str) -> None:
    print(f"Fehler: {message}", file=sys.stderr)


__all__ = [
    "error",
    "get_logger",
    "get_session_id",
    "log",
    "new_session_id",
    "setup_logging",
]
