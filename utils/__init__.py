"""Utility-Module für whisper-paste.

Gemeinsame Hilfsfunktionen für Logging und Zeitmessung.

Usage:
    from utils import setup_logging, log, error, timed_operation

    setup_logging(debug=True)
    with timed_operation("API-Call"):
        do_something()
"""

# NOTE:
# Keep this package-level re-export module small. `audio.recording` imports
# `utils.logging`, and `utils.state` imports `audio.waveform`; re-exporting
# state here would create an import cycle during startup.

from .logging import setup_logging, log, error, get_logger, get_session_id, new_session_id
from .timing import Stopwatch, timed_operation, format_duration, log_preview

__all__ = [
    "setup_logging",
    "log",
    "error",
    "get_logger",
    "get_session_id",
    "new_session_id",
    "Stopwatch",
    "timed_operation",
    "log_preview",
    "format_duration",
]
