"""Prozessweiter Session-State für whisper-paste.

Ein einziges Objekt, das von Hotkey-Thread, Session-Worker und
Anzeige gemeinsam genutzt wird. Zugriff nur über schmale Operationen,
damit "nur eine aktive Session" und "begrenzte Waveform" am
Zugriffspunkt garantiert sind.
"""

import threading
from enum import Enum

from audio.waveform import WaveformWindow
from config import WAVEFORM_SIZE


class Status(Enum):
    IDLE = "idle"
    RECORDING = "recording"
    TRANSCRIBING = "transcribing"
    RESULT = "result"  # Transkript eingefügt und angezeigt


# Aus diesen Zuständen startet ein Hotkey eine neue Aufnahme
STARTABLE = frozenset({Status.IDLE, Status.RESULT})


class SharedSessionState:
    """Status, Stop-Flag, Live-Waveform und letztes Ergebnis.

    Status und Stop-Flag sind einzeln synchronisiert (kurzer Lock bzw.
    threading.Event); Waveform und Ergebnis haben eigene Locks, die nur
    für Kopieren/Ersetzen gehalten werden.
    """

    def __init__(self, waveform_capacity: int = WAVEFORM_SIZE):
        self._status = Status.IDLE
        self._status_lock = threading.Lock()
        self._stop_requested = threading.Event()
        self._waveform = WaveformWindow(waveform_capacity)
        self._result_lock = threading.Lock()
        self._last_result = ""

    # -- Status ---------------------------------------------------------------

    @property
    def status(self) -> Status:
        with self._status_lock:
            return self._status

    def set_status(self, status: Status) -> None:
        with self._status_lock:
            self._status = status

    def begin_recording(self) -> bool:
        """Atomarer Start: IDLE/RESULT → RECORDING.

        Setzt Stop-Flag und Waveform im selben kritischen Abschnitt zurück.
        Gibt False zurück, wenn bereits eine Session läuft.
        """
        with self._status_lock:
            if self._status not in STARTABLE:
                return False
            self._stop_requested.clear()
            self._waveform.clear()
            self._status = Status.RECORDING
            return True

    # -- Stop-Signal ----------------------------------------------------------

    def request_stop(self) -> None:
        """Fordert das Ende der laufenden Aufnahme an (Hotkey oder UI)."""
        self._stop_requested.set()

    @property
    def stop_requested(self) -> bool:
        return self._stop_requested.is_set()

    # -- Live-Waveform --------------------------------------------------------

    def replace_waveform(self, samples) -> None:
        self._waveform.replace(samples)

    def waveform_snapshot(self):
        return self._waveform.snapshot()

    # -- Ergebnis -------------------------------------------------------------

    def set_result(self, text: str) -> None:
        with self._result_lock:
            self._last_result = text

    @property
    def last_result(self) -> str:
        with self._result_lock:
            return self._last_result


__all__ = ["Status", "STARTABLE", "SharedSessionState"]
