"""
paste_daemon.py – Session-Steuerung für whisper-paste.

Architektur:
- Hotkey-Thread: HotkeyMonitor → SessionController.toggle() (blockiert nie)
- SessionWorker: Aufnahme → Resample → WAV → Transkription → Auto-Paste
- WaveformBroadcaster: kopiert die Live-Waveform alle 50ms in den State
- StopWatcher: überträgt das Session-Stop-Flag auf das Aufnahme-Event
- PortAudio-Callback: füllt Aufnahme-Puffer und Waveform

State-Flow:
    idle/result → [Hotkey] → recording → [Hotkey] → transcribing → result | idle
"""

import logging
import threading

from audio import AudioCapture, AudioDeviceError, WaveformWindow, samples_to_wav
from config import (
    BROADCAST_INTERVAL,
    DEFAULT_MODEL,
    STOP_WATCH_INTERVAL,
    TARGET_SAMPLE_RATE,
    WAVEFORM_SIZE,
)
from providers import TranscriptionError
from utils.logging import log, new_session_id
from utils.state import SharedSessionState, Status
from utils.timing import log_preview
from whisper_platform.paste import PasteError

logger = logging.getLogger("whisper_paste")


class SessionController:
    """
    State-Machine für Aufnahme-Sessions.

    Reagiert auf Hotkey-Toggles, startet pro Aufnahme die Worker-Threads
    und setzt den Status im SharedSessionState.

    Args:
        state: Prozessweiter Session-State
        provider: Objekt mit transcribe(wav_bytes, model) -> str
        paster: Objekt mit paste(text) (plattformspezifisch)
        model: Transkriptions-Modell
        capture_factory: Erzeugt die Aufnahme (Default: AudioCapture)
    """

    def __init__(
        self,
        state: SharedSessionState,
        provider,
        paster,
        model: str = DEFAULT_MODEL,
        capture_factory=AudioCapture,
        broadcast_interval: float = BROADCAST_INTERVAL,
        stop_watch_interval: float = STOP_WATCH_INTERVAL,
    ):
        self.state = state
        self.provider = provider
        self.paster = paster
        self.model = model
        self.capture_factory = capture_factory
        self.broadcast_interval = broadcast_interval
        self.stop_watch_interval = stop_watch_interval

        self._worker_thread: threading.Thread | None = None

    # =========================================================================
    # Hotkey
    # =========================================================================

    def toggle(self) -> None:
        """Hotkey-Toggle. Läuft im Polling-Thread, darf nicht blockieren."""
        status = self.state.status

        if status is Status.TRANSCRIBING:
            logger.debug("Toggle ignoriert: Transkription läuft")
            return

        if status is Status.RECORDING:
            logger.info("Toggle: Stop angefordert")
            log("Aufnahme gestoppt.")
            self.state.request_stop()
            return

        self.start_session()

    def start_session(self) -> bool:
        """Startet eine neue Aufnahme-Session (IDLE/RESULT → RECORDING).

        Returns:
            False wenn bereits eine Session aktiv ist
        """
        # Compare-and-set: zwei schnelle Toggles können nicht doppelt starten
        if not self.state.begin_recording():
            logger.warning("Start ignoriert: Session bereits aktiv")
            return False

        session_id = new_session_id()
        logger.info(f"[{session_id}] Toggle: Start")
        log("Aufnahme läuft...")

        self._worker_thread = threading.Thread(
            target=self._session_worker,
            daemon=True,
            name="SessionWorker",
        )
        self._worker_thread.start()
        return True

    def wait_for_session(self, timeout: float | None = None) -> bool:
        """Wartet auf das Ende der aktuellen Session. True wenn beendet."""
        worker = self._worker_thread
        if worker is None:
            return True
        worker.join(timeout)
        return not worker.is_alive()

    # =========================================================================
    # Session-Threads
    # =========================================================================

    def _broadcast_waveform(self, sink: WaveformWindow, session_done: threading.Event) -> None:
        """Kopiert die Aufnahme-Waveform in den State, solange diese Session aufnimmt."""
        while not session_done.is_set() and self.state.status is Status.RECORDING:
            self.state.replace_waveform(sink.snapshot())
            session_done.wait(self.broadcast_interval)

    def _watch_stop(self, capture_stop: threading.Event) -> None:
        """Überträgt das Session-Stop-Flag auf das Stop-Event der Aufnahme."""
        while not capture_stop.wait(self.stop_watch_interval):
            if self.state.stop_requested:
                capture_stop.set()
                return

    def _spawn(self, target, name: str, *args) -> threading.Thread:
        thread = threading.Thread(target=target, args=args, daemon=True, name=name)
        thread.start()
        return thread

    def _session_worker(self) -> None:
        """Eine komplette Session: Aufnahme bis Stop, dann Transkription."""
        try:
            self._run_session()
        except Exception as e:
            logger.exception(f"Session-Worker Fehler: {e}")
            self.state.set_status(Status.IDLE)

    def _run_session(self) -> None:
        sink = WaveformWindow(WAVEFORM_SIZE)
        capture_stop = threading.Event()
        capture = self.capture_factory(waveform=sink)

        # Gerätefehler vor allen weiteren Threads melden
        try:
            capture.start()
        except AudioDeviceError as e:
            logger.error(f"Aufnahme-Fehler: {e}")
            log(f"Aufnahme-Fehler: {e}")
            self.state.set_status(Status.IDLE)
            return

        broadcaster = self._spawn(
            self._broadcast_waveform, "WaveformBroadcaster", sink, capture_stop
        )
        self._spawn(self._watch_stop, "StopWatcher", capture_stop)

        try:
            samples = capture.wait_until_stopped(capture_stop)
        finally:
            # Beendet StopWatcher und Broadcaster auch bei Fehlern
            capture_stop.set()

        # Ein alter Broadcaster darf die Waveform der nächsten Session nicht überschreiben
        broadcaster.join()
        self._process_samples(samples)

    def _process_samples(self, samples) -> None:
        """Transkribiert die Aufnahme und fügt das Ergebnis ein."""
        if len(samples) == 0:
            logger.warning("Keine Audiodaten aufgenommen")
            log("(keine Audiodaten aufgenommen)")
            self.state.set_status(Status.IDLE)
            return

        self.state.set_status(Status.TRANSCRIBING)
        duration = len(samples) / TARGET_SAMPLE_RATE
        logger.info(f"Transkribiere {duration:.1f}s Audio...")
        log("Transkribiere...")

        wav_data = samples_to_wav(samples, TARGET_SAMPLE_RATE)

        try:
            text = self.provider.transcribe(wav_data, model=self.model)
        except TranscriptionError as e:
            logger.error(f"Transkription fehlgeschlagen: {e}")
            log(f"Transkriptions-Fehler: {e}")
            self.state.set_status(Status.IDLE)
            return

        text = text.strip()
        if not text:
            logger.warning("Leeres Transkript")
            log("(keine Sprache erkannt)")
            self.state.set_status(Status.IDLE)
            return

        logger.info(f"Transkript: '{log_preview(text)}'")
        log(f"Ergebnis: {text}")
        self.state.set_result(text)

        try:
            self.paster.paste(text)
            logger.info("✓ Text eingefügt")
        except PasteError as e:
            # Text bleibt in Zwischenablage und Anzeige verfügbar
            logger.error(f"Auto-Paste fehlgeschlagen: {e}")
            log(f"Einfügen fehlgeschlagen: {e}")

        self.state.set_status(Status.RESULT)


__all__ = ["SessionController"]
