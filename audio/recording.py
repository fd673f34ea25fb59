"""Audio-Aufnahme für whisper-paste.

Öffnet das Standard-Eingabegerät in seiner nativen Konfiguration
(Samplerate + Kanäle) mit sounddevice, mischt auf Mono und liefert
am Ende 16kHz-Samples für die Transkription.

Keine Abhängigkeit zum Session-State: gestoppt wird über ein
eigenes threading.Event des Aufrufers.
"""

import logging
import threading
import time
from collections import Counter

import numpy as np

from config import CAPTURE_POLL_INTERVAL, TARGET_SAMPLE_RATE
from utils.logging import get_session_id
from utils.timing import format_duration

from .resample import resample

logger = logging.getLogger("whisper_paste.audio")


class AudioDeviceError(RuntimeError):
    """Eingabegerät fehlt, ist unbrauchbar konfiguriert oder der Stream startet nicht."""


def _sounddevice():
    """Lazy Import – PortAudio wird erst bei der ersten Aufnahme geladen."""
    import sounddevice as sd

    return sd


class AudioCapture:
    """Eine Aufnahme-Session am Standard-Mikrofon.

    Usage:
        capture = AudioCapture(waveform=window)
        capture.start()
        # ... anderer Thread setzt stop_event ...
        samples = capture.wait_until_stopped(stop_event)
    """

    def __init__(self, waveform=None, target_rate: int = TARGET_SAMPLE_RATE):
        self.waveform = waveform
        self.target_rate = target_rate

        self.sample_rate: int = 0
        self.channels: int = 0

        self._chunks: list[np.ndarray] = []
        self._stream_status: list[str] = []
        self._chunks_lock = threading.Lock()
        self._stream = None
        self._recording_start: float = 0.0

    def _audio_callback(self, indata, _frames, _time_info, status) -> None:
        """Callback im PortAudio-Thread: nur kurz gehaltene Locks, kein I/O.

        Stream-Status (Over-/Underflows) wird nur gesammelt und nach dem
        Stop geloggt.
        """
        if indata.ndim > 1 and indata.shape[1] > 1:
            mono = indata.mean(axis=1, dtype=np.float32)
        else:
            mono = indata.reshape(-1).copy()

        with self._chunks_lock:
            self._chunks.append(mono)
            if status:
                self._stream_status.append(str(status))

        if self.waveform is not None:
            self.waveform.append(mono)

    def start(self) -> None:
        """Öffnet das Eingabegerät und startet den Stream.

        Raises:
            AudioDeviceError: Wenn kein Gerät gefunden wird, die Konfiguration
                unbrauchbar ist oder der Stream nicht startet
        """
        try:
            sd = _sounddevice()
        except OSError as e:
            # sounddevice wirft OSError, wenn die PortAudio-Library fehlt
            raise AudioDeviceError(f"PortAudio nicht verfügbar: {e}") from e

        try:
            device = sd.query_devices(kind="input")
        except (sd.PortAudioError, ValueError) as e:
            raise AudioDeviceError(f"no input device found: {e}") from e

        try:
            native_rate = int(device["default_samplerate"])
            native_channels = int(device["max_input_channels"])
        except (KeyError, TypeError, ValueError) as e:
            raise AudioDeviceError(f"failed to get default input config: {e}") from e

        if native_rate <= 0 or native_channels <= 0:
            raise AudioDeviceError(
                f"failed to get default input config: rate={native_rate}, "
                f"channels={native_channels}"
            )

        self.sample_rate = native_rate
        self.channels = native_channels
        with self._chunks_lock:
            self._chunks = []
            self._stream_status = []

        try:
            stream = sd.InputStream(
                samplerate=native_rate,
                channels=native_channels,
                dtype="float32",
                callback=self._audio_callback,
            )
        except (sd.PortAudioError, ValueError) as e:
            raise AudioDeviceError(f"failed to build input stream: {e}") from e

        try:
            stream.start()
        except sd.PortAudioError as e:
            stream.close()
            raise AudioDeviceError(f"failed to start stream: {e}") from e

        self._stream = stream
        self._recording_start = time.perf_counter()
        logger.info(
            f"[{get_session_id()}] Aufnahme gestartet: "
            f"{device.get('name', '?')}, {native_rate}Hz, {native_channels}ch"
        )

    def close(self) -> None:
        """Stoppt und schließt den Stream (idempotent)."""
        stream = self._stream
        self._stream = None
        if stream is None:
            return
        try:
            stream.stop()
        finally:
            stream.close()

    def wait_until_stopped(
        self,
        stop_event: threading.Event,
        poll_interval: float = CAPTURE_POLL_INTERVAL,
    ) -> np.ndarray:
        """Blockiert bis stop_event gesetzt ist und liefert die Samples.

        Der Stream wird freigegeben, bevor resampelt wird.

        Returns:
            float32 Mono-Samples in target_rate (leer wenn nichts aufgenommen)
        """
        try:
            while not stop_event.wait(poll_interval):
                pass
        finally:
            self.close()

        duration = time.perf_counter() - self._recording_start
        logger.info(f"[{get_session_id()}] Aufnahme: {format_duration(duration)}")

        with self._chunks_lock:
            chunks = self._chunks
            self._chunks = []
            stream_status = self._stream_status
            self._stream_status = []

        if stream_status:
            # Over-/Underflows sind nicht fatal, die Aufnahme ist trotzdem nutzbar
            counts = Counter(stream_status)
            summary = ", ".join(f"{status} ({n}x)" for status, n in counts.items())
            logger.warning(f"[{get_session_id()}] Audio-Stream Status: {summary}")

        if not chunks:
            return np.zeros(0, dtype=np.float32)

        raw = np.concatenate(chunks)
        if self.sample_rate != self.target_rate:
            logger.debug(
                f"Resample: {self.sample_rate}Hz → {self.target_rate}Hz, "
                f"{raw.shape[0]} Samples"
            )
            return resample(raw, self.sample_rate, self.target_rate)
        return raw

    @property
    def is_recording(self) -> bool:
        """True solange der Stream offen ist."""
        return self._stream is not None


def record_until_stopped(stop_event: threading.Event, waveform=None) -> np.ndarray:
    """Nimmt vom Standard-Mikrofon auf, bis stop_event gesetzt wird.

    Args:
        stop_event: Vom Aufrufer kontrolliertes Stop-Signal
        waveform: Optionales WaveformWindow für die Live-Anzeige

    Returns:
        float32 Mono-Samples in TARGET_SAMPLE_RATE

    Raises:
        AudioDeviceError: Bei Gerätefehlern (vor dem Aufnahmestart)
    """
    capture = AudioCapture(waveform=waveform)
    capture.start()
    return capture.wait_until_stopped(stop_event)


__all__ = ["AudioCapture", "AudioDeviceError", "record_until_stopped"]
