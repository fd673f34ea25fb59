"""Begrenzter Ringpuffer für die Live-Waveform.

Nur Anzeige-Näherung – die Transkription nutzt den verlustfreien
Aufnahme-Puffer in audio.recording.
"""

import threading

import numpy as np

from config import WAVEFORM_SIZE


class WaveformWindow:
    """Thread-sichere Waveform mit fester Kapazität.

    Neue Samples werden angehängt, die ältesten fallen heraus,
    sobald die Kapazität überschritten ist.
    """

    def __init__(self, capacity: int = WAVEFORM_SIZE):
        if capacity <= 0:
            raise ValueError(f"Ungültige Kapazität: {capacity}")
        self.capacity = capacity
        self._lock = threading.Lock()
        self._samples = np.zeros(0, dtype=np.float32)

    def append(self, samples) -> None:
        """Hängt Samples an und trimmt auf die Kapazität."""
        chunk = np.asarray(samples, dtype=np.float32).reshape(-1)
        with self._lock:
            merged = np.concatenate((self._samples, chunk))
            self._samples = merged[-self.capacity:]

    def replace(self, samples) -> None:
        """Ersetzt den Inhalt komplett (kein Anhängen)."""
        chunk = np.array(samples, dtype=np.float32).reshape(-1)
        with self._lock:
            self._samples = chunk[-self.capacity:]

    def clear(self) -> None:
        with self._lock:
            self._samples = np.zeros(0, dtype=np.float32)

    def snapshot(self) -> np.ndarray:
        """Kopie des aktuellen Inhalts (älteste Samples zuerst)."""
        with self._lock:
            return self._samples.copy()

    def __len__(self) -> int:
        with self._lock:
            return int(self._samples.shape[0])


__all__ = ["WaveformWindow"]
