"""Audio-Modul für whisper-paste.

Bietet Mikrofon-Aufnahme, Resampling, WAV-Kodierung und die Live-Waveform.

Usage:
    from audio import AudioCapture, WaveformWindow, samples_to_wav

    window = WaveformWindow()
    capture = AudioCapture(waveform=window)
    capture.start()
    # ... später ...
    samples = capture.wait_until_stopped(stop_event)
    wav_bytes = samples_to_wav(samples)
"""

from .recording import AudioCapture, AudioDeviceError, record_until_stopped
from .resample import resample
from .wav import samples_to_wav
from .waveform import WaveformWindow

__all__ = [
    "AudioCapture",
    "AudioDeviceError",
    "record_until_stopped",
    "resample",
    "samples_to_wav",
    "WaveformWindow",
]
