"""WAV-Kodierung für den Upload an die Transkriptions-API."""

import io

import numpy as np
import soundfile as sf

from config import INT16_MAX, INT16_MIN, TARGET_SAMPLE_RATE


def samples_to_wav(samples, sample_rate: int = TARGET_SAMPLE_RATE) -> bytes:
    """Kodiert Float-Samples als PCM16-Mono-WAV.

    Werte außerhalb von [-1, 1] werden geklemmt statt überzulaufen.
    Auch ohne Samples entsteht ein gültiger RIFF/WAVE-Header (44 Bytes).
    """
    data = np.nan_to_num(np.asarray(samples, dtype=np.float32).reshape(-1))
    pcm = np.clip(data * INT16_MAX, INT16_MIN, INT16_MAX).astype(np.int16)

    buffer = io.BytesIO()
    sf.write(buffer, pcm, sample_rate, format="WAV", subtype="PCM_16")
    return buffer.getvalue()


__all__ = ["samples_to_wav"]
