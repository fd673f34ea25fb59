"""Sample-Rate-Konvertierung für die Transkription.

Lineare Interpolation reicht für Sprache-zu-Text völlig aus,
band-limitiertes Resampling ist hier nicht nötig.
"""

import numpy as np


def resample(samples, source_rate: int, target_rate: int):
    """Konvertiert Samples von source_rate nach target_rate (linear).

    Bei leerer Eingabe oder gleichen Raten wird die Eingabe
    unverändert zurückgegeben.

    Args:
        samples: Mono-Samples (numpy-Array oder Sequenz von Floats)
        source_rate: Samplerate der Eingabe in Hz
        target_rate: Ziel-Samplerate in Hz

    Returns:
        float32 numpy-Array mit floor(len / ratio) Samples
    """
    if len(samples) == 0 or source_rate == target_rate:
        return samples

    data = np.asarray(samples, dtype=np.float32)
    length = data.shape[0]

    ratio = source_rate / target_rate
    out_len = int(length / ratio)

    positions = np.arange(out_len, dtype=np.float64) * ratio
    base = positions.astype(np.int64)
    frac = (positions - base).astype(np.float32)

    # Letzter Index hat keinen rechten Nachbarn → auf vorhandenes Sample klemmen
    out = data[np.minimum(base, length - 1)].copy()
    inside = base + 1 < length
    left = data[base[inside]]
    right = data[base[inside] + 1]
    out[inside] = left * (1.0 - frac[inside]) + right * frac[inside]

    return out


__all__ = ["resample"]
