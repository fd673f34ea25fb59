"""Transkriptions-Provider für whisper-paste.

Usage:
    from providers import get_provider

    provider = get_provider("openai", api_key="sk-...")
    text = provider.transcribe(wav_bytes, model="whisper-1")

Unterstützte Provider:
    - openai: OpenAI Whisper API (whisper-1, gpt-4o-transcribe)
"""


class TranscriptionError(RuntimeError):
    """Transkription fehlgeschlagen (Netzwerk, HTTP-Status, Antwortformat)."""

def get_provider(mode: str, api_key: str):
    """Factory für Transkriptions-Provider.

    Args:
        mode: Provider-Name ('openai')
        api_key: Zugangsdaten für den Dienst

    Raises:
        ValueError: Bei unbekanntem Provider oder fehlendem Key
    """
    if mode == "openai":
        from .openai import OpenAIProvider

        return OpenAIProvider(api_key=api_key)
    raise ValueError(f"Unbekannter Provider: {mode}")


__all__ = [
    "TranscriptionError",
    "get_provider",
]
