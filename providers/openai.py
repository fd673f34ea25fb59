"""OpenAI Whisper API Provider.

Schickt die WAV-Bytes als Multipart-Upload (model + file, audio/wav)
an die OpenAI Transcription API und liefert den erkannten Text.
"""

import logging

from config import DEFAULT_MODEL
from utils.timing import format_duration, log_preview, timed_operation

from . import TranscriptionError

logger = logging.getLogger("whisper_paste.providers.openai")


class OpenAIProvider:
    """OpenAI Whisper API Provider.

    Unterstützt:
        - whisper-1 (original Whisper)
        - gpt-4o-transcribe / gpt-4o-mini-transcribe
    """

    name = "openai"
    default_model = DEFAULT_MODEL

    def __init__(self, api_key: str) -> None:
        if not api_key:
            raise ValueError(
                "OPENAI_API_KEY nicht gesetzt. "
                "Bitte `whisper-paste --setup` ausführen."
            )
        self._api_key = api_key
        self._client = None

    def _get_client(self):
        """OpenAI-Client (Lazy Init, ohne automatische Retries)."""
        if self._client is None:
            from openai import OpenAI

            self._client = OpenAI(api_key=self._api_key, max_retries=0)
            logger.debug("OpenAI-Client initialisiert")
        return self._client

    def transcribe(self, wav_data: bytes, model: str | None = None) -> str:
        """Transkribiert WAV-Audio über die OpenAI API.

        Ein Aufruf pro Session, kein Retry.

        Args:
            wav_data: PCM16-Mono-WAV in 16kHz
            model: Modell (default: whisper-1)

        Returns:
            Transkribierter Text (evtl. leer)

        Raises:
            TranscriptionError: Netzwerkfehler, HTTP-Fehlerstatus oder
                unlesbare Antwort
        """
        import openai

        model = model or self.default_model
        logger.info(f"OpenAI: {model}, {len(wav_data) // 1024}KB")

        client = self._get_client()

        try:
            with timed_operation("OpenAI-Transkription", logger=logger) as watch:
                response = client.audio.transcriptions.create(
                    model=model,
                    file=("audio.wav", wav_data, "audio/wav"),
                )
        except openai.APIStatusError as e:
            body = e.response.text if e.response is not None else ""
            raise TranscriptionError(f"API error {e.status_code}: {body}") from e
        except openai.APIConnectionError as e:
            raise TranscriptionError(f"request failed: {e}") from e
        except openai.OpenAIError as e:
            raise TranscriptionError(f"parse error: {e}") from e

        text = getattr(response, "text", None)
        if not isinstance(text, str):
            raise TranscriptionError(f"parse error: unerwartete Antwort {type(response).__name__}")

        logger.debug(f"Ergebnis nach {format_duration(watch.elapsed)}: {log_preview(text)}")
        return text


__all__ = ["OpenAIProvider"]
