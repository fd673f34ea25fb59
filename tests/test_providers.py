"""Tests für providers/ – OpenAI-Transkription mit gemocktem Client."""

from types import SimpleNamespace
from unittest.mock import Mock, patch

import httpx
import openai
import pytest

from providers import TranscriptionError, get_provider
from providers.openai import OpenAIProvider

WAV = b"RIFF\x24\x00\x00\x00WAVEfmt " + b"\x00" * 32

_REQUEST = httpx.Request("POST", "https://api.openai.com/v1/audio/transcriptions")


@pytest.fixture
def provider():
    """OpenAIProvider mit gemocktem Client (kein Netzwerk)."""
    provider = OpenAIProvider(api_key="sk-test")
    provider._client = Mock()
    provider._client.audio.transcriptions.create.return_value = SimpleNamespace(
        text="hello world"
    )
    return provider


class TestGetProvider:
    def test_openai(self):
        assert isinstance(get_provider("openai", api_key="sk-test"), OpenAIProvider)

    def test_unknown_provider(self):
        with pytest.raises(ValueError, match="Unbekannter Provider"):
            get_provider("deepgram", api_key="x")

    def test_missing_api_key(self):
        with pytest.raises(ValueError, match="OPENAI_API_KEY"):
            get_provider("openai", api_key="")

    def test_default_model(self):
        assert OpenAIProvider.default_model == "whisper-1"


class TestOpenAIProvider:
    """Tests für OpenAIProvider.transcribe()."""

    def test_returns_text(self, provider):
        assert provider.transcribe(WAV) == "hello world"

    def test_multipart_upload_fields(self, provider):
        """Upload enthält model und file=(audio.wav, bytes, audio/wav)."""
        provider.transcribe(WAV, model="gpt-4o-transcribe")

        kwargs = provider._client.audio.transcriptions.create.call_args.kwargs
        assert kwargs["model"] == "gpt-4o-transcribe"
        assert kwargs["file"] == ("audio.wav", WAV, "audio/wav")

    def test_default_model_used(self, provider):
        provider.transcribe(WAV)
        kwargs = provider._client.audio.transcriptions.create.call_args.kwargs
        assert kwargs["model"] == "whisper-1"

    def test_empty_text_is_returned(self, provider):
        """Leerer Text ist kein Fehler (Stille)."""
        provider._client.audio.transcriptions.create.return_value = SimpleNamespace(text="")
        assert provider.transcribe(WAV) == ""

    def test_http_error_status(self, provider):
        """Nicht-2xx → TranscriptionError mit Status und Body."""
        response = httpx.Response(401, text='{"error": "invalid key"}', request=_REQUEST)
        provider._client.audio.transcriptions.create.side_effect = openai.APIStatusError(
            "Unauthorized", response=response, body=None
        )

        with pytest.raises(TranscriptionError, match="API error 401") as exc_info:
            provider.transcribe(WAV)
        assert "invalid key" in str(exc_info.value)

    def test_connection_error(self, provider):
        provider._client.audio.transcriptions.create.side_effect = openai.APIConnectionError(
            request=_REQUEST
        )
        with pytest.raises(TranscriptionError, match="request failed"):
            provider.transcribe(WAV)

    def test_unreadable_response(self, provider):
        """Antwort ohne text-Feld → parse error."""
        provider._client.audio.transcriptions.create.return_value = SimpleNamespace(foo=1)
        with pytest.raises(TranscriptionError, match="parse error"):
            provider.transcribe(WAV)

    def test_client_without_retries(self):
        """Client wird lazy und ohne automatische Retries erzeugt."""
        with patch("openai.OpenAI") as mock_openai:
            provider = OpenAIProvider(api_key="sk-test")
            mock_openai.assert_not_called()
            provider._get_client()
            provider._get_client()

        mock_openai.assert_called_once_with(api_key="sk-test", max_retries=0)
