"""
Deepgram Client - HTTP client for Deepgram's pre-recorded transcription API.

Deepgram fetches the audio itself, so only the episode URL is sent.
"""
import logging
from dataclasses import dataclass, field
from typing import Optional

import httpx

from services.errors import ProviderError

logger = logging.getLogger(__name__)


@dataclass
class TranscriptionResult:
    """Result of a transcription."""
    text: str
    segments: list[str] = field(default_factory=list)  # Sentence texts across paragraphs
    request_id: Optional[str] = None


class DeepgramClient:
    """
    HTTP client for Deepgram /v1/listen.

    Every request asks for paragraphs and speaker diarization.
    """

    def __init__(
        self,
        api_key: str,
        api_url: str = "https://api.deepgram.com",
        model: str = "nova",
        timeout: int = 600,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_key = api_key
        self.api_url = api_url.rstrip('/')
        self.model = model
        self.timeout = timeout
        self._transport = transport

    def request_options(self) -> dict[str, str]:
        return {
            "model": self.model,
            "paragraphs": "true",
            "diarize": "true",
        }

    async def transcribe_url(self, audio_url: str) -> TranscriptionResult:
        """
        Transcribe remote audio in a single synchronous provider call.

        Raises:
            ProviderError: the request failed, Deepgram returned an error,
                or the response carries no transcript
        """
        url = f"{self.api_url}/v1/listen"
        headers = {"Authorization": f"Token {self.api_key}"}

        logger.info(f"Requesting Deepgram transcription: {audio_url}")

        try:
            async with httpx.AsyncClient(transport=self._transport, timeout=self.timeout) as client:
                response = await client.post(
                    url,
                    params=self.request_options(),
                    headers=headers,
                    json={"url": audio_url},
                )
        except httpx.RequestError as e:
            raise ProviderError(f"Deepgram request failed: {e}") from e

        if not response.is_success:
            logger.error(f"Deepgram API error: {response.status_code} - {response.text}")
            raise ProviderError(f"Deepgram API error {response.status_code}: {response.text}")

        try:
            data = response.json()
        except ValueError as e:
            raise ProviderError(f"Deepgram returned a non-JSON response: {response.text[:200]}") from e

        result = self._parse_result(data)
        logger.info(
            f"Transcription complete: request_id={result.request_id}, "
            f"chars={len(result.text)}, segments={len(result.segments)}"
        )
        return result

    def _parse_result(self, data: dict) -> TranscriptionResult:
        """Parse API response into TranscriptionResult."""
        try:
            alternative = data["results"]["channels"][0]["alternatives"][0]
            text = alternative["transcript"]
        except (KeyError, IndexError, TypeError) as e:
            raise ProviderError("Deepgram response missing transcript text") from e

        if not isinstance(text, str):
            raise ProviderError(f"Deepgram transcript is not text: {text!r}")

        return TranscriptionResult(
            text=text,
            segments=extract_segments(alternative),
            request_id=(data.get("metadata") or {}).get("request_id"),
        )


def extract_segments(alternative: dict) -> list[str]:
    """Flatten paragraph sentences into a list of sentence texts; empty if absent."""
    paragraphs = (alternative.get("paragraphs") or {}).get("paragraphs") or []
    segments = []
    for paragraph in paragraphs:
        for sentence in paragraph.get("sentences") or []:
            text = sentence.get("text")
            if text:
                segments.append(text)
    return segments
