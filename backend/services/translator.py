"""
DeepL Client - Translate transcripts through the DeepL v2 API.

Without an API key the translator is disabled and returns the text unchanged.
"""
import logging
from typing import Optional

import httpx

from services.errors import ProviderError

logger = logging.getLogger(__name__)


class DeepLTranslator:
    """HTTP client for DeepL /v2/translate."""

    def __init__(
        self,
        api_key: str = "",
        api_url: str = "https://api-free.deepl.com",
        source_lang: str = "EN",
        target_lang: str = "JA",
        timeout: int = 60,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_key = api_key
        self.api_url = api_url.rstrip('/')
        self.source_lang = source_lang
        self.target_lang = target_lang
        self.timeout = timeout
        self._transport = transport

    @property
    def enabled(self) -> bool:
        return bool(self.api_key)

    async def translate(self, text: str) -> str:
        """
        Translate text from source_lang to target_lang.

        Returns the input verbatim when no API key is configured.
        """
        if not self.enabled:
            logger.debug("DeepL translation disabled; returning original text")
            return text

        url = f"{self.api_url}/v2/translate"
        headers = {"Authorization": f"DeepL-Auth-Key {self.api_key}"}
        payload = {
            "text": [text],
            "source_lang": self.source_lang,
            "target_lang": self.target_lang,
        }

        try:
            async with httpx.AsyncClient(transport=self._transport, timeout=self.timeout) as client:
                response = await client.post(url, headers=headers, json=payload)
        except httpx.RequestError as e:
            raise ProviderError(f"DeepL request failed: {e}") from e

        if not response.is_success:
            logger.error(f"DeepL API error: {response.status_code} - {response.text}")
            raise ProviderError(f"DeepL API error {response.status_code}: {response.text}")

        try:
            return response.json()["translations"][0]["text"]
        except (KeyError, IndexError, TypeError, ValueError) as e:
            raise ProviderError("DeepL response missing translation text") from e
