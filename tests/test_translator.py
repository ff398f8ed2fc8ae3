import json

import httpx
import pytest

from services.errors import ProviderError
from services.translator import DeepLTranslator


@pytest.mark.asyncio
async def test_translate_without_key_returns_original():
    def handler(request):
        raise AssertionError("DeepL must not be called without an API key")

    translator = DeepLTranslator(transport=httpx.MockTransport(handler))

    assert translator.enabled is False
    assert await translator.translate("Hello") == "Hello"


@pytest.mark.asyncio
async def test_translate_calls_deepl():
    captured = {}

    def handler(request: httpx.Request) -> httpx.Response:
        captured["path"] = request.url.path
        captured["auth"] = request.headers["authorization"]
        captured["body"] = json.loads(request.content)
        return httpx.Response(200, json={
            "translations": [{"detected_source_language": "EN", "text": "こんにちは"}],
        })

    translator = DeepLTranslator(api_key="KEY", transport=httpx.MockTransport(handler))

    assert await translator.translate("Hello") == "こんにちは"
    assert captured["path"] == "/v2/translate"
    assert captured["auth"] == "DeepL-Auth-Key KEY"
    assert captured["body"] == {"text": ["Hello"], "source_lang": "EN", "target_lang": "JA"}


@pytest.mark.asyncio
async def test_translate_error_status_raises_provider_error():
    def handler(request):
        return httpx.Response(456, text="Quota exceeded")

    translator = DeepLTranslator(api_key="KEY", transport=httpx.MockTransport(handler))

    with pytest.raises(ProviderError, match="456"):
        await translator.translate("Hello")
