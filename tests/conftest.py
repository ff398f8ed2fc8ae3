from pathlib import Path
from typing import Optional

import httpx
import pytest
from fastapi.testclient import TestClient

from config import Settings
from context import AppContext
from main import create_app
from services.errors import ProviderError
from services.pipeline import TranscriptionOrchestrator
from services.registry import ChannelRegistry, make_engine
from services.rss_parser import FeedReader
from services.transcriber import TranscriptionResult
from services.translator import DeepLTranslator

FEED_URL = "https://example.com/feed.xml"


def make_feed(title: Optional[str] = "Example Show", items: Optional[list[dict]] = None) -> str:
    """Render a minimal RSS 2.0 document."""
    parts = []
    for item in items or []:
        parts.append("<item>")
        if item.get("title") is not None:
            parts.append(f"<title>{item['title']}</title>")
        if item.get("description") is not None:
            parts.append(f"<description>{item['description']}</description>")
        if item.get("audio_url") is not None:
            parts.append(
                f'<enclosure url="{item["audio_url"]}" type="audio/mpeg" length="1024"/>'
            )
        parts.append("</item>")

    title_tag = f"<title>{title}</title>" if title is not None else ""
    return (
        '<?xml version="1.0" encoding="UTF-8"?>'
        '<rss version="2.0"><channel>'
        f"{title_tag}<link>https://example.com</link><description>A show</description>"
        f"{''.join(parts)}"
        "</channel></rss>"
    )


class FakeFeedServer:
    """Serves registered feed bodies through an httpx.MockTransport."""

    def __init__(self):
        self.feeds: dict[str, tuple[int, str]] = {}
        self.requests: list[str] = []
        self.transport = httpx.MockTransport(self._handle)

    def add(self, url: str, body: str, status_code: int = 200) -> None:
        self.feeds[url] = (status_code, body)

    def _handle(self, request: httpx.Request) -> httpx.Response:
        url = str(request.url)
        self.requests.append(url)
        if url not in self.feeds:
            return httpx.Response(404, text="not found")
        status_code, body = self.feeds[url]
        return httpx.Response(
            status_code,
            content=body.encode("utf-8"),
            headers={"Content-Type": "application/rss+xml"},
        )


class FakeTranscriber:
    def __init__(self, result: Optional[TranscriptionResult] = None, error: Optional[Exception] = None):
        self.result = result or TranscriptionResult(
            text="Hello world. Second sentence.",
            segments=["Hello world.", "Second sentence."],
        )
        self.error = error
        self.calls: list[str] = []

    async def transcribe_url(self, audio_url: str) -> TranscriptionResult:
        self.calls.append(audio_url)
        if self.error:
            raise self.error
        return self.result


class FakeStore:
    def __init__(self):
        self.objects: dict[str, str] = {}

    async def put_text(self, key: str, text: str) -> str:
        self.objects[key] = text
        return f"memory://{key}"


@pytest.fixture
def feed_server() -> FakeFeedServer:
    return FakeFeedServer()


@pytest.fixture
def transcriber() -> FakeTranscriber:
    return FakeTranscriber()


@pytest.fixture
def store() -> FakeStore:
    return FakeStore()


@pytest.fixture
def test_settings(tmp_path: Path) -> Settings:
    return Settings(
        DATABASE_URL=f"sqlite:///{tmp_path / 'podcasts.db'}",
        OUTPUT_BASE_DIR=tmp_path / "transcripts",
        DEEPGRAM_API_KEY="dg_test_key",
        DEEPL_API_KEY="",
    )


@pytest.fixture
def registry(test_settings: Settings) -> ChannelRegistry:
    registry = ChannelRegistry(make_engine(test_settings.DATABASE_URL))
    registry.init_schema()
    yield registry
    registry.engine.dispose()


@pytest.fixture
def app_context(test_settings, feed_server, transcriber, store, registry) -> AppContext:
    return AppContext(
        settings=test_settings,
        feed_reader=FeedReader(transport=feed_server.transport),
        registry=registry,
        orchestrator=TranscriptionOrchestrator(
            transcriber=transcriber,
            store=store,
            translator=DeepLTranslator(),
        ),
    )


@pytest.fixture
def client(app_context):
    app = create_app(context=app_context)
    with TestClient(app) as tc:
        yield tc


@pytest.fixture
def provider_error() -> ProviderError:
    return ProviderError("Deepgram API error 401: invalid credentials")
