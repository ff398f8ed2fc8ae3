"""
Application context - every external collaborator a handler needs,
built once from Settings when the app is constructed.
"""
import logging
from dataclasses import dataclass

from fastapi import Request

from config import Settings
from services.file_manager import LocalTranscriptStore, S3TranscriptStore
from services.pipeline import TranscriptionOrchestrator, TranscriptStore
from services.registry import ChannelRegistry, make_engine
from services.rss_parser import FeedReader
from services.transcriber import DeepgramClient
from services.translator import DeepLTranslator

logger = logging.getLogger(__name__)


@dataclass
class AppContext:
    settings: Settings
    feed_reader: FeedReader
    registry: ChannelRegistry
    orchestrator: TranscriptionOrchestrator


def build_store(settings: Settings) -> TranscriptStore:
    if settings.BLOB_BACKEND == "s3":
        return S3TranscriptStore(
            bucket=settings.TRANSCRIPT_BUCKET,
            endpoint_url=settings.S3_ENDPOINT_URL,
            access_key_id=settings.S3_ACCESS_KEY_ID,
            secret_access_key=settings.S3_SECRET_ACCESS_KEY,
            region=settings.S3_REGION,
        )
    return LocalTranscriptStore(settings.OUTPUT_BASE_DIR)


def build_context(settings: Settings) -> AppContext:
    """Wire the production clients from settings."""
    if not settings.DEEPGRAM_API_KEY:
        logger.warning("DEEPGRAM_API_KEY is not set; /transcribe will fail")

    orchestrator = TranscriptionOrchestrator(
        transcriber=DeepgramClient(
            api_key=settings.DEEPGRAM_API_KEY,
            api_url=settings.DEEPGRAM_API,
            model=settings.DEEPGRAM_MODEL,
            timeout=settings.DEEPGRAM_TIMEOUT,
        ),
        store=build_store(settings),
        translator=DeepLTranslator(
            api_key=settings.DEEPL_API_KEY,
            api_url=settings.DEEPL_API,
            source_lang=settings.TRANSLATE_SOURCE_LANG,
            target_lang=settings.TRANSLATE_TARGET_LANG,
            timeout=settings.DEEPL_TIMEOUT,
        ),
    )

    return AppContext(
        settings=settings,
        feed_reader=FeedReader(),
        registry=ChannelRegistry(make_engine(settings.DATABASE_URL)),
        orchestrator=orchestrator,
    )


def get_context(request: Request) -> AppContext:
    """FastAPI dependency returning the context attached at app construction."""
    return request.app.state.context
