"""Services package."""
from .errors import (
    ServiceError,
    FeedError,
    FeedFetchError,
    FeedShapeError,
    EmptyFeedError,
    ProviderError,
    StorageError,
)
from .rss_parser import FeedReader, parse_feed, extract_episodes, get_feed_title
from .transcriber import DeepgramClient, TranscriptionResult
from .translator import DeepLTranslator
from .file_manager import (
    sanitize_filename,
    transcript_key,
    LocalTranscriptStore,
    S3TranscriptStore,
)
from .registry import ChannelRegistry, make_engine
from .pipeline import TranscriptionOrchestrator

__all__ = [
    "ServiceError",
    "FeedError",
    "FeedFetchError",
    "FeedShapeError",
    "EmptyFeedError",
    "ProviderError",
    "StorageError",
    "FeedReader",
    "parse_feed",
    "extract_episodes",
    "get_feed_title",
    "DeepgramClient",
    "TranscriptionResult",
    "DeepLTranslator",
    "sanitize_filename",
    "transcript_key",
    "LocalTranscriptStore",
    "S3TranscriptStore",
    "ChannelRegistry",
    "make_engine",
    "TranscriptionOrchestrator",
]
