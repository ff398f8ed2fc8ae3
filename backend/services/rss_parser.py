"""
RSS Feed Parser - Fetch podcast feeds and extract episode information.
"""
import logging
from typing import Optional
from urllib.parse import urlparse

import feedparser
import httpx

from models import Episode
from services.errors import EmptyFeedError, FeedFetchError, FeedShapeError

logger = logging.getLogger(__name__)

FEED_HEADERS = {
    'User-Agent': 'Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36',
    'Accept': 'application/rss+xml, application/xml, text/xml, */*',
    'Accept-Encoding': 'identity',  # Disable compression to avoid encoding issues
}


class FeedReader:
    """
    Fetches and parses RSS/Atom feeds.

    No caching and no retry: every call performs a fresh request.
    """

    def __init__(self, transport: Optional[httpx.AsyncBaseTransport] = None):
        # Tests inject an httpx.MockTransport here
        self._transport = transport

    async def fetch_feed_content(self, rss_url: str) -> bytes:
        """Fetch raw feed bytes; feedparser handles encoding detection."""
        try:
            async with httpx.AsyncClient(
                transport=self._transport,
                timeout=None,
                follow_redirects=True,
            ) as client:
                response = await client.get(rss_url, headers=FEED_HEADERS)
        except httpx.RequestError as e:
            raise FeedFetchError(f"Failed to fetch RSS feed: {e}") from e

        if not response.is_success:
            raise FeedFetchError(f"Failed to fetch RSS feed: {response.status_code}")

        return response.content

    async def fetch_and_parse(self, rss_url: str) -> feedparser.FeedParserDict:
        """Fetch a feed and return the parsed tree, checked to be a feed with items."""
        content = await self.fetch_feed_content(rss_url)
        feed = parse_feed(content)
        logger.info(f"Parsed feed {rss_url}: {len(feed.entries)} items")
        return feed


def parse_feed(content: bytes) -> feedparser.FeedParserDict:
    """
    Parse feed bytes and verify the parts the service relies on.

    Raises:
        FeedShapeError: the document is not a recognized RSS/Atom feed
        EmptyFeedError: the feed contains no items
    """
    feed = feedparser.parse(content)

    if not feed.get("version"):
        reason = feed.get("bozo_exception") or "unrecognized document"
        raise FeedShapeError(f"Failed to parse RSS feed: {reason}")

    if not feed.entries:
        raise EmptyFeedError("No items found in RSS feed")

    return feed


def get_feed_title(feed: feedparser.FeedParserDict) -> str:
    """Return the channel title of a parsed feed."""
    title = feed.feed.get("title")
    if not title:
        raise FeedShapeError("Feed has no channel title")
    return title


def is_http_url(url: str) -> bool:
    """True for absolute http(s) urls. The url itself is passed on unchanged."""
    parsed = urlparse(url)
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)


def extract_episodes(feed: feedparser.FeedParserDict) -> list[Episode]:
    """
    Map every feed item to an Episode, preserving feed order.

    The audio URL is the first enclosure of each item regardless of its MIME type.
    """
    if not feed.entries:
        raise EmptyFeedError("No items found in RSS feed")

    episodes = []
    for idx, entry in enumerate(feed.entries):
        enclosures = entry.get("enclosures") or []
        audio_url = enclosures[0].get("href") if enclosures else None
        if not audio_url:
            raise FeedShapeError(f"Item {idx + 1} has no enclosure url")

        if not is_http_url(audio_url):
            raise FeedShapeError(f"Item {idx + 1} has an invalid enclosure url: {audio_url}")

        episodes.append(Episode(
            title=entry.get("title") or f"Episode {idx + 1}",
            audio_url=audio_url,
            description=entry.get("description"),
        ))

    return episodes
