"""
File Manager - Transcript object naming and storage backends.
"""
import asyncio
import hashlib
import logging
import re
import unicodedata
from pathlib import Path
from typing import Optional

import aiofiles
import boto3
from botocore.exceptions import BotoCoreError, ClientError

from services.errors import StorageError

logger = logging.getLogger(__name__)

TRANSCRIPT_PREFIX = "transcriptions"


def sanitize_filename(name: str, max_length: int = 100) -> str:
    """
    Sanitize a string for use as a filename or object key segment.
    Removes invalid characters while preserving Chinese and other Unicode.
    """
    # Normalize unicode
    name = unicodedata.normalize("NFC", name)

    # Remove or replace invalid filename characters
    invalid_chars = r'[<>:"/\\|?*#%{}^~\[\]`\x00-\x1f\x7f]'
    name = re.sub(invalid_chars, "", name)

    # Replace multiple spaces/underscores with single underscore
    name = re.sub(r"[\s_]+", "_", name)

    # Remove leading/trailing spaces and dots
    name = name.strip(" ._")

    # Truncate if too long
    if len(name) > max_length:
        name = name[:max_length].rstrip("_")

    return name or "untitled"


def transcript_key(channel_title: str, episode_title: str) -> str:
    """
    Build the object key for an episode transcript.
    Format: transcriptions/{channel}/{episode}-{hash}.txt

    The hash covers the raw titles, so titles that sanitize to the same
    text still get distinct keys. Same titles always give the same key.
    """
    digest = hashlib.sha256(
        f"{channel_title}\x00{episode_title}".encode("utf-8")
    ).hexdigest()[:12]

    channel = sanitize_filename(channel_title, max_length=80)
    episode = sanitize_filename(episode_title, max_length=80)
    return f"{TRANSCRIPT_PREFIX}/{channel}/{episode}-{digest}.txt"


class LocalTranscriptStore:
    """Writes transcripts under a local directory, mirroring the object key."""

    def __init__(self, base_dir: Path):
        self.base_dir = Path(base_dir)

    def get_path(self, key: str) -> Path:
        return self.base_dir / key

    async def put_text(self, key: str, text: str) -> str:
        path = self.get_path(key)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            async with aiofiles.open(path, "w", encoding="utf-8") as f:
                await f.write(text)
        except OSError as e:
            raise StorageError(f"Failed to write transcript {key}: {e}") from e

        logger.info(f"Saved transcript: {path}")
        return str(path)


class S3TranscriptStore:
    """Writes transcripts to an S3-compatible bucket (Cloudflare R2, AWS S3, MinIO)."""

    def __init__(
        self,
        bucket: str,
        endpoint_url: Optional[str] = None,
        access_key_id: Optional[str] = None,
        secret_access_key: Optional[str] = None,
        region: str = "auto",
        client=None,
    ):
        self.bucket = bucket
        if client is None:
            client = boto3.client(
                "s3",
                endpoint_url=endpoint_url,
                aws_access_key_id=access_key_id,
                aws_secret_access_key=secret_access_key,
                region_name=region,
            )
        self._client = client

    def _put(self, key: str, data: bytes) -> None:
        self._client.put_object(
            Bucket=self.bucket,
            Key=key,
            Body=data,
            ContentType="text/plain; charset=utf-8",
        )

    async def put_text(self, key: str, text: str) -> str:
        data = text.encode("utf-8")
        loop = asyncio.get_running_loop()
        try:
            await loop.run_in_executor(None, lambda: self._put(key, data))
        except (ClientError, BotoCoreError) as e:
            raise StorageError(f"Failed to upload transcript {key}: {e}") from e

        logger.info(f"[S3] Uploaded {len(data)} bytes to {self.bucket}/{key}")
        return f"s3://{self.bucket}/{key}"
