"""
Podcast Transcribe API - Configuration

External collaborators:
- Deepgram: speech-to-text for episode audio
- DeepL: optional transcript translation
- Blob store: S3-compatible bucket (Cloudflare R2) or a local directory
- Relational store: any SQLAlchemy URL holding the `podcasts` table
"""
from pathlib import Path
from typing import Literal, Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    # ========== Deepgram Configuration ==========
    DEEPGRAM_API_KEY: str = ""
    DEEPGRAM_API: str = "https://api.deepgram.com"
    DEEPGRAM_MODEL: str = "nova"
    DEEPGRAM_TIMEOUT: int = 600  # Pre-recorded transcription of long episodes

    # ========== DeepL Configuration ==========
    # Translation is skipped (translation == original) while no key is set
    DEEPL_API_KEY: str = ""
    DEEPL_API: str = "https://api-free.deepl.com"
    TRANSLATE_SOURCE_LANG: str = "EN"
    TRANSLATE_TARGET_LANG: str = "JA"
    DEEPL_TIMEOUT: int = 60

    # ========== Storage ==========
    DATABASE_URL: str = "sqlite:///./podcasts.db"

    BLOB_BACKEND: Literal["local", "s3"] = "local"
    OUTPUT_BASE_DIR: Path = Path("./transcripts")  # local backend root
    TRANSCRIPT_BUCKET: str = "transcriptions"
    S3_ENDPOINT_URL: Optional[str] = None  # e.g. https://<account>.r2.cloudflarestorage.com
    S3_ACCESS_KEY_ID: Optional[str] = None
    S3_SECRET_ACCESS_KEY: Optional[str] = None
    S3_REGION: str = "auto"  # R2 uses "auto"

    # ========== Server ==========
    HOST: str = "0.0.0.0"
    PORT: int = 8000
    CORS_ORIGINS: list[str] = ["*"]
    LOG_LEVEL: str = "INFO"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"


settings = Settings()
