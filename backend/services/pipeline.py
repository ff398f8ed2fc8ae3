"""
Transcription Pipeline - transcribe an episode, store the text, translate it.
"""
import logging
from typing import Protocol

from models import Channel, Episode, Transcript
from services.file_manager import transcript_key
from services.transcriber import DeepgramClient
from services.translator import DeepLTranslator

logger = logging.getLogger(__name__)


class TranscriptStore(Protocol):
    async def put_text(self, key: str, text: str) -> str: ...


class TranscriptionOrchestrator:
    """
    Runs the per-request transcription steps in order:
    transcribe -> store -> translate.

    A failure at any step aborts the rest; the transcript is only
    written after Deepgram returned a usable result.
    """

    def __init__(
        self,
        transcriber: DeepgramClient,
        store: TranscriptStore,
        translator: DeepLTranslator,
    ):
        self.transcriber = transcriber
        self.store = store
        self.translator = translator

    async def transcribe_episode(self, episode: Episode, channel: Channel) -> Transcript:
        # Step 1: Transcribe
        logger.info(f"Transcribing '{episode.title}' from '{channel.title}'")
        result = await self.transcriber.transcribe_url(str(episode.audio_url))

        # Step 2: Store
        key = transcript_key(channel.title, episode.title)
        location = await self.store.put_text(key, result.text)
        logger.info(f"Stored transcript for '{episode.title}' at {location}")

        # Step 3: Translate (mirrors the original when DeepL is not configured)
        translation = await self.translator.translate(result.text)

        return Transcript(
            original=result.text,
            segments=result.segments,
            translation=translation,
        )
