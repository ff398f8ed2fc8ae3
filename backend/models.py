"""
Pydantic models for API and internal data structures.
"""
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, HttpUrl


class Channel(BaseModel):
    """A subscribed podcast, as stored in the registry."""
    id: int
    rss_url: HttpUrl
    title: str


class Episode(BaseModel):
    """One feed entry with a playable enclosure; audio_url is the enclosure url as published."""
    model_config = ConfigDict(populate_by_name=True)

    title: str
    audio_url: str = Field(alias="audioUrl")
    description: Optional[str] = None


class EpisodeRequest(Episode):
    """Episode as sent by the client; the audio url must be a valid http(s) url."""
    audio_url: HttpUrl = Field(alias="audioUrl")


class Transcript(BaseModel):
    """Transcription result returned to the client."""
    original: str
    segments: list[str] = []
    translation: str


class EpisodesRequest(BaseModel):
    """Request body for /episodes."""
    channel: Channel


class EpisodesResponse(BaseModel):
    episodes: list[Episode]


class TranscribeRequest(BaseModel):
    """Request body for /transcribe."""
    episode: EpisodeRequest
    channel: Channel


class TranscribeResponse(BaseModel):
    transcription: Transcript


class RegisterChannelRequest(BaseModel):
    """Request body for /channel-register."""
    new_rss_url: HttpUrl = Field(alias="newRssUrl")


class DeleteChannelRequest(BaseModel):
    """Request body for /channel-delete."""
    del_rss_id: int = Field(alias="delRssId")


class MessageResponse(BaseModel):
    message: str
