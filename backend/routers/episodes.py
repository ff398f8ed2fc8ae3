"""
API Router for episode listing and transcription.
"""
import logging

from fastapi import APIRouter, Depends

from context import AppContext, get_context
from models import EpisodesRequest, EpisodesResponse, TranscribeRequest, TranscribeResponse
from routers.responses import empty_feed_response, error_response
from services.errors import EmptyFeedError
from services.rss_parser import extract_episodes

logger = logging.getLogger(__name__)

router = APIRouter(tags=["episodes"])


@router.post("/episodes")
async def list_episodes(request: EpisodesRequest, ctx: AppContext = Depends(get_context)):
    """
    Fetch the channel's feed and return its episodes in feed order.
    """
    rss_url = str(request.channel.rss_url)

    try:
        feed = await ctx.feed_reader.fetch_and_parse(rss_url)
        episodes = extract_episodes(feed)
    except EmptyFeedError:
        return empty_feed_response()
    except Exception as e:
        return error_response("Failed to fetch episodes", e)

    logger.info(f"Listed {len(episodes)} episodes for '{request.channel.title}'")
    return EpisodesResponse(episodes=episodes).model_dump(mode="json", by_alias=True)


@router.post("/transcribe")
async def transcribe_episode(request: TranscribeRequest, ctx: AppContext = Depends(get_context)):
    """
    Transcribe one episode with Deepgram and store the transcript.
    """
    try:
        transcript = await ctx.orchestrator.transcribe_episode(request.episode, request.channel)
    except Exception as e:
        return error_response("Transcription failed", e)

    return TranscribeResponse(transcription=transcript).model_dump(mode="json")
