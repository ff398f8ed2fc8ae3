"""
API Router for the channel registry.
"""
import logging

from fastapi import APIRouter, Depends, status

from context import AppContext, get_context
from models import DeleteChannelRequest, MessageResponse, RegisterChannelRequest
from routers.responses import empty_feed_response, error_response
from services.errors import EmptyFeedError
from services.rss_parser import get_feed_title

logger = logging.getLogger(__name__)

router = APIRouter(tags=["channels"])


@router.get("/channel-list")
async def list_channels(ctx: AppContext = Depends(get_context)):
    """
    List registered channels, newest first.
    An empty registry returns `{}` rather than an empty list.
    """
    try:
        rows = await ctx.registry.list_channels()
    except Exception as e:
        return error_response("Failed to fetch RSS list", e)

    if not rows:
        return {}
    return {"channelList": rows}


@router.post("/channel-register", status_code=status.HTTP_201_CREATED, response_model=MessageResponse)
async def register_channel(request: RegisterChannelRequest, ctx: AppContext = Depends(get_context)):
    """Fetch the feed for its title and add it to the registry."""
    rss_url = str(request.new_rss_url)

    try:
        feed = await ctx.feed_reader.fetch_and_parse(rss_url)
        title = get_feed_title(feed)
        await ctx.registry.add_channel(rss_url, title)
    except EmptyFeedError:
        return empty_feed_response()
    except Exception as e:
        return error_response("Registration failed", e)

    return MessageResponse(message="Podcast registered")


@router.post("/channel-delete", status_code=status.HTTP_201_CREATED, response_model=MessageResponse)
async def delete_channel(request: DeleteChannelRequest, ctx: AppContext = Depends(get_context)):
    """Remove a channel by id."""
    try:
        await ctx.registry.delete_channel(request.del_rss_id)
    except Exception as e:
        return error_response("Delete failed", e)

    return MessageResponse(message="Podcast deleted")
