"""
Channel subscription API endpoints.

    POST   /channels                  subscribe by URL
    GET    /channels                  list subscriptions, newest first
    GET    /channels/{id}             one subscribed channel
    DELETE /channels/{id}             unsubscribe
    GET    /channels/{id}/summaries   summaries for the channel
    POST   /channels/{id}/summaries   store a summary for a video

{id} is the internal channel id returned by POST /channels.
"""

import logging
from typing import List

from fastapi import APIRouter, HTTPException, Response, status

from tubebrief.core.auth import CurrentUser
from tubebrief.core.exceptions import ChannelNotFoundError, InvalidChannelURLError, InvalidVideoURLError
from tubebrief.db.deps import DBSession
from tubebrief.schemas.auth import ErrorResponse
from tubebrief.schemas.channels import (
    ChannelResponse,
    ChannelSubscribeRequest,
    SubscribeResponse,
    SubscriptionResponse,
)
from tubebrief.schemas.summaries import SummaryCreateRequest, SummaryResponse
from tubebrief.services.identity import require_channel_id, require_video_id
from tubebrief.services.subscriptions import (
    ChannelDescriptor,
    get_channel_by_external_id,
    get_subscribed_channel,
    list_subscriptions,
    subscribe,
    unsubscribe,
)
from tubebrief.services.summaries import (
    VideoDescriptor,
    create_video_summary,
    list_summaries_for_channel,
)
from tubebrief.services.youtube import fetch_channel_descriptor

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/channels", tags=["Channels"])


# ========================================
# Subscriptions
# ========================================

@router.post(
    "",
    response_model=SubscribeResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Subscribe to a YouTube channel",
    responses={
        201: {"description": "Subscribed"},
        200: {"description": "Already subscribed (nothing changed)"},
        404: {"model": ErrorResponse, "description": "Not a YouTube channel URL"},
    }
)
async def subscribe_to_channel(
    request: ChannelSubscribeRequest,
    response: Response,
    current_user: CurrentUser,
    db: DBSession,
) -> SubscribeResponse:
    """
    Subscribe to a channel by URL.

    The channel row is created the first time anyone subscribes; its
    display metadata comes from the YouTube API when configured, else
    from the request, else the channel identifier is used as the name.
    """
    try:
        channel_id = require_channel_id(request.url)
    except InvalidChannelURLError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)

    descriptor = ChannelDescriptor(
        channel_id=channel_id,
        name=request.name or channel_id,
        url=request.url,
        thumbnail_url=request.thumbnail_url,
        description=request.description,
    )

    # Metadata is fetched before any write, and only for unseen channels
    if await get_channel_by_external_id(db, channel_id) is None:
        descriptor = await fetch_channel_descriptor(descriptor)

    result = await subscribe(db, current_user.id, descriptor)

    if result.already_subscribed:
        response.status_code = status.HTTP_200_OK

    return SubscribeResponse(
        channel=ChannelResponse.model_validate(result.channel),
        already_subscribed=result.already_subscribed,
    )


@router.get(
    "",
    response_model=List[SubscriptionResponse],
    summary="List subscribed channels",
)
async def list_channels(current_user: CurrentUser, db: DBSession) -> List[SubscriptionResponse]:
    """All of the user's subscriptions, most recent first."""
    subscriptions = await list_subscriptions(db, current_user.id)
    return [SubscriptionResponse.model_validate(sub) for sub in subscriptions]


@router.get(
    "/{channel_id}",
    response_model=ChannelResponse,
    summary="Get a subscribed channel",
    responses={404: {"model": ErrorResponse, "description": "Channel not found"}},
)
async def get_channel(channel_id: int, current_user: CurrentUser, db: DBSession) -> ChannelResponse:
    """One channel, only if the user subscribes to it."""
    channel = await get_subscribed_channel(db, current_user.id, channel_id)
    if channel is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=ChannelNotFoundError(channel_id).message
        )
    return ChannelResponse.model_validate(channel)


@router.delete(
    "/{channel_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Unsubscribe from a channel",
)
async def unsubscribe_from_channel(channel_id: int, current_user: CurrentUser, db: DBSession) -> Response:
    """Unsubscribe. Succeeds even if the user was not subscribed."""
    await unsubscribe(db, current_user.id, channel_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# ========================================
# Channel summaries
# ========================================

@router.get(
    "/{channel_id}/summaries",
    response_model=List[SummaryResponse],
    summary="List summaries for a channel",
    responses={404: {"model": ErrorResponse, "description": "Channel not found"}},
)
async def list_channel_summaries(
    channel_id: int,
    current_user: CurrentUser,
    db: DBSession,
) -> List[SummaryResponse]:
    """The user's summaries for a subscribed channel, newest video first."""
    if await get_subscribed_channel(db, current_user.id, channel_id) is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=ChannelNotFoundError(channel_id).message
        )

    summaries = await list_summaries_for_channel(db, channel_id, current_user.id)
    return [SummaryResponse.model_validate(summary) for summary in summaries]


@router.post(
    "/{channel_id}/summaries",
    response_model=SummaryResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Store a video summary",
    responses={
        201: {"description": "Summary stored"},
        200: {"description": "A summary for this video already exists (returned unchanged)"},
        404: {"model": ErrorResponse, "description": "Channel not found or not a video URL"},
    }
)
async def create_channel_summary(
    channel_id: int,
    request: SummaryCreateRequest,
    response: Response,
    current_user: CurrentUser,
    db: DBSession,
) -> SummaryResponse:
    """Store a summary produced by the summarizer for one of the user's channels."""
    try:
        video_id = require_video_id(request.video_url)
        result = await create_video_summary(
            db,
            current_user.id,
            channel_id,
            VideoDescriptor(
                video_id=video_id,
                title=request.title,
                url=request.video_url,
                published_at=request.published_at,
                thumbnail_url=request.thumbnail_url,
            ),
            request.summary_content,
        )
    except (InvalidVideoURLError, ChannelNotFoundError) as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)

    if not result.created:
        response.status_code = status.HTTP_200_OK

    return SummaryResponse.model_validate(result.summary)
