"""
Onboarding wizard API endpoints.

The frontend renders the two wizard steps; these endpoints run the same
OnboardingFlow on the server so validation messages and the final
upsert are identical however the client behaves.
"""

import logging
from functools import partial

from fastapi import APIRouter, HTTPException, status

from tubebrief.core.auth import CurrentUser
from tubebrief.core.exceptions import ValidationError
from tubebrief.db.deps import DBSession
from tubebrief.schemas.auth import ErrorResponse
from tubebrief.schemas.onboarding import (
    DestinationRequest,
    DestinationResponse,
    PreferenceRequest,
    PreferenceResponse,
)
from tubebrief.services.onboarding import (
    OnboardingFlow,
    get_notification_preference,
    save_notification_preference,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/onboarding", tags=["Onboarding"])


@router.post(
    "/destination",
    response_model=DestinationResponse,
    summary="Validate the notification destination (wizard step 1)",
    responses={
        422: {"model": ErrorResponse, "description": "Empty or malformed destination"},
    }
)
async def check_destination(
    request: DestinationRequest,
    current_user: CurrentUser,
    db: DBSession,
) -> DestinationResponse:
    """
    Run the destination step without saving anything.

    Returns the destination in its stored form, e.g. a WhatsApp number
    without spaces or parentheses.
    """
    flow = OnboardingFlow(current_user.id, partial(save_notification_preference, db))

    if not flow.submit_destination(request.destination, request.channel_type):
        raise ValidationError(flow.error)

    return DestinationResponse(channel_type=flow.channel_type, destination=flow.destination)


@router.put(
    "/preferences",
    response_model=PreferenceResponse,
    summary="Save notification preferences (both wizard steps)",
    responses={
        200: {"description": "Preference created or replaced"},
        422: {"model": ErrorResponse, "description": "Invalid destination or categories"},
    }
)
async def save_preferences(
    request: PreferenceRequest,
    current_user: CurrentUser,
    db: DBSession,
) -> PreferenceResponse:
    """
    Validate destination and categories, then upsert the preference.

    Calling this again replaces the stored preference, including
    switching between email and WhatsApp.
    """
    flow = OnboardingFlow(current_user.id, partial(save_notification_preference, db))

    committed = (
        flow.submit_destination(request.destination, request.channel_type)
        and await flow.submit_categories(request.categories)
    )
    if not committed:
        raise ValidationError(flow.error)

    logger.info(f"User {current_user.id} completed onboarding via {flow.channel_type.value}")
    return PreferenceResponse.model_validate(flow.preference)


@router.get(
    "/preferences",
    response_model=PreferenceResponse,
    summary="Get notification preferences",
    responses={
        404: {"model": ErrorResponse, "description": "User has not completed onboarding"},
    }
)
async def read_preferences(current_user: CurrentUser, db: DBSession) -> PreferenceResponse:
    """Get the current user's stored preference."""
    preference = await get_notification_preference(db, current_user.id)

    if preference is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Notification preferences not found"
        )

    return PreferenceResponse.model_validate(preference)
