"""
Authentication API endpoints.

Sign-in happens at the identity provider; the only thing this API needs
is the current user's profile, created from token claims on first use.
"""

from fastapi import APIRouter

from tubebrief.core.auth import CurrentUser
from tubebrief.core.logging import get_logger
from tubebrief.db.deps import DBSession
from tubebrief.schemas.auth import ErrorResponse, UserResponse
from tubebrief.services.onboarding import get_notification_preference

logger = get_logger(__name__)

# Create router
router = APIRouter(prefix="/auth", tags=["authentication"])


@router.get(
    "/me",
    response_model=UserResponse,
    responses={401: {"model": ErrorResponse, "description": "Missing or invalid token"}},
)
async def read_current_user(current_user: CurrentUser, db: DBSession) -> UserResponse:
    """
    Get the current user's profile.

    ``onboarded`` tells the frontend whether to show the onboarding
    wizard or go straight to the channel list.
    """
    preference = await get_notification_preference(db, current_user.id)

    logger.debug("current_user_fetched", user_id=current_user.id, onboarded=preference is not None)

    return UserResponse(
        id=current_user.id,
        email=current_user.email,
        name=current_user.name,
        image=current_user.image,
        created_at=current_user.created_at,
        onboarded=preference is not None,
    )
