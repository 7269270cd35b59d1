"""
Video summary API endpoints.

Read/unread marking is scoped to the current user: a summary id that
belongs to someone else gets the same 404 as one that does not exist.
"""

from fastapi import APIRouter, HTTPException, status

from tubebrief.core.auth import CurrentUser
from tubebrief.core.exceptions import SummaryNotFoundError
from tubebrief.db.deps import DBSession
from tubebrief.schemas.auth import ErrorResponse
from tubebrief.schemas.summaries import ReadStateResponse, SummaryResponse
from tubebrief.services.summaries import get_summary, mark_summary_read, mark_summary_unread

router = APIRouter(prefix="/summaries", tags=["Summaries"])

NOT_FOUND = {404: {"model": ErrorResponse, "description": "Summary not found"}}


def _not_found(summary_id: int) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=SummaryNotFoundError(summary_id).message
    )


@router.get("/{summary_id}", response_model=SummaryResponse, responses=NOT_FOUND)
async def read_summary(summary_id: int, current_user: CurrentUser, db: DBSession) -> SummaryResponse:
    """Get one of the user's summaries."""
    summary = await get_summary(db, summary_id, current_user.id)
    if summary is None:
        raise _not_found(summary_id)
    return SummaryResponse.model_validate(summary)


@router.post("/{summary_id}/read", response_model=ReadStateResponse, responses=NOT_FOUND)
async def mark_read(summary_id: int, current_user: CurrentUser, db: DBSession) -> ReadStateResponse:
    """Mark a summary as read. Repeating the call is harmless."""
    if not await mark_summary_read(db, summary_id, current_user.id):
        raise _not_found(summary_id)
    return ReadStateResponse(id=summary_id, is_read=True)


@router.delete("/{summary_id}/read", response_model=ReadStateResponse, responses=NOT_FOUND)
async def mark_unread(summary_id: int, current_user: CurrentUser, db: DBSession) -> ReadStateResponse:
    """Mark a summary as unread."""
    if not await mark_summary_unread(db, summary_id, current_user.id):
        raise _not_found(summary_id)
    return ReadStateResponse(id=summary_id, is_read=False)
