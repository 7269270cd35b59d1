"""
Authentication schemas (Pydantic models for request/response).

References:
-----------
- Pydantic: https://docs.pydantic.dev/latest/
- FastAPI Request Body: https://fastapi.tiangolo.com/tutorial/body/
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class UserResponse(BaseModel):
    """
    User information response.

    Example response:
        {
            "id": "google-oauth2|1093847561234",
            "email": "alice@example.com",
            "name": "Alice Johnson",
            "image": "https://lh3.googleusercontent.com/a/...",
            "onboarded": true
        }
    """
    id: str = Field(..., description="Identity provider user id")
    email: str = Field(..., description="User's email address")
    name: Optional[str] = Field(None, description="User's display name")
    image: Optional[str] = Field(None, description="URL to profile picture")
    created_at: datetime = Field(..., description="When the account was first seen")
    onboarded: bool = Field(
        False,
        description="Whether the user has saved a notification preference"
    )

    model_config = {
        "from_attributes": True
    }


class ErrorResponse(BaseModel):
    """
    Standard error response format.

    Example:
        {
            "detail": "Summary not found"
        }
    """
    detail: str = Field(..., description="Error message")
