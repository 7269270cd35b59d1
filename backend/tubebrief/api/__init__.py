"""
API routes initialization.

This module aggregates all API routers and provides a single router
to include in the main application.
"""

from fastapi import APIRouter

from tubebrief.api.routes import auth, channels, onboarding, summaries

# Create main API router
api_router = APIRouter()

# Include authentication routes
api_router.include_router(auth.router)

# Include onboarding wizard routes
api_router.include_router(onboarding.router)

# Include channel subscription routes
api_router.include_router(channels.router)

# Include summary routes
api_router.include_router(summaries.router)
