"""
API route modules.

Import all route modules here for easy access.
"""

from tubebrief.api.routes import auth, channels, onboarding, summaries

__all__ = ["auth", "channels", "onboarding", "summaries"]
