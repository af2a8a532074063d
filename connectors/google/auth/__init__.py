"""Google OAuth token storage."""

from .oauth_handler import AsyncGoogleOAuthHandler

__all__ = ["AsyncGoogleOAuthHandler"]
