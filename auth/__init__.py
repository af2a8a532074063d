"""Authentication module for slides-writer."""

from .base_auth import BaseAuthProvider
from .google_auth import SlidesGoogleAuth

__all__ = ["SlidesGoogleAuth", "BaseAuthProvider"]
