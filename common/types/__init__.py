"""Common types module."""

from .errors import SLIDES_ERROR_MESSAGES, SlidesErrorType, SlidesWriterError
from .slides import ShapeSelection, TextTarget

__all__ = [
    # Error types
    "SlidesErrorType",
    "SlidesWriterError",
    "SLIDES_ERROR_MESSAGES",
    # Slide types
    "ShapeSelection",
    "TextTarget",
]
