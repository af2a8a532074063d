"""Common shared modules across slides-writer."""

from .types import (
    SLIDES_ERROR_MESSAGES,
    ShapeSelection,
    SlidesErrorType,
    SlidesWriterError,
    TextTarget,
)

__all__ = [
    "SlidesErrorType",
    "SlidesWriterError",
    "SLIDES_ERROR_MESSAGES",
    "ShapeSelection",
    "TextTarget",
]
