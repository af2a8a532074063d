"""Slide shape types."""

from enum import Enum

from pydantic import BaseModel, Field


class TextTarget(str, Enum):
    """Which of the two text boxes on a slide to write."""

    TITLE = "title"
    CONTENT = "content"


class ShapeSelection(BaseModel):
    """Element ids of the title and content text boxes on one slide.

    Resolved per call from a fresh presentation snapshot and never cached.
    """

    model_config = {"frozen": True}

    slide_number: int = Field(..., ge=1, description="1-based slide index")
    title_id: str = Field(..., description="Object id of the top-most text box")
    content_id: str = Field(..., description="Object id of the next text box down")

    def element_for(self, target: TextTarget) -> str:
        if target is TextTarget.TITLE:
            return self.title_id
        return self.content_id
