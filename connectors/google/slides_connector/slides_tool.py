"""Google Slides text writing used by the MCP tools and the CLI."""

import logging
from typing import Any

from common.types.slides import TextTarget
from config import SlidesWriterConfig
from connectors.google.slides_connector.shape_resolver import (
    find_element,
    resolve_slide_elements,
    resolve_title_shape,
)
from connectors.google.slides_connector.slides_service_async import SlidesServiceAsync

logger = logging.getLogger(__name__)


def delete_all_text_request(element_id: str) -> dict[str, Any]:
    return {"deleteText": {"objectId": element_id, "textRange": {"type": "ALL"}}}


def insert_text_request(element_id: str, text: str) -> dict[str, Any]:
    return {"insertText": {"objectId": element_id, "text": text, "insertionIndex": 0}}


def element_text(element: dict[str, Any]) -> str:
    """Plain text of a shape, without the closing paragraph newline."""
    text_elements = ((element.get("shape") or {}).get("text") or {}).get("textElements") or []
    content = "".join(
        (text_element.get("textRun") or {}).get("content", "") for text_element in text_elements
    )
    return content[:-1] if content.endswith("\n") else content


class SlidesConnectorTool:
    """Writes text into shapes of the configured presentation."""

    def __init__(self, slides_service: SlidesServiceAsync, config: SlidesWriterConfig):
        """Initialize the Google Slides connector tool.

        Args:
            slides_service: Authenticated Slides service
            config: Presentation id and fixed shape settings
        """
        self.slides_service = slides_service
        self.config = config
        self.presentation_id = config.presentation_id
        logger.debug("Initialized SlidesConnectorTool")

    async def has_text(self, element_id: str) -> bool:
        """Check whether a shape currently holds any text."""
        presentation = await self.slides_service.get_presentation(
            self.presentation_id, fields="slides"
        )
        element = find_element(presentation, element_id)
        return element is not None and element_text(element) != ""

    async def replace_text(self, element_id: str, new_text: str) -> None:
        """
        Replace the text of a shape.

        Existing text is deleted in one batch and the new text inserted in a
        second one. The two calls are not atomic: if the insert fails the
        shape is left empty.

        Args:
            element_id: Object id of the target shape
            new_text: Text to write
        """
        if await self.has_text(element_id):
            logger.debug(f"Deleting existing text in {element_id}")
            await self.slides_service.batch_update_presentation(
                self.presentation_id, [delete_all_text_request(element_id)]
            )

        await self.slides_service.batch_update_presentation(
            self.presentation_id, [insert_text_request(element_id, new_text)]
        )

    async def overwrite_text(self, element_id: str, text: str) -> dict[str, Any]:
        """Delete and insert in a single batch, whatever the shape held before."""
        return await self.slides_service.batch_update_presentation(
            self.presentation_id,
            [delete_all_text_request(element_id), insert_text_request(element_id, text)],
        )

    async def write_title(self, text: str) -> str:
        """
        Write the fixed title shape.

        Args:
            text: Title text (e.g. "CATEGORY $400")

        Returns:
            Confirmation message
        """
        logger.info(f"Writing title text: {text}")
        title_id = await resolve_title_shape(
            self.slides_service,
            self.presentation_id,
            self.config.title_slide_number,
            self.config.title_object_id,
        )
        logger.info(f"Found title element with ID: {title_id}")

        await self.overwrite_text(title_id, text)
        return f'Successfully wrote "{text}" to slide title'

    async def write_slide(self, slide_number: int, target: TextTarget, text: str) -> str:
        """
        Write the title or content text box of a slide.

        Args:
            slide_number: 1-based slide index
            target: Which of the two text boxes to write
            text: Text to write

        Returns:
            Confirmation message
        """
        logger.info(f"Writing {target.value} text to slide {slide_number}")
        selection = await resolve_slide_elements(
            self.slides_service, self.presentation_id, slide_number
        )
        element_id = selection.element_for(target)
        logger.debug(f"Resolved {target.value} element {element_id} on slide {slide_number}")

        await self.replace_text(element_id, text)
        return f'Successfully wrote "{text}" to slide {slide_number} {target.value}'
