"""Locate the title and content text boxes on a slide.

Slides in the target deck carry no placeholders, so text boxes are told apart
by where they sit: the one nearest the top of the slide is the title and the
next one down is the content.
"""

import logging
from typing import Any, Optional

from common.types.errors import invalid_state, not_found
from common.types.slides import ShapeSelection
from connectors.google.slides_connector.slides_service_async import SlidesServiceAsync

logger = logging.getLogger(__name__)

TEXT_BOX = "TEXT_BOX"


def get_slide(presentation: dict[str, Any], slide_number: int) -> dict[str, Any]:
    """Return the slide at a 1-based index, or raise NOT_FOUND.

    A slide without page elements counts as missing.
    """
    slides = presentation.get("slides") or []
    if slide_number < 1 or slide_number > len(slides):
        raise not_found(f"slide number {slide_number}", slide_count=len(slides))

    slide: dict[str, Any] = slides[slide_number - 1]
    if not slide.get("pageElements"):
        raise not_found(f"page elements on slide number {slide_number}")
    return slide


def vertical_offset(element: dict[str, Any]) -> float:
    return float((element.get("transform") or {}).get("translateY", 0) or 0)


def text_box_elements(slide: dict[str, Any]) -> list[dict[str, Any]]:
    """Text boxes on a slide from top to bottom.

    Equal offsets keep the order the elements have on the slide.
    """
    indexed = [
        (position, element)
        for position, element in enumerate(slide.get("pageElements") or [])
        if (element.get("shape") or {}).get("shapeType") == TEXT_BOX
    ]
    indexed.sort(key=lambda item: (vertical_offset(item[1]), item[0]))
    return [element for _, element in indexed]


def find_element(presentation: dict[str, Any], element_id: str) -> Optional[dict[str, Any]]:
    for slide in presentation.get("slides") or []:
        for element in slide.get("pageElements") or []:
            if element.get("objectId") == element_id:
                return element
    return None


def find_title_shape(
    presentation: dict[str, Any], slide_number: int, object_id: Optional[str] = None
) -> str:
    """Object id of the fixed title shape.

    With ``object_id`` the shape is looked up by identity anywhere in the deck;
    otherwise it is the top-most text box on ``slide_number``.
    """
    if object_id:
        if find_element(presentation, object_id) is None:
            raise not_found(f"title element {object_id}", object_id=object_id)
        return object_id

    text_boxes = text_box_elements(get_slide(presentation, slide_number))
    if not text_boxes:
        raise not_found(f"a title text box on slide number {slide_number}")

    title_id: str = text_boxes[0]["objectId"]
    return title_id


def find_slide_elements(presentation: dict[str, Any], slide_number: int) -> ShapeSelection:
    """Resolve the title and content text boxes on a slide by vertical position."""
    slide = get_slide(presentation, slide_number)
    logger.debug(
        f"Found {len(slide['pageElements'])} page elements on slide {slide_number}"
    )

    text_boxes = text_box_elements(slide)
    if len(text_boxes) < 2:
        raise invalid_state(
            "Could not find required text elements on slide",
            slide_number=slide_number,
            text_box_count=len(text_boxes),
        )

    return ShapeSelection(
        slide_number=slide_number,
        title_id=text_boxes[0]["objectId"],
        content_id=text_boxes[1]["objectId"],
    )


async def resolve_title_shape(
    slides_service: SlidesServiceAsync,
    presentation_id: str,
    slide_number: int,
    object_id: Optional[str] = None,
) -> str:
    presentation = await slides_service.get_presentation(presentation_id)
    return find_title_shape(presentation, slide_number, object_id)


async def resolve_slide_elements(
    slides_service: SlidesServiceAsync, presentation_id: str, slide_number: int
) -> ShapeSelection:
    presentation = await slides_service.get_presentation(presentation_id)
    return find_slide_elements(presentation, slide_number)
