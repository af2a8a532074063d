"""In-memory stand-in for the googleapiclient Slides resource.

Only the pieces the connector touches are modelled: ``presentations().get``
and ``presentations().batchUpdate`` with deleteText / insertText requests.
"""

import copy
from typing import Any, Callable, Optional


def text_box(object_id: str, translate_y: float, text: Optional[str] = None) -> dict[str, Any]:
    """A TEXT_BOX page element at a vertical offset, optionally holding text."""
    element: dict[str, Any] = {
        "objectId": object_id,
        "transform": {"scaleX": 1, "scaleY": 1, "translateX": 0, "translateY": translate_y},
        "shape": {"shapeType": "TEXT_BOX"},
    }
    if text:
        element["shape"]["text"] = text_body(text)
    return element


def rectangle(object_id: str, translate_y: float) -> dict[str, Any]:
    return {
        "objectId": object_id,
        "transform": {"translateY": translate_y},
        "shape": {"shapeType": "RECTANGLE"},
    }


def image(object_id: str, translate_y: float) -> dict[str, Any]:
    return {"objectId": object_id, "transform": {"translateY": translate_y}, "image": {}}


def text_body(text: str) -> dict[str, Any]:
    return {
        "textElements": [
            {"startIndex": 0, "endIndex": len(text) + 1, "paragraphMarker": {"style": {}}},
            {"startIndex": 0, "endIndex": len(text) + 1, "textRun": {"content": text + "\n"}},
        ]
    }


def make_presentation(*slides: list[dict[str, Any]], presentation_id: str = "deck-1") -> dict:
    """Build a presentation whose slides hold the given page element lists."""
    return {
        "presentationId": presentation_id,
        "title": "Quiz night",
        "slides": [
            {"objectId": f"slide_{index}", "pageElements": elements}
            for index, elements in enumerate(slides, start=1)
        ],
    }


class FakeRequest:
    def __init__(self, func: Callable[[], Any]):
        self._func = func

    def execute(self) -> Any:
        return self._func()


class FakePresentations:
    def __init__(self, api: "FakeSlidesApi"):
        self.api = api

    def get(self, presentationId: str, fields: Optional[str] = None) -> FakeRequest:
        self.api.get_calls.append({"presentationId": presentationId, "fields": fields})
        return FakeRequest(lambda: self.api.snapshot(fields))

    def batchUpdate(self, presentationId: str, body: dict[str, Any]) -> FakeRequest:
        requests = copy.deepcopy(body["requests"])
        self.api.batch_calls.append(requests)
        return FakeRequest(lambda: self.api.apply(presentationId, requests))


class FakeSlidesApi:
    """Records calls and applies text edits to an in-memory presentation."""

    def __init__(self, presentation: dict[str, Any]):
        self.presentation = copy.deepcopy(presentation)
        self.get_calls: list[dict[str, Any]] = []
        self.batch_calls: list[list[dict[str, Any]]] = []
        self.fail_batch_number: Optional[int] = None
        self.batch_error: Exception = RuntimeError("backend unavailable")

    def presentations(self) -> FakePresentations:
        return FakePresentations(self)

    def snapshot(self, fields: Optional[str] = None) -> dict[str, Any]:
        if fields == "slides":
            return {"slides": copy.deepcopy(self.presentation.get("slides", []))}
        return copy.deepcopy(self.presentation)

    def element(self, object_id: str) -> dict[str, Any]:
        for slide in self.presentation["slides"]:
            for element in slide.get("pageElements", []):
                if element["objectId"] == object_id:
                    return element
        raise KeyError(object_id)

    def text_of(self, object_id: str) -> str:
        text_elements = self.element(object_id)["shape"].get("text", {}).get("textElements", [])
        content = "".join(e.get("textRun", {}).get("content", "") for e in text_elements)
        return content[:-1] if content.endswith("\n") else content

    def apply(self, presentation_id: str, requests: list[dict[str, Any]]) -> dict[str, Any]:
        if self.fail_batch_number == len(self.batch_calls):
            raise self.batch_error

        replies: list[dict[str, Any]] = []
        for request in requests:
            if "deleteText" in request:
                shape = self.element(request["deleteText"]["objectId"])["shape"]
                shape.pop("text", None)
            elif "insertText" in request:
                insert = request["insertText"]
                shape = self.element(insert["objectId"])["shape"]
                existing = self.text_of(insert["objectId"])
                index = insert.get("insertionIndex", 0)
                shape["text"] = text_body(existing[:index] + insert["text"] + existing[index:])
            else:
                raise ValueError(f"Unsupported request: {request}")
            replies.append({})
        return {"presentationId": presentation_id, "replies": replies}
