"""Async Google Slides service implementation."""

import logging
from typing import Any, Optional

from connectors.google.base_service import BaseGoogleService

logger = logging.getLogger(__name__)


class SlidesServiceAsync(BaseGoogleService):
    """Async Google Slides service implementation."""

    @property
    def service_name(self) -> str:
        return "slides"

    @property
    def service_version(self) -> str:
        return "v1"

    async def get_presentation(
        self, presentation_id: str, fields: Optional[str] = None
    ) -> dict[str, Any]:
        """
        Get a Google Slides presentation by ID.

        Args:
            presentation_id: The Google Slides presentation ID
            fields: Optional field mask limiting the response (e.g. "slides")

        Returns:
            The presentation resource as returned by the API
        """
        logger.info(f"Getting presentation {presentation_id}")

        def _get_presentation(service: Any) -> Any:
            kwargs: dict[str, Any] = {"presentationId": presentation_id}
            if fields:
                kwargs["fields"] = fields
            return service.presentations().get(**kwargs)

        result: dict[str, Any] = await self._execute_request(
            "presentations.get", _get_presentation
        )
        return result

    async def batch_update_presentation(
        self, presentation_id: str, requests: list[dict[str, Any]]
    ) -> dict[str, Any]:
        """
        Apply batch updates to a Google Slides presentation.

        The requests are applied by the API in order, as one call.

        Args:
            presentation_id: The Google Slides presentation ID
            requests: List of update requests

        Returns:
            The batchUpdate response
        """
        logger.info(
            f"Batch updating presentation {presentation_id} with {len(requests)} requests"
        )

        def _batch_update(service: Any) -> Any:
            return service.presentations().batchUpdate(
                presentationId=presentation_id, body={"requests": requests}
            )

        result: dict[str, Any] = await self._execute_request(
            "presentations.batchUpdate", _batch_update
        )
        logger.debug(f"Update result: {result}")
        return result
