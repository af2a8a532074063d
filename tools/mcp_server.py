"""MCP server exposing slide text writing tools.

Tools:
- write-slide-title: write the fixed title shape of the configured presentation
- write-slide-content: write the content text box of a slide
"""

import logging
from typing import Annotated, Optional

from mcp.server.fastmcp import FastMCP
from mcp.server.fastmcp.exceptions import ToolError
from pydantic import Field

from auth.google_auth import SlidesGoogleAuth
from common.types.errors import SlidesWriterError
from common.types.slides import TextTarget
from config import SlidesWriterConfig
from connectors.google.slides_connector import SlidesConnectorTool
from telemetry import get_tracer

logger = logging.getLogger(__name__)

tracer = get_tracer(__name__)

SERVER_NAME = "slides-writer"


class SlidesWriterTools:
    """Tool handlers; each call gets a fresh client from the credential manager."""

    def __init__(self, config: SlidesWriterConfig, auth: Optional[SlidesGoogleAuth] = None):
        self.config = config
        self.auth = auth or SlidesGoogleAuth(config)

    async def write_slide_title(self, text: str) -> str:
        with tracer.start_as_current_span("write-slide-title"):
            try:
                slides_service = await self.auth.obtain_client()
                async with slides_service:
                    connector = SlidesConnectorTool(slides_service, self.config)
                    return await connector.write_title(text)
            except SlidesWriterError as e:
                logger.error(f"write-slide-title failed: {e.message}")
                raise ToolError(f"Error: {e.message}") from e
            except Exception as e:
                logger.exception("Unexpected error in write-slide-title")
                raise ToolError(f"Error: {e}") from e

    async def write_slide_content(self, text: str, slide_number: Optional[int] = None) -> str:
        slide_number = slide_number or self.config.content_slide_number
        with tracer.start_as_current_span("write-slide-content") as span:
            span.set_attribute("slides.slide_number", slide_number)
            try:
                slides_service = await self.auth.obtain_client()
                async with slides_service:
                    connector = SlidesConnectorTool(slides_service, self.config)
                    return await connector.write_slide(slide_number, TextTarget.CONTENT, text)
            except SlidesWriterError as e:
                logger.error(f"write-slide-content failed: {e.message}")
                raise ToolError(f"Error: {e.message}") from e
            except Exception as e:
                logger.exception("Unexpected error in write-slide-content")
                raise ToolError(f"Error: {e}") from e


def create_server(config: SlidesWriterConfig, auth: Optional[SlidesGoogleAuth] = None) -> FastMCP:
    """Build the FastMCP server with both slide tools registered."""
    mcp = FastMCP(SERVER_NAME)
    tools = SlidesWriterTools(config, auth)

    @mcp.tool(
        name="write-slide-title",
        description="Write the category and amount text at the top of the slide",
    )
    async def write_slide_title(
        text: Annotated[
            str, Field(description="The title text to write (e.g. 'CATEGORY $400')")
        ],
    ) -> str:
        return await tools.write_slide_title(text)

    @mcp.tool(
        name="write-slide-content",
        description="Write the clue text in the center of the slide",
    )
    async def write_slide_content(
        text: Annotated[str, Field(description="The clue text to write")],
        slide_number: Annotated[
            Optional[int],
            Field(
                ge=1,
                description="1-based slide number (defaults to the configured content slide)",
            ),
        ] = None,
    ) -> str:
        return await tools.write_slide_content(text, slide_number)

    return mcp
