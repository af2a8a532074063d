"""Project configuration and paths."""

import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field


DEFAULT_PRESENTATION_ID = "TODO-PUT-GOOGLE-SLIDES-PRESENTATION-ID-HERE"
DEFAULT_CREDENTIALS_PATH = "gcp-oauth.keys.json"
DEFAULT_TOKEN_PATH = ".slides-server-credentials.json"
DEFAULT_SCOPES = ["https://www.googleapis.com/auth/presentations"]
DEFAULT_CALLBACK_PORT = 4892
DEFAULT_AUTH_TIMEOUT = 300.0  # 5 minutes


class SlidesWriterConfig(BaseModel):
    """Settings shared by the auth flow, the Slides connector and the MCP server."""

    presentation_id: str = Field(DEFAULT_PRESENTATION_ID, min_length=1)
    credentials_path: Path = Field(Path(DEFAULT_CREDENTIALS_PATH))
    token_path: Path = Field(Path(DEFAULT_TOKEN_PATH))
    scopes: list[str] = Field(default_factory=lambda: list(DEFAULT_SCOPES))

    # OAuth callback listener
    callback_host: str = "localhost"
    callback_port: int = Field(DEFAULT_CALLBACK_PORT, ge=1, le=65535)
    auth_timeout: float = Field(DEFAULT_AUTH_TIMEOUT, gt=0)

    # Fixed shapes used by the MCP tools
    title_slide_number: int = Field(1, ge=1)
    title_object_id: Optional[str] = None
    content_slide_number: int = Field(1, ge=1)

    @property
    def redirect_uri(self) -> str:
        return f"http://{self.callback_host}:{self.callback_port}"


def load_config(env_file: Optional[str] = None) -> SlidesWriterConfig:
    """Build the configuration from defaults, a .env file and the environment."""
    load_dotenv(env_file)

    return SlidesWriterConfig(
        presentation_id=os.getenv("SLIDES_PRESENTATION_ID", DEFAULT_PRESENTATION_ID),
        credentials_path=Path(os.getenv("SLIDES_CREDENTIALS_PATH", DEFAULT_CREDENTIALS_PATH)),
        token_path=Path(os.getenv("SLIDES_TOKEN_PATH", DEFAULT_TOKEN_PATH)),
        callback_host=os.getenv("SLIDES_CALLBACK_HOST", "localhost"),
        callback_port=int(os.getenv("SLIDES_CALLBACK_PORT", str(DEFAULT_CALLBACK_PORT))),
        auth_timeout=float(os.getenv("SLIDES_AUTH_TIMEOUT", str(DEFAULT_AUTH_TIMEOUT))),
        title_slide_number=int(os.getenv("SLIDES_TITLE_SLIDE", "1")),
        title_object_id=os.getenv("SLIDES_TITLE_OBJECT_ID") or None,
        content_slide_number=int(os.getenv("SLIDES_CONTENT_SLIDE", "1")),
    )
