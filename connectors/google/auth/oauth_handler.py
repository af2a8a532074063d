"""
Token cache for the Google Slides OAuth credentials.
Holds exactly one serialized credential record in a local JSON file.
"""

import asyncio
import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional

from google.oauth2.credentials import Credentials

logger = logging.getLogger(__name__)

DEFAULT_TOKEN_URI = "https://oauth2.googleapis.com/token"


def credentials_to_dict(credentials: Credentials) -> dict[str, Any]:
    """Serialize credentials into the token cache record"""
    return {
        "access_token": credentials.token,
        "refresh_token": credentials.refresh_token,
        "token_uri": credentials.token_uri,
        "client_id": credentials.client_id,
        "client_secret": credentials.client_secret,
        "scopes": list(credentials.scopes) if credentials.scopes else None,
        "expiry": credentials.expiry.isoformat() if credentials.expiry else None,
    }


def parse_expiry(value: Optional[str]) -> Optional[datetime]:
    """google-auth compares expiry against naive UTC datetimes"""
    if not value:
        return None
    expiry = datetime.fromisoformat(value)
    if expiry.tzinfo is not None:
        expiry = expiry.astimezone(timezone.utc).replace(tzinfo=None)
    return expiry


def credentials_from_dict(token_data: dict[str, Any]) -> Credentials:
    """Rebuild credentials from a token cache record"""
    return Credentials(
        token=token_data.get("access_token"),
        refresh_token=token_data.get("refresh_token"),
        token_uri=token_data.get("token_uri", DEFAULT_TOKEN_URI),
        client_id=token_data.get("client_id"),
        client_secret=token_data.get("client_secret"),
        scopes=token_data.get("scopes"),
        expiry=parse_expiry(token_data.get("expiry")),
    )


class AsyncGoogleOAuthHandler:
    """Reads and writes the single-file token cache"""

    def __init__(self, token_path: Path) -> None:
        self.token_file = Path(token_path)
        logger.debug(f"OAuth handler using token file: {self.token_file}")

    async def load_credentials(self) -> Optional[Credentials]:
        """Load stored OAuth credentials, or None if there is no usable record"""
        if not self.token_file.exists():
            logger.info(f"No token file found at {self.token_file}")
            return None

        try:
            # Run file I/O in executor to keep it async
            loop = asyncio.get_event_loop()
            token_data = await loop.run_in_executor(
                None, lambda: json.loads(self.token_file.read_text())
            )
            if not isinstance(token_data, dict):
                raise ValueError("token record is not a JSON object")

            credentials = credentials_from_dict(token_data)
            logger.debug("Successfully loaded credentials")
            return credentials

        except (OSError, ValueError) as e:
            logger.warning(f"Ignoring unreadable token file {self.token_file}: {e}")
            return None

    async def store_credentials(self, credentials: Credentials) -> None:
        """Store OAuth credentials, replacing any previous record"""
        self.token_file.parent.mkdir(parents=True, exist_ok=True)
        token_data = credentials_to_dict(credentials)

        loop = asyncio.get_event_loop()
        await loop.run_in_executor(
            None, lambda: self.token_file.write_text(json.dumps(token_data, indent=2))
        )

        logger.info(f"Credentials stored in: {self.token_file}")

    async def revoke_authentication(self) -> bool:
        """Delete the stored token record"""
        if not self.token_file.exists():
            logger.info(f"No stored credentials at {self.token_file}")
            return False

        loop = asyncio.get_event_loop()
        await loop.run_in_executor(None, self.token_file.unlink)
        logger.info(f"Removed stored credentials at {self.token_file}")
        return True
