"""Google OAuth authentication for slides-writer - shared between CLI and MCP server."""

import asyncio
import json
import logging
import secrets
import webbrowser
from typing import Any, Optional

from aiohttp import web
from google.oauth2.credentials import Credentials
from google_auth_oauthlib.flow import Flow

from common.types.errors import SlidesWriterError, auth_failed, config_missing
from config import SlidesWriterConfig
from connectors.google.auth import AsyncGoogleOAuthHandler
from connectors.google.slides_connector import SlidesServiceAsync

from .base_auth import BaseAuthProvider

logger = logging.getLogger(__name__)

GOOGLE_AUTH_URI = "https://accounts.google.com/o/oauth2/auth"
GOOGLE_TOKEN_URI = "https://oauth2.googleapis.com/token"

SUCCESS_PAGE = """
<!DOCTYPE html>
<html>
<head>
    <title>slides-writer Authentication</title>
    <style>
        body { font-family: -apple-system, BlinkMacSystemFont, sans-serif;
               text-align: center; padding: 50px; background: #f5f5f5; }
        .success { color: #28a745; font-size: 24px; margin-bottom: 20px; }
        .message { color: #666; font-size: 16px; }
    </style>
</head>
<body>
    <div class="success">Authentication successful!</div>
    <div class="message">You can close this window.</div>
</body>
</html>
"""


class SlidesGoogleAuth(BaseAuthProvider):
    """Obtains an authenticated Slides client from the token cache or the browser flow"""

    def __init__(
        self,
        config: SlidesWriterConfig,
        oauth_handler: Optional[AsyncGoogleOAuthHandler] = None,
    ):
        self.config = config
        self.oauth_handler = oauth_handler or AsyncGoogleOAuthHandler(config.token_path)
        self.redirect_uri = config.redirect_uri
        logger.debug(f"Google auth initialized with redirect URI {self.redirect_uri}")

    @property
    def scopes(self) -> list[str]:
        return list(self.config.scopes)

    async def obtain_client(self) -> SlidesServiceAsync:
        """Return a Slides client, authorizing interactively if no token is cached.

        A cached token is used as is; google-auth refreshes it once its expiry
        has passed, and if it cannot be refreshed the first API call fails
        with REMOTE_CALL_FAILED.
        """
        logger.info("Checking for existing token...")
        credentials = await self.load_cached_credentials()
        if credentials is None:
            logger.info("No existing token, starting auth flow...")
            credentials = await self.authenticate()
        return SlidesServiceAsync(credentials)

    async def load_cached_credentials(self) -> Optional[Credentials]:
        return await self.oauth_handler.load_credentials()

    async def revoke_authentication(self) -> bool:
        return await self.oauth_handler.revoke_authentication()

    def load_client_config(self) -> dict[str, Any]:
        """Read the installed-app OAuth client id and secret"""
        path = self.config.credentials_path
        logger.info(f"Loading client credentials from {path}...")
        try:
            with open(path, "r") as f:
                client_config = json.load(f)
        except FileNotFoundError as e:
            raise config_missing(path, "file not found", e) from e
        except (OSError, ValueError) as e:
            raise config_missing(path, str(e), e) from e

        installed = client_config.get("installed") if isinstance(client_config, dict) else None
        if (
            not isinstance(installed, dict)
            or not installed.get("client_id")
            or not installed.get("client_secret")
        ):
            raise config_missing(path, "expected installed.client_id and installed.client_secret")

        installed.setdefault("auth_uri", GOOGLE_AUTH_URI)
        installed.setdefault("token_uri", GOOGLE_TOKEN_URI)
        return {"installed": installed}

    def get_auth_url(self) -> tuple[str, Flow, str]:
        """Get the OAuth authorization URL, the flow that produced it and its state"""
        flow = Flow.from_client_config(
            self.load_client_config(), scopes=self.scopes, redirect_uri=self.redirect_uri
        )

        state = secrets.token_urlsafe(32)

        # Offline access with forced consent so Google returns a refresh token
        auth_url, _ = flow.authorization_url(
            access_type="offline",
            include_granted_scopes="false",
            state=state,
            prompt="consent",
        )
        return auth_url, flow, state

    async def authenticate(self) -> Credentials:
        """Run the browser OAuth flow against a one-shot local callback listener.

        Returns:
            Credentials obtained from the authorization code, already stored
            in the token cache

        Raises:
            SlidesWriterError: CONFIG_MISSING if the client credentials cannot be
                read, AUTH_FAILED on listener errors, code exchange errors or
                when no callback arrives within ``auth_timeout``
        """
        auth_url, flow, state = self.get_auth_url()
        host, port = self.config.callback_host, self.config.callback_port

        loop = asyncio.get_running_loop()
        app = web.Application()
        app["flow"] = flow
        app["state"] = state
        app["result"] = loop.create_future()
        app.router.add_get("/", self._handle_callback)

        logger.info("Setting up callback server...")
        runner = web.AppRunner(app)
        await runner.setup()
        try:
            site = web.TCPSite(runner, host, port)
            try:
                await site.start()
            except OSError as e:
                logger.error(f"Server error: {e}")
                raise auth_failed(f"could not listen on {host}:{port}: {e}", e) from e

            logger.info(f"Listening for OAuth callback on port {port}")
            logger.info(f"Opening auth URL: {auth_url}")
            webbrowser.open(auth_url)

            try:
                credentials: Credentials = await asyncio.wait_for(
                    app["result"], timeout=self.config.auth_timeout
                )
            except asyncio.TimeoutError as e:
                logger.error(f"Authentication timed out after {self.config.auth_timeout:g}s")
                raise auth_failed(
                    f"no OAuth callback received within {self.config.auth_timeout:g} seconds", e
                ) from e
        finally:
            await runner.cleanup()
            logger.info("Callback server closed")

        logger.info("Google authentication successful!")
        return credentials

    async def _exchange_code(self, flow: Flow, code: str) -> Credentials:
        loop = asyncio.get_running_loop()
        await loop.run_in_executor(None, lambda: flow.fetch_token(code=code))
        credentials: Credentials = flow.credentials
        return credentials

    async def _handle_callback(self, request: web.Request) -> web.StreamResponse:
        """Handle OAuth callback"""
        app = request.app
        result: asyncio.Future = app["result"]
        logger.info(f"Received callback request: {request.path_qs}")

        if result.done():
            return web.Response(text="Authentication already finished", status=410)

        if "error" in request.query:
            error = request.query.get("error")
            logger.error(f"OAuth error: {error}")
            response = web.Response(text=f"Authentication failed: {error}", status=400)
            return await self._resolve(
                request, response, error=auth_failed(f"authorization was denied: {error}")
            )

        code = request.query.get("code")
        if not code:
            return web.Response(text="No authorization code received", status=400)

        state = request.query.get("state")
        if state is not None and state != app["state"]:
            logger.error("Invalid state parameter")
            return web.Response(text="Invalid state parameter", status=400)

        try:
            logger.info("Got auth code, getting tokens...")
            credentials = await self._exchange_code(app["flow"], code)
            logger.info("Got tokens, saving...")
            await self.oauth_handler.store_credentials(credentials)
        except Exception as e:
            logger.error(f"Error handling callback: {e}")
            response = web.Response(text=f"Token exchange failed: {e}", status=500)
            if isinstance(e, SlidesWriterError):
                return await self._resolve(request, response, error=e)
            return await self._resolve(
                request, response, error=auth_failed(f"token exchange failed: {e}", e)
            )

        response = web.Response(text=SUCCESS_PAGE, content_type="text/html")
        return await self._resolve(request, response, credentials=credentials)

    async def _resolve(
        self,
        request: web.Request,
        response: web.Response,
        credentials: Optional[Credentials] = None,
        error: Optional[SlidesWriterError] = None,
    ) -> web.StreamResponse:
        """Send the response, then settle the flow.

        The page is flushed first so the listener is not torn down mid-response.
        """
        await response.prepare(request)
        await response.write_eof()

        result: asyncio.Future = request.app["result"]
        if not result.done():
            if error is not None:
                result.set_exception(error)
            else:
                result.set_result(credentials)
        return response
