"""Tests for the slides-writer command line."""

import json
from typing import Iterator
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from google.oauth2.credentials import Credentials

import main
from common.types.errors import auth_failed
from config import SlidesWriterConfig
from connectors.google.slides_connector import SlidesServiceAsync
from tests.helpers.oauth_fakes import BrowserSimulator, mock_flow
from tests.helpers.slides_fakes import FakeSlidesApi


@pytest.fixture(autouse=True)
def quiet_setup(config: SlidesWriterConfig) -> Iterator[None]:
    """Use the test config and skip global logging / telemetry setup."""
    with patch("main.load_config", return_value=config), patch(
        "main.init_telemetry"
    ), patch("main.configure_logging"):
        yield


@pytest.fixture
def mock_auth(slides_service: SlidesServiceAsync) -> Iterator[MagicMock]:
    with patch("main.SlidesGoogleAuth") as auth_class:
        auth_class.return_value.obtain_client = AsyncMock(return_value=slides_service)
        auth_class.return_value.revoke_authentication = AsyncMock(return_value=True)
        yield auth_class.return_value


@pytest.mark.unit
class TestParser:
    def test_write_slide_arguments(self) -> None:
        args = main.build_parser().parse_args(["write-slide", "2", "content", "ANSWER"])

        assert args.command == "write-slide"
        assert args.slide_number == 2
        assert args.target == "content"
        assert args.text == "ANSWER"

    @pytest.mark.parametrize("slide_number", ["0", "-1", "two"])
    def test_slide_number_must_be_positive(self, slide_number: str) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main.main(["write-slide", slide_number, "title", "x"])

        assert exc_info.value.code == 1

    def test_missing_arguments_exit_1(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main.main(["write-slide", "2"])

        assert exc_info.value.code == 1

    def test_target_must_be_title_or_content(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main.build_parser().parse_args(["write-slide", "1", "footer", "x"])

        assert exc_info.value.code == 1

    def test_no_command(self) -> None:
        assert main.build_parser().parse_args([]).command is None


@pytest.mark.unit
class TestWriteSlideCommand:
    def test_content_targets_lower_text_box(
        self, mock_auth: MagicMock, fake_api: FakeSlidesApi
    ) -> None:
        """Slide 2 has boxes at offsets 50 and 200; content is the one at 200."""
        exit_code = main.main(["write-slide", "2", "content", "ANSWER"])

        assert exit_code == 0
        assert fake_api.text_of("clue_box") == "ANSWER"
        assert fake_api.text_of("category_box") == ""

    def test_title_targets_upper_text_box(
        self, mock_auth: MagicMock, fake_api: FakeSlidesApi
    ) -> None:
        assert main.main(["write-slide", "2", "title", "SCIENCE"]) == 0
        assert fake_api.text_of("category_box") == "SCIENCE"

    def test_missing_slide_exits_1(self, mock_auth: MagicMock, fake_api: FakeSlidesApi) -> None:
        assert main.main(["write-slide", "9", "content", "ANSWER"]) == 1
        assert fake_api.batch_calls == []

    def test_auth_failure_exits_1(self, mock_auth: MagicMock) -> None:
        mock_auth.obtain_client.side_effect = auth_failed("port in use")

        assert main.main(["write-slide", "2", "content", "ANSWER"]) == 1

    def test_unexpected_error_exits_1(self, mock_auth: MagicMock) -> None:
        mock_auth.obtain_client.side_effect = RuntimeError("connection reset")

        assert main.main(["write-slide", "2", "content", "ANSWER"]) == 1

    def test_service_is_closed_after_write(
        self, mock_auth: MagicMock, slides_service: SlidesServiceAsync
    ) -> None:
        with patch.object(slides_service, "close", wraps=slides_service.close) as close:
            assert main.main(["write-slide", "2", "content", "ANSWER"]) == 0

        close.assert_called_once()

    def test_invalid_configuration_exits_1(self) -> None:
        def bad_port_config() -> SlidesWriterConfig:
            return SlidesWriterConfig(callback_port=0)

        with patch("main.load_config", side_effect=bad_port_config):
            assert main.main(["write-slide", "2", "content", "ANSWER"]) == 1


@pytest.mark.unit
class TestAuthCommand:
    def test_success_exits_0(self, mock_auth: MagicMock) -> None:
        assert main.main(["auth"]) == 0
        mock_auth.obtain_client.assert_awaited_once()

    def test_failure_exits_1(self, mock_auth: MagicMock) -> None:
        mock_auth.obtain_client.side_effect = auth_failed("timed out")

        assert main.main(["auth"]) == 1

    def test_unexpected_error_exits_1(self, mock_auth: MagicMock) -> None:
        mock_auth.obtain_client.side_effect = OSError("token file is read-only")

        assert main.main(["auth"]) == 1

    def test_revoke(self, mock_auth: MagicMock) -> None:
        assert main.main(["revoke"]) == 0
        mock_auth.revoke_authentication.assert_awaited_once()


@pytest.mark.integration
class TestAuthCommandEndToEnd:
    """No cached token: the browser flow runs against the real callback listener."""

    def test_callback_writes_token_and_exits_0(
        self, config: SlidesWriterConfig, credentials: Credentials
    ) -> None:
        assert not config.token_path.exists()
        browser = BrowserSimulator(config, "?code=abc123")
        flow = mock_flow(credentials)

        with patch("auth.google_auth.Flow.from_client_config", return_value=flow), patch(
            "auth.google_auth.webbrowser.open", side_effect=browser.open
        ):
            exit_code = main.main(["auth"])

        assert exit_code == 0
        assert "auth%2Fpresentations" in browser.opened[0]
        flow.fetch_token.assert_called_once_with(code="abc123")
        assert json.loads(config.token_path.read_text())["refresh_token"] == "refresh-token-456"


@pytest.mark.unit
class TestServeCommand:
    def test_no_command_starts_stdio_server(self, config: SlidesWriterConfig) -> None:
        with patch("main.create_server") as mock_create, patch("main.signal.signal"):
            assert main.main([]) == 0

        mock_create.assert_called_once_with(config)
        mock_create.return_value.run.assert_called_once_with(transport="stdio")
