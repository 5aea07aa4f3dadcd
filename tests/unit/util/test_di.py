"""Unit tests for dependency injection wiring."""

import sys

import logfire
import pytest

from talkback.adapter.api import CommentApiClient, MockCommentApiClient
from talkback.adapter.live import LiveConnector, MockLiveConnector
from talkback.application.session import CommentSession
from talkback.config import Settings
from talkback.domain.repository import CommentRepository
from talkback.interface.render import RecordingRenderer, Renderer, TextRenderer
from talkback.util.di import ApiProvider, ProdApiProvider, ProdDomainProvider, get_provider
from talkback.util.error import ConfigurationError
from talkback.util.observability import configure_logfire
from tests.di import MockApiProvider, build_test_container
from tests.harness import create_env_fixture

# Unit test fixture - everything mocked
unit_env = create_env_fixture()

# Real text renderer
text_env = create_env_fixture(unmock={"renderer"})


class TestGetProvider:
    """Tests for get_provider function."""

    def test_concrete_provider_is_returned_as_is(self):
        assert get_provider(ProdDomainProvider) is ProdDomainProvider

    def test_mockable_component(self):
        assert get_provider(ApiProvider, use_mock=False) is ProdApiProvider
        assert get_provider(ApiProvider, use_mock=True) is MockApiProvider

    def test_unknown_unmock_component(self):
        with pytest.raises(ValueError):
            build_test_container(unmock={"database"})


class TestTestContainer:
    """The test container swaps infrastructure for in-memory doubles."""

    @pytest.mark.asyncio
    async def test_mocks_by_default(self, unit_env):
        assert isinstance(await unit_env.get(CommentApiClient), MockCommentApiClient)
        assert isinstance(await unit_env.get(LiveConnector), MockLiveConnector)
        assert isinstance(await unit_env.get(Renderer), RecordingRenderer)

    @pytest.mark.asyncio
    async def test_unmocked_renderer(self, text_env):
        assert isinstance(await text_env.get(Renderer), TextRenderer)

    @pytest.mark.asyncio
    async def test_session_shares_request_scoped_store(self, unit_env):
        session = await unit_env.get(CommentSession)
        store = await unit_env.get(CommentRepository)

        assert session.presenter.store is store
        assert session.apply_live_update.store is store


class TestConfigureLogfire:
    """Tests for configure_logfire function."""

    def test_sending_without_token_is_rejected(self, monkeypatch):
        monkeypatch.delenv("OBSERVABILITY__LOGFIRE_TOKEN", raising=False)
        monkeypatch.setenv("OBSERVABILITY__SEND_TO_LOGFIRE", "true")
        settings = Settings(_env_file=None)

        with pytest.raises(ConfigurationError):
            configure_logfire(settings)

    def test_console_writes_to_stderr(self, monkeypatch):
        """Console events must not interleave with the tree on stdout."""
        captured = {}
        monkeypatch.setattr(logfire, "configure", lambda **kwargs: captured.update(kwargs))
        monkeypatch.setenv("OBSERVABILITY__SEND_TO_LOGFIRE", "false")
        settings = Settings(_env_file=None)

        configure_logfire(settings)

        assert captured["send_to_logfire"] is False
        assert captured["console"].output is sys.stderr
