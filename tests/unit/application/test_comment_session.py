"""Unit tests for CommentSession."""

import asyncio
import json

import pytest

from talkback.adapter.api import CommentApiClient, LiveMessage
from talkback.adapter.live import LiveConnector
from talkback.application.command import ChangeSortCommand
from talkback.application.error import SessionClosedError
from talkback.application.session import CommentSession
from talkback.application.state import SessionState
from talkback.domain.repository import CommentRepository
from talkback.domain.value import CommentSort
from talkback.interface.render import Renderer
from tests.conftest import make_comment
from tests.harness import create_env_fixture

# Unit test fixture - everything mocked
unit_env = create_env_fixture()


async def eventually(predicate, timeout: float = 1.0) -> None:
    async with asyncio.timeout(timeout):
        while not predicate():
            await asyncio.sleep(0)


class TestLifecycle:
    """Tests for start/close."""

    @pytest.mark.asyncio
    async def test_start_loads_and_subscribes(self, unit_env):
        api = await unit_env.get(CommentApiClient)
        connector = await unit_env.get(LiveConnector)
        renderer = await unit_env.get(Renderer)
        comment = make_comment()
        api.seed([comment])

        async with await unit_env.get(CommentSession) as session:
            await eventually(lambda: connector.current is not None and connector.current.sent)

            assert [n.comment.id for n in renderer.last_tree] == [comment.id]
            assert session.channel.is_running
            assert json.loads(connector.current.sent[0]) == {
                "domain": str(api.page_info.domain_id),
                "path": "/",
            }

        assert session.is_closed
        assert session.channel is None

    @pytest.mark.asyncio
    async def test_no_subscription_when_load_fails(self, unit_env):
        api = await unit_env.get(CommentApiClient)
        connector = await unit_env.get(LiveConnector)
        renderer = await unit_env.get(Renderer)
        session = await unit_env.get(CommentSession)
        api.fail_next()

        await session.start()

        assert session.channel is None
        assert connector.attempts == []
        assert renderer.last_message.is_error
        await session.close()

    @pytest.mark.asyncio
    async def test_dispatch_after_close_raises(self, unit_env):
        session = await unit_env.get(CommentSession)
        await session.start()
        await session.close()

        with pytest.raises(SessionClosedError):
            await session.dispatch(ChangeSortCommand(sort=CommentSort.TIME_ASC))

    @pytest.mark.asyncio
    async def test_close_invalidates_pending_reload(self, unit_env):
        session = await unit_env.get(CommentSession)
        state = await unit_env.get(SessionState)
        await session.start()
        generation = state.generation

        await session.close()

        assert not state.is_current(generation)


class TestLiveMessages:
    """Tests for live updates flowing through the session."""

    @pytest.mark.asyncio
    async def test_live_new_comment_renders_tree(self, unit_env):
        api = await unit_env.get(CommentApiClient)
        connector = await unit_env.get(LiveConnector)
        renderer = await unit_env.get(Renderer)
        store = await unit_env.get(CommentRepository)

        async with await unit_env.get(CommentSession):
            await eventually(lambda: connector.current is not None)
            comment = make_comment()
            api.seed([comment])

            connector.current.feed(
                json.dumps(
                    {
                        "domain": str(api.page_info.domain_id),
                        "path": "/",
                        "comment": str(comment.id),
                        "action": "new",
                    }
                )
            )
            await eventually(lambda: len(renderer.trees) == 2)

            assert store.contains(comment.id)

    @pytest.mark.asyncio
    async def test_refetch_failure_is_dropped(self, unit_env):
        api = await unit_env.get(CommentApiClient)
        renderer = await unit_env.get(Renderer)

        async with await unit_env.get(CommentSession) as session:
            api.fail_next()

            await session.handle_live_message(
                LiveMessage(
                    domain=str(api.page_info.domain_id),
                    path="/",
                    comment=str(make_comment().id),
                    action="new",
                )
            )

            assert len(renderer.trees) == 1
            assert renderer.messages == []
