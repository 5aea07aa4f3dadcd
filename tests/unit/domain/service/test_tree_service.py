"""Unit tests for TreeService."""

from uuid import uuid4

import pytest

from talkback.domain.repository import CommentRepository
from talkback.domain.service import CardContext, TreeService
from talkback.domain.value import CommentId, CommentSort
from tests.conftest import NOW, make_comment, make_page_info
from tests.harness import create_env_fixture

# Unit test fixture - everything mocked
unit_env = create_env_fixture()


def context(**overrides) -> CardContext:
    fields = {
        "principal": None,
        "page_info": make_page_info(),
        "commenters": {},
        "sort": CommentSort.SCORE_DESC,
        "now": NOW,
    }
    fields.update(overrides)
    return CardContext(**fields)


def flatten(nodes, depth=0):
    for node in nodes:
        yield node.comment.id, depth
        yield from flatten(node.children, depth + 1)


class TestBuild:
    """Tests for build method."""

    @pytest.mark.asyncio
    async def test_builds_sorted_nested_tree(self, unit_env):
        """Buckets are sorted independently and nested under their parent."""
        tree_service = await unit_env.get(TreeService)
        store = await unit_env.get(CommentRepository)
        low = make_comment(score=1)
        high = make_comment(score=5)
        reply_low = make_comment(parent=high, score=0)
        reply_high = make_comment(parent=high, score=2)
        store.load([low, high, reply_low, reply_high])

        nodes = tree_service.build(store, context())

        assert list(flatten(nodes)) == [
            (high.id, 0),
            (reply_high.id, 1),
            (reply_low.id, 1),
            (low.id, 0),
        ]
        assert nodes[0].card.has_children is True
        assert nodes[0].children[0].card.level == 1
        assert nodes[1].card.has_children is False

    @pytest.mark.asyncio
    async def test_orphans_render_at_root_level(self, unit_env):
        """Replies to an unknown parent are appended to the root level."""
        tree_service = await unit_env.get(TreeService)
        store = await unit_env.get(CommentRepository)
        root = make_comment(score=0)
        orphan = make_comment(parent=make_comment(), score=10)
        store.load([root, orphan])

        nodes = tree_service.build(store, context())

        assert {n.comment.id for n in nodes} == {root.id, orphan.id}
        assert nodes[0].comment.id == orphan.id

    @pytest.mark.asyncio
    async def test_hide_deleted_drops_deleted_leaves(self, unit_env):
        """Hidden deleted comments disappear only when they have no replies."""
        tree_service = await unit_env.get(TreeService)
        store = await unit_env.get(CommentRepository)
        deleted_leaf = make_comment(is_deleted=True)
        deleted_parent = make_comment(is_deleted=True)
        reply = make_comment(parent=deleted_parent)
        store.load([deleted_leaf, deleted_parent, reply])

        hidden = tree_service.build(store, context(hide_deleted=True))
        shown = tree_service.build(store, context())

        assert [n.comment.id for n in hidden] == [deleted_parent.id]
        assert [c.comment.id for c in hidden[0].children] == [reply.id]
        assert len(shown) == 2

    @pytest.mark.asyncio
    async def test_empty_store_builds_empty_forest(self, unit_env):
        tree_service = await unit_env.get(TreeService)
        store = await unit_env.get(CommentRepository)

        assert tree_service.build(store, context()) == []


class TestBuildNode:
    """Tests for build_node method."""

    @pytest.mark.asyncio
    async def test_node_level_follows_ancestors(self, unit_env):
        tree_service = await unit_env.get(TreeService)
        store = await unit_env.get(CommentRepository)
        root = make_comment()
        reply = make_comment(parent=root)
        nested = make_comment(parent=reply)
        store.load([root, reply, nested])

        node = tree_service.build_node(store, context(), reply.id)

        assert node.card.level == 1
        assert [c.comment.id for c in node.children] == [nested.id]
        assert node.children[0].card.level == 2

    @pytest.mark.asyncio
    async def test_unknown_comment_returns_none(self, unit_env):
        tree_service = await unit_env.get(TreeService)
        store = await unit_env.get(CommentRepository)

        assert tree_service.build_node(store, context(), CommentId(uuid4())) is None
