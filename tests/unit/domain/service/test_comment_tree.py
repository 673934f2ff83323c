"""Unit tests for comment tree operations."""

import pytest

from quill.domain.error import StructuralError
from quill.domain.service.comment_tree import (
    append_reply,
    count_nodes,
    filter_visible,
    resolve_node,
    update_node,
)
from quill.domain.value import RecipientPath, ThreadId
from tests.conftest import make_comment


def path(*indices: int) -> RecipientPath:
    return RecipientPath(thread_id=ThreadId("t1"), indices=indices)


@pytest.fixture
def tree():
    """root -> [a -> [a0], b]"""
    return make_comment(
        "root",
        replies=[
            make_comment("a", replies=[make_comment("a0")]),
            make_comment("b"),
        ],
    )


class TestResolveNode:
    """Tests for resolve_node."""

    def test_empty_indices_is_root(self, tree):
        assert resolve_node(tree, path()).comment_id == "root"

    def test_walks_indices(self, tree):
        assert resolve_node(tree, path(0, 0)).comment_id == "a0"
        assert resolve_node(tree, path(1)).comment_id == "b"

    def test_out_of_range_reports_depth(self, tree):
        with pytest.raises(StructuralError) as exc_info:
            resolve_node(tree, path(0, 3))

        assert exc_info.value.depth == 1
        assert exc_info.value.thread_id == "t1"

    def test_leaf_has_no_replies(self, tree):
        with pytest.raises(StructuralError):
            resolve_node(tree, path(1, 0))


class TestAppendReply:
    """Tests for append_reply."""

    def test_appends_at_end(self, tree):
        new_tree = append_reply(tree, path(0), make_comment("a1"))

        assert [r.comment_id for r in new_tree.replies[0].replies] == ["a0", "a1"]

    def test_original_tree_untouched(self, tree):
        append_reply(tree, path(0, 0), make_comment("deep"))

        assert tree.replies[0].replies[0].replies == []

    def test_siblings_shared(self, tree):
        new_tree = append_reply(tree, path(0), make_comment("a1"))

        assert new_tree.replies[1] is tree.replies[1]

    def test_reply_to_root(self, tree):
        new_tree = append_reply(tree, path(), make_comment("c"))

        assert [r.comment_id for r in new_tree.replies] == ["a", "b", "c"]

    def test_bad_path_raises(self, tree):
        with pytest.raises(StructuralError):
            append_reply(tree, path(5), make_comment("x"))


class TestUpdateNode:
    """Tests for update_node."""

    def test_replaces_addressed_node(self, tree):
        new_tree = update_node(
            tree, path(0, 0), lambda n: n.model_copy(update={"approved": False})
        )

        assert new_tree.replies[0].replies[0].approved is False
        assert tree.replies[0].replies[0].approved is True


class TestFilterVisible:
    """Tests for filter_visible."""

    def test_hidden_reply_takes_subtree(self):
        root = make_comment(
            "root",
            replies=[
                make_comment(
                    "hidden", approved=False, replies=[make_comment("child")]
                ),
                make_comment("shown"),
            ],
        )

        visible = filter_visible([root])

        assert [r.comment_id for r in visible[0].replies] == ["shown"]

    def test_spam_root_dropped(self):
        roots = [make_comment("spam", spam=True), make_comment("ham")]

        assert [c.comment_id for c in filter_visible(roots)] == ["ham"]

    def test_order_preserved(self):
        roots = [make_comment(str(i)) for i in range(5)]

        assert [c.comment_id for c in filter_visible(roots)] == list("01234")


class TestCountNodes:
    """Tests for count_nodes."""

    def test_counts_replies(self, tree):
        assert count_nodes([tree]) == 4

    def test_empty_forest(self):
        assert count_nodes([]) == 0
