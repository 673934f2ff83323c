"""Structural operations on comment trees.

All functions are pure: they never modify the tree they are given and
return new nodes where something changed. Untouched subtrees are shared
between the old and the new tree.
"""

from typing import Callable, Sequence

from quill.domain.error import StructuralError
from quill.domain.model.comment import Comment
from quill.domain.value import RecipientPath


def resolve_node(root: Comment, path: RecipientPath) -> Comment:
    """Find the node a recipient path points at.

    Args:
        root: Root comment of the thread named by ``path``
        path: Recipient path

    Returns:
        The addressed node (``root`` itself for an empty index tail)

    Raises:
        StructuralError: If an index is out of range at some depth
    """
    node = root
    for depth, index in enumerate(path.indices):
        if index >= len(node.replies):
            raise StructuralError(path.thread_id, path.indices, depth)
        node = node.replies[index]
    return node


def update_node(
    root: Comment, path: RecipientPath, change: Callable[[Comment], Comment]
) -> Comment:
    """Rebuild a tree with the node at ``path`` replaced by ``change(node)``.

    Raises:
        StructuralError: If an index is out of range at some depth
    """

    def rebuild(node: Comment, depth: int) -> Comment:
        if depth == len(path.indices):
            return change(node)
        index = path.indices[depth]
        if index >= len(node.replies):
            raise StructuralError(path.thread_id, path.indices, depth)
        replies = list(node.replies)
        replies[index] = rebuild(replies[index], depth + 1)
        return node.model_copy(update={"replies": replies})

    return rebuild(root, 0)


def append_reply(root: Comment, path: RecipientPath, reply: Comment) -> Comment:
    """Rebuild a tree with ``reply`` appended to the node at ``path``."""
    return update_node(
        root,
        path,
        lambda node: node.model_copy(update={"replies": [*node.replies, reply]}),
    )


def filter_visible(comments: Sequence[Comment]) -> list[Comment]:
    """Prune a forest down to what may be shown publicly.

    A hidden comment takes its whole subtree with it, whatever the state
    of the replies. Order is preserved.
    """
    return [
        comment.model_copy(update={"replies": filter_visible(comment.replies)})
        for comment in comments
        if comment.is_visible
    ]


def count_nodes(comments: Sequence[Comment]) -> int:
    """Number of comments in a forest, replies included."""
    return sum(1 + count_nodes(comment.replies) for comment in comments)
