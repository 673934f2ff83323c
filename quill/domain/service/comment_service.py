"""Comment domain service."""

import secrets
import string
from typing import Callable, Sequence

import logfire

from quill.config import CommentSettings
from quill.domain.error import ConflictError, NotFoundError, ThreadConflictError
from quill.domain.model.comment import (
    Author,
    Comment,
    CommentDraft,
    CreatedComment,
    Thread,
    utcnow,
)
from quill.domain.repository import CommentRepository
from quill.domain.value import (
    CommentId,
    CommentQuery,
    PostId,
    RecipientPath,
    SortOrder,
    ThreadId,
)

from .base import Service
from .comment_tree import (
    append_reply,
    count_nodes,
    filter_visible,
    resolve_node,
    update_node,
)
from .scanner import CorpusScanner

COMMENT_ID_ALPHABET = string.ascii_lowercase + string.digits
COMMENT_ID_LENGTH = 12


def generate_comment_id() -> CommentId:
    """Random token identifying a single comment node."""
    return CommentId(
        "".join(secrets.choice(COMMENT_ID_ALPHABET) for _ in range(COMMENT_ID_LENGTH))
    )


class CommentService(Service):
    """Domain service for comment threads."""

    def __init__(
        self,
        comment_repository: CommentRepository,
        scanner: CorpusScanner,
        settings: CommentSettings,
    ) -> None:
        """Initialize comment service.

        Args:
            comment_repository: Comment repository
            scanner: Corpus scanner for exhaustive reads
            settings: Comment engine settings
        """
        self.comment_repository = comment_repository
        self.scanner = scanner
        self.write_attempts = max(1, settings.write_conflict_retries)

    async def create_comment(
        self, draft: CommentDraft, recipient_path: RecipientPath | None = None
    ) -> CreatedComment:
        """Start a thread or reply to a comment inside one.

        Args:
            draft: Validated caller input
            recipient_path: Node to reply to, None to start a new thread

        Returns:
            The new comment, and the node it replied to as it was before

        Raises:
            NotFoundError: If the thread does not exist
            StructuralError: If the path does not fit the thread
            ConflictError: If concurrent writers kept winning the race
        """
        comment = Comment(
            comment_id=generate_comment_id(),
            post_id=draft.post_id,
            author=Author(**draft.author.model_dump()),
            content=draft.content,
            user_host_address=draft.user_host_address,
            user_agent=draft.user_agent,
            spam=bool(draft.spam),
            approved=not draft.spam,
            published_at=utcnow(),
            replies=[],
        )

        with logfire.span(
            "comment_service.create_comment",
            post_id=draft.post_id,
            comment_id=comment.comment_id,
            recipient_path=recipient_path.serialize() if recipient_path else None,
        ):
            if recipient_path is None:
                thread = await self.comment_repository.create_thread(comment)
                logfire.info(
                    "Thread created",
                    thread_id=thread.id,
                    post_id=draft.post_id,
                    spam=comment.spam,
                )
                return CreatedComment(new_comment=thread.root, replied_to_comment=None)

            def attach(root: Comment) -> tuple[Comment, Comment]:
                target = resolve_node(root, recipient_path)
                return append_reply(root, recipient_path, comment), target

            _, target = await self._update_thread(recipient_path.thread_id, attach)
            logfire.info(
                "Reply created",
                thread_id=recipient_path.thread_id,
                depth=len(recipient_path.indices) + 1,
                post_id=draft.post_id,
                spam=comment.spam,
            )
            return CreatedComment(new_comment=comment, replied_to_comment=target)

    async def moderate_comment(
        self, path: RecipientPath, approved: bool
    ) -> Comment:
        """Approve or reject any comment in a thread.

        Approving also clears the spam mark, so the comment becomes visible.

        Args:
            path: Address of the comment
            approved: New approval state

        Returns:
            The comment as stored after the change
        """
        with logfire.span(
            "comment_service.moderate_comment",
            recipient_path=path.serialize(),
            approved=approved,
        ):

            def moderate(root: Comment) -> tuple[Comment, Comment]:
                target = resolve_node(root, path)
                update = {"approved": approved}
                if approved:
                    update["spam"] = False
                moderated = target.model_copy(update=update)
                return update_node(root, path, lambda _: moderated), moderated

            _, moderated = await self._update_thread(path.thread_id, moderate)
            logfire.info(
                "Comment moderated",
                thread_id=path.thread_id,
                comment_id=moderated.comment_id,
                approved=approved,
            )
            return moderated

    async def _update_thread(
        self,
        thread_id: ThreadId,
        change: Callable[[Comment], tuple[Comment, Comment]],
    ) -> tuple[Thread, Comment]:
        """Read-modify-write a thread under optimistic concurrency.

        ``change`` receives the current tree and returns the new tree along
        with the node to report back. It is re-run against a fresh read
        after every lost race.
        """
        for attempt in range(1, self.write_attempts + 1):
            thread = await self.comment_repository.get_thread(thread_id)
            if thread is None:
                logfire.warn("Thread not found", thread_id=thread_id)
                raise NotFoundError("Thread", thread_id)

            new_root, node = change(thread.root)
            try:
                saved = await self.comment_repository.replace_thread(
                    thread.with_root(new_root)
                )
                return saved, node
            except ThreadConflictError:
                logfire.warn(
                    "Thread write conflict, retrying",
                    thread_id=thread_id,
                    attempt=attempt,
                )

        logfire.error(
            "Thread write conflicts exhausted",
            thread_id=thread_id,
            attempts=self.write_attempts,
        )
        raise ConflictError("Thread", thread_id, self.write_attempts)

    async def list_comments(self, post_ids: Sequence[PostId]) -> list[Comment]:
        """Every visible thread on the given posts, oldest first.

        Hidden roots are excluded by the store query; hidden replies are
        pruned afterwards together with their subtrees.
        """
        with logfire.span("comment_service.list_comments", post_ids=list(post_ids)):
            query = CommentQuery(
                post_ids=tuple(post_ids),
                visible_only=True,
                sort=SortOrder.ASC,
            )
            threads = filter_visible(await self.scanner.scan_all(query))
            logfire.info(
                "Comments listed",
                threads=len(threads),
                comments=count_nodes(threads),
            )
            return threads

    async def get_all_comments(self) -> list[Comment]:
        """Every thread in the store, unfiltered, for administrative export."""
        with logfire.span("comment_service.get_all_comments"):
            return await self.scanner.scan_all(CommentQuery())

    async def delete_comment(self, thread_id: ThreadId) -> None:
        """Delete a thread document, replies included.

        Raises:
            NotFoundError: If there is no such thread
        """
        with logfire.span("comment_service.delete_comment", thread_id=thread_id):
            deleted = await self.comment_repository.delete_thread(thread_id)
            if not deleted:
                logfire.warn("Thread not found for deletion", thread_id=thread_id)
                raise NotFoundError("Thread", thread_id)
            logfire.info("Thread deleted", thread_id=thread_id)

    async def delete_post_comments(self, post_id: PostId) -> int:
        """Delete every thread on a post. Safe to repeat.

        Returns:
            Number of threads deleted
        """
        with logfire.span("comment_service.delete_post_comments", post_id=post_id):
            deleted = await self.comment_repository.delete_by_post(post_id)
            logfire.info("Post comments deleted", post_id=post_id, deleted=deleted)
            return deleted
