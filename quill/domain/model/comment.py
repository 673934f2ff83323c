"""Comment entity.

Comments are threaded discussions on posts with unlimited depth. A thread
is persisted as a single document: the root comment with every reply
embedded recursively in its ``replies``.
"""

from datetime import datetime, timezone
from typing import Any, Optional

from pydantic import EmailStr, Field, field_validator

from quill.domain.model.common import DomainModel
from quill.domain.value import CommentId, PostId, ThreadId


class Author(DomainModel):
    """Commenter identity as stored with a comment.

    Stored values are taken as they are; input rules live on AuthorDraft.
    """

    name: str
    email: str
    website: str = ""


class AuthorDraft(Author):
    """Commenter identity as typed into the comment form."""

    name: str = Field(min_length=1)
    email: EmailStr


class Comment(DomainModel):
    """Comment entity.

    The same shape is used for roots and replies. Only a root read back
    from the store carries ``id``, the store-assigned thread id; every
    node has its own synthesized ``comment_id``.
    """

    id: Optional[ThreadId] = None
    comment_id: CommentId
    post_id: PostId
    author: Author
    content: str
    user_host_address: str
    user_agent: str
    spam: bool = False
    approved: bool
    published_at: datetime
    replies: list["Comment"] = Field(default_factory=list)

    @field_validator("spam", mode="before")
    @classmethod
    def null_spam_is_ham(cls, v: Any) -> Any:
        """Older documents store ``spam: null`` when no check ran."""
        return False if v is None else v

    @field_validator("replies", mode="before")
    @classmethod
    def missing_replies_are_empty(cls, v: Any) -> Any:
        return [] if v is None else v

    @property
    def is_visible(self) -> bool:
        """Whether the comment may be shown publicly."""
        return self.approved and not self.spam

    def to_document(self) -> dict[str, Any]:
        """Serialize to the stored document body.

        The thread id is the document key, so it is never part of the body.
        """
        body = self.model_dump(mode="json", exclude_none=True)
        body.pop("id", None)
        return body

    @classmethod
    def from_document(
        cls, source: dict[str, Any], thread_id: Optional[str] = None
    ) -> "Comment":
        """Build a comment tree from a stored document body.

        Args:
            source: Document body
            thread_id: Store id of the document, for roots

        Returns:
            Root comment with its replies
        """
        data = dict(source)
        data.pop("id", None)
        if thread_id is not None:
            data["id"] = thread_id
        return cls.model_validate(data)


class CommentDraft(DomainModel):
    """Caller-supplied part of a new comment.

    Server-side fields (``comment_id``, ``approved``, ``published_at``)
    are not part of a draft and cannot be supplied.
    """

    post_id: PostId = Field(min_length=1)
    author: AuthorDraft
    content: str = Field(min_length=1)
    user_host_address: str = Field(min_length=1)
    user_agent: str = Field(min_length=1)
    spam: Optional[bool]


class ThreadVersion(DomainModel):
    """Optimistic-concurrency token of a thread document."""

    seq_no: int
    primary_term: int


class Thread(DomainModel):
    """A root comment and its reply tree, as stored in one document."""

    id: ThreadId
    version: ThreadVersion
    root: Comment

    def with_root(self, root: Comment) -> "Thread":
        """Same document and version holding a new tree."""
        return Thread(id=self.id, version=self.version, root=root)


def utcnow() -> datetime:
    """Current wall-clock time in UTC."""
    return datetime.now(timezone.utc)


class CreatedComment(DomainModel):
    """Outcome of posting a comment."""

    new_comment: Comment
    # Target node as it was before the reply was attached; None for new threads
    replied_to_comment: Optional[Comment] = None
