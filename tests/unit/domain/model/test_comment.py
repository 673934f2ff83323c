"""Unit tests for the Comment entity."""

import pytest
from pydantic import ValidationError as PydanticValidationError

from quill.domain.model import AuthorDraft, Comment
from tests.conftest import make_comment, make_draft


class TestComment:
    """Tests for Comment."""

    @pytest.mark.parametrize(
        "approved, spam, visible",
        [(True, False, True), (True, True, False), (False, False, False)],
    )
    def test_visibility(self, approved, spam, visible):
        assert make_comment(approved=approved, spam=spam).is_visible is visible

    def test_document_round_trip_keeps_tree(self):
        comment = make_comment(replies=[make_comment("r", replies=[make_comment("rr")])])

        restored = Comment.from_document(comment.to_document(), thread_id="t1")

        assert restored.replies == comment.replies
        assert restored.id == "t1"

    def test_immutable(self):
        comment = make_comment()

        with pytest.raises(PydanticValidationError):
            comment.content = "changed"


class TestAuthorDraft:
    """Tests for AuthorDraft."""

    def test_email_checked(self):
        with pytest.raises(PydanticValidationError):
            AuthorDraft(name="Ada", email="nope")

    def test_reserved_domain_rejected_on_input(self):
        with pytest.raises(PydanticValidationError):
            AuthorDraft(name="Dev", email="dev@blog.local")

    def test_website_optional(self):
        assert AuthorDraft(name="Ada", email="ada@example.com").website == ""


class TestCommentDraft:
    """Tests for CommentDraft."""

    def test_empty_content_rejected(self):
        with pytest.raises(PydanticValidationError):
            make_draft(content="")


class TestStoredDocuments:
    """Tests for reading documents written under older input rules."""

    def test_legacy_email_reads_back(self):
        source = make_comment(replies=[make_comment("r")]).to_document()
        source["author"]["email"] = "dev@blog.local"
        source["replies"][0]["author"] = {"name": "", "email": "not an address"}

        comment = Comment.from_document(source, thread_id="t1")

        assert comment.author.email == "dev@blog.local"
        assert comment.replies[0].author.email == "not an address"
