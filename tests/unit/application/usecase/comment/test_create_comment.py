"""Unit tests for CreateCommentUseCase."""

import pytest

from quill.application.usecase.comment import (
    CreateCommentRequest,
    CreateCommentUseCase,
)
from quill.domain.error import ValidationError
from quill.domain.service import CommentService
from tests.conftest import make_payload
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


class TestCreateCommentRequest:
    """Tests for request parsing."""

    def test_valid_payload(self):
        request = CreateCommentRequest.parse(make_payload())

        assert request.draft.post_id == "p1"
        assert request.recipient_path is None

    def test_recipient_path_as_json_text(self):
        request = CreateCommentRequest.parse(make_payload(recipient_path='["t1", 0]'))

        assert request.recipient_path.indices == (0,)

    def test_every_invalid_field_reported(self):
        payload = make_payload(
            content="",
            author={"name": "", "email": "not-an-email"},
            recipient_path="[1]",
        )
        del payload["spam"]

        with pytest.raises(ValidationError) as exc_info:
            CreateCommentRequest.parse(payload)

        fields = exc_info.value.fields
        assert "content" in fields
        assert "author.name" in fields
        assert "author.email" in fields
        assert "spam" in fields
        assert "recipient_path" in fields

    def test_null_spam_accepted(self):
        request = CreateCommentRequest.parse(make_payload(spam=None))

        assert request.draft.spam is None

    def test_server_fields_ignored(self):
        request = CreateCommentRequest.parse(
            make_payload(approved=True, comment_id="forged", published_at="1999")
        )

        assert not hasattr(request.draft, "comment_id")


class TestCreateCommentUseCase:
    """Tests for CreateCommentUseCase."""

    @pytest.mark.asyncio
    async def test_reply_returns_both_comments(self, unit_env):
        comment_service = await unit_env.get(CommentService)
        use_case = CreateCommentUseCase(comment_service=comment_service)

        thread = await use_case.execute(CreateCommentRequest.parse(make_payload()))
        reply = await use_case.execute(
            CreateCommentRequest.parse(
                make_payload(recipient_path=[thread.new_comment.id])
            )
        )

        assert reply.replied_to_comment.comment_id == thread.new_comment.comment_id
        assert reply.new_comment.comment_id != thread.new_comment.comment_id
