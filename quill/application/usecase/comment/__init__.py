"""Comment use cases."""

from .create_comment import (
    CreateCommentRequest,
    CreateCommentResponse,
    CreateCommentUseCase,
)
from .delete_comment import (
    DeleteCommentRequest,
    DeleteCommentResponse,
    DeleteCommentUseCase,
    DeletePostCommentsRequest,
    DeletePostCommentsResponse,
    DeletePostCommentsUseCase,
)
from .get_all_comments import (
    GetAllCommentsRequest,
    GetAllCommentsResponse,
    GetAllCommentsUseCase,
)
from .get_comments import GetCommentsRequest, GetCommentsResponse, GetCommentsUseCase
from .moderate_comment import (
    ModerateCommentRequest,
    ModerateCommentResponse,
    ModerateCommentUseCase,
)

__all__ = [
    "CreateCommentRequest",
    "CreateCommentResponse",
    "CreateCommentUseCase",
    "DeleteCommentRequest",
    "DeleteCommentResponse",
    "DeleteCommentUseCase",
    "DeletePostCommentsRequest",
    "DeletePostCommentsResponse",
    "DeletePostCommentsUseCase",
    "GetAllCommentsRequest",
    "GetAllCommentsResponse",
    "GetAllCommentsUseCase",
    "GetCommentsRequest",
    "GetCommentsResponse",
    "GetCommentsUseCase",
    "ModerateCommentRequest",
    "ModerateCommentResponse",
    "ModerateCommentUseCase",
]
