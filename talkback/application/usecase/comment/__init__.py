"""Comment use cases."""

from .create_comment import CreateCommentUseCase
from .delete_comment import DeleteCommentUseCase
from .edit_comment import EditCommentUseCase
from .load_comments import LoadCommentsUseCase
from .moderate_comment import ModerateCommentUseCase
from .sticky_comment import StickyCommentUseCase
from .vote_comment import VoteCommentUseCase

__all__ = [
    "CreateCommentUseCase",
    "DeleteCommentUseCase",
    "EditCommentUseCase",
    "LoadCommentsUseCase",
    "ModerateCommentUseCase",
    "StickyCommentUseCase",
    "VoteCommentUseCase",
]
