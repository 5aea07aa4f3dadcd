"""Domain services."""

from .base import Service
from .card_service import CardContext, CardService, CardState
from .reconciler_service import ReconcilerService
from .sort_service import SortService
from .tree_service import CommentNode, TreeService

__all__ = [
    "CardContext",
    "CardService",
    "CardState",
    "CommentNode",
    "ReconcilerService",
    "Service",
    "SortService",
    "TreeService",
]
