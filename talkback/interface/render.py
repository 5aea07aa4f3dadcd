"""Comment tree renderers.

A renderer receives the display tree built by the tree service and turns it
into something a user can see. It never touches the store: every
interaction goes back through commands.
"""

from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import Optional

from bs4 import BeautifulSoup

from talkback.domain.service import CardState, CommentNode
from talkback.domain.value import CommentState, Message

# Indentation stops growing for unnested replies
_INDENT = "    "


class Renderer(ABC):
    """Output side of the comment widget."""

    @abstractmethod
    def render_tree(self, nodes: list[CommentNode]) -> None:
        """Render the whole comment tree, replacing anything shown before."""
        pass

    @abstractmethod
    def update_card(self, node: CommentNode) -> None:
        """Re-render a single card (and its replies) in place."""
        pass

    @abstractmethod
    def show_message(self, message: Optional[Message]) -> None:
        """Show a message above the comments; None hides the current one."""
        pass


class TextRenderer(Renderer):
    """Renders the comment tree as indented plain text lines."""

    def __init__(self, write: Callable[[str], None] = print) -> None:
        """Initialize text renderer.

        Args:
            write: Function receiving each output line
        """
        self.write = write

    def render_tree(self, nodes: list[CommentNode]) -> None:
        if not nodes:
            self.write("No comments yet.")
            return
        for line in self.format_nodes(nodes):
            self.write(line)

    def update_card(self, node: CommentNode) -> None:
        for line in self.format_nodes([node]):
            self.write(line)

    def show_message(self, message: Optional[Message]) -> None:
        if message is None:
            return
        prefix = "!!" if message.is_error else "--"
        text = f"{prefix} {message.text}"
        if message.details:
            text += f" ({message.details})"
        self.write(text)

    def format_nodes(self, nodes: list[CommentNode], depth: int = 0) -> list[str]:
        """Format nodes and their visible replies, depth first."""
        lines: list[str] = []
        for node in nodes:
            lines.append(_INDENT * depth + self.format_card(node.card))
            if not node.children:
                continue
            child_depth = depth if node.children[0].card.unnest else depth + 1
            if node.card.collapsed:
                hidden = f"[{len(node.children)} replies hidden]"
                lines.append(_INDENT * child_depth + hidden)
                continue
            lines.extend(self.format_nodes(node.children, child_depth))
        return lines

    def format_card(self, card: CardState) -> str:
        """Format a single card as one line."""
        badges = []
        if card.is_sticky:
            badges.append("sticky")
        if card.is_author_moderator:
            badges.append("mod")
        if card.state == CommentState.PENDING:
            badges.append("pending")
        elif card.state == CommentState.REJECTED:
            badges.append("rejected")

        vote = "+" if card.upvoted else "-" if card.downvoted else " "
        header = (
            f"[{card.score:+d}{vote}] {card.author_name} ({card.time_ago})"
            f" #{card.comment_id}"
        )
        if badges:
            header += " " + " ".join(f"<{b}>" for b in badges)

        # Text nodes are joined with a space so paragraphs stay apart
        body = BeautifulSoup(card.body, "html.parser").get_text(" ", strip=True)
        return f"{header}: {body}"


class RecordingRenderer(Renderer):
    """Renderer keeping everything it was asked to render, for tests."""

    def __init__(self) -> None:
        self.trees: list[list[CommentNode]] = []
        self.cards: list[CommentNode] = []
        self.messages: list[Optional[Message]] = []

    @property
    def last_tree(self) -> Optional[list[CommentNode]]:
        return self.trees[-1] if self.trees else None

    @property
    def last_message(self) -> Optional[Message]:
        return self.messages[-1] if self.messages else None

    def render_tree(self, nodes: list[CommentNode]) -> None:
        self.trees.append(nodes)

    def update_card(self, node: CommentNode) -> None:
        self.cards.append(node)

    def show_message(self, message: Optional[Message]) -> None:
        self.messages.append(message)
