"""Command dispatcher.

Routes every command to its handler. Handlers either run a use case (which
talks to the backend and reconciles the store) or change session-local
view state. Failed backend calls and rejected input never reach the store;
they are turned into an error message shown above the comments, and the
same command can simply be dispatched again.
"""

from collections.abc import Awaitable, Callable
from typing import Any

import logfire

from talkback.adapter.error import ApiError
from talkback.application.command import (
    ChangeSortCommand,
    Command,
    CreateCommentCommand,
    DeleteCommentCommand,
    DismissMessageCommand,
    EditCommentCommand,
    ModerateCommentCommand,
    ReloadCommand,
    TogglePageReadonlyCommand,
    ToggleCollapseCommand,
    ToggleStickyCommand,
    VoteCommentCommand,
)
from talkback.application.presenter import Presenter
from talkback.application.state import RenderRequest, SessionState
from talkback.application.usecase.comment import (
    CreateCommentUseCase,
    DeleteCommentUseCase,
    EditCommentUseCase,
    LoadCommentsUseCase,
    ModerateCommentUseCase,
    StickyCommentUseCase,
    VoteCommentUseCase,
)
from talkback.application.usecase.page import TogglePageReadonlyUseCase
from talkback.domain.error import DomainError
from talkback.domain.value import Message

Handler = Callable[[Any], Awaitable[RenderRequest]]


class CommandDispatcher:
    """Single entry point for user commands."""

    def __init__(
        self,
        state: SessionState,
        presenter: Presenter,
        load_comments: LoadCommentsUseCase,
        create_comment: CreateCommentUseCase,
        edit_comment: EditCommentUseCase,
        vote_comment: VoteCommentUseCase,
        moderate_comment: ModerateCommentUseCase,
        sticky_comment: StickyCommentUseCase,
        delete_comment: DeleteCommentUseCase,
        toggle_page_readonly: TogglePageReadonlyUseCase,
    ) -> None:
        self.state = state
        self.presenter = presenter
        self._handlers: dict[type, Handler] = {
            ReloadCommand: load_comments.execute,
            CreateCommentCommand: create_comment.execute,
            EditCommentCommand: edit_comment.execute,
            VoteCommentCommand: vote_comment.execute,
            ModerateCommentCommand: moderate_comment.execute,
            ToggleStickyCommand: sticky_comment.execute,
            DeleteCommentCommand: delete_comment.execute,
            TogglePageReadonlyCommand: toggle_page_readonly.execute,
            ChangeSortCommand: self._change_sort,
            ToggleCollapseCommand: self._toggle_collapse,
            DismissMessageCommand: self._dismiss_message,
        }

    async def dispatch(self, command: Command) -> None:
        """Handle a command and render its outcome.

        Args:
            command: Any user command

        Raises:
            KeyError: If no handler is registered for the command type
        """
        handler = self._handlers[type(command)]
        message_before = self.state.message

        with logfire.span("dispatch {command_type}", command_type=command.type):
            try:
                request = await handler(command)
            except ApiError as e:
                logfire.warn(
                    "Command failed",
                    command_type=command.type,
                    status=e.status,
                    error=e.message,
                )
                self._fail(Message.error(e.message, e.details))
                return
            except DomainError as e:
                logfire.info("Command rejected", command_type=command.type, error=str(e))
                self._fail(Message.error(str(e)))
                return

            self.presenter.present(request)
            if self.state.message is not message_before:
                self.presenter.show_message(self.state.message)

    def _fail(self, message: Message) -> None:
        self.state.message = message
        self.presenter.show_message(message)

    async def _change_sort(self, command: ChangeSortCommand) -> RenderRequest:
        if command.sort == self.state.sort:
            return RenderRequest.none()
        self.state.sort = command.sort
        return RenderRequest.tree()

    async def _toggle_collapse(self, command: ToggleCollapseCommand) -> RenderRequest:
        if command.comment_id in self.state.collapsed:
            self.state.collapsed.discard(command.comment_id)
        else:
            self.state.collapsed.add(command.comment_id)
        return RenderRequest.card(command.comment_id)

    async def _dismiss_message(self, command: DismissMessageCommand) -> RenderRequest:
        self.state.message = None
        return RenderRequest.none()
