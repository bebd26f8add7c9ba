"""Rendering of conversation events to a Rich console."""

from rich.console import Console
from rich.panel import Panel

from ..chat import (
    AnnouncementMessage,
    AssistantMessage,
    ConversationEvent,
    ReplyState,
    UserMessage,
)

_STYLES = {
    ReplyState.FULFILLED: "green",
    ReplyState.EMPTY_RESULT: "yellow",
    ReplyState.API_ERROR: "red",
    ReplyState.TRANSPORT_ERROR: "red",
}


class ConversationRenderer:
    """Store observer that prints messages as they appear or settle.

    User messages are not echoed since the user just typed them.
    Pending replies print a short notice and are rendered again once
    their text is known.
    """

    def __init__(self, console: Console, echo_user: bool = False) -> None:
        self.console = console
        self.echo_user = echo_user
        self._pending: set[str] = set()

    def __call__(self, event: ConversationEvent) -> None:
        if event.kind == "cleared":
            self.console.rule("[dim]New conversation[/dim]")
            self._pending.clear()
            return

        message = event.message
        if event.kind == "appended":
            match message:
                case AnnouncementMessage():
                    self.console.print(Panel(message.text, title="Notice", style="yellow"))
                case AssistantMessage(state=ReplyState.PENDING):
                    self._pending.add(message.id)
                    self.console.print("[dim]Clippy is thinking...[/dim]")
                case AssistantMessage():
                    self._print_reply(message)
                case UserMessage() if self.echo_user:
                    self.console.print("[bold yellow]You:[/bold yellow] ", end="")
                    self.console.print(message.text, markup=False)
            return

        if isinstance(message, AssistantMessage) and message.id in self._pending:
            if message.state != ReplyState.PENDING:
                self._pending.discard(message.id)
                self._print_reply(message)

    def _print_reply(self, message: AssistantMessage) -> None:
        style = _STYLES.get(message.state, "green")
        self.console.print(f"[bold {style}]Clippy:[/bold {style}] ", end="")
        if message.text:
            self.console.print(message.text, markup=False)
        else:
            self.console.print("[dim](empty)[/dim]")
