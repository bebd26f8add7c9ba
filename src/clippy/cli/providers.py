"""Service factory functions for CLI.

Centralizes creation of settings, key storage and the chat service from
environment variables. Hides configuration details from command
implementations.
"""

from rich.console import Console

from ..chat import ChatService, ConversationStore
from ..settings import KeyService, SettingsService, create_key_service, create_settings_service

# Default console for output
_console = Console()


def get_settings() -> SettingsService:
    """Create the settings backend.

    Environment variables:
        CLIPPY_API_ENDPOINT: Chat-completion endpoint URL
        CLIPPY_MAX_TOKENS: Token budget per reply (default: 256)
    """
    return create_settings_service("env")


def get_keys() -> KeyService:
    """Create the key storage backend.

    Environment variables:
        CLIPPY_API_KEY: Bearer key sent with each request
    """
    return create_key_service("env")


def get_service(
    console: Console | None = None,
    store: ConversationStore | None = None,
) -> ChatService:
    """Create a chat service wired to the environment.

    Args:
        console: Optional Rich console for output
        store: Conversation to seed; subscribe observers before passing it in

    Returns:
        ChatService with a freshly seeded conversation
    """
    con = console or _console
    settings = get_settings()
    keys = get_keys()
    if not keys.get_key() or not settings.api_endpoint:
        con.print("[yellow]Warning: CLIPPY_API_KEY or CLIPPY_API_ENDPOINT not set[/yellow]")
    return ChatService(settings, keys, store=store)
