"""Abstract interfaces for settings and key storage.

The chat core only reads through these interfaces. They hide:
- Where settings live (environment, .env file, memory)
- How the API key is stored and retrieved
"""

from abc import ABC, abstractmethod


class SettingsService(ABC):
    """Read-only view of the application settings."""

    @property
    @abstractmethod
    def has_key(self) -> bool:
        """Whether an API key has been stored."""

    @property
    @abstractmethod
    def api_endpoint(self) -> str | None:
        """Chat-completion endpoint URL."""

    @property
    @abstractmethod
    def tokens(self) -> int:
        """Token budget sent as ``max_tokens``."""


class KeyService(ABC):
    """Secret storage for the API key."""

    @abstractmethod
    def get_key(self) -> str | None:
        """Return the stored API key, or None if there is none."""
