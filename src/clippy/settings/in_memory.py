"""In-memory settings and key storage.

Values live on the instance and are lost when the app exits.
Suitable for embedding and testing.
"""

from .base import KeyService, SettingsService
from .models import DEFAULT_MAX_TOKENS, ClippySettings


class InMemorySettingsService(SettingsService):
    """Settings held in a mutable ``ClippySettings`` instance."""

    def __init__(
        self,
        api_endpoint: str | None = None,
        tokens: int = DEFAULT_MAX_TOKENS,
        has_key: bool = False,
    ):
        self.settings = ClippySettings(api_endpoint=api_endpoint, tokens=tokens, has_key=has_key)

    @property
    def has_key(self) -> bool:
        return self.settings.has_key

    @property
    def api_endpoint(self) -> str | None:
        return self.settings.api_endpoint

    @property
    def tokens(self) -> int:
        return self.settings.tokens


class InMemoryKeyService(KeyService):
    """Key held in memory."""

    def __init__(self, key: str | None = None):
        self._key = key

    def get_key(self) -> str | None:
        return self._key

    def set_key(self, key: str | None) -> None:
        self._key = key
