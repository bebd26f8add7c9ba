"""Environment-backed settings and key storage.

Values are read from the process environment, after loading a ``.env``
file from the working directory if one exists.

Environment variables:
    CLIPPY_API_ENDPOINT: Chat-completion endpoint URL
    CLIPPY_MAX_TOKENS: Token budget per reply (default: 256)
    CLIPPY_API_KEY: Bearer key sent with each request
"""

import os

from dotenv import load_dotenv

from .base import KeyService, SettingsService
from .models import DEFAULT_MAX_TOKENS, ClippySettings

ENDPOINT_VAR = "CLIPPY_API_ENDPOINT"
TOKENS_VAR = "CLIPPY_MAX_TOKENS"
KEY_VAR = "CLIPPY_API_KEY"

_dotenv_loaded = False


def _load_dotenv_once() -> None:
    global _dotenv_loaded
    if _dotenv_loaded:
        return
    load_dotenv(override=False)
    _dotenv_loaded = True


def _env(name: str) -> str | None:
    value = os.getenv(name)
    if value is None:
        return None
    value = value.strip()
    return value or None


class EnvSettingsService(SettingsService):
    """Settings read from environment variables on every access."""

    def __init__(self, load_env_file: bool = True):
        if load_env_file:
            _load_dotenv_once()

    def snapshot(self) -> ClippySettings:
        """Read and validate the current environment.

        Raises:
            pydantic.ValidationError: If CLIPPY_MAX_TOKENS is not a positive integer
        """
        return ClippySettings(
            api_endpoint=_env(ENDPOINT_VAR),
            tokens=_env(TOKENS_VAR) or DEFAULT_MAX_TOKENS,
            has_key=_env(KEY_VAR) is not None,
        )

    @property
    def has_key(self) -> bool:
        return _env(KEY_VAR) is not None

    @property
    def api_endpoint(self) -> str | None:
        return _env(ENDPOINT_VAR)

    @property
    def tokens(self) -> int:
        return self.snapshot().tokens


class EnvKeyService(KeyService):
    """API key read from ``CLIPPY_API_KEY`` at call time."""

    def __init__(self, load_env_file: bool = True):
        if load_env_file:
            _load_dotenv_once()

    def get_key(self) -> str | None:
        return _env(KEY_VAR)
