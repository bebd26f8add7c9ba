"""Settings module for clippy.

Provides the read-only settings and key storage the chat core consumes.
"""

from .base import KeyService, SettingsService
from .env import EnvKeyService, EnvSettingsService
from .factory import create_key_service, create_settings_service
from .in_memory import InMemoryKeyService, InMemorySettingsService
from .models import DEFAULT_MAX_TOKENS, ClippySettings

__all__ = [
    "ClippySettings",
    "DEFAULT_MAX_TOKENS",
    "EnvKeyService",
    "EnvSettingsService",
    "InMemoryKeyService",
    "InMemorySettingsService",
    "KeyService",
    "SettingsService",
    "create_key_service",
    "create_settings_service",
]
