"""Factories for settings and key storage backends."""

from typing import Any

from .base import KeyService, SettingsService


def create_settings_service(backend: str = "env", **kwargs: Any) -> SettingsService:
    """Create a settings backend.

    Args:
        backend: Backend type ("env" or "memory")
        **kwargs: Backend-specific configuration

    Returns:
        SettingsService instance

    Raises:
        ValueError: If backend type is not supported
    """
    if backend == "env":
        from .env import EnvSettingsService
        return EnvSettingsService(**kwargs)

    elif backend == "memory":
        from .in_memory import InMemorySettingsService
        return InMemorySettingsService(**kwargs)

    raise ValueError(
        f"Unsupported settings backend: {backend}. "
        f"Supported backends: env, memory"
    )


def create_key_service(backend: str = "env", **kwargs: Any) -> KeyService:
    """Create a key storage backend.

    Args:
        backend: Backend type ("env" or "memory")
        **kwargs: Backend-specific configuration

    Returns:
        KeyService instance

    Raises:
        ValueError: If backend type is not supported
    """
    if backend == "env":
        from .env import EnvKeyService
        return EnvKeyService(**kwargs)

    elif backend == "memory":
        from .in_memory import InMemoryKeyService
        return InMemoryKeyService(**kwargs)

    raise ValueError(
        f"Unsupported key backend: {backend}. "
        f"Supported backends: env, memory"
    )
