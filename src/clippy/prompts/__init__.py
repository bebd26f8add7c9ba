"""Fixed texts Clippy speaks with.

Each text lives in a ``.txt`` file next to this module. A file with the
same name under ``./prompts/`` replaces the packaged one.
"""

from functools import lru_cache
from pathlib import Path

_PACKAGED = Path(__file__).parent


@lru_cache(maxsize=16)
def load_prompt(name: str) -> str:
    """Return the text stored as ``<name>.txt``.

    The working-directory copy wins over the packaged copy. Surrounding
    whitespace is stripped so files may end with a newline.

    Raises:
        FileNotFoundError: If neither copy exists
    """
    candidates = [
        Path.cwd() / "prompts" / f"{name}.txt",
        _PACKAGED / f"{name}.txt",
    ]
    for path in candidates:
        if path.exists():
            return path.read_text(encoding="utf-8").strip()

    searched = "\n".join(f"  - {path}" for path in candidates)
    raise FileNotFoundError(f"Prompt '{name}' not found. Searched:\n{searched}")


def get_system_prompt() -> str:
    """Persona instruction sent as the first transcript turn."""
    return load_prompt("system")


def get_greeting() -> str:
    """Reply that opens a fresh conversation."""
    return load_prompt("greeting")


def get_missing_credentials_notice() -> str:
    """Announcement shown when the key or endpoint is missing."""
    return load_prompt("missing_credentials")


def clear_cache() -> None:
    """Forget loaded texts so edited files are read again."""
    load_prompt.cache_clear()


__all__ = [
    "clear_cache",
    "get_greeting",
    "get_missing_credentials_notice",
    "get_system_prompt",
    "load_prompt",
]
