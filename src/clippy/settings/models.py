"""Settings data model."""

from pydantic import BaseModel, Field, field_validator

DEFAULT_MAX_TOKENS = 256


class ClippySettings(BaseModel):
    """Snapshot of the settings the chat core depends on."""

    api_endpoint: str | None = Field(default=None, description="Chat-completion endpoint URL")
    tokens: int = Field(default=DEFAULT_MAX_TOKENS, ge=1, description="Token budget per reply")
    has_key: bool = Field(default=False, description="Whether an API key is stored")

    @field_validator("api_endpoint", mode="before")
    @classmethod
    def _blank_as_none(cls, value: object) -> object:
        if isinstance(value, str) and not value.strip():
            return None
        return value.strip() if isinstance(value, str) else value
