"""ContextSettings — configuration for a :class:`~scope_context.ScopeContext`.

Values passed to :func:`load_settings` come first, then ``SCOPE_CONTEXT_*``
environment variables, then a local ``.env`` file.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import Field, ValidationError, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from scope_context.exceptions import ContextConfigError

# camelCase spellings accepted for compatibility with existing settings files
_CAMEL_ALIASES = {
    "flushInterval": "flush_interval",
    "region": "region_name",
    "endpoint": "endpoint_url",
}


def _normalize_keys(data: dict[str, Any]) -> dict[str, Any]:
    data = dict(data)
    for camel, snake in _CAMEL_ALIASES.items():
        if camel in data:
            value = data.pop(camel)
            data.setdefault(snake, value)
    return data


class ContextSettings(BaseSettings):
    """Settings record for a scope context.

    Attributes:
        bucket:         Object-store bucket holding the scope documents.  Required.
        prefix:         Path segment prepended to every document path.
        flush_interval: Reserved for a periodic-flush mode.  Accepted, not used.
        region_name:    S3 region.
        endpoint_url:   S3-compatible endpoint override (MinIO, localstack, ...).
    """

    model_config = SettingsConfigDict(
        env_prefix="SCOPE_CONTEXT_",
        env_file=".env",
        extra="ignore",
    )

    bucket: str = Field(default="", validate_default=True)
    prefix: str = ""
    flush_interval: int = Field(default=5, ge=0)

    region_name: str | None = None
    endpoint_url: str | None = None
    aws_access_key_id: str | None = None
    aws_secret_access_key: str | None = None
    aws_session_token: str | None = None

    @model_validator(mode="before")
    @classmethod
    def _accept_camel_case(cls, data: Any) -> Any:
        if isinstance(data, dict):
            data = _normalize_keys(data)
        return data

    @field_validator("bucket")
    @classmethod
    def _bucket_required(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("S3 bucket name is required")
        return value

    def client_options(self) -> dict[str, Any]:
        """Keyword arguments for ``boto3.client("s3", ...)``, unset ones omitted."""
        options = {
            "region_name": self.region_name,
            "endpoint_url": self.endpoint_url,
            "aws_access_key_id": self.aws_access_key_id,
            "aws_secret_access_key": self.aws_secret_access_key,
            "aws_session_token": self.aws_session_token,
        }
        return {k: v for k, v in options.items() if v is not None}


def load_settings(
    settings: ContextSettings | Mapping[str, Any] | None = None,
    **overrides: Any,
) -> ContextSettings:
    """Merge *settings* and *overrides* into a validated :class:`ContextSettings`.

    Raises:
        ContextConfigError: If the merged values fail validation.
    """
    if isinstance(settings, ContextSettings):
        if not overrides:
            return settings
        data: dict[str, Any] = settings.model_dump(exclude_unset=True)
    else:
        data = dict(settings or {})
    data.update(overrides)
    # before pydantic-settings merges the environment, so explicit aliases win
    data = _normalize_keys(data)

    try:
        return ContextSettings(**data)
    except ValidationError as exc:
        first = exc.errors()[0]
        field = ".".join(str(part) for part in first["loc"]) or "settings"
        raise ContextConfigError(field, first["msg"]) from exc
