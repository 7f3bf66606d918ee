from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from ..constants import DEFAULT_PART_MESSAGE, DEFAULT_PORT, DEFAULT_QUIT_MESSAGE
from ..errors import ConfigurationError
from ..irc.membership import validate_channel


def _optional_text(value: Any) -> str | None:
    """Non-empty strings pass through; anything else means "not set"."""
    if isinstance(value, str) and value:
        return value
    return None


def _normalize_channels(channels: Any) -> tuple[str, ...]:
    """Prefix channel names with '#', drop rejected names and duplicates.

    Order is preserved so the JOIN line lists channels as configured.
    """
    if channels is None:
        return ()
    if isinstance(channels, str) or not isinstance(channels, list | tuple):
        raise ValueError("channels must be a list")
    normalized = (validate_channel(ch) for ch in channels)
    return tuple(dict.fromkeys(ch for ch in normalized if ch))


def _format_errors(error: ValidationError) -> list[str]:
    messages = []
    for item in error.errors():
        location = ".".join(str(part) for part in item.get("loc", ()))
        messages.append(f"{location}: {item.get('msg', 'invalid')}")
    return messages


class ServerConfig(BaseModel):
    """One configured IRC server.

    Attributes:
        hostname: Server host name (required, non-empty).
        port: TCP port 1-65535, DEFAULT_PORT when missing or zero.
        channels: Start channels, '#'-prefixed, joined after registration.
        nick, username, password, real_name, quit_message, part_message:
            Per-server overrides; None inherits the client-wide value.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    hostname: str
    port: int = Field(default=DEFAULT_PORT, ge=1, le=65535)
    channels: tuple[str, ...] = ()
    nick: str | None = None
    username: str | None = None
    password: str | None = None
    real_name: str | None = Field(default=None, alias="realName")
    quit_message: str | None = Field(default=None, alias="quitMessage")
    part_message: str | None = Field(default=None, alias="partMessage")

    @field_validator("hostname", mode="before")
    @classmethod
    def validate_hostname(cls, v: Any) -> str:
        if not isinstance(v, str) or not v:
            raise ValueError(f"Invalid server host: {v!r}")
        return v

    @field_validator("port", mode="before")
    @classmethod
    def default_port(cls, v: Any) -> Any:
        return v or DEFAULT_PORT

    @field_validator("channels", mode="before")
    @classmethod
    def validate_channels(cls, v: Any) -> tuple[str, ...]:
        return _normalize_channels(v)

    @field_validator(
        "nick",
        "username",
        "password",
        "real_name",
        "quit_message",
        "part_message",
        mode="before",
    )
    @classmethod
    def optional_overrides(cls, v: Any) -> str | None:
        return _optional_text(v)

    def inherit(self, client: ClientConfig) -> ServerConfig:
        """Return a copy with every unset override filled from ``client``."""
        return self.model_copy(
            update={
                "nick": self.nick or client.nick,
                "username": self.username or client.username,
                "password": self.password or client.password,
                "real_name": self.real_name or client.real_name,
                "quit_message": self.quit_message or client.quit_message,
                "part_message": self.part_message or client.part_message,
            }
        )


class ClientConfig(BaseModel):
    """Client-wide identity and defaults plus the list of servers."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    nick: str
    username: str
    password: str
    real_name: str = Field(default="", alias="realName")
    quit_message: str = Field(default=DEFAULT_QUIT_MESSAGE, alias="quitMessage")
    part_message: str = Field(default=DEFAULT_PART_MESSAGE, alias="partMessage")
    servers: tuple[ServerConfig, ...] = ()

    @field_validator("nick", "username", "password", mode="before")
    @classmethod
    def required_text(cls, v: Any) -> str:
        if not isinstance(v, str) or not v:
            raise ValueError("must be a non-empty string")
        return v

    @field_validator("real_name", mode="before")
    @classmethod
    def default_real_name(cls, v: Any) -> str:
        return _optional_text(v) or ""

    @field_validator("quit_message", mode="before")
    @classmethod
    def default_quit_message(cls, v: Any) -> str:
        return _optional_text(v) or DEFAULT_QUIT_MESSAGE

    @field_validator("part_message", mode="before")
    @classmethod
    def default_part_message(cls, v: Any) -> str:
        return _optional_text(v) or DEFAULT_PART_MESSAGE

    @field_validator("servers", mode="before")
    @classmethod
    def validate_servers(cls, v: Any) -> Any:
        if v is None:
            return ()
        if isinstance(v, str) or not isinstance(v, list | tuple):
            raise ValueError("servers must be a list")
        return v

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ClientConfig:
        """Validate a raw mapping (e.g. parsed JSON) into a ClientConfig.

        The mapping itself is left untouched.

        Raises:
            ConfigurationError: If required fields are missing or invalid.
        """
        if not isinstance(data, Mapping):
            raise ConfigurationError("Client configuration must be a mapping")
        try:
            return cls.model_validate(dict(data))
        except ValidationError as e:
            problems = _format_errors(e)
            raise ConfigurationError(
                "Invalid client configuration: " + "; ".join(problems),
                data={"errors": problems},
            ) from e

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)
