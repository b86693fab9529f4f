"""Data types for MCP server settings and saved server templates."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Any, Mapping

ZERO_TIME = datetime(1, 1, 1, tzinfo=timezone.utc)

_RFC3339_RE = re.compile(
    r"(\d{4})-(\d{2})-(\d{2})[Tt](\d{2}):(\d{2}):(\d{2})(?:\.(\d+))?([Zz]|[+-]\d{2}:\d{2})"
)


def _now() -> datetime:
    return datetime.now().astimezone()


def _format_time(value: datetime) -> str:
    if value.tzinfo is None:
        value = value.astimezone()
    text = value.isoformat()
    if value.utcoffset() == timedelta(0):
        text = text[: -len("+00:00")] + "Z"
    return text


def _parse_time(value: Any) -> datetime:
    if not isinstance(value, str):
        raise ValueError(f"createdAt must be a string, not {type(value).__name__}")
    match = _RFC3339_RE.fullmatch(value)
    if match is None:
        raise ValueError(f"invalid RFC 3339 timestamp: {value!r}")
    year, month, day, hour, minute, second, fraction, offset = match.groups()
    micro = int((fraction or "")[:6].ljust(6, "0"))
    if offset in ("Z", "z"):
        tz = timezone.utc
    else:
        sign = -1 if offset[0] == "-" else 1
        hours, minutes = int(offset[1:3]), int(offset[4:6])
        tz = timezone(sign * timedelta(hours=hours, minutes=minutes))
    return datetime(
        int(year), int(month), int(day), int(hour), int(minute), int(second), micro, tzinfo=tz
    )


def _mapping(data: Any, what: str) -> Mapping[str, Any]:
    if data is None:
        return {}
    if not isinstance(data, Mapping):
        raise ValueError(f"{what} must be a JSON object, not {type(data).__name__}")
    return data


def _opt_str(data: Mapping[str, Any], key: str) -> str | None:
    value = data.get(key)
    if value is not None and not isinstance(value, str):
        raise ValueError(f"{key} must be a string")
    return value


def _opt_str_list(data: Mapping[str, Any], key: str) -> list[str] | None:
    value = data.get(key)
    if value is None:
        return None
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        raise ValueError(f"{key} must be a list of strings")
    return list(value)


def _opt_str_dict(data: Mapping[str, Any], key: str) -> dict[str, str] | None:
    value = data.get(key)
    if value is None:
        return None
    if not isinstance(value, Mapping) or not all(
        isinstance(k, str) and isinstance(v, str) for k, v in value.items()
    ):
        raise ValueError(f"{key} must be an object of strings")
    return dict(value)


def _opt_int(data: Mapping[str, Any], key: str) -> int | None:
    value = data.get(key)
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{key} must be an integer")
    return value


@dataclass
class MCPServer:
    """One server entry of an MCP settings file."""

    command: str = ""
    args: list[str] | None = None
    env: dict[str, str] | None = None
    timeout: int | None = None
    env_file: str | None = None
    transport_type: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON form, leaving out empty and unset fields."""
        result: dict[str, Any] = {"command": self.command}
        if self.args:
            result["args"] = list(self.args)
        if self.env:
            result["env"] = dict(self.env)
        if self.timeout is not None:
            result["timeout"] = self.timeout
        if self.env_file is not None:
            result["envFile"] = self.env_file
        if self.transport_type is not None:
            result["transportType"] = self.transport_type
        return result

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> MCPServer:
        """Build a server from its JSON form; raises ValueError on bad types."""
        data = _mapping(data, "server")
        return cls(
            command=_opt_str(data, "command") or "",
            args=_opt_str_list(data, "args"),
            env=_opt_str_dict(data, "env"),
            timeout=_opt_int(data, "timeout"),
            env_file=_opt_str(data, "envFile"),
            transport_type=_opt_str(data, "transportType"),
        )


@dataclass
class ServerTemplate:
    """A named, saved server configuration."""

    name: str
    description: str | None = None
    created_at: datetime = field(default_factory=_now)
    server_config: MCPServer = field(default_factory=MCPServer)

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON form of the template."""
        return {
            "name": self.name,
            "description": self.description,
            "createdAt": _format_time(self.created_at),
            "serverConfig": self.server_config.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> ServerTemplate:
        """Build a template from its JSON form; raises ValueError on bad data."""
        data = _mapping(data, "template")
        created = data.get("createdAt")
        return cls(
            name=_opt_str(data, "name") or "",
            description=_opt_str(data, "description"),
            created_at=ZERO_TIME if created is None else _parse_time(created),
            server_config=MCPServer.from_dict(data.get("serverConfig")),
        )


@dataclass
class MCPConfig:
    """The contents of an MCP settings file."""

    mcp_servers: dict[str, MCPServer] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON form of the settings."""
        return {"mcpServers": {name: s.to_dict() for name, s in self.mcp_servers.items()}}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> MCPConfig:
        """Build settings from their JSON form; raises ValueError on bad data."""
        data = _mapping(data, "MCP config")
        servers = _mapping(data.get("mcpServers"), "mcpServers")
        return cls({name: MCPServer.from_dict(value) for name, value in servers.items()})


def create_server_template(
    name: str,
    command: str,
    args: list[str] | None = None,
    env: dict[str, str] | None = None,
) -> ServerTemplate:
    """Create a template stamped with the current time and no description."""
    return ServerTemplate(
        name=name,
        description=None,
        created_at=_now(),
        server_config=MCPServer(command=command, args=args, env=env),
    )