"""Validation of names and parsing of comma-separated option values."""

from __future__ import annotations

import re

from mcpjson.errors import McpJsonError

MAX_NAME_LENGTH = 50
RESERVED_WORDS = (
    "help",
    "version",
    "list",
    "server",
    "apply",
    "save",
    "create",
    "delete",
    "rename",
    "add",
    "remove",
    "show",
)

_NAME_RE = re.compile(r"[a-zA-Z0-9_-]+")
_ENV_KEY_RE = re.compile(r"[a-zA-Z][a-zA-Z0-9_]*")


class ValidationError(McpJsonError):
    """A name or option value is not acceptable."""


def validate_name(name: str, resource_type: str) -> None:
    """Raise ValidationError unless ``name`` is a usable resource name."""
    if not name:
        raise ValidationError(f"{resource_type}名が指定されていません")
    if len(name.encode("utf-8")) > MAX_NAME_LENGTH:
        raise ValidationError(f"{resource_type}名は{MAX_NAME_LENGTH}文字以内で指定してください")
    if not _NAME_RE.fullmatch(name):
        raise ValidationError(
            f"{resource_type}名に使用できない文字が含まれています"
            "（使用可能: 英数字、ハイフン、アンダースコア）"
        )
    if name in RESERVED_WORDS:
        raise ValidationError(f"{resource_type}名に予約語 '{name}' は使用できません")


def parse_env_vars(env_str: str) -> dict[str, str] | None:
    """Parse ``KEY=value,KEY2=value2``; an empty string gives None."""
    if not env_str:
        return None
    env: dict[str, str] = {}
    for pair in env_str.split(","):
        key, sep, value = pair.partition("=")
        if not sep:
            raise ValidationError(f"環境変数の形式が不正です: '{pair}'")
        key = key.strip()
        if not _ENV_KEY_RE.fullmatch(key):
            raise ValidationError(f"環境変数名が不正です: '{key}'")
        env[key] = value.strip()
    return env


def parse_args(args_str: str) -> list[str] | None:
    """Split a comma-separated list, dropping blanks; an empty string gives None."""
    if not args_str:
        return None
    return [item for item in (part.strip() for part in args_str.split(",")) if item]