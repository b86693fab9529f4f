"""Exit codes, the base exception and helpers for positional arguments."""

from __future__ import annotations

import sys
from enum import IntEnum
from typing import NoReturn, Sequence


class ExitCode(IntEnum):
    """Process exit codes used by the command line."""

    SUCCESS = 0
    GENERAL_ERROR = 1
    RESOURCE_ERROR = 2
    FILE_ERROR = 3
    FORMAT_ERROR = 4
    ENVIRONMENT = 5
    SERVER_ERROR = 6
    ARGUMENT_ERROR = 7
    REFERENCE_ERROR = 8


class McpJsonError(Exception):
    """Base class for errors raised by this package."""


class ArgumentError(McpJsonError):
    """A command-line argument is missing or malformed."""


def _report_default(default_name: str, what: str = "プロファイル名") -> None:
    print(f"{what}が指定されていないため、デフォルト '{default_name}' を使用します")


def handle_error(err: BaseException | None, exit_code: int) -> None | NoReturn:
    """Print ``err`` to stderr and exit with ``exit_code``; do nothing if ``err`` is None."""
    if err is None:
        return None
    print(f"エラー: {err}", file=sys.stderr)
    raise SystemExit(int(exit_code))


def parse_profile_name(args: Sequence[str], default_name: str) -> tuple[str, int]:
    """Return the profile name from ``args`` and how many arguments it consumed.

    Falls back to ``default_name`` when there are no arguments or the first one
    is an option.
    """
    if not args or args[0].startswith("-"):
        _report_default(default_name)
        return default_name, 0
    return args[0], 1


def parse_flag(args: Sequence[str], index: int, flag: str) -> tuple[str, int]:
    """Return the value following the flag at ``index`` and the index of that value."""
    if index + 1 >= len(args):
        raise ArgumentError(f"{flag} オプションに値が指定されていません")
    return args[index + 1], index + 1


def parse_rename_args(args: Sequence[str], default_name: str) -> tuple[str, str, int]:
    """Return ``(old_name, new_name, consumed)`` for a rename command."""
    if not args:
        raise ArgumentError(
            "新しいプロファイル名が指定されていません\n"
            "使用方法: mcpconfig rename [現在のプロファイル名] <新しいプロファイル名>"
        )
    if len(args) < 2:
        _report_default(default_name, "元のプロファイル名")
        return default_name, args[0], 1
    return args[0], args[1], 2