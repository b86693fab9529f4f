"""Reading and writing JSON (with comments) and dotenv-style files."""

from __future__ import annotations

import json
import os
import re
from pathlib import Path
from typing import Any, Union

from mcpjson.errors import McpJsonError

PathLike = Union[str, "os.PathLike[str]"]

_STRING = r'"(?:\\.|[^"\\])*"'
_COMMENT_RE = re.compile(_STRING + r"|//[^\n]*|/\*.*?(?:\*/|\Z)", re.DOTALL)
_TRAILING_COMMA_RE = re.compile(_STRING + r"|,(?=\s*[}\]])")


class EnvFileError(McpJsonError):
    """An environment file is missing, unreadable or malformed."""


def _keep_strings(replacement: str):
    def replace(match: re.Match[str]) -> str:
        text = match.group(0)
        return text if text.startswith('"') else replacement

    return replace


def strip_jsonc(text: str) -> str:
    """Turn JSON with comments and trailing commas into plain JSON."""
    without_comments = _COMMENT_RE.sub(_keep_strings(" "), text)
    return _TRAILING_COMMA_RE.sub(_keep_strings(""), without_comments)


def file_exists(path: PathLike) -> bool:
    """Return True if ``path`` can be stat'ed."""
    try:
        os.stat(path)
    except OSError:
        return False
    return True


def load_json(path: PathLike) -> Any:
    """Load a JSON or JSONC file.

    Raises FileNotFoundError when the file is missing and ValueError when it
    does not hold valid JSON.
    """
    text = Path(path).read_text(encoding="utf-8")
    return json.loads(strip_jsonc(text))


def save_json(path: PathLike, value: Any) -> None:
    """Write ``value`` as JSON indented by two spaces."""
    data = json.dumps(value, indent=2, ensure_ascii=False)
    Path(path).write_text(data, encoding="utf-8")


def load_env_file(path: PathLike) -> dict[str, str]:
    """Parse a ``KEY=value`` file, skipping blank lines and ``#`` comments."""
    try:
        raw = Path(path).read_bytes()
    except OSError as exc:
        raise EnvFileError(f"環境変数ファイルが見つかりません: '{path}'") from exc
    try:
        text = raw.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise EnvFileError(f"環境変数ファイルの読み込みに失敗しました: '{path}'") from exc

    env: dict[str, str] = {}
    for line_num, raw_line in enumerate(text.split("\n"), start=1):
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        key, sep, value = line.partition("=")
        if not sep:
            raise EnvFileError(f"環境変数ファイルの形式が不正です: '{path}' 行{line_num}")
        env[key.strip()] = value.strip().strip("\"'")
    return env