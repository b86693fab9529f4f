"""Listing of saved server templates."""

from __future__ import annotations

import os
from datetime import datetime
from pathlib import Path

from mcpjson.models import ServerTemplate
from mcpjson.template_manager import FILE_EXTENSION, TemplateError, TemplateManager

LIST_COLUMN_WIDTH = 20


def _format_timestamp(value: datetime) -> str:
    return (
        f"{value.year:04d}-{value.month:02d}-{value.day:02d} "
        f"{value.hour:02d}:{value.minute:02d}:{value.second:02d}"
    )


class TemplateDisplay:
    """Print the templates stored in a directory."""

    def __init__(self, servers_dir: str | os.PathLike[str]):
        self.servers_dir = Path(servers_dir)

    def list(self, detail: bool = False) -> list[ServerTemplate]:
        """Print every template, as a table or in detail; return those shown."""
        try:
            entries = sorted(os.listdir(self.servers_dir))
        except OSError as exc:
            raise TemplateError(f"サーバーディレクトリの読み込みに失敗しました: {exc}") from exc

        if not entries:
            print("サーバーテンプレートが存在しません")
            return []

        names = [e[: -len(FILE_EXTENSION)] for e in entries if e.endswith(FILE_EXTENSION)]
        manager = TemplateManager(self.servers_dir)
        if detail:
            return self._list_detailed(manager, names)
        return self._list_summary(manager, names)

    def _list_detailed(self, manager: TemplateManager, names: list[str]) -> list[ServerTemplate]:
        shown = []
        for name in names:
            try:
                template = manager.load(name)
            except TemplateError as exc:
                print(f"エラー: {name} の読み込みに失敗しました: {exc}")
                continue
            print()
            print(self.format_detail(template))
            shown.append(template)
        return shown

    def _list_summary(self, manager: TemplateManager, names: list[str]) -> list[ServerTemplate]:
        width = LIST_COLUMN_WIDTH
        print(f"{'テンプレート名':<{width}} {'作成日時':<{width}} コマンド")
        print("-" * 60)
        shown = []
        for name in names:
            try:
                template = manager.load(name)
            except TemplateError:
                continue
            print(
                f"{template.name:<{width}} "
                f"{_format_timestamp(template.created_at):<{width}} "
                f"{template.server_config.command}"
            )
            shown.append(template)
        return shown

    def format_detail(self, template: ServerTemplate) -> str:
        """Return the detailed, multi-line description of ``template``."""
        config = template.server_config
        lines = [f"テンプレート: {template.name}"]
        if template.description is not None:
            lines.append(f"  説明: {template.description}")
        lines.append(f"  作成日時: {_format_timestamp(template.created_at)}")
        lines.append(f"  コマンド: {config.command}")
        if config.args:
            lines.append(f"  引数: [{' '.join(config.args)}]")
        if config.env:
            lines.append("  環境変数:")
            lines.extend(f"    {key}={value}" for key, value in config.env.items())
        return "\n".join(lines)