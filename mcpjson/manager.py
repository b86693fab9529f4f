"""One entry point for server templates and MCP settings files."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Mapping, Sequence

from mcpjson.errors import McpJsonError
from mcpjson.fileio import file_exists, load_json, save_json
from mcpjson.models import MCPConfig, MCPServer, ServerTemplate
from mcpjson.template_display import TemplateDisplay
from mcpjson.template_manager import (
    ConfirmFunc,
    ProfileManager,
    TemplateError,
    TemplateManager,
)
from mcpjson.template_updater import TemplateUpdater


class Manager:
    """Manage server templates and add them to or remove them from MCP settings."""

    def __init__(self, servers_dir: str | os.PathLike[str], confirm: ConfirmFunc | None = None):
        self._templates = TemplateManager(servers_dir, confirm)
        self._updater = TemplateUpdater(self._templates)
        self._display = TemplateDisplay(servers_dir)

    def save_from_file(
        self, template_name: str, server_name: str, mcp_config_path, force: bool = False
    ) -> ServerTemplate:
        """Save a server of an MCP settings file as a template."""
        return self._templates.save_from_file(template_name, server_name, mcp_config_path, force)

    def save_manual(
        self,
        template_name: str,
        command: str,
        args: Sequence[str] | None = None,
        env: Mapping[str, str] | None = None,
        force: bool = False,
    ) -> ServerTemplate:
        """Create or update a template from explicit values."""
        return self._updater.save_manual(template_name, command, args, env, force)

    def list(self, detail: bool = False) -> list[ServerTemplate]:
        """Print all templates and return those shown."""
        return self._display.list(detail)

    def delete(
        self, name: str, force: bool = False, profile_manager: ProfileManager | None = None
    ) -> None:
        """Delete a template."""
        self._templates.delete(name, force, profile_manager)

    def copy(self, src_name: str, dest_name: str, force: bool = False) -> ServerTemplate:
        """Copy a template."""
        return self._templates.copy(src_name, dest_name, force)

    def rename(self, old_name: str, new_name: str, force: bool = False) -> None:
        """Rename a template."""
        self._templates.rename(old_name, new_name, force)

    def add_to_mcp_config(
        self,
        mcp_config_path,
        template_name: str,
        server_name: str = "",
        env_overrides: Mapping[str, str] | None = None,
    ) -> MCPServer:
        """Add a server built from ``template_name`` to an MCP settings file.

        The file is created if missing. ``server_name`` defaults to the
        template name; ``env_overrides`` are merged over the template's
        environment.
        """
        try:
            template = self._templates.load(template_name)
        except TemplateError as exc:
            raise TemplateError(
                f"テンプレート '{template_name}' の読み込みに失敗しました: {exc}"
            ) from exc

        config = self._load_or_create_config(mcp_config_path)
        server_name = server_name or template_name

        if server_name in config.mcp_servers:
            raise McpJsonError(f"サーバー '{server_name}' は既にMCP設定ファイルに存在します")

        source = template.server_config
        env = {**(source.env or {}), **(env_overrides or {})}
        server = MCPServer(
            command=source.command,
            args=list(source.args) if source.args is not None else None,
            env=env,
            timeout=source.timeout,
            env_file=source.env_file,
            transport_type=source.transport_type,
        )
        config.mcp_servers[server_name] = server
        self._save_config(config, mcp_config_path)

        print(f"サーバー '{server_name}' をMCP設定ファイルに追加しました: {mcp_config_path}")
        return server

    def remove_from_mcp_config(self, mcp_config_path, server_name: str) -> None:
        """Remove the server ``server_name`` from an MCP settings file."""
        try:
            config = MCPConfig.from_dict(load_json(mcp_config_path))
        except (OSError, ValueError) as exc:
            raise McpJsonError(f"MCP設定ファイルの読み込みに失敗しました: {exc}") from exc

        if server_name not in config.mcp_servers:
            available = "[" + " ".join(config.mcp_servers) + "]"
            raise McpJsonError(
                f"サーバー '{server_name}' がMCP設定ファイルに見つかりません\n"
                f"ファイル: {mcp_config_path}\n"
                f"利用可能なサーバー: {available}"
            )

        del config.mcp_servers[server_name]
        self._save_config(config, mcp_config_path)
        print(f"サーバー '{server_name}' をMCP設定ファイルから削除しました: {mcp_config_path}")

    def load(self, name: str) -> ServerTemplate:
        """Load a template."""
        return self._templates.load(name)

    def exists(self, name: str) -> bool:
        """Return True if the template exists."""
        return self._templates.exists(name)

    def save_from_config(self, name: str, server: MCPServer) -> ServerTemplate:
        """Save ``server`` as a template."""
        return self._templates.save_from_config(name, server)

    def reset(self, force: bool = False) -> int:
        """Delete all templates and return how many were removed."""
        return self._templates.reset(force)

    def get_template_path(self, name: str) -> Path:
        """Return the file of an existing template."""
        return self._templates.get_template_path(name)

    @staticmethod
    def _load_or_create_config(path) -> MCPConfig:
        if not file_exists(path):
            return MCPConfig()
        try:
            return MCPConfig.from_dict(load_json(path))
        except (OSError, ValueError) as exc:
            raise McpJsonError(f"MCP設定ファイルの読み込みに失敗しました: {exc}") from exc

    @staticmethod
    def _save_config(config: MCPConfig, path) -> None:
        try:
            save_json(path, config.to_dict())
        except OSError as exc:
            raise McpJsonError(f"MCP設定ファイルの保存に失敗しました: {exc}") from exc