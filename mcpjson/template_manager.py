"""Storage of server templates as files in a directory."""

from __future__ import annotations

import os
from dataclasses import replace
from datetime import datetime
from pathlib import Path
from typing import Callable, Protocol

from mcpjson.errors import McpJsonError
from mcpjson.fileio import file_exists, load_json, save_json
from mcpjson.models import MCPConfig, MCPServer, ServerTemplate

FILE_EXTENSION = ".jsonc"

ConfirmFunc = Callable[[str], bool]


def _confirm_stdin(prompt: str) -> bool:
    try:
        answer = input(f"{prompt} (y/N): ")
    except EOFError:
        return False
    return answer.strip().lower() in ("y", "yes")


def _format_list(items: list[str]) -> str:
    return "[" + " ".join(items) + "]"


class TemplateError(McpJsonError):
    """A server template operation failed."""


class TemplateNotFoundError(TemplateError):
    """The named server template does not exist."""


class TemplateExistsError(TemplateError):
    """A server template with the target name already exists."""


class ProfileManager(Protocol):
    """What template deletion needs to know about profiles."""

    def find_profiles_using_template(self, template_name: str) -> list[str]:
        """Return the names of profiles that reference ``template_name``."""

    def remove_template_references_from_all_profiles(self, template_name: str) -> None:
        """Drop every reference to ``template_name`` from all profiles."""


class TemplateManager:
    """Create, read, copy, rename and delete server templates."""

    def __init__(self, servers_dir: str | os.PathLike[str], confirm: ConfirmFunc | None = None):
        self.servers_dir = Path(servers_dir)
        self.confirm: ConfirmFunc = confirm or _confirm_stdin

    def template_path(self, name: str) -> Path:
        """Return where the template ``name`` is stored, whether or not it exists."""
        return self.servers_dir / f"{name}{FILE_EXTENSION}"

    def _not_found(self, name: str) -> TemplateNotFoundError:
        return TemplateNotFoundError(f"サーバーテンプレート '{name}' が見つかりません")

    def _already_exists(self, name: str) -> TemplateExistsError:
        return TemplateExistsError(
            f"サーバーテンプレート '{name}' は既に存在します\n"
            "別の名前を指定するか、--force オプションで上書きしてください"
        )

    def save_from_file(
        self, template_name: str, server_name: str, mcp_config_path, force: bool = False
    ) -> ServerTemplate:
        """Save the server ``server_name`` of an MCP settings file as a template."""
        if not force and self.exists(template_name):
            prompt = f"サーバーテンプレート '{template_name}' は既に存在します。上書きしますか？"
            if not self.confirm(prompt):
                raise TemplateError("上書きをキャンセルしました")

        try:
            config = MCPConfig.from_dict(load_json(mcp_config_path))
        except (OSError, ValueError) as exc:
            raise TemplateError(f"MCP設定ファイルの読み込みに失敗しました: {exc}") from exc

        server = config.mcp_servers.get(server_name)
        if server is None:
            raise TemplateError(f"MCPサーバー '{server_name}' がMCP設定ファイルに見つかりません")

        template = ServerTemplate(name=template_name, server_config=server)
        self.save(template)

        print(f"サーバーテンプレート '{template_name}' を保存しました")
        print(f"コマンド: {server.command}")
        if server.args:
            print(f"引数: {_format_list(server.args)}")
        return template

    def save_from_config(self, name: str, server: MCPServer) -> ServerTemplate:
        """Save ``server`` as the template ``name``."""
        template = ServerTemplate(name=name, server_config=server)
        self.save(template)
        return template

    def load(self, name: str) -> ServerTemplate:
        """Load the template ``name``."""
        try:
            return ServerTemplate.from_dict(load_json(self.template_path(name)))
        except FileNotFoundError as exc:
            raise self._not_found(name) from exc
        except (OSError, ValueError) as exc:
            raise TemplateError(f"サーバーテンプレートの読み込みに失敗しました: {exc}") from exc

    def exists(self, name: str) -> bool:
        """Return True if the template ``name`` exists."""
        return file_exists(self.template_path(name))

    def save(self, template: ServerTemplate) -> None:
        """Write ``template`` to its file, replacing any previous content."""
        save_json(self.template_path(template.name), template.to_dict())

    def delete(
        self, name: str, force: bool = False, profile_manager: ProfileManager | None = None
    ) -> None:
        """Delete the template ``name``, warning about profiles that use it."""
        path = self.template_path(name)
        if not file_exists(path):
            raise self._not_found(name)

        using_profiles: list[str] = []
        if profile_manager is not None:
            try:
                using_profiles = list(profile_manager.find_profiles_using_template(name))
            except Exception as exc:
                raise TemplateError(f"プロファイルでの使用状況確認に失敗しました: {exc}") from exc

        if using_profiles:
            print(f"警告: サーバーテンプレート '{name}' は以下のプロファイルで使用されています:")
            for profile_name in using_profiles:
                print(f"  - {profile_name}")
            print()

        if not force and not self.confirm(f"サーバーテンプレート '{name}' を削除しますか？"):
            print("削除をキャンセルしました")
            return

        if using_profiles and profile_manager is not None:
            if force:
                print("強制削除: プロファイルからの参照も削除します")
                remove_refs = True
            else:
                remove_refs = self.confirm("プロファイルからの参照も削除しますか？")
            if remove_refs:
                try:
                    profile_manager.remove_template_references_from_all_profiles(name)
                except Exception as exc:
                    print(f"警告: プロファイルからの参照削除に失敗しました: {exc}")

        try:
            os.remove(path)
        except OSError as exc:
            raise TemplateError(f"サーバーテンプレートの削除に失敗しました: {exc}") from exc

        print(f"サーバーテンプレート '{name}' を削除しました")

    def copy(self, src_name: str, dest_name: str, force: bool = False) -> ServerTemplate:
        """Copy ``src_name`` to ``dest_name`` with a fresh creation time."""
        if not src_name:
            raise TemplateError("コピー元のサーバーテンプレート名が指定されていません")
        if not dest_name:
            raise TemplateError("コピー先のサーバーテンプレート名が指定されていません")
        if src_name == dest_name:
            raise TemplateError("コピー元とコピー先が同じ名前です")
        if not file_exists(self.template_path(src_name)):
            raise self._not_found(src_name)
        if file_exists(self.template_path(dest_name)) and not force:
            raise self._already_exists(dest_name)

        source = self.load(src_name)
        copied = replace(source, name=dest_name, created_at=datetime.now().astimezone())
        self.save(copied)

        print(f"サーバーテンプレート '{src_name}' を '{dest_name}' にコピーしました")
        return copied

    def rename(self, old_name: str, new_name: str, force: bool = False) -> None:
        """Rename the template ``old_name`` to ``new_name``."""
        if not file_exists(self.template_path(old_name)):
            raise self._not_found(old_name)
        if file_exists(self.template_path(new_name)) and not force:
            raise self._already_exists(new_name)

        template = self.load(old_name)
        template.name = new_name
        self.save(template)
        try:
            os.remove(self.template_path(old_name))
        except OSError as exc:
            raise TemplateError(f"古いサーバーテンプレートの削除に失敗しました: {exc}") from exc

        print(f"サーバーテンプレート '{old_name}' を '{new_name}' に変更しました")

    def get_template_path(self, name: str) -> Path:
        """Return the file of the template ``name``, which must exist."""
        path = self.template_path(name)
        if not file_exists(path):
            raise self._not_found(name)
        return path

    def reset(self, force: bool = False) -> int:
        """Delete every template file and return how many were removed."""
        if not file_exists(self.servers_dir):
            print("サーバーテンプレートディレクトリが存在しません")
            return 0

        try:
            entries = sorted(os.listdir(self.servers_dir))
        except OSError as exc:
            raise TemplateError(
                f"サーバーテンプレートディレクトリの読み込みに失敗しました: {exc}"
            ) from exc

        template_files = [entry for entry in entries if entry.endswith(FILE_EXTENSION)]
        if not template_files:
            print("削除するサーバーテンプレートが存在しません")
            return 0

        if not force:
            print(f"以下の{len(template_files)}個のサーバーテンプレートを削除します:")
            for file_name in template_files:
                print(f"  - {file_name[: -len(FILE_EXTENSION)]}")
            print()
            if not self.confirm("すべてのサーバーテンプレートを削除しますか？"):
                print("リセットをキャンセルしました")
                return 0

        deleted = 0
        for file_name in template_files:
            try:
                os.remove(self.servers_dir / file_name)
            except OSError as exc:
                print(f"警告: {file_name} の削除に失敗しました: {exc}")
            else:
                deleted += 1

        print(f"サーバーテンプレートを{deleted}個削除しました")
        return deleted