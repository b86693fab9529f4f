"""Creating and updating server templates from command-line values."""

from __future__ import annotations

from typing import Mapping, Sequence

from mcpjson.models import ServerTemplate, create_server_template
from mcpjson.template_manager import ConfirmFunc, TemplateError, TemplateManager


class TemplateUpdater:
    """Create a template or update an existing one field by field."""

    def __init__(self, template_manager: TemplateManager, confirm: ConfirmFunc | None = None):
        self.template_manager = template_manager
        self.confirm: ConfirmFunc = confirm or template_manager.confirm

    def save_manual(
        self,
        template_name: str,
        command: str,
        args: Sequence[str] | None = None,
        env: Mapping[str, str] | None = None,
        force: bool = False,
    ) -> ServerTemplate:
        """Create ``template_name`` or update it with the given values, then save it.

        When updating, an empty ``command`` keeps the current command, ``None``
        for ``args`` or ``env`` keeps the current value.
        """
        existing = self.template_exists(template_name)

        if existing and not force:
            prompt = f"サーバーテンプレート '{template_name}' は既に存在します。上書きしますか？"
            if not self.confirm(prompt):
                raise TemplateError("上書きをキャンセルしました")

        if existing:
            template = self.template_manager.load(template_name)
            if command:
                template.server_config.command = command
            self.update_template_args(template, args)
            self.update_template_env(template, env)
            print(f"サーバーテンプレート '{template_name}' を更新しました")
        else:
            if not command:
                raise TemplateError("コマンドが指定されていません")
            template = create_server_template(
                template_name,
                command,
                list(args) if args is not None else None,
                dict(env) if env is not None else None,
            )
            print(f"サーバーテンプレート '{template_name}' を作成しました")

        self.template_manager.save(template)
        return template

    def update_template_args(self, template: ServerTemplate, args: Sequence[str] | None) -> None:
        """Replace the arguments; ``None`` keeps them and ``[""]`` clears them."""
        if args is None:
            return
        args = list(args)
        template.server_config.args = None if args == [""] else args

    def update_template_env(self, template: ServerTemplate, env: Mapping[str, str] | None) -> None:
        """Merge ``env`` into the template's environment.

        ``None`` keeps the environment, an empty mapping clears it, and a key
        whose value is empty is removed.
        """
        if env is None:
            return
        if not env:
            template.server_config.env = None
            return

        current = template.server_config.env
        if current is None:
            current = {}
            template.server_config.env = current

        for key, value in env.items():
            if value == "":
                current.pop(key, None)
            else:
                current[key] = value

    def template_exists(self, name: str) -> bool:
        """Return True if the template ``name`` exists."""
        return self.template_manager.exists(name)