import pytest

from mcpjson.models import MCPServer, ServerTemplate
from mcpjson.template_manager import TemplateError, TemplateManager
from mcpjson.template_updater import TemplateUpdater

NAME = "updater-test-template"
COMMAND = "node"
NEW_COMMAND = "python"


@pytest.fixture
def manager(tmp_path):
    return TemplateManager(tmp_path, confirm=lambda prompt: True)


@pytest.fixture
def updater(manager):
    return TemplateUpdater(manager)


def test_save_manual_create_new(updater, manager):
    updater.save_manual(NAME, COMMAND, ["server.js"], {"NODE_ENV": "test"}, False)

    template = manager.load(NAME)
    assert template.name == NAME
    assert template.server_config.command == COMMAND
    assert template.server_config.args == ["server.js"]
    assert template.server_config.env == {"NODE_ENV": "test"}


def test_save_manual_update_existing(updater, manager):
    manager.save_from_config(
        NAME, MCPServer(command=COMMAND, args=["old.js"], env={"OLD_ENV": "old_value"})
    )

    updater.save_manual(NAME, NEW_COMMAND, ["new.py"], {"NEW_ENV": "new_value"}, True)

    template = manager.load(NAME)
    assert template.server_config.command == NEW_COMMAND
    assert template.server_config.args == ["new.py"]
    assert template.server_config.env["NEW_ENV"] == "new_value"
    assert template.server_config.env["OLD_ENV"] == "old_value"


def test_save_manual_empty_command(updater, manager):
    with pytest.raises(TemplateError, match="コマンドが指定されていません"):
        updater.save_manual(NAME, "", None, None, False)
    assert manager.exists(NAME) is False


def test_save_manual_update_existing_empty_command(updater, manager):
    manager.save_from_config(NAME, MCPServer(command=COMMAND, args=["test.js"]))

    updater.save_manual(NAME, "", ["new.js"], None, True)

    template = manager.load(NAME)
    assert template.server_config.command == COMMAND
    assert template.server_config.args == ["new.js"]


def test_save_manual_overwrite_declined(manager):
    manager.save_from_config(NAME, MCPServer(command=COMMAND))
    prompts = []

    def decline(prompt):
        prompts.append(prompt)
        return False

    updater = TemplateUpdater(manager, confirm=decline)
    with pytest.raises(TemplateError, match="上書きをキャンセルしました"):
        updater.save_manual(NAME, NEW_COMMAND, None, None, False)

    assert len(prompts) == 1
    assert manager.load(NAME).server_config.command == COMMAND


def test_save_manual_overwrite_confirmed(manager):
    manager.save_from_config(NAME, MCPServer(command=COMMAND))
    updater = TemplateUpdater(manager, confirm=lambda prompt: True)

    updater.save_manual(NAME, NEW_COMMAND, None, None, False)

    assert manager.load(NAME).server_config.command == NEW_COMMAND


def test_save_manual_prints_created_and_updated(updater, capsys):
    updater.save_manual(NAME, COMMAND, None, None, False)
    assert f"サーバーテンプレート '{NAME}' を作成しました" in capsys.readouterr().out
    updater.save_manual(NAME, NEW_COMMAND, None, None, True)
    assert f"サーバーテンプレート '{NAME}' を更新しました" in capsys.readouterr().out


def _loaded(manager, server):
    manager.save_from_config(NAME, server)
    return manager.load(NAME)


def test_update_template_args_normal(updater, manager):
    template = _loaded(manager, MCPServer(command=COMMAND, args=["old.js"]))
    updater.update_template_args(template, ["new.js", "--verbose"])
    assert template.server_config.args == ["new.js", "--verbose"]


def test_update_template_args_none(updater, manager):
    template = _loaded(manager, MCPServer(command=COMMAND, args=["old.js"]))
    updater.update_template_args(template, None)
    assert template.server_config.args == ["old.js"]


def test_update_template_args_empty_string(updater, manager):
    template = _loaded(manager, MCPServer(command=COMMAND, args=["old.js"]))
    updater.update_template_args(template, [""])
    assert template.server_config.args is None


@pytest.mark.parametrize(
    "args, expected",
    [
        (["new-arg1", "new-arg2"], ["new-arg1", "new-arg2"]),
        ([""], None),
        (None, ["old-arg"]),
    ],
)
def test_update_template_args_table(updater, args, expected):
    template = ServerTemplate(name="t", server_config=MCPServer(args=["old-arg"]))
    updater.update_template_args(template, args)
    assert template.server_config.args == expected


def test_update_template_env_normal(updater, manager):
    template = _loaded(manager, MCPServer(command=COMMAND, env={"OLD_VAR": "old_value"}))
    updater.update_template_env(
        template, {"NEW_VAR": "new_value", "ANOTHER_VAR": "another_value"}
    )
    assert template.server_config.env == {
        "OLD_VAR": "old_value",
        "NEW_VAR": "new_value",
        "ANOTHER_VAR": "another_value",
    }


def test_update_template_env_none(updater, manager):
    template = _loaded(manager, MCPServer(command=COMMAND, env={"OLD_VAR": "old_value"}))
    updater.update_template_env(template, None)
    assert template.server_config.env == {"OLD_VAR": "old_value"}


def test_update_template_env_empty_map(updater, manager):
    template = _loaded(manager, MCPServer(command=COMMAND, env={"OLD_VAR": "old_value"}))
    updater.update_template_env(template, {})
    assert template.server_config.env is None


def test_update_template_env_delete_variable(updater, manager):
    template = _loaded(
        manager, MCPServer(command=COMMAND, env={"VAR1": "value1", "VAR2": "value2"})
    )
    updater.update_template_env(template, {"VAR1": ""})
    assert "VAR1" not in template.server_config.env
    assert template.server_config.env["VAR2"] == "value2"


def test_update_template_env_initialize_env(updater, manager):
    template = _loaded(manager, MCPServer(command=COMMAND))
    assert template.server_config.env is None
    updater.update_template_env(template, {"NEW_VAR": "new_value"})
    assert template.server_config.env == {"NEW_VAR": "new_value"}


@pytest.mark.parametrize(
    "env, expected",
    [
        ({"NEW_ENV": "new_value"}, {"OLD_ENV": "old_value", "NEW_ENV": "new_value"}),
        ({"OLD_ENV": ""}, {}),
        ({}, None),
    ],
)
def test_update_template_env_table(updater, env, expected):
    template = ServerTemplate(name="t", server_config=MCPServer(env={"OLD_ENV": "old_value"}))
    updater.update_template_env(template, env)
    assert template.server_config.env == expected


def test_template_exists(updater, manager):
    assert updater.template_exists("nonexistent") is False
    manager.save_from_config(NAME, MCPServer(command=COMMAND))
    assert updater.template_exists(NAME) is True


def test_update_existing_template_changes_command(updater, manager):
    manager.save_from_config(
        NAME, MCPServer(command="old-command", args=["old.py"], env={"OLD_ENV": "old_value"})
    )
    template = updater.save_manual(NAME, "new-command", ["new.py"], {"NEW_ENV": "new_value"}, True)
    assert template.server_config.command == "new-command"
    assert manager.load(NAME).server_config.command == "new-command"