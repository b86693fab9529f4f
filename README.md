# mcpjson

A library for keeping MCP server definitions as named templates and
turning them into `mcpServers` entries of MCP configuration files.

Templates are stored one per file (`<name>.jsonc`) in a directory of
your choice. Files may contain JSONC comments and trailing commas; they
are written back as JSON indented by two spaces.

## Installation

```
pip install .
```

For running the tests:

```
pip install ".[test]"
pytest
```

## Working with templates

`mcpjson.manager.Manager` is the single entry point:

```python
from mcpjson.manager import Manager

manager = Manager("/path/to/servers")

# Create a template by hand
manager.save_manual("files", "python", ["-m", "file_server"], {"ROOT": "/data"}, False)

# Or capture one from an existing MCP configuration file
manager.save_from_file("api", "api-server", "mcp.json", False)

manager.exists("files")              # True
template = manager.load("files")     # a ServerTemplate
print(template.server_config.command)

manager.copy("files", "files-dev", False)          # returns the new template
manager.rename("files-dev", "files-test", False)
manager.list(False)                  # prints a summary table, returns the templates shown
manager.list(True)                   # prints full details
manager.get_template_path("files")   # Path of an existing template file
manager.delete("files-test", True, None)
manager.reset(True)                  # deletes every template, returns the count
```

The same operations are available separately on
`mcpjson.template_manager.TemplateManager`,
`mcpjson.template_updater.TemplateUpdater` (`save_manual`) and
`mcpjson.template_display.TemplateDisplay` (`list`, `format_detail`).

Overwriting, deleting or resetting without `force` asks for
confirmation on standard input (`y` or `yes` accepts). Pass your own
`confirm` callable, taking the prompt and returning a bool, to
`Manager`, `TemplateManager` or `TemplateUpdater` to decide
programmatically.

`copy` and `rename` refuse to overwrite an existing template unless
`force` is true; `copy` also gives the new template a fresh creation
time.

### Updating a template

`save_manual` on an existing template updates it:

- an empty `command` keeps the stored command;
- `args=None` keeps the arguments, `[""]` clears them;
- `env=None` keeps the environment, `{}` clears it, and a key with an
  empty value removes that variable.

Creating a new template without a command raises `TemplateError`.

### Deleting templates that profiles use

`delete` accepts an object following the
`mcpjson.template_manager.ProfileManager` protocol
(`find_profiles_using_template`,
`remove_template_references_from_all_profiles`). When profiles use the
template a warning lists them; with `force` their references are
removed, otherwise the user is asked. Pass `None` when there are no
profiles to consider.

## Writing MCP configuration files

```python
manager.add_to_mcp_config("mcp.json", "files", "my-files", {"DEBUG": "1"})
manager.remove_from_mcp_config("mcp.json", "my-files")
```

`add_to_mcp_config` creates the file when it does not exist, uses the
template name when the server name is empty, merges the overrides over
the template's environment, refuses to replace an existing server, and
returns the `MCPServer` it added. `remove_from_mcp_config` raises an
error listing the available servers when the name is not found.

## Data types

`mcpjson.models` holds the dataclasses `MCPServer`, `ServerTemplate`
and `MCPConfig`, each with `to_dict()` and `from_dict()` for their JSON
form (`command`, `args`, `env`, `timeout`, `envFile`, `transportType`;
`name`, `description`, `createdAt`, `serverConfig`; `mcpServers`), and
`create_server_template(name, command, args, env)`.

## Helpers

- `mcpjson.validation`: `validate_name(name, resource_type)` (letters,
  digits, `-` and `_`, at most 50 characters, no reserved words),
  `parse_env_vars("PORT=3000,DEBUG=true")`, `parse_args("a, b ,c")`.
- `mcpjson.fileio`: `load_json` (JSONC aware), `save_json`,
  `load_env_file` for `KEY=value` files, `strip_jsonc`, `file_exists`.
- `mcpjson.errors`: `ExitCode`, `handle_error`, and the argument helpers
  `parse_profile_name`, `parse_flag`, `parse_rename_args`.

## Errors

Operations raise exceptions derived from `mcpjson.errors.McpJsonError`:
`TemplateError` (with `TemplateNotFoundError` and
`TemplateExistsError`), `ValidationError`, `EnvFileError` and
`ArgumentError`. The low-level `load_json` raises `FileNotFoundError`
or `ValueError` directly.

## What this package does not do

It is a library only: there is no command-line program. It manages
server templates but has no profiles of its own; profile handling is
limited to the `ProfileManager` protocol that `delete` accepts.