[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "mcpjson"
version = "0.1.0"
description = "Manage reusable MCP server templates and the MCP configuration files built from them"
requires-python = ">=3.10"
dependencies = []
keywords = ["mcp", "model-context-protocol", "configuration", "templates", "jsonc"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Libraries :: Python Modules",
    "Topic :: Utilities",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["mcpjson"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
