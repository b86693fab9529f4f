"""Manage MCP server templates and the MCP configuration files built from them."""

__version__ = "0.1.0"