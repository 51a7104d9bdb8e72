"""Code Search MCP package.

Symbol indexing, fuzzy symbol search, references and multi-tier text search
for a project tree, exposed as MCP tools.
"""

__version__ = "0.1.0"
