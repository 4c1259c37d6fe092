"""db-lab MCP Server

A Model Context Protocol (MCP) server exposing the SQL Server explorer:
table listing, table description and an ad-hoc SQL console.
"""

import asyncio
import logging
import os
from typing import Any, Optional

from dotenv import load_dotenv
from mcp.server import Server
from mcp.types import TextContent, Tool

from db_lab.adapters import BaseAdapter, create_adapter
from db_lab.models.config import DatabaseConfig
from db_lab.models.seed import SeedPack
from db_lab.utils import dumps

# Load environment variables
load_dotenv()

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

# Response size limits (in characters) for MCP tool responses
MAX_RESPONSE_LIST_TABLES = 5000
MAX_RESPONSE_DESCRIBE_TABLE = 8000
MAX_RESPONSE_RUN_QUERY = 10000

SEED_PACK_PROPERTIES = {
    "name": {"type": "string", "description": "Seed pack name"},
    "create_script_path": {"type": "string", "description": "Schema script"},
    "constraints_script_path": {
        "type": "string",
        "description": "Constraints script",
    },
    "reset_script_path": {"type": "string", "description": "Reset script"},
    "csv_paths": {
        "type": "object",
        "description": "Table name to CSV path",
        "additionalProperties": {"type": "string"},
    },
}


def truncate_json_response(data: str, max_length: int) -> str:
    """
    Truncate JSON response to a maximum length.

    Args:
        data: JSON string to truncate
        max_length: Maximum length in characters

    Returns:
        Truncated JSON string with truncation notice if needed
    """
    if len(data) <= max_length:
        return data

    truncation_msg = f"\n\n... [Response truncated: {len(data)} chars -> {max_length} chars]"
    available_length = max_length - len(truncation_msg)

    if available_length < 100:
        return dumps(
            {
                "error": "Response too large",
                "original_size": len(data),
                "limit": max_length,
                "message": "Response exceeds size limit. Please narrow the query.",
            }
        )

    truncated = data[:available_length]

    # Prefer cutting at a line break in the last 20%
    last_newline = truncated.rfind("\n")
    if last_newline > available_length * 0.8:
        truncated = truncated[:last_newline]

    return truncated + truncation_msg


class DbLabMCPServer:
    """MCP server wrapping a database adapter."""

    def __init__(self, config: DatabaseConfig, adapter: Optional[BaseAdapter] = None):
        """
        Initialize the server.

        Args:
            config: Database configuration
            adapter: Adapter to use instead of one built from ``config``
        """
        self.config = config
        self.adapter = adapter or create_adapter(config)
        self.server = Server("db-lab")

    def register_handlers(self) -> None:
        """Register list_tools and call_tool handlers on the MCP server."""

        @self.server.list_tools()
        async def list_tools() -> list[Tool]:
            return self.get_tools()

        @self.server.call_tool()
        async def call_tool(name: str, arguments: dict[str, Any]) -> list[TextContent]:
            return await self.dispatch(name, arguments)

        logger.info(f"Registered {len(self.get_tools())} tools for {self.config.dialect}")

    def get_tools(self) -> list[Tool]:
        """All tools offered by this server."""
        return [
            self._create_list_tables_tool(),
            self._create_describe_table_tool(),
            self._create_run_query_tool(),
            self._create_seed_database_tool(),
            self._create_reset_database_tool(),
        ]

    async def dispatch(self, name: str, arguments: dict[str, Any]) -> list[TextContent]:
        """Route a tool call to its handler."""
        handlers = {
            "list_tables": self.handle_list_tables,
            "describe_table": self.handle_describe_table,
            "run_query": self.handle_run_query,
            "seed_database": self.handle_seed_database,
            "reset_database": self.handle_reset_database,
        }

        handler = handlers.get(name)
        if handler is None:
            raise ValueError(f"Unknown tool: {name}")

        return await handler(arguments or {})

    def _create_list_tables_tool(self) -> Tool:
        return Tool(
            name="list_tables",
            description="List base tables in a schema with approximate row counts",
            inputSchema={
                "type": "object",
                "properties": {
                    "schema": {
                        "type": "string",
                        "description": f"Schema name (default: {self.config.default_schema})",
                    },
                },
                "required": [],
            },
        )

    def _create_describe_table_tool(self) -> Tool:
        return Tool(
            name="describe_table",
            description="Describe a table's columns, primary key, unique columns and foreign keys",
            inputSchema={
                "type": "object",
                "properties": {
                    "table": {"type": "string", "description": "Table name"},
                    "schema": {
                        "type": "string",
                        "description": f"Schema name (default: {self.config.default_schema})",
                    },
                },
                "required": ["table"],
            },
        )

    def _create_run_query_tool(self) -> Tool:
        return Tool(
            name="run_query",
            description="Run any SQL statement or batch and return rows or the affected-row count",
            inputSchema={
                "type": "object",
                "properties": {
                    "sql": {"type": "string", "description": "SQL to run"},
                },
                "required": ["sql"],
            },
        )

    def _create_seed_database_tool(self) -> Tool:
        return Tool(
            name="seed_database",
            description="Create and populate the database from a seed pack (not implemented)",
            inputSchema={
                "type": "object",
                "properties": SEED_PACK_PROPERTIES,
                "required": [],
            },
        )

    def _create_reset_database_tool(self) -> Tool:
        return Tool(
            name="reset_database",
            description="Reset the database using a seed pack (not implemented)",
            inputSchema={
                "type": "object",
                "properties": SEED_PACK_PROPERTIES,
                "required": [],
            },
        )

    # Tool handlers
    async def handle_list_tables(self, arguments: dict[str, Any]) -> list[TextContent]:
        """Handle list_tables request."""
        tables = await self.adapter.list_tables(arguments.get("schema"))
        response = dumps([t.model_dump() for t in tables])
        return [
            TextContent(
                type="text",
                text=truncate_json_response(response, MAX_RESPONSE_LIST_TABLES),
            )
        ]

    async def handle_describe_table(
        self, arguments: dict[str, Any]
    ) -> list[TextContent]:
        """Handle describe_table request."""
        schema = arguments.get("schema") or self.config.default_schema
        detail = await self.adapter.describe_table(schema, arguments.get("table", ""))
        response = dumps(detail.model_dump())
        return [
            TextContent(
                type="text",
                text=truncate_json_response(response, MAX_RESPONSE_DESCRIBE_TABLE),
            )
        ]

    async def handle_run_query(self, arguments: dict[str, Any]) -> list[TextContent]:
        """Handle run_query request."""
        outcome = await self.adapter.run_query(arguments.get("sql", ""))
        data = outcome.model_dump()
        data["status"] = outcome.status_line
        return [
            TextContent(
                type="text",
                text=truncate_json_response(dumps(data), MAX_RESPONSE_RUN_QUERY),
            )
        ]

    async def handle_seed_database(
        self, arguments: dict[str, Any]
    ) -> list[TextContent]:
        """Handle seed_database request."""
        # Unvalidated: every seed pack is rejected by the adapter
        await self.adapter.seed(SeedPack.model_construct(**arguments))
        return [TextContent(type="text", text="Seed completed")]

    async def handle_reset_database(
        self, arguments: dict[str, Any]
    ) -> list[TextContent]:
        """Handle reset_database request."""
        await self.adapter.reset(SeedPack.model_construct(**arguments))
        return [TextContent(type="text", text="Reset completed")]

    async def cleanup(self) -> None:
        """Cleanup resources."""
        await self.adapter.dispose()
        logger.info("db-lab MCP server cleaned up")


def load_config() -> DatabaseConfig:
    """Build the configuration from environment variables."""
    database_url = os.getenv("DATABASE_URL")
    if not database_url:
        raise ValueError("DATABASE_URL environment variable must be set")

    options: dict[str, Any] = {"url": database_url}
    default_schema = os.getenv("DB_LAB_DEFAULT_SCHEMA")
    if default_schema:
        options["default_schema"] = default_schema

    return DatabaseConfig(**options)


async def main() -> None:
    """Main entry point for the MCP server."""
    mcp_server = DbLabMCPServer(load_config())

    try:
        mcp_server.register_handlers()

        from mcp.server.stdio import stdio_server

        async with stdio_server() as (read_stream, write_stream):
            await mcp_server.server.run(
                read_stream,
                write_stream,
                mcp_server.server.create_initialization_options(),
            )

    finally:
        await mcp_server.cleanup()


def cli_entry() -> None:
    """
    Synchronous entry point for console script.

    This function is called by the 'db-lab-mcp' console script.
    """
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        logger.info("Server stopped by user")
    except Exception as e:
        logger.error(f"Server error: {e}", exc_info=True)
        raise


if __name__ == "__main__":
    cli_entry()
