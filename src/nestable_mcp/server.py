"""MCP server for nestable-mcp."""

import asyncio
import json
import logging

from mcp.server import Server
from mcp.types import Tool, TextContent

from .logging_config import configure_logging
from .tools.nest_records import nest_records
from .tools.flatten_records import flatten_records

logger = logging.getLogger(__name__)

RECORDS_SCHEMA = {
    "type": "array",
    "items": {
        "type": "object",
        "properties": {
            "id": {"description": "Unique record identifier"},
        },
        "required": ["id"]
    },
    "description": "Flat records in display order, each referencing its parent by id"
}


# Create server
server = Server("nestable-mcp")


@server.list_tools()
async def list_tools() -> list[Tool]:
    """List all available tools."""
    return [
        Tool(
            name="nest_records",
            description="Nest a flat list of records into a tree using their parent-id references. Records whose ancestor chain is broken are dropped unless pruning is disabled.",
            inputSchema={
                "type": "object",
                "properties": {
                    "records": RECORDS_SCHEMA,
                    "parent_field": {
                        "type": "string",
                        "description": "Name of the parent reference field",
                        "default": "parent_id"
                    },
                    "children_field": {
                        "type": "string",
                        "description": "Name under which children are nested in the output",
                        "default": "items"
                    },
                    "prune_missing_ancestors": {
                        "type": "boolean",
                        "description": "Drop records whose parent (or any ancestor) is not in the list. When false, they are kept as top-level orphans.",
                        "default": True
                    }
                },
                "required": ["records"]
            }
        ),
        Tool(
            name="flatten_records",
            description="Nest a flat list of records, then flatten it into ordered, indented labels suitable for a select list or menu.",
            inputSchema={
                "type": "object",
                "properties": {
                    "records": RECORDS_SCHEMA,
                    "display_field": {
                        "type": "string",
                        "description": "Field used as the label",
                        "default": "title"
                    },
                    "indent": {
                        "type": "string",
                        "description": "Indent repeated once per level (default: four spaces)"
                    },
                    "qualified": {
                        "type": "boolean",
                        "description": "Prefix each label with the labels of all its ancestors",
                        "default": False
                    },
                    "parent_field": {
                        "type": "string",
                        "description": "Name of the parent reference field",
                        "default": "parent_id"
                    },
                    "prune_missing_ancestors": {
                        "type": "boolean",
                        "description": "Drop records whose parent (or any ancestor) is not in the list",
                        "default": True
                    }
                },
                "required": ["records"]
            }
        ),
    ]


@server.call_tool()
async def call_tool(name: str, arguments: dict) -> list[TextContent]:
    """Handle tool calls."""
    logger.info("Tool call: %s", name)

    try:
        if name == "nest_records":
            result = nest_records(
                records=arguments["records"],
                parent_field=arguments.get("parent_field", "parent_id"),
                children_field=arguments.get("children_field", "items"),
                prune_missing_ancestors=arguments.get("prune_missing_ancestors", True)
            )
        elif name == "flatten_records":
            result = flatten_records(
                records=arguments["records"],
                display_field=arguments.get("display_field", "title"),
                indent=arguments.get("indent"),
                qualified=arguments.get("qualified", False),
                parent_field=arguments.get("parent_field", "parent_id"),
                prune_missing_ancestors=arguments.get("prune_missing_ancestors", True)
            )
        else:
            result = {"error": f"Unknown tool: {name}"}

        return [TextContent(type="text", text=json.dumps(result, indent=2))]

    except Exception as e:
        logger.exception("Tool %s failed", name)
        return [TextContent(type="text", text=json.dumps({"error": str(e)}, indent=2))]


async def run_server():
    """Run the MCP server."""
    from mcp.server.stdio import stdio_server

    async with stdio_server() as (read_stream, write_stream):
        await server.run(
            read_stream,
            write_stream,
            server.create_initialization_options()
        )


def main():
    """Main entry point."""
    configure_logging()
    asyncio.run(run_server())


if __name__ == "__main__":
    main()
