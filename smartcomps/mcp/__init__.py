"""SmartComps MCP server."""
