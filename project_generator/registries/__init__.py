"""
Static registries: features, MCP servers and quick-start templates.
"""
