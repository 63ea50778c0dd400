"""
Oracle Cloud MCP — OCI management API exposed as assistant tools.
"""

__version__ = "1.0.0"
SERVER_NAME = "oracle-cloud-mcp"
