#!/usr/bin/env python3
"""
Oracle Cloud MCP — CLI entry point.

Usage:
    oci-mcp                       Serve the OCI tools over stdio (MCP)
    oci-mcp serve                 Same as above
    oci-mcp tools                 Print the tool catalog as JSON
    oci-mcp call TOOL [ARGS]      Run one tool; ARGS is a JSON object

Environment:
    OCI_CONFIG_FILE     Credential file (default ~/.oci/config)
    OCI_PROFILE         Profile within the credential file (default DEFAULT)
    OCI_TENANCY_OCID    Compartment used when a tool call omits one
    OCI_REGION          Target region (default: profile region, else us-chicago-1)
    OCI_MCP_LOG_LEVEL   Log level for stderr logging (default WARNING)
"""

from __future__ import annotations

import asyncio
import json
import logging
import sys

from ocimcp.clients import ClientSet, init_clients
from ocimcp.config import Settings
from ocimcp.dispatch import Dispatcher, Failure
from ocimcp.registry import build_registry

logger = logging.getLogger("oci-mcp")

_KNOWN_COMMANDS = ("serve", "tools", "call")


def _configure_logging(level_name: str) -> None:
    # stdout carries the protocol stream; logs go to stderr only.
    logging.basicConfig(
        level=getattr(logging, level_name, logging.WARNING),
        format="%(name)s: %(message)s",
        stream=sys.stderr,
    )


def build_dispatcher(settings: Settings, clients: ClientSet | None = None) -> Dispatcher:
    """Wire registry, clients and the tenancy fallback into a dispatcher."""
    if clients is None:
        clients = init_clients(settings)
    default_compartment = settings.tenancy_ocid or clients.tenancy_ocid
    if not default_compartment:
        logger.warning("No tenancy OCID configured; tools will need an explicit compartment_id")
    return Dispatcher(build_registry(), clients, default_compartment_id=default_compartment)


def main(argv: list[str] | None = None) -> None:
    """Dispatch to the appropriate sub-command."""
    args = sys.argv[1:] if argv is None else argv
    settings = Settings.from_env()
    _configure_logging(settings.log_level)

    command = args[0] if args else "serve"
    if command not in _KNOWN_COMMANDS:
        print(f"Unknown command: {command}", file=sys.stderr)
        print(__doc__, file=sys.stderr)
        sys.exit(1)

    try:
        if command == "serve":
            _cmd_serve(settings)
        elif command == "tools":
            _cmd_tools()
        else:
            _cmd_call(settings, args[1:])
    except Exception:
        logger.exception("Server error")
        sys.exit(1)


# ---------------------------------------------------------------------------
# Sub-commands
# ---------------------------------------------------------------------------

def _cmd_serve(settings: Settings) -> None:
    from ocimcp.server import serve

    asyncio.run(serve(build_dispatcher(settings)))


def _cmd_tools() -> None:
    """Print the catalog; needs no credentials."""
    print(json.dumps(build_registry().list_capabilities(), indent=2))


def _cmd_call(settings: Settings, args: list[str]) -> None:
    from ocimcp.server import envelope_text

    if not args:
        print("Usage: oci-mcp call TOOL [JSON-ARGS]", file=sys.stderr)
        sys.exit(1)

    tool_id = args[0]
    try:
        params = json.loads(args[1]) if len(args) > 1 else {}
    except json.JSONDecodeError as exc:
        print(f"Invalid JSON arguments: {exc}", file=sys.stderr)
        sys.exit(1)

    result = asyncio.run(build_dispatcher(settings).invoke(tool_id, params))
    print(envelope_text(result))
    if isinstance(result, Failure):
        sys.exit(1)


if __name__ == "__main__":
    main()
