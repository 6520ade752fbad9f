"""Command-line interface for serving and inspecting the desktop tool server."""
from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from dataclasses import replace
from typing import Optional

from rich.console import Console
from rich.table import Table

from config import ServerConfig, load_server_config, resolve_factory
from tools.schemas import describe_tools
from tools.server import DesktopToolServer

logger = logging.getLogger(__name__)


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Desktop sandbox tools over the Model Context Protocol")
    parser.add_argument("--log-level", help="Logging level (defaults to DESKTOP_TOOLS_LOG_LEVEL or WARNING)")
    subparsers = parser.add_subparsers(dest="command", required=True)

    serve = subparsers.add_parser("serve", help="Serve the tools over stdin/stdout")
    serve.add_argument(
        "--sandbox",
        help="Sandbox factory as 'module:attribute' (defaults to DESKTOP_TOOLS_SANDBOX)",
    )
    serve.add_argument("--name", help="Server name reported during initialization")

    tools = subparsers.add_parser("tools", help="Print the tool listing")
    tools.add_argument("--json", action="store_true", help="Emit the listing as JSON")

    return parser.parse_args(argv)


def configure_logging(level: str) -> None:
    # stdout carries protocol messages when serving over stdio.
    logging.basicConfig(
        stream=sys.stderr,
        level=getattr(logging, level.upper(), logging.WARNING),
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )


def build_server(config: ServerConfig, sandbox_path: Optional[str] = None) -> DesktopToolServer:
    server = DesktopToolServer(name=config.name, version=config.version)
    factory_path = sandbox_path or config.sandbox_factory
    if factory_path:
        server.bind_sandbox(resolve_factory(factory_path)())
    else:
        logger.warning("no sandbox configured; tool calls will be rejected until one is bound")
    return server


def print_tools(console: Console, as_json: bool) -> None:
    specs = describe_tools()
    if as_json:
        payload = [
            {"name": spec.name, "description": spec.description, "inputSchema": spec.input_schema}
            for spec in specs
        ]
        console.print_json(json.dumps(payload))
        return

    table = Table(title="Tools")
    table.add_column("Name", style="bold", no_wrap=True)
    table.add_column("Description")
    table.add_column("Fields")
    for spec in specs:
        properties = spec.input_schema.get("properties", {})
        required = set(spec.input_schema.get("required", []))
        fields = ", ".join(f"{name}*" if name in required else name for name in properties)
        table.add_row(spec.name, spec.description, fields)
    console.print(table)


def main(argv: Optional[list[str]] = None) -> int:
    args = parse_args(argv)
    config = load_server_config()
    configure_logging(args.log_level or config.log_level)

    if args.command == "tools":
        print_tools(Console(highlight=False, soft_wrap=False), args.json)
        return 0

    if args.name:
        config = replace(config, name=args.name)
    try:
        server = build_server(config, args.sandbox)
    except (ImportError, AttributeError, ValueError) as exc:
        print(f"Failed to load sandbox: {exc}", file=sys.stderr)
        return 2

    asyncio.run(server.serve_stdio())
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
