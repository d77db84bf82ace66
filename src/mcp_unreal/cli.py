"""
Command-line entry point for a standalone bridge.

Runs the bridge against the in-memory sandbox host, which is useful for
developing clients without an editor:

    mcp-unreal-bridge --port 8090 --disable gas --disable niagara
"""

import argparse
import json
import logging
import sys
from typing import Optional

from .bridge import build_bridge
from .core.config import BridgeConfig
from .core.constants import PLUGIN_NAME, PLUGIN_VERSION
from .core.errors import ConfigError
from .core.logging import configure_logging
from .host.sandbox import SandboxEditorHost

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mcp-unreal-bridge",
        description=f"{PLUGIN_NAME} command bridge with the sandbox editor host.",
    )
    parser.add_argument("--config", help="YAML configuration file")
    parser.add_argument("--host", help="Address to bind (default: 127.0.0.1)")
    parser.add_argument("--port", type=int, help="Port to listen on (default: 8090)")
    parser.add_argument(
        "--timeout",
        type=float,
        help="Seconds to wait for a host-thread command (default: 30)",
    )
    parser.add_argument(
        "--enable",
        action="append",
        metavar="DOMAIN",
        help="Only register this capability domain (repeatable)",
    )
    parser.add_argument(
        "--disable",
        action="append",
        metavar="DOMAIN",
        help="Do not register this capability domain (repeatable)",
    )
    parser.add_argument("--log-level", help="DEBUG, INFO, WARNING or ERROR")
    parser.add_argument("--log-file", help="Also append logs to this file")
    parser.add_argument(
        "--project-name",
        default="SandboxProject",
        help="Project name reported by the sandbox host",
    )
    parser.add_argument(
        "--list-commands",
        action="store_true",
        help="Print the registered commands as JSON and exit",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {PLUGIN_VERSION}")
    return parser


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point for the standalone bridge."""
    args = build_parser().parse_args(argv)

    try:
        config = BridgeConfig.load(
            config_file=args.config,
            host=args.host,
            port=args.port,
            command_timeout=args.timeout,
            enabled_domains=args.enable,
            disabled_domains=args.disable,
            log_level=args.log_level,
            log_file=args.log_file,
        )
    except ConfigError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2

    configure_logging(config.log_level, config.log_file)

    bridge = build_bridge(config, SandboxEditorHost(project_name=args.project_name))

    if args.list_commands:
        commands = [d.describe() for d in bridge.registry.descriptors()]
        print(json.dumps(commands, indent=2))
        return 0

    logger.info(f"Starting {PLUGIN_NAME} {PLUGIN_VERSION} sandbox bridge...")
    try:
        bridge.serve_forever()
    except KeyboardInterrupt:
        logger.info("Interrupted")
    return 0


if __name__ == "__main__":
    sys.exit(main())
