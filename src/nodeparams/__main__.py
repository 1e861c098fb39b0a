"""CLI entry point for inspecting a role's resolved endpoint configuration.

Initializes a server or client endpoint config for one role exactly as a
node process would, prints the result and releases any eager listener.

Examples:
    ```bash
    python -m nodeparams query-node
    python -m nodeparams data-node --side client --config config/nodeparams.yaml
    NODEPARAMS_PROXY_PORT=0 python -m nodeparams proxy --env-prefix NODEPARAMS_ --json
    ```
"""

import argparse
import json
import sys
from collections.abc import Sequence
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from nodeparams.core import (
    ClientEndpointConfig,
    NodeParamsError,
    ParamTable,
    ParamTableConfig,
    ServerEndpointConfig,
    TransportConfig,
)
from nodeparams.core.logger import Logger, setup_logging
from nodeparams.models.constants import Role


SIDE_REGISTRY: dict[str, type[TransportConfig]] = {
    "server": ServerEndpointConfig,
    "client": ClientEndpointConfig,
}

logger = Logger("cli")


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        prog="nodeparams",
        description="Resolve and print a node role's endpoint configuration",
    )

    parser.add_argument(
        "role",
        choices=[role.value for role in Role],
        help="Node role to resolve",
    )

    parser.add_argument(
        "--side",
        choices=list(SIDE_REGISTRY),
        default="server",
        help="Transport side whose size limits are resolved (default: server)",
    )

    parser.add_argument(
        "--config",
        type=Path,
        help="YAML parameter file (default: environment and built-in defaults only)",
    )

    parser.add_argument(
        "--env-prefix",
        default="",
        help="Prefix for environment variable overrides, e.g. NODEPARAMS_",
    )

    parser.add_argument(
        "--no-defaults",
        action="store_true",
        help="Do not fall back to built-in default ports",
    )

    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="WARNING",
        help="Log level (default: WARNING)",
    )

    parser.add_argument(
        "--json",
        action="store_true",
        help="Print the result as JSON",
    )

    return parser.parse_args(argv)


def describe(config: TransportConfig, side: str) -> dict[str, Any]:
    """Summarize an initialized config as plain data."""
    return {
        "role": str(config.role),
        "side": side,
        "address": config.get_address(),
        "ip": config.ip,
        "port": config.port,
        "listener": config.listener is not None,
        "max_send_size": config.max_send_size,
        "max_recv_size": config.max_recv_size,
    }


def render(summary: dict[str, Any], *, as_json: bool) -> str:
    if as_json:
        return json.dumps(summary, indent=2)
    return "\n".join(f"{key}: {value}" for key, value in summary.items())


def main(argv: Sequence[str] | None = None) -> int:
    """Main entry point: build the parameter store, initialize, print.

    Returns:
        Exit code: 0 on success, 1 on configuration or startup failure.
    """
    args = parse_args(argv)
    setup_logging(args.log_level)

    try:
        store = ParamTable.from_config(
            ParamTableConfig(
                config_path=args.config,
                env_prefix=args.env_prefix,
                use_defaults=not args.no_defaults,
            )
        )
    except (ValidationError, FileNotFoundError, yaml.YAMLError, NodeParamsError) as e:
        logger.error("config_invalid", error=str(e))
        return 1

    config = SIDE_REGISTRY[args.side](store)
    try:
        config.init_once(args.role)
        print(render(describe(config, args.side), as_json=args.json))  # noqa: T201
    except NodeParamsError as e:
        logger.error("init_failed", role=args.role, error=str(e))
        return 1
    finally:
        config.close_listener()
    return 0


def cli() -> None:
    """Synchronous entry point for console_scripts."""
    sys.exit(main())


if __name__ == "__main__":
    cli()
