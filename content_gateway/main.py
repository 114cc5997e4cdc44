"""
Content Gateway - command line entry point.

Fetches one URL through a gateway configured from the environment and
prints the result as JSON.

Usage:
    python -m content_gateway.main URL [--expires-in SECONDS] [--stale-expires-in SECONDS]
"""
import argparse
import asyncio
import json
import os
import sys
from typing import Any, Dict, List, Optional

from content_gateway.config import GatewayConfig
from content_gateway.exceptions import ContentGatewayError
from content_gateway.gateway import ContentGateway
from content_gateway.utils.logger import get_logger, setup_logging

logger = get_logger(__name__)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Fetch a JSON resource through the content gateway")
    parser.add_argument("url", help="Resource URL")
    parser.add_argument("--expires-in", type=float, help="Cache the response for SECONDS")
    parser.add_argument("--stale-expires-in", type=float, help="Keep a stale copy for SECONDS")
    parser.add_argument(
        "-H",
        "--header",
        action="append",
        default=[],
        metavar="NAME:VALUE",
        help="Extra request header (repeatable)",
    )
    return parser.parse_args(argv)


def build_options(args: argparse.Namespace) -> Dict[str, Any]:
    """Translate CLI arguments into gateway fetch options."""
    headers = {}
    for header in args.header:
        name, _, value = header.partition(":")
        headers[name.strip()] = value.strip()

    cache_policy: Dict[str, Any] = {}
    if args.expires_in is not None:
        cache_policy["expires_in"] = args.expires_in
    if args.stale_expires_in is not None:
        cache_policy["stale_expires_in"] = args.stale_expires_in

    return {"headers": headers, "cache_policy": cache_policy}


async def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point.

    Returns:
        Process exit code (0 when a payload was returned)
    """
    args = parse_args(argv)

    log_level = os.getenv("LOG_LEVEL", "INFO")
    setup_logging(level=log_level)

    try:
        config = GatewayConfig.from_env()
        options = build_options(args)

        async with ContentGateway(config) as gateway:
            result = await gateway.get(args.url, options)
    except ContentGatewayError as e:
        logger.error("gateway_error", error=e.message)
        return 2

    print(json.dumps(result.model_dump(mode="json"), indent=2))
    return 0 if result.ok else 1


def run() -> None:
    """Console script wrapper."""
    sys.exit(asyncio.run(main()))


if __name__ == "__main__":
    run()
