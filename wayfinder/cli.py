"""Command line entry for Wayfinder."""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from typing import List, Optional

import uvicorn

from wayfinder.catalogue.people import web_id_for
from wayfinder.core.config import settings
from wayfinder.solid.client import RemoteProfileClient

logger = logging.getLogger(__name__)


def run_server(host: str = "0.0.0.0", port: int = 8080) -> None:
    uvicorn.run("wayfinder.api.main:app", host=host, port=port, log_level="debug" if settings.DEBUG else "info")


async def check_pod(web_id: str) -> int:
    """Fetch one profile straight from its pod and print the outcome as JSON."""

    client = RemoteProfileClient()
    try:
        outcome = await client.fetch(web_id)
    finally:
        await client.aclose()

    print(
        json.dumps(
            {
                "web_id": web_id,
                "outcome": outcome.kind.value,
                "attempts": outcome.attempts,
                "detail": outcome.detail,
                "profile": outcome.fragment.model_dump(exclude_none=True) if outcome.fragment else None,
            },
            indent=2,
        )
    )
    return 0 if outcome.ok else 1


def main(argv: Optional[List[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="Wayfinder profile service")
    subcommands = parser.add_subparsers(dest="command")

    serve = subcommands.add_parser("serve", help="Run the API server (default)")
    serve.add_argument("--host", default="0.0.0.0")
    serve.add_argument("--port", type=int, default=8080)

    check = subcommands.add_parser("check-pod", help="Fetch a profile from its pod")
    check.add_argument("target", help="WebID, or a catalogue person id such as flint-rivers")

    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if settings.DEBUG else logging.INFO)

    try:
        if args.command == "check-pod":
            target = args.target if "://" in args.target else web_id_for(args.target)
            sys.exit(asyncio.run(check_pod(target)))
        elif args.command == "serve":
            run_server(args.host, args.port)
        else:
            run_server()
    except KeyboardInterrupt:
        logger.info("Stopped.")


if __name__ == "__main__":
    main()
