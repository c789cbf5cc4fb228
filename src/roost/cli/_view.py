"""``roost view`` — render one navigation and print the mounted HTML."""

import argparse
import asyncio
import sys

import httpx

from roost.app import App
from roost.cli._config import config_from_args, configure_logging
from roost.errors import ConfigurationError


def _notify(message: str) -> None:
    print(f"! {message}", file=sys.stderr)


async def render_path(
    args: argparse.Namespace,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
) -> str:
    """Render ``args.path`` and return the mounted HTML."""
    config = config_from_args(args)
    async with App(config, transport=transport, notify=_notify, initial=args.path) as app:
        await app.start()
        return app.html()


def run_view(args: argparse.Namespace) -> None:
    try:
        configure_logging(config_from_args(args))
        html = asyncio.run(render_path(args))
    except ConfigurationError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc
    print(html)
