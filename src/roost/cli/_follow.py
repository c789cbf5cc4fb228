"""``roost follow`` — open the home timeline and report live activity."""

import argparse
import asyncio
import sys

from roost.app import App
from roost.cli._config import config_from_args, configure_logging
from roost.errors import ConfigurationError
from roost.timeline.reconciler import Timeline


def _notify(message: str) -> None:
    print(f"! {message}", file=sys.stderr)


async def follow(app: App, *, auto_flush: bool = False) -> None:
    """Mount ``/`` and print each pending-count change until cancelled."""
    await app.start()
    page = app.page
    if page is None or not isinstance(page.state, Timeline):
        print(app.html())
        return

    timeline: Timeline = page.state
    for item in timeline.visible:
        print(f"{item.id}\t{item.post.content}")

    def on_change(tl: Timeline) -> None:
        if not tl.pending:
            return
        if auto_flush:
            newest = tl.pending[0]
            tl.flush()
            print(f"{newest.id}\t{newest.post.content}")
        else:
            print(tl.pending_label)

    timeline.on_change(on_change)
    await asyncio.Event().wait()


def run_follow(args: argparse.Namespace) -> None:
    try:
        config = config_from_args(args)
        configure_logging(config)

        async def _main() -> None:
            async with App(config, notify=_notify) as app:
                await follow(app, auto_flush=args.auto_flush)

        asyncio.run(_main())
    except ConfigurationError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc
    except KeyboardInterrupt:
        pass
