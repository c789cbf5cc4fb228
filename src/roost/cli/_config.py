"""Build an AppConfig from parsed CLI arguments."""

import argparse
import dataclasses
import logging

from roost.config import AppConfig


def config_from_args(args: argparse.Namespace) -> AppConfig:
    """CLI flags override the AppConfig defaults."""
    overrides: dict[str, object] = {"log_level": args.log_level}
    if args.base_url:
        overrides["base_url"] = args.base_url
    if args.token:
        overrides["auth_token"] = args.token
    if args.page_size is not None:
        overrides["page_size"] = args.page_size
    return dataclasses.replace(AppConfig(), **overrides)


def configure_logging(config: AppConfig) -> None:
    logging.basicConfig(
        level=config.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
