"""Shared helpers for the command-line scripts."""
from __future__ import annotations

import logging
import sys
from datetime import datetime

from admin_tool.config import AdminConfig, load_config, load_env


def configure_logging(verbose: bool = False) -> None:
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def load_script_config() -> AdminConfig:
    """Load ``.env`` and the admin configuration, raising ``ConfigurationError``."""

    load_env()
    return load_config()


def format_timestamp(value: datetime | None, default: str = "Never") -> str:
    if value is None:
        return default
    return value.isoformat()


def print_error(message: str) -> None:
    print(message, file=sys.stderr)


__all__ = ["configure_logging", "load_script_config", "format_timestamp", "print_error"]
