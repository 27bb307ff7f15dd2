"""Command-line entry point: python -m pageviews [--adapter memory] [--port 3000].

Flags override the matching environment settings (ADAPTER, DATABASE_URL, ...)
before the application reads its configuration.
"""

import argparse
import os

import uvicorn

from pageviews.config import get_settings

_OVERRIDABLE = ("adapter", "database_url", "host", "port", "log_level", "log_format")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pageviews", description="Run the page views API server.",
    )
    parser.add_argument("-a", "--adapter", help="storage adapter (memory, sql)")
    parser.add_argument("--database-url", help="SQLAlchemy URL for the sql adapter")
    parser.add_argument("-H", "--host", help="interface to bind")
    parser.add_argument("-p", "--port", type=int, help="port to listen on")
    parser.add_argument("--log-level", help="DEBUG, INFO, WARNING, ...")
    parser.add_argument("--log-format", choices=["json", "text"])
    return parser


def apply_overrides(args: argparse.Namespace) -> None:
    """Export CLI flags as environment variables and reset cached settings."""
    for name in _OVERRIDABLE:
        value = getattr(args, name, None)
        if value is not None:
            os.environ[name.upper()] = str(value)
    get_settings.cache_clear()


def main(argv: list[str] | None = None) -> None:
    args = build_parser().parse_args(argv)
    apply_overrides(args)
    settings = get_settings()
    uvicorn.run(
        "pageviews.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
