#!/usr/bin/env python3
"""Watch the comments of a page in the terminal.

Loads the page configured by EMBED__HOST / EMBED__PAGE_PATH, prints the
comment tree, keeps it up to date through live updates and reads commands
from stdin (see talkback.interface.cli for the syntax). Quit with EOF or
"quit".
"""

import asyncio
import sys

import logfire
from pydantic import ValidationError

from talkback.application.session import CommentSession
from talkback.config import Settings
from talkback.interface.cli import parse_line
from talkback.interface.error import CommandParseError
from talkback.util.di.container import create_container
from talkback.util.logging import setup_logging
from talkback.util.observability import configure_logfire, instrument_httpx


async def run() -> None:
    """Run a comment session until stdin is exhausted."""
    container = create_container()
    try:
        async with container() as request_container:
            session = await request_container.get(CommentSession)
            async with session:
                while True:
                    line = await asyncio.to_thread(sys.stdin.readline)
                    if not line or line.strip() in ("quit", "exit"):
                        break
                    if not line.strip():
                        continue

                    try:
                        command = parse_line(line)
                    except (CommandParseError, ValidationError) as e:
                        print(f"!! {e}", file=sys.stderr)
                        continue

                    await session.dispatch(command)
    finally:
        await container.close()


def main() -> int:
    """Start the viewer and log any startup errors to Logfire."""
    settings = Settings()

    # Configure Logfire early to catch startup errors
    configure_logfire(settings)
    instrument_httpx()
    setup_logging(settings)

    try:
        logfire.info(
            "Starting comment viewer",
            host=settings.embed.host,
            path=settings.embed.page_path,
        )
        asyncio.run(run())
        return 0

    except KeyboardInterrupt:
        return 130

    except Exception as e:
        logfire.error(
            "Comment viewer failed",
            error=str(e),
            error_type=type(e).__name__,
            _exc_info=sys.exc_info(),
        )
        raise


if __name__ == "__main__":
    sys.exit(main())
