#!/usr/bin/env python
"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
Gitter client, a product of Garudex Labs

Demonstration of the Gitter client: one REST call, then a room stream.

Usage::

    GITTER_TOKEN=... python examples/stream_room_demo.py <room-id>
"""

import asyncio
import sys
from pathlib import Path

from gitter.config import load_config
from gitter.exceptions import GitterError
from gitter.logging_config import get_logger, setup_logging
from gitter.sdk import GitterClient

logger = get_logger(__name__)


async def run(room_id: str) -> None:
    config = load_config()
    setup_logging(
        level=config.logging.level,
        log_file=Path(config.logging.file) if config.logging.file else None,
        json_format=config.logging.json_format,
    )

    async with GitterClient.from_config(config) as client:
        try:
            user = await client.get("/user")
        except GitterError as e:
            logger.error(f"Could not fetch current user: {e}")
            return
        client.current_user = user
        logger.info("authenticated", remaining=client.remaining, limit=client.rate_limit)

        def on_message(message):
            print(f"{message.get('fromUser', {}).get('username')}: {message.get('text')}")

        def on_error(error):
            logger.error(f"stream terminated: {error}")

        session = await client.stream(f"/rooms/{room_id}/chatMessages", on_message, on_error)
        await session.wait()


def main():
    if len(sys.argv) != 2:
        print("usage: stream_room_demo.py <room-id>")
        sys.exit(2)
    asyncio.run(run(sys.argv[1]))


if __name__ == "__main__":
    main()
