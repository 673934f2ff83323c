#!/usr/bin/env python3
"""Create the comments index with Logfire error tracking."""

import asyncio
import sys

import logfire

from quill.config import Settings
from quill.persistence.database import create_client, ensure_comments_index
from quill.util.logging import setup_logging
from quill.util.observability import configure_logfire


async def create_indices(settings: Settings) -> bool:
    """Create the comments index if it is missing.

    Returns:
        True if the index was created, False if it already existed
    """
    client = create_client(settings)
    try:
        return await ensure_comments_index(client, settings)
    finally:
        await client.close()


def main() -> int:
    """Create indices and log any errors to Logfire."""
    settings = Settings()

    setup_logging(settings)
    configure_logfire(settings)

    try:
        logfire.info(
            "Creating comments index",
            index=settings.elasticsearch.comments_index,
        )
        created = asyncio.run(create_indices(settings))
        logfire.info("Index setup completed", created=created)
        return 0

    except Exception as e:
        logfire.error(
            "Index setup failed",
            error=str(e),
            error_type=type(e).__name__,
            _exc_info=sys.exc_info(),
        )
        # Re-raise so the container fails and doesn't start without an index
        raise


if __name__ == "__main__":
    sys.exit(main())
