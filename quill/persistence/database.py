"""Elasticsearch client and index management.

Provides the process-wide async client and the comments index mapping.
"""

from typing import Any

import logfire
from elasticsearch import AsyncElasticsearch

from quill.config import Settings
from quill.util.error import ConfigurationError

# Replies travel inside the thread document and are never indexed
COMMENTS_MAPPING: dict[str, Any] = {
    "properties": {
        "comment_id": {"type": "keyword"},
        "post_id": {"type": "keyword"},
        "author": {
            "properties": {
                "name": {"type": "text"},
                "email": {"type": "keyword"},
                "website": {"type": "keyword"},
            }
        },
        "content": {"type": "text"},
        "user_host_address": {"type": "keyword"},
        "user_agent": {"type": "keyword"},
        "spam": {"type": "boolean"},
        "approved": {"type": "boolean"},
        "published_at": {"type": "date"},
        "replies": {"type": "object", "enabled": False},
    }
}


def create_client(settings: Settings) -> AsyncElasticsearch:
    """Create the async Elasticsearch client.

    Timeouts and retries apply to every call made through the client.

    Args:
        settings: Application settings

    Returns:
        Configured client

    Raises:
        ConfigurationError: If only half of the basic auth pair is set
    """
    es = settings.elasticsearch
    kwargs: dict[str, Any] = {
        "hosts": es.hosts,
        "request_timeout": es.request_timeout,
        "max_retries": es.max_retries,
        "retry_on_timeout": es.retry_on_timeout,
    }

    if es.api_key:
        kwargs["api_key"] = es.api_key
    elif es.username or es.password:
        if not (es.username and es.password):
            raise ConfigurationError(
                "ELASTICSEARCH__USERNAME and ELASTICSEARCH__PASSWORD must be set together"
            )
        kwargs["basic_auth"] = (es.username, es.password)

    return AsyncElasticsearch(**kwargs)


async def ensure_comments_index(client: AsyncElasticsearch, settings: Settings) -> bool:
    """Create the comments index with its mapping if it does not exist.

    Returns:
        True if the index was created
    """
    index = settings.elasticsearch.comments_index
    if await client.indices.exists(index=index):
        logfire.info("Comments index present", index=index)
        return False

    await client.indices.create(index=index, mappings=COMMENTS_MAPPING)
    logfire.info("Comments index created", index=index)
    return True
