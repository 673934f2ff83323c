"""Mappers between domain objects and Elasticsearch request/response bodies."""

from datetime import timezone
from typing import Any, Mapping

from quill.domain.model import (
    Comment,
    DateBucket,
    Post,
    PostBucket,
    Thread,
    ThreadVersion,
)
from quill.domain.value import CommentQuery, HistogramInterval, PostId

POST_IDS_AGG = "post_ids"
HISTOGRAM_AGG = "comments_histogram"


def query_to_es(query: CommentQuery) -> dict[str, Any]:
    """Translate a comment query to Elasticsearch query DSL.

    Every condition is a non-scoring filter clause; an empty query is
    ``match_all``.
    """
    if query.is_match_all:
        return {"match_all": {}}

    filters: list[dict[str, Any]] = []

    if query.post_ids is not None:
        filters.append({"terms": {"post_id": list(query.post_ids)}})

    if query.published_since is not None:
        since = query.published_since
        if since.tzinfo is None:
            since = since.replace(tzinfo=timezone.utc)
        filters.append({"range": {"published_at": {"gte": since.isoformat()}}})

    if query.visible_only:
        filters.append({"term": {"approved": True}})
        filters.append({"bool": {"must_not": {"term": {"spam": True}}}})

    return {"bool": {"filter": filters}}


def sort_to_es(query: CommentQuery) -> list[Any]:
    """Sort clause; unsorted scans use index order."""
    if query.sort is None:
        return ["_doc"]
    return [{"published_at": {"order": query.sort.value}}]


def stats_aggs_to_es(top_posts: int, interval: HistogramInterval) -> dict[str, Any]:
    """Aggregations for the stats search.

    Post buckets are ordered by count, ties by ascending post id.
    """
    return {
        POST_IDS_AGG: {
            "terms": {
                "field": "post_id",
                "size": top_posts,
                "order": [{"_count": "desc"}, {"_key": "asc"}],
            }
        },
        HISTOGRAM_AGG: {
            "date_histogram": {
                "field": "published_at",
                **interval.to_es_params(),
            }
        },
    }


def hit_to_comment(hit: Mapping[str, Any]) -> Comment:
    """Root comment from a search hit, keyed by the hit's document id."""
    return Comment.from_document(hit["_source"], thread_id=hit["_id"])


def response_to_thread(response: Mapping[str, Any]) -> Thread:
    """Thread from a get response, carrying its concurrency token."""
    return Thread(
        id=response["_id"],
        version=ThreadVersion(
            seq_no=response["_seq_no"],
            primary_term=response["_primary_term"],
        ),
        root=Comment.from_document(response["_source"], thread_id=response["_id"]),
    )


def buckets_to_post_buckets(aggregations: Mapping[str, Any]) -> list[PostBucket]:
    return [
        PostBucket(post_id=PostId(str(bucket["key"])), doc_count=bucket["doc_count"])
        for bucket in aggregations.get(POST_IDS_AGG, {}).get("buckets", [])
    ]


def buckets_to_date_buckets(aggregations: Mapping[str, Any]) -> list[DateBucket]:
    return [
        DateBucket(
            key=bucket["key"],
            key_as_string=bucket.get("key_as_string", str(bucket["key"])),
            doc_count=bucket["doc_count"],
        )
        for bucket in aggregations.get(HISTOGRAM_AGG, {}).get("buckets", [])
    ]


def doc_to_post(doc: Mapping[str, Any]) -> Post:
    """Post from an mget entry; the document id wins over any stored id."""
    return Post.model_validate({**doc["_source"], "id": doc["_id"]})
