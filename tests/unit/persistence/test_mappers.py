"""Unit tests for Elasticsearch mappers."""

from datetime import datetime

from quill.domain.value import CommentQuery, HistogramInterval, SortOrder
from quill.persistence.mappers import (
    buckets_to_date_buckets,
    buckets_to_post_buckets,
    doc_to_post,
    hit_to_comment,
    query_to_es,
    sort_to_es,
    stats_aggs_to_es,
)
from tests.conftest import make_comment


class TestQueryToEs:
    """Tests for query translation."""

    def test_empty_query_matches_all(self):
        assert query_to_es(CommentQuery()) == {"match_all": {}}

    def test_post_ids_and_visibility(self):
        query = query_to_es(CommentQuery(post_ids=("a", "b"), visible_only=True))

        assert query == {
            "bool": {
                "filter": [
                    {"terms": {"post_id": ["a", "b"]}},
                    {"term": {"approved": True}},
                    {"bool": {"must_not": {"term": {"spam": True}}}},
                ]
            }
        }

    def test_naive_start_date_is_utc(self):
        query = query_to_es(CommentQuery(published_since=datetime(2024, 1, 1)))

        assert query["bool"]["filter"] == [
            {"range": {"published_at": {"gte": "2024-01-01T00:00:00+00:00"}}}
        ]


class TestSortToEs:
    """Tests for sort clauses."""

    def test_unsorted_uses_doc_order(self):
        assert sort_to_es(CommentQuery()) == ["_doc"]

    def test_descending(self):
        assert sort_to_es(CommentQuery(sort=SortOrder.DESC)) == [
            {"published_at": {"order": "desc"}}
        ]


class TestStatsAggs:
    """Tests for stats aggregations."""

    def test_terms_tie_break_and_interval(self):
        aggs = stats_aggs_to_es(5, HistogramInterval("12h"))

        assert aggs["post_ids"]["terms"] == {
            "field": "post_id",
            "size": 5,
            "order": [{"_count": "desc"}, {"_key": "asc"}],
        }
        assert aggs["comments_histogram"]["date_histogram"] == {
            "field": "published_at",
            "fixed_interval": "12h",
        }

    def test_buckets_parsed(self):
        aggregations = {
            "post_ids": {"buckets": [{"key": "p1", "doc_count": 3}]},
            "comments_histogram": {
                "buckets": [
                    {
                        "key": 1704067200000,
                        "key_as_string": "2024-01-01T00:00:00.000Z",
                        "doc_count": 3,
                    }
                ]
            },
        }

        [post_bucket] = buckets_to_post_buckets(aggregations)
        [date_bucket] = buckets_to_date_buckets(aggregations)

        assert (post_bucket.post_id, post_bucket.doc_count) == ("p1", 3)
        assert date_bucket.key == 1704067200000

    def test_missing_aggregations(self):
        assert buckets_to_post_buckets({}) == []
        assert buckets_to_date_buckets({}) == []


class TestDocuments:
    """Tests for document conversion."""

    def test_hit_carries_thread_id(self):
        source = make_comment(replies=[make_comment("r")]).to_document()

        comment = hit_to_comment({"_id": "t1", "_source": source})

        assert comment.id == "t1"
        assert comment.replies[0].comment_id == "r"
        assert comment.replies[0].id is None

    def test_document_has_no_thread_id(self):
        comment = make_comment().model_copy(update={"id": "t1"})

        assert "id" not in comment.to_document()

    def test_legacy_null_spam(self):
        source = make_comment().to_document()
        source["spam"] = None
        source["replies"] = None

        comment = hit_to_comment({"_id": "t1", "_source": source})

        assert comment.spam is False
        assert comment.replies == []
        assert comment.published_at.utcoffset().total_seconds() == 0

    def test_post_keeps_extra_fields(self):
        post = doc_to_post(
            {"_id": "p1", "_source": {"title": "Hello", "slug": "hello", "tags": ["x"]}}
        )

        assert post.id == "p1"
        assert post.model_dump()["tags"] == ["x"]
