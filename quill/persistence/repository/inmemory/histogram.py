"""Date histogram bucketing matching Elasticsearch semantics.

Calendar intervals align to UTC calendar boundaries (weeks start on
Monday). Fixed intervals align to multiples of their width since the epoch.
Buckets run from the first to the last non-empty one with empty buckets
in between, like a ``date_histogram`` with default ``min_doc_count``.
"""

from collections import Counter
from datetime import datetime, timedelta, timezone
from typing import Iterable

from quill.domain.model import DateBucket
from quill.domain.value import HistogramInterval

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

FIXED_UNIT_WIDTH = {
    "ms": timedelta(milliseconds=1),
    "s": timedelta(seconds=1),
    "m": timedelta(minutes=1),
    "h": timedelta(hours=1),
    "d": timedelta(days=1),
}


def _as_utc(moment: datetime) -> datetime:
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc)


def _add_months(moment: datetime, months: int) -> datetime:
    years, month_index = divmod(moment.month - 1 + months, 12)
    return moment.replace(year=moment.year + years, month=month_index + 1)


def bucket_start(moment: datetime, interval: HistogramInterval) -> datetime:
    """Start of the bucket containing ``moment``."""
    moment = _as_utc(moment)

    if not interval.is_calendar:
        width = FIXED_UNIT_WIDTH[interval.unit] * interval.amount
        return EPOCH + ((moment - EPOCH) // width) * width

    unit = interval.unit
    if unit == "m":
        return moment.replace(second=0, microsecond=0)
    if unit == "h":
        return moment.replace(minute=0, second=0, microsecond=0)

    day = moment.replace(hour=0, minute=0, second=0, microsecond=0)
    if unit == "d":
        return day
    if unit == "w":
        return day - timedelta(days=day.weekday())
    if unit == "M":
        return day.replace(day=1)
    if unit == "q":
        return day.replace(month=(day.month - 1) // 3 * 3 + 1, day=1)
    return day.replace(month=1, day=1)


def next_bucket_start(start: datetime, interval: HistogramInterval) -> datetime:
    """Start of the bucket following the one starting at ``start``."""
    if not interval.is_calendar:
        return start + FIXED_UNIT_WIDTH[interval.unit] * interval.amount

    unit = interval.unit
    if unit == "m":
        return start + timedelta(minutes=1)
    if unit == "h":
        return start + timedelta(hours=1)
    if unit == "d":
        return start + timedelta(days=1)
    if unit == "w":
        return start + timedelta(weeks=1)
    if unit == "M":
        return _add_months(start, 1)
    if unit == "q":
        return _add_months(start, 3)
    return _add_months(start, 12)


def _epoch_millis(moment: datetime) -> int:
    return (moment - EPOCH) // timedelta(milliseconds=1)


def _format_key(moment: datetime) -> str:
    """Same text as Elasticsearch's default date format."""
    return moment.strftime("%Y-%m-%dT%H:%M:%S.") + f"{moment.microsecond // 1000:03d}Z"


def date_histogram(
    moments: Iterable[datetime], interval: HistogramInterval
) -> list[DateBucket]:
    """Bucket timestamps, filling gaps with empty buckets."""
    counts = Counter(bucket_start(moment, interval) for moment in moments)
    if not counts:
        return []

    buckets = []
    start, last = min(counts), max(counts)
    while start <= last:
        buckets.append(
            DateBucket(
                key=_epoch_millis(start),
                key_as_string=_format_key(start),
                doc_count=counts.get(start, 0),
            )
        )
        start = next_bucket_start(start, interval)
    return buckets
