"""Domain value objects for the comment engine.

Value objects are immutable and defined by their values, not identity.
They encapsulate validation rules and parsing of caller-supplied input.
"""

import json
import re
from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import Field, field_validator
from pydantic import ValidationError as PydanticValidationError

from quill.domain.error import ValidationError
from quill.domain.value.common import RootValueObject, ValueObject
from quill.domain.value.identifiers import PostId, ThreadId


class SortOrder(str, Enum):
    """Sort direction on ``published_at``."""

    ASC = "asc"
    DESC = "desc"


class RecipientPath(ValueObject):
    """Address of the node a reply attaches to.

    The first element is the id of the thread document, every following
    element is a zero-based index into the ``replies`` of the current level.
    ``["abc"]`` targets the root comment of thread ``abc``,
    ``["abc", 0, 2]`` the third reply of its first reply.

    Paths are plain values; they are resolved against the current state of
    the thread each time they are used.
    """

    thread_id: ThreadId = Field(min_length=1)
    indices: tuple[int, ...] = ()

    @field_validator("indices")
    @classmethod
    def validate_indices(cls, v: tuple[int, ...]) -> tuple[int, ...]:
        """Reject negative indices, which would address from the end."""
        if any(index < 0 for index in v):
            raise ValueError("Reply indices must be zero or positive")
        return v

    @classmethod
    def parse(cls, raw: str | list[Any] | None) -> "RecipientPath | None":
        """Parse a serialized recipient path.

        Accepts the JSON text form (``'["abc", 0, 1]'``) or an already
        decoded list. ``None`` means the comment starts a new thread.

        Args:
            raw: Serialized path

        Returns:
            Parsed path, or None for a new thread

        Raises:
            ValidationError: If the path is malformed
        """
        if raw is None:
            return None

        elements = raw
        if isinstance(raw, str):
            try:
                elements = json.loads(raw)
            except json.JSONDecodeError:
                raise ValidationError(
                    [{"field": "recipient_path", "message": "Not valid JSON"}]
                )

        if not isinstance(elements, list) or not elements:
            raise ValidationError(
                [
                    {
                        "field": "recipient_path",
                        "message": "Must be a non-empty array",
                    }
                ]
            )

        thread_id, *indices = elements
        if not isinstance(thread_id, str):
            raise ValidationError(
                [
                    {
                        "field": "recipient_path",
                        "message": "First element must be a thread id",
                    }
                ]
            )
        # bool is an int subclass, but [id, true] is not a path
        if any(isinstance(i, bool) or not isinstance(i, int) for i in indices):
            raise ValidationError(
                [
                    {
                        "field": "recipient_path",
                        "message": "Reply indices must be integers",
                    }
                ]
            )

        try:
            return cls(thread_id=ThreadId(thread_id), indices=tuple(indices))
        except PydanticValidationError as e:
            raise ValidationError.from_pydantic(e, prefix="recipient_path")

    def serialize(self) -> str:
        """Return the JSON text form of the path."""
        return json.dumps([self.thread_id, *self.indices])

    def child(self, index: int) -> "RecipientPath":
        """Path of the ``index``-th reply of the node this path targets."""
        return RecipientPath(thread_id=self.thread_id, indices=(*self.indices, index))


_INTERVAL_RE = re.compile(r"^(\d+)(ms|s|m|h|d|w|M|q|y)$")

_CALENDAR_UNITS = {"m", "h", "d", "w", "M", "q", "y"}
_FIXED_UNITS = {"ms", "s", "m", "h", "d"}
_CALENDAR_WORDS = {
    "minute": "1m",
    "hour": "1h",
    "day": "1d",
    "week": "1w",
    "month": "1M",
    "quarter": "1q",
    "year": "1y",
}


class HistogramInterval(RootValueObject[str]):
    """Bucket width of the comments date histogram.

    Uses Elasticsearch interval syntax. Single units (``1d``, ``1M``,
    ``week``) are calendar-aware; multiples of fixed units (``12h``,
    ``90m``) are fixed-width. Anything else is rejected.
    """

    @field_validator("root")
    @classmethod
    def validate_interval(cls, v: str) -> str:
        """Normalize calendar words and check the unit is usable."""
        v = _CALENDAR_WORDS.get(v.strip(), v.strip())
        match = _INTERVAL_RE.match(v)
        if not match:
            raise ValueError(f"Unrecognized interval: {v!r}")
        amount, unit = int(match.group(1)), match.group(2)
        if amount < 1:
            raise ValueError("Interval must be at least one unit")
        if not (amount == 1 and unit in _CALENDAR_UNITS) and unit not in _FIXED_UNITS:
            raise ValueError(f"Unit {unit!r} only supports an interval of 1")
        # Elasticsearch rejects leading zeros such as "01d"
        return f"{amount}{unit}"

    @classmethod
    def parse(cls, raw: str) -> "HistogramInterval":
        """Parse an interval, raising a domain ValidationError on bad input."""
        try:
            return cls(raw)
        except PydanticValidationError as e:
            raise ValidationError.from_pydantic(e, prefix="interval")

    @property
    def amount(self) -> int:
        return int(_INTERVAL_RE.match(self.root).group(1))

    @property
    def unit(self) -> str:
        return _INTERVAL_RE.match(self.root).group(2)

    @property
    def is_calendar(self) -> bool:
        return self.amount == 1 and self.unit in _CALENDAR_UNITS

    def to_es_params(self) -> dict[str, str]:
        """Histogram parameters in Elasticsearch form."""
        key = "calendar_interval" if self.is_calendar else "fixed_interval"
        return {key: self.root}


class CommentQuery(ValueObject):
    """Store-neutral filter over root comment documents.

    Every field narrows the match; an empty query matches everything.
    ``visible_only`` keeps roots that are approved and not marked as spam.
    """

    post_ids: tuple[PostId, ...] | None = None
    published_since: datetime | None = None
    visible_only: bool = False
    sort: SortOrder | None = None

    @property
    def is_match_all(self) -> bool:
        return (
            self.post_ids is None
            and self.published_since is None
            and not self.visible_only
        )
