"""Decide whether a content item is visible at a fixed moment in time.

Items may be marked as drafts, scheduled for a future publication date, or
given an expiration date. :class:`TemporalFilter` evaluates those fields
against a ``now`` captured once per generation run so every item in the run is
judged against the same clock.

Examples
--------
>>> import datetime as dt
>>> now = dt.datetime(2024, 5, 1, 12, 0, tzinfo=dt.UTC)
>>> gate = TemporalFilter(now)
>>> gate.evaluate({"publication": "2024-05-01 12:00:00"}).included
True
>>> gate.evaluate({"draft": True}).reason
'draft'
"""

from __future__ import annotations

import dataclasses as dc
import datetime as dt
import enum
import logging
import typing as typ

from ._constants import DEFAULT_DATE_FORMAT
from .front_matter import FrontMatter

if typ.TYPE_CHECKING:
    import collections.abc as cabc

logger = logging.getLogger(__name__)


class DateFormatError(ValueError):
    """Raised when a date value does not match the configured format."""


class Exclusion(enum.StrEnum):
    """Reason an item was filtered out."""

    DRAFT = "draft"
    SCHEDULED = "scheduled"
    EXPIRED = "expired"


@dc.dataclass(slots=True, frozen=True)
class Visibility:
    """Outcome of evaluating an item's temporal metadata.

    Attributes
    ----------
    draft : bool
        Value of the ``draft`` flag (``False`` when absent).
    publication : datetime
        Effective publication time; ``now`` when absent or unparsable.
    expiration : datetime | None
        Effective expiration time, if one was given and could be parsed.
    reason : Exclusion | None
        Why the item is excluded, or ``None`` when it is included.
    """

    draft: bool
    publication: dt.datetime
    expiration: dt.datetime | None
    reason: Exclusion | None = None

    @property
    def included(self) -> bool:
        return self.reason is None


def _as_utc(value: dt.datetime) -> dt.datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=dt.UTC)
    return value.astimezone(dt.UTC)


def parse_content_date(
    value: object, date_format: str = DEFAULT_DATE_FORMAT
) -> dt.datetime:
    """Return a UTC datetime for ``value`` using ``date_format``.

    Strings are parsed with :meth:`datetime.strptime`; datetimes and dates
    already decoded by the YAML loader are accepted as they are. Naive values
    are interpreted as UTC.

    Raises
    ------
    DateFormatError
        If ``value`` cannot be interpreted as a date.
    """
    match value:
        case dt.datetime():
            return _as_utc(value)
        case dt.date():
            return dt.datetime(value.year, value.month, value.day, tzinfo=dt.UTC)
        case str() as text:
            try:
                return _as_utc(dt.datetime.strptime(text.strip(), date_format))
            except ValueError as exc:
                msg = f"Date {text!r} does not match format {date_format!r}."
                raise DateFormatError(msg) from exc
        case _:
            msg = f"Unsupported date value {value!r}."
            raise DateFormatError(msg)


class TemporalFilter:
    """Apply draft, publication, and expiration rules against a fixed clock."""

    def __init__(
        self, now: dt.datetime, *, date_format: str = DEFAULT_DATE_FORMAT
    ) -> None:
        self.now = _as_utc(now)
        self.date_format = date_format

    def evaluate(
        self, front_matter: cabc.Mapping[str, typ.Any] | FrontMatter
    ) -> Visibility:
        """Return the :class:`Visibility` verdict for ``front_matter``.

        Rules apply in order: drafts are excluded, then items published after
        ``now``, then items whose expiration lies before ``now``. Both
        boundaries are inclusive, so an item published or expiring exactly at
        ``now`` is visible.
        """
        meta = (
            front_matter
            if isinstance(front_matter, FrontMatter)
            else FrontMatter(front_matter)
        )
        draft = meta.boolean("draft") or False
        publication = self._resolve(meta, "publication") or self.now
        expiration = self._resolve(meta, "expiration")

        reason: Exclusion | None = None
        if draft:
            reason = Exclusion.DRAFT
        elif publication > self.now:
            reason = Exclusion.SCHEDULED
        elif expiration is not None and expiration < self.now:
            reason = Exclusion.EXPIRED
        return Visibility(
            draft=draft,
            publication=publication,
            expiration=expiration,
            reason=reason,
        )

    def _resolve(self, meta: FrontMatter, key: str) -> dt.datetime | None:
        raw = meta.value(key)
        if raw is None:
            return None
        try:
            return parse_content_date(raw, self.date_format)
        except DateFormatError as exc:
            logger.debug("Ignoring %s value: %s", key, exc)
            return None


__all__ = [
    "DateFormatError",
    "Exclusion",
    "TemporalFilter",
    "Visibility",
    "parse_content_date",
]
