"""
Timestamp model for dateformat.

A Timestamp pairs an instant (integer epoch milliseconds) with the zone that
decides its UTC offset. Every calendar field used by the format tokens is
derived from those two values:
- Local calendar fields (year, month, day, weekday, hour, ...)
- UTC offset of the instant in minutes (positive = east of UTC)
- Best-effort zone identifier and abbreviation
"""

from __future__ import annotations

from datetime import date, datetime, timedelta, timezone, tzinfo
from typing import Any

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
NAIVE_EPOCH = datetime(1970, 1, 1)
ONE_MILLISECOND = timedelta(milliseconds=1)


class Timestamp:
    """
    An immutable instant with its local calendar view.

    Only millisecond precision is kept. Naive datetimes are interpreted in
    the local system zone, which Python exposes as a fixed offset.
    """

    __slots__ = ("_epoch_ms", "_tz", "_local")

    def __init__(self, epoch_ms: int, tz: tzinfo | None = None):
        """
        Initialize the timestamp.

        Args:
            epoch_ms: Milliseconds since 1970-01-01T00:00:00Z
            tz: Zone deciding the UTC offset (defaults to UTC)
        """
        self._epoch_ms = int(epoch_ms)
        self._tz = tz if tz is not None else timezone.utc
        self._local = _local_view(self._epoch_ms, self._tz)

    @classmethod
    def from_datetime(cls, dt: date) -> Timestamp:
        """
        Build a timestamp from a datetime (or a date, taken at midnight).

        Args:
            dt: datetime or date object

        Returns:
            Timestamp for the same instant and zone
        """
        if not isinstance(dt, datetime):
            dt = datetime(dt.year, dt.month, dt.day)
        if dt.tzinfo is None or dt.utcoffset() is None:
            dt = dt.astimezone()
        epoch_ms = (dt - EPOCH) // ONE_MILLISECOND
        try:
            return cls(epoch_ms, dt.tzinfo)
        except OverflowError:
            # Keep the caller's wall clock when the UTC instant lies outside
            # the datetime range
            ts = cls.__new__(cls)
            ts._epoch_ms = epoch_ms
            ts._tz = dt.tzinfo
            ts._local = dt.replace(microsecond=dt.microsecond // 1000 * 1000)
            return ts

    @classmethod
    def from_epoch(cls, seconds: float, tz: tzinfo | None = None) -> Timestamp:
        """Build a timestamp from Unix epoch seconds."""
        return cls(round(seconds * 1000), tz)

    @classmethod
    def now(cls, tz: tzinfo | None = None) -> Timestamp:
        """Current instant, in ``tz`` or in the local system zone."""
        return cls.from_datetime(datetime.now(tz))

    @classmethod
    def coerce(cls, value: Any) -> Timestamp:
        """
        Convert a supported value to a Timestamp.

        Accepts a Timestamp, a datetime, a date, or epoch seconds.

        Raises:
            TypeError: If the value cannot be interpreted as an instant
        """
        if isinstance(value, Timestamp):
            return value
        if isinstance(value, date):
            return cls.from_datetime(value)
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return cls.from_epoch(value)
        raise TypeError(f"Cannot interpret {type(value).__name__} as a timestamp")

    # -------------------------------------------------------------------------
    # Primary values
    # -------------------------------------------------------------------------

    @property
    def epoch_ms(self) -> int:
        return self._epoch_ms

    @property
    def tz(self) -> tzinfo:
        return self._tz

    # -------------------------------------------------------------------------
    # Derived local fields
    # -------------------------------------------------------------------------

    @property
    def year(self) -> int:
        return self._local.year

    @property
    def month(self) -> int:
        """Month of the year, 1-12."""
        return self._local.month

    @property
    def day(self) -> int:
        return self._local.day

    @property
    def weekday(self) -> int:
        """Day of the week, 0 (Sunday) to 6 (Saturday)."""
        return self._local.isoweekday() % 7

    @property
    def hour(self) -> int:
        return self._local.hour

    @property
    def minute(self) -> int:
        return self._local.minute

    @property
    def second(self) -> int:
        return self._local.second

    @property
    def millisecond(self) -> int:
        return self._local.microsecond // 1000

    @property
    def offset_minutes(self) -> int:
        """UTC offset of this instant in minutes, positive east of UTC."""
        return _offset_minutes(self._local)

    @property
    def standard_offset_minutes(self) -> int:
        """
        The zone's standard (non-DST) offset for this year.

        Taken as the smallest offset seen on the first day of each month.
        """
        return min(
            _offset_minutes(datetime(self.year, month, 1, tzinfo=self._tz))
            for month in range(1, 13)
        )

    @property
    def zone_name(self) -> str | None:
        """IANA key for zoneinfo zones, otherwise the zone's display name."""
        key = getattr(self._tz, "key", None)
        if key:
            return key
        return self._local.tzname()

    @property
    def zone_abbreviation(self) -> str | None:
        return self._local.tzname()

    def to_datetime(self) -> datetime:
        """Aware datetime in this timestamp's zone."""
        return self._local

    def local_date(self) -> date:
        return self._local.date()

    def utc(self) -> datetime:
        return self._local.astimezone(timezone.utc)

    def format(self, format_string: str, lang: str | None = None) -> str:
        """Format this timestamp with the global formatter."""
        from dateformat.formatter import format_date

        return format_date(self, format_string, lang)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Timestamp):
            return NotImplemented
        return self._epoch_ms == other._epoch_ms and self.offset_minutes == other.offset_minutes

    def __hash__(self) -> int:
        return hash((self._epoch_ms, self.offset_minutes))

    def __repr__(self) -> str:
        return f"Timestamp({self._local.isoformat(timespec='milliseconds')})"


def _offset_minutes(dt: datetime) -> int:
    offset = dt.utcoffset()
    if offset is None:
        return 0
    # Truncate toward zero so historical second-level offsets keep their sign
    return int(offset.total_seconds() / 60)


def _local_view(epoch_ms: int, tz: tzinfo) -> datetime:
    delta = epoch_ms * ONE_MILLISECOND
    try:
        return (EPOCH + delta).astimezone(tz)
    except OverflowError:
        # The UTC instant is out of range but the local one may not be
        offset = tz.utcoffset(None)
        if offset is None:
            raise
        return (NAIVE_EPOCH + (delta + offset)).replace(tzinfo=tz)
