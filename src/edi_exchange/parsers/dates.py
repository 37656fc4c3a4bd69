"""
Date and time normalization for outgoing documents.

Trading partners and upstream systems hand us dates in several shapes
('2018-08-12', '2018-08-12 22:54:24', '8/12/18'). Outgoing documents must
carry exactly:
- dates as YYYY-MM-DD
- times as HH:MM:SS+00:00
"""

from datetime import datetime, timezone
from typing import Optional

from edi_exchange.exceptions import FormatError

DATE_FORMAT = '%Y-%m-%d'
TIME_FORMAT = '%H:%M:%S+00:00'

# Tried in order after ISO parsing fails
_DATE_FORMATS = [
    '%m/%d/%y',
    '%m/%d/%Y',
    '%m/%d/%y %H:%M:%S',
    '%m/%d/%Y %H:%M:%S',
]

_TIME_FORMATS = [
    '%H:%M:%S',
    '%H:%M',
]


def _parse_iso(value: str) -> Optional[datetime]:
    try:
        return datetime.fromisoformat(value)
    except ValueError:
        return None


def _parse_formats(value: str, formats) -> Optional[datetime]:
    for fmt in formats:
        try:
            return datetime.strptime(value, fmt)
        except ValueError:
            continue
    return None


def to_utc(moment: datetime) -> datetime:
    """Convert offset-aware values to UTC; naive values are returned unchanged."""
    if moment.tzinfo is not None:
        return moment.astimezone(timezone.utc)
    return moment


def parse_datetime(value: str) -> datetime:
    """
    Parse a date or date+time string in any supported shape.

    Supported: ISO date, ISO date+time (space or 'T' separator, optional
    offset), M/D/YY, MM/DD/YY, M/D/YYYY, each optionally followed by H:MM:SS.

    Raises:
        FormatError: If no supported shape matches
    """
    text = (value or '').strip()
    moment = _parse_iso(text) or _parse_formats(text, _DATE_FORMATS)
    if moment is None:
        raise FormatError(f"Unsupported date format: {value!r}")
    return moment


def format_date(value: str) -> str:
    """
    Normalize a date string to YYYY-MM-DD.

    Offset-aware input is converted to UTC first, so the date always agrees
    with format_time() for the same value.

    Example:
        >>> format_date('8/12/18')
        '2018-08-12'
        >>> format_date('2018-08-12 22:54:24')
        '2018-08-12'

    Raises:
        FormatError: If value matches no supported shape
    """
    return to_utc(parse_datetime(value)).strftime(DATE_FORMAT)


def format_time(value: str) -> str:
    """
    Normalize a time, date or date+time string to HH:MM:SS+00:00.

    A bare date yields midnight. Offset-aware input is converted to UTC.

    Example:
        >>> format_time('2:54:00')
        '02:54:00+00:00'
        >>> format_time('2018-08-12')
        '00:00:00+00:00'

    Raises:
        FormatError: If value matches no supported shape
    """
    text = (value or '').strip()
    moment = _parse_formats(text, _TIME_FORMATS)
    if moment is None:
        try:
            moment = parse_datetime(text)
        except FormatError:
            raise FormatError(f"Unsupported time format: {value!r}") from None
    return to_utc(moment).strftime(TIME_FORMAT)
