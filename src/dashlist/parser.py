"""Parsers for the item grammar of dash-marked todo lists.

An item is written as::

    [x] Title text ;; :2016/12/13T13:00:
     free form description

Every parser works on a ``bytes`` buffer and a cursor. Parsers return a
``(value, new_pos)`` tuple and raise a ``ParseError`` subclass when the
input does not match; they never consume anything on failure.
"""

import logging
import re
from typing import Optional, Tuple

from .exceptions import (
    EmptyTitle,
    MalformedCheckbox,
    MalformedDate,
    MalformedNumber,
    MalformedText,
    MalformedTime,
    MissingTitleDelimiter,
)
from .todo import DateTime, Item, Time

logger = logging.getLogger(__name__)

WHITESPACE = b" \t\r\n"
TITLE_DELIMITER = b";;"
STAMP_DELIMITER = b":"
DATE_SEPARATORS = (b"-", b"/")
TIME_SEPARATORS = (b"t", b"T")
CHECKED_MARKS = (b"x", b"X")
BOX_MARKS = (b" ",) + CHECKED_MARKS

DIGITS_RE = re.compile(rb"[0-9]+")


def skip_ws(data: bytes, pos: int) -> int:
    """Return the first position at or after ``pos`` that is not whitespace."""
    while pos < len(data) and data[pos] in WHITESPACE:
        pos += 1
    return pos


def get_num(data: bytes) -> int:
    """Convert a slice made only of ASCII digits into an int."""
    if not DIGITS_RE.fullmatch(data):
        raise MalformedNumber(f"Expected digits, got {data!r}")
    return int(data)


def _fixed_num(data: bytes, pos: int, width: int, error_cls, label: str) -> Tuple[int, int]:
    span = data[pos:pos + width]
    if len(span) < width:
        raise error_cls(f"{label}: expected {width} characters, got {span!r}", pos)
    try:
        return get_num(span), pos + width
    except MalformedNumber as e:
        raise error_cls(f"{label}: {e}", pos) from e


def get_time(data: bytes, pos: int = 0) -> Tuple[Time, int]:
    """Parse ``HH:MM`` or ``HHMM``."""
    hours, pos = _fixed_num(data, pos, 2, MalformedTime, "hours")
    if data[pos:pos + 1] == b":":
        pos += 1
    minutes, pos = _fixed_num(data, pos, 2, MalformedTime, "minutes")
    return Time(hours=hours, minutes=minutes), pos


def _date_separator(data: bytes, pos: int) -> int:
    sep = data[pos:pos + 1]
    if sep not in DATE_SEPARATORS:
        raise MalformedDate(f"Expected '-' or '/' date separator, got {sep!r}", pos)
    return pos + 1


def get_datetime(data: bytes, pos: int = 0) -> Tuple[DateTime, int]:
    """Parse ``YYYY-MM-DD`` with an optional ``THH:MM`` suffix.

    Either separator may be ``-`` or ``/``, independently of the other. A
    ``t``/``T`` followed by a malformed time is not part of the literal and
    is left unconsumed.
    """
    year, pos = _fixed_num(data, pos, 4, MalformedDate, "year")
    pos = _date_separator(data, pos)
    month, pos = _fixed_num(data, pos, 2, MalformedDate, "month")
    pos = _date_separator(data, pos)
    day, pos = _fixed_num(data, pos, 2, MalformedDate, "day")

    time = None
    if data[pos:pos + 1] in TIME_SEPARATORS:
        try:
            time, pos = get_time(data, pos + 1)
        except MalformedTime as e:
            logger.debug(f"Ignoring time suffix at {pos}: {e}")

    return DateTime(year=year, month=month, day=day, time=time), pos


def todo_box(data: bytes, pos: int = 0) -> Tuple[bool, int]:
    """Parse ``[]``, ``[ ]``, ``[x]`` or ``[X]``; True means ticked."""
    if data[pos:pos + 1] != b"[":
        raise MalformedCheckbox("Expected '['", pos)
    cursor = pos + 1

    mark = data[cursor:cursor + 1]
    if mark in BOX_MARKS:
        cursor += 1
    else:
        mark = None

    if data[cursor:cursor + 1] != b"]":
        raise MalformedCheckbox(f"Expected ']' at {cursor}, got {data[cursor:cursor + 1]!r}", pos)
    return mark in CHECKED_MARKS, cursor + 1


def _decode(span: bytes, encoding: str, pos: int) -> str:
    try:
        return span.strip(WHITESPACE).decode(encoding)
    except UnicodeDecodeError as e:
        raise MalformedText(f"Cannot decode text as {encoding}: {e.reason}", pos + e.start) from e


def item_head(data: bytes, pos: int = 0, encoding: str = "utf-8") -> Tuple[str, int]:
    """Take the title up to ``;;`` and consume the delimiter."""
    end = data.find(TITLE_DELIMITER, pos)
    if end == -1:
        raise MissingTitleDelimiter("Title is not terminated by ';;'", pos)
    text = _decode(data[pos:end], encoding, pos)
    if not text:
        raise EmptyTitle("Title is empty", pos)
    return text, end + len(TITLE_DELIMITER)


def item_stamp(data: bytes, pos: int = 0) -> Tuple[DateTime, int]:
    """Parse ``:datetime:`` starting exactly at ``pos``."""
    if data[pos:pos + 1] != STAMP_DELIMITER:
        raise MalformedDate("Expected ':' before date", pos)
    stamp, cursor = get_datetime(data, pos + 1)
    if data[cursor:cursor + 1] != STAMP_DELIMITER:
        raise MalformedDate(f"Expected closing ':' at {cursor}", cursor)
    return stamp, cursor + 1


def item_body(data: bytes, pos: int = 0, encoding: str = "utf-8") -> Optional[str]:
    """Take the rest of the buffer as the description; blank means None."""
    return _decode(data[pos:], encoding, pos) or None


def parse_item(data: bytes, encoding: str = "utf-8") -> Item:
    """Parse the text of one block into an Item.

    Raises:
        MissingTitleDelimiter: If the text has no ``;;``.
        EmptyTitle: If nothing but whitespace precedes ``;;``.
        MalformedText: If the title or body cannot be decoded.
    """
    pos = skip_ws(data, 0)

    todo = None
    if data[pos:pos + 1] == b"[":
        try:
            todo, after_box = todo_box(data, pos)
            pos = skip_ws(data, after_box)
        except MalformedCheckbox:
            # Not a box; the brackets belong to the title
            todo = None

    text, pos = item_head(data, pos, encoding)
    pos = skip_ws(data, pos)

    time = None
    if data[pos:pos + 1] == STAMP_DELIMITER:
        try:
            time, after_stamp = item_stamp(data, pos)
            pos = skip_ws(data, after_stamp)
        except MalformedDate as e:
            logger.debug(f"No date stamp for {text!r}: {e}")

    description = item_body(data, pos, encoding)

    return Item(
        text=text,
        todo=todo,
        time=time,
        description=description,
        children=(),
    )
