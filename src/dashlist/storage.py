"""Text serialization for items in the dash-marked list format."""

from typing import Iterable, Tuple

from .blocks import MARKER
from .parser import parse_item
from .todo import DateTime, Item


def format_datetime(stamp: DateTime) -> str:
    """Render ``YYYY-MM-DD`` with ``THH:MM`` when a time is present."""
    text = f"{stamp.year:04d}-{stamp.month:02d}-{stamp.day:02d}"
    if stamp.time:
        text += f"T{stamp.time.hours:02d}:{stamp.time.minutes:02d}"
    return text


class ItemTextFormat:
    """Handles conversion between Item objects and the list text format."""

    @staticmethod
    def to_text(item: Item) -> str:
        """Convert an Item to ``[x] title ;; :date: body``."""
        parts = []
        if item.todo is not None:
            parts.append("[x]" if item.todo else "[ ]")

        parts.append(item.text)
        parts.append(";;")

        if item.time:
            parts.append(f":{format_datetime(item.time)}:")

        if item.description:
            parts.append(item.description)

        return " ".join(parts)

    @staticmethod
    def from_text(text: str, encoding: str = "utf-8") -> Item:
        """Parse the text of a single item (without depth markers)."""
        return parse_item(text.encode(encoding), encoding)

    @staticmethod
    def to_block(depth: int, item: Item) -> str:
        """Prefix the item text with ``depth`` markers."""
        if depth < 1:
            raise ValueError(f"Depth must be at least 1, got {depth}")
        return MARKER.decode() * depth + ItemTextFormat.to_text(item)

    @staticmethod
    def to_document(pairs: Iterable[Tuple[int, Item]], newline: str = "\n") -> str:
        """Render ``(depth, Item)`` pairs as a document, one block per line group."""
        return newline.join(ItemTextFormat.to_block(depth, item) for depth, item in pairs)
