"""dashlist - parse dash-marked todo lists into structured items."""

__version__ = "0.1.0"

from .todo import Item, DateTime, Time
from .exceptions import (
    ParseError,
    MalformedNumber,
    MalformedTime,
    MalformedDate,
    MalformedCheckbox,
    MissingTitleDelimiter,
    EmptyTitle,
    MalformedText,
    BlockParseFailure,
)
from .pipeline import (
    ParseResult,
    BlockFailure,
    parse_document,
    parse_file,
    read_lines_and_parse,
)

__all__ = [
    "Item",
    "DateTime",
    "Time",
    "ParseError",
    "MalformedNumber",
    "MalformedTime",
    "MalformedDate",
    "MalformedCheckbox",
    "MissingTitleDelimiter",
    "EmptyTitle",
    "MalformedText",
    "BlockParseFailure",
    "ParseResult",
    "BlockFailure",
    "parse_document",
    "parse_file",
    "read_lines_and_parse",
    "__version__",
]
