"""Exceptions raised while parsing dash-marked todo lists."""

from typing import Optional


class ParseError(Exception):
    """Base class for all parsing failures.

    ``position`` is the byte offset inside the parsed slice where the
    failure was detected, when known.
    """

    def __init__(self, message: str, position: Optional[int] = None):
        self.position = position
        super().__init__(message)


class MalformedNumber(ParseError):
    """A slice that should hold decimal digits does not."""


class MalformedTime(ParseError):
    """An ``HH[:]MM`` time literal is short or not numeric."""


class MalformedDate(ParseError):
    """A ``YYYY-MM-DD`` date literal is short, not numeric or badly separated."""


class MalformedCheckbox(ParseError):
    """A ``[ ]`` / ``[x]`` checkbox literal is malformed."""


class MissingTitleDelimiter(ParseError):
    """The ``;;`` that terminates a title never occurs."""


class EmptyTitle(ParseError):
    """The title is empty once surrounding whitespace is removed."""


class MalformedText(ParseError):
    """Title or body bytes cannot be decoded."""


class BlockParseFailure(ParseError):
    """A whole block failed to parse into an item.

    The primitive error that caused it is available as ``__cause__``.
    """

    def __init__(self, message: str, index: int, depth: int,
                 position: Optional[int] = None):
        self.index = index
        self.depth = depth
        super().__init__(message, position)
