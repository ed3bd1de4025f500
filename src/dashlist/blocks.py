"""Split a document into depth-tagged blocks.

Each block starts with one or more ``--`` markers; the number of markers is
the block's depth. A block runs until the next newline that is directly
followed by a marker, or until the end of input::

    --Top level ;;
    ----Child ;;
     with a description
    --Another top level ;;
"""

import logging
from typing import List, NamedTuple, Optional, Tuple

from .exceptions import ParseError

logger = logging.getLogger(__name__)

MARKER = b"--"
BOUNDARY = b"\n" + MARKER


class Block(NamedTuple):
    """Raw text of one item together with its depth."""
    depth: int
    text: bytes


def count_dash(data: bytes, pos: int = 0) -> int:
    """Count consecutive, non-overlapping ``--`` tokens starting at ``pos``."""
    count = 0
    while data.startswith(MARKER, pos + count * len(MARKER)):
        count += 1
    return count


def match_line(data: bytes, pos: int = 0) -> Tuple[Block, int]:
    """Read one block starting at ``pos``.

    Returns the block and the position of the next one. A single newline
    right after the text, either before the next marker or at the end of
    input, is consumed and dropped.
    """
    depth = count_dash(data, pos)
    if depth == 0:
        raise ParseError("Expected '--' depth marker", pos)

    start = pos + depth * len(MARKER)
    end = data.find(BOUNDARY, start)
    if end == -1:
        text = data[start:]
        if text.endswith(b"\n"):
            text = text[:-1]
        return Block(depth, text), len(data)
    return Block(depth, data[start:end]), end + 1


def split_preamble(data: bytes) -> Tuple[Optional[bytes], int]:
    """Separate any unmarked text in front of the first block.

    Returns the preamble (None when there is none or it is blank) and the
    position of the first block.
    """
    if count_dash(data, 0):
        return None, 0

    end = data.find(BOUNDARY)
    if end == -1:
        preamble, pos = data, len(data)
    else:
        preamble, pos = data[:end], end + 1

    if not preamble.strip():
        return None, pos
    return preamble, pos


def match_lines(data: bytes, pos: Optional[int] = None) -> List[Block]:
    """Split a whole document into blocks, in order.

    Empty and whitespace-only documents give an empty list. Text before the
    first marker is not a block and is skipped. Pass ``pos`` from
    ``split_preamble`` to start at the first block without scanning again.
    """
    if pos is None:
        preamble, pos = split_preamble(data)
        if preamble is not None:
            logger.debug(f"Skipping {len(preamble)} bytes of unmarked text before the first block")

    blocks = []
    while pos < len(data):
        block, pos = match_line(data, pos)
        blocks.append(block)

    logger.debug(f"Found {len(blocks)} blocks")
    return blocks
