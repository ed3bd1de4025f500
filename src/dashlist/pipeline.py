"""Turn a whole document into ``(depth, Item)`` pairs.

Blocks that fail to parse never stop the run. ``read_lines_and_parse``
drops them silently; ``parse_document`` also reports them in
``ParseResult.failures``.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Tuple, Union

from .blocks import Block, match_lines, split_preamble
from .config import ConfigModel
from .exceptions import BlockParseFailure, ParseError
from .parser import parse_item
from .todo import Item

logger = logging.getLogger(__name__)

Source = Union[bytes, str]


@dataclass
class BlockFailure:
    """A block that could not be parsed."""
    index: int
    depth: int
    text: bytes
    error: BlockParseFailure

    @property
    def cause(self) -> Optional[BaseException]:
        """The primitive error behind the failure."""
        return self.error.__cause__


@dataclass
class ParseResult:
    """Items parsed from a document together with the blocks that were dropped."""
    items: List[Tuple[int, Item]] = field(default_factory=list)
    failures: List[BlockFailure] = field(default_factory=list)
    preamble: Optional[str] = None

    @property
    def ok(self) -> bool:
        return not self.failures

    def __len__(self) -> int:
        return len(self.items)


def convert_item_tup(block: Block, index: int = 0, encoding: str = "utf-8") -> Tuple[int, Item]:
    """Parse one block, wrapping any grammar error in ``BlockParseFailure``."""
    try:
        return block.depth, parse_item(block.text, encoding)
    except ParseError as e:
        raise BlockParseFailure(
            f"Block {index} (depth {block.depth}): {e}",
            index=index,
            depth=block.depth,
            position=e.position,
        ) from e


def parse_document(data: Source, config: Optional[ConfigModel] = None) -> ParseResult:
    """Parse a document, keeping a record of every dropped block.

    Args:
        data: Raw document. ``str`` input is encoded with the configured
            encoding first.
        config: Parsing options; defaults are used when omitted.

    Returns:
        ParseResult with items in document order.

    Raises:
        BlockParseFailure: On the first bad block, only when ``config.strict``.
    """
    config = config or ConfigModel()
    if isinstance(data, str):
        data = data.encode(config.encoding)

    result = ParseResult()

    preamble, start = split_preamble(data)
    if preamble is not None:
        logger.debug(f"Skipping {len(preamble)} bytes of unmarked text before the first block")
        result.preamble = preamble.decode(config.encoding, errors="replace").strip()

    for index, block in enumerate(match_lines(data, start)):
        try:
            result.items.append(convert_item_tup(block, index, config.encoding))
        except BlockParseFailure as failure:
            if config.strict:
                raise
            logger.debug(f"Dropping block: {failure}")
            result.failures.append(BlockFailure(
                index=index,
                depth=block.depth,
                text=block.text,
                error=failure,
            ))

    if result.failures:
        logger.info(f"Parsed {len(result.items)} items, dropped {len(result.failures)} blocks")
    return result


def read_lines_and_parse(data: Source) -> List[Tuple[int, Item]]:
    """Parse a document into ``(depth, Item)`` pairs, dropping bad blocks."""
    return parse_document(data).items


def parse_file(path: Union[str, Path], config: Optional[ConfigModel] = None) -> ParseResult:
    """Read a file in full and parse it."""
    return parse_document(Path(path).read_bytes(), config)
