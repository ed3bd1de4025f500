"""Assemble flat ``(depth, Item)`` pairs into a tree of items.

The parser only reports depths. This module is the separate step that
nests items under one another.
"""

from dataclasses import replace
from typing import Iterable, List, Tuple

from .todo import Item


class _Node:
    __slots__ = ("depth", "item", "children")

    def __init__(self, depth: int, item: Item):
        self.depth = depth
        self.item = item
        self.children: List["_Node"] = []

    def freeze(self) -> Item:
        return replace(self.item, children=tuple(c.freeze() for c in self.children))


def build_tree(pairs: Iterable[Tuple[int, Item]]) -> List[Item]:
    """Nest items by depth.

    Each item becomes a child of the closest preceding item with a smaller
    depth. Items with no such ancestor are returned as roots. Skipped
    levels are allowed: a depth 3 item directly under a depth 1 item is
    its child.
    """
    roots: List[_Node] = []
    stack: List[_Node] = []

    for depth, item in pairs:
        node = _Node(depth, item)
        while stack and stack[-1].depth >= depth:
            stack.pop()
        if stack:
            stack[-1].children.append(node)
        else:
            roots.append(node)
        stack.append(node)

    return [root.freeze() for root in roots]


def flatten_tree(roots: Iterable[Item], depth: int = 1) -> List[Tuple[int, Item]]:
    """Reverse of ``build_tree``: depth-first ``(depth, Item)`` pairs without children."""
    pairs = []
    for item in roots:
        pairs.append((depth, replace(item, children=())))
        pairs.extend(flatten_tree(item.children, depth + 1))
    return pairs


def count_items(roots: Iterable[Item]) -> int:
    """Total number of items in a forest."""
    return sum(1 + count_items(item.children) for item in roots)
