"""Lead comment attachment for tree-sitter Go trees.

A declaration's doc comment is the run of adjacent comments that ends on
the line directly above it. Comments that share a line with a preceding
token are trailing line comments and never lead the next declaration.
"""

from __future__ import annotations

from bisect import bisect_right
from typing import TYPE_CHECKING

from models.syntax import CommentGroup

if TYPE_CHECKING:
    from tree_sitter import Node

# Statement terminators the grammar emits for newlines and EOF.
_TERMINATORS = frozenset({"\n", "\0"})


def _decode(node: Node) -> str:
    return node.text.decode("utf8", errors="replace") if node.text else ""


class CommentIndex:
    """Comments and code tokens of one file, ordered by byte offset."""

    def __init__(self, root: Node) -> None:
        self._comments: list[Node] = []
        self._comment_starts: list[int] = []
        self._token_ends: list[int] = []
        self._token_end_rows: list[int] = []
        self._collect(root)

    def _collect(self, root: Node) -> None:
        stack = [root]
        while stack:
            node = stack.pop()
            if node.type == "comment":
                self._comments.append(node)
                self._comment_starts.append(node.start_byte)
                continue
            if node.child_count == 0:
                if node.type not in _TERMINATORS and (node.text or b"").strip():
                    self._token_ends.append(node.end_byte)
                    self._token_end_rows.append(node.end_point[0])
                continue
            stack.extend(reversed(node.children))

    def lead_group(self, node: Node) -> CommentGroup | None:
        """Return the comment group leading ``node``, if there is one."""
        start = node.start_byte

        previous = bisect_right(self._token_ends, start) - 1
        floor_byte = self._token_ends[previous] if previous >= 0 else 0
        floor_row = self._token_end_rows[previous] if previous >= 0 else -1

        group: list[Node] = []
        next_row = node.start_point[0]
        index = bisect_right(self._comment_starts, start) - 1
        while index >= 0:
            comment = self._comments[index]
            if comment.start_byte < floor_byte or comment.start_point[0] <= floor_row:
                break
            end_row = comment.end_point[0]
            adjacent = end_row + 1 >= next_row if group else end_row + 1 == next_row
            if not adjacent:
                break
            group.append(comment)
            next_row = comment.start_point[0]
            index -= 1

        if not group:
            return None
        group.reverse()
        return CommentGroup(tuple(_decode(comment) for comment in group))


__all__ = ["CommentIndex"]
