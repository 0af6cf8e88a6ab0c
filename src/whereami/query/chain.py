#!/usr/bin/env python3
"""
WHEREAMI QUERY - Context Chain Walker
-------------------------------------
Walks parent links outward from a target line and replaces brace-only
ancestors with the nearest descriptive line above them.

The backward scan for a boring ancestor is linear in the distance to
the replacement; long runs of consecutive `{` lines are its worst case.
"""

from typing import Iterator, List, Tuple

from whereami.core.errors import QueryError
from whereami.core.models import Context
from whereami.parsing.context import SourceIndex


class ContextChainWalker:
    """Answers breadcrumb queries against a finished SourceIndex."""

    def __init__(self, index: SourceIndex):
        self.index = index

    def ancestors(self, line_index: int) -> List[int]:
        """Raw parent chain, innermost first. The implicit root is not included."""
        self._check_range(line_index)
        records = self.index.records
        chain = []
        outer = records[line_index].outer_index
        while outer is not None:
            chain.append(outer)
            outer = records[outer].outer_index
        return chain

    def resolve(self, ancestor: int) -> int:
        """Skips backward from a boring ancestor to the line that describes it."""
        records = self.index.records
        limit = records[ancestor].indentation
        current = ancestor
        while current > 0 and self.index.is_boring(current):
            current -= 1
            while current > 0 and records[current].indentation > limit:
                current -= 1
        return current

    def chain(self, line_index: int) -> List[Context]:
        """Resolved contexts of one line, outermost first."""
        contexts = [Context(index=resolved, text=self.index.text(resolved))
                    for resolved in map(self.resolve, self.ancestors(line_index))]
        contexts.reverse()
        return contexts

    def all_chains(self) -> Iterator[Tuple[int, List[Context]]]:
        for line_index in range(self.index.line_count):
            yield line_index, self.chain(line_index)

    def _check_range(self, line_index: int):
        if not 0 <= line_index < self.index.line_count:
            raise QueryError(
                f"line {line_index + 1} is out of range "
                f"('{self.index.filename}' has {self.index.line_count} lines)")
