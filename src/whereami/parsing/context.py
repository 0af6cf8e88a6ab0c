#!/usr/bin/env python3
"""
WHEREAMI SOURCE INDEX
---------------------
The complete, read-only result of one indexing pass: the source bytes
and one LineRecord per logical line.
"""

from dataclasses import dataclass, field
from typing import List

from whereami.core.models import LineRecord


@dataclass
class SourceIndex:
    """
    Built once by the IndexPipeline, then only read by the query side.
    """
    filename: str                                            # Used in diagnostics only
    buffer: bytes                                            # The untouched file contents
    records: List[LineRecord] = field(default_factory=list)  # One entry per logical line

    @property
    def line_count(self) -> int:
        return len(self.records)

    def text(self, index: int) -> bytes:
        """The line's text from its first non-indentation byte."""
        record = self.records[index]
        return self.buffer[record.start_offset:record.end_offset]

    def is_boring(self, index: int) -> bool:
        """A line whose first character opens a brace says nothing about its scope."""
        return self.text(index).startswith(b'{')
