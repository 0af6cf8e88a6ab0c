#!/usr/bin/env python3
"""
WHEREAMI STRUCTURER - Indentation Stack Builder
-----------------------------------------------
Links every line to its nearest enclosing context line in a single
forward pass. Instead of an explicit stack, each record stores a direct
link to its parent; popping a level means following that link.

Only eligible lines open contexts. Continuation lines (code after a
multi-line block comment) may close contexts but never open one.
"""

from typing import List

from whereami.core.models import Cursor, LineKind, LineRecord, Segment


class IndentStructurer:
    """
    Appends one LineRecord per Segment, keeping the open-context state on
    the Cursor.
    """

    def place(self, segment: Segment, cursor: Cursor, records: List[LineRecord]) -> LineRecord:
        """Links `segment` to its enclosing context and appends its record."""
        if segment.kind is LineKind.BLANK or segment.indentation is None:
            # Blank lines carry the previous indentation and leave the cursor alone
            record = LineRecord(cursor.outer_index, cursor.prev_indentation,
                                segment.start_offset, segment.end_offset)
            records.append(record)
            return record

        column = segment.indentation
        if segment.may_close and column < cursor.prev_indentation:
            popped = self._close_contexts(column, cursor, records)
            if popped and not segment.eligible:
                # A closing continuation leaves its own column as the level to beat
                cursor.prev_indentation = column
        elif segment.eligible and column > cursor.prev_indentation and segment.index > 0:
            cursor.outer_index = cursor.prev_valid_index

        record = LineRecord(cursor.outer_index, column, segment.start_offset, segment.end_offset)
        records.append(record)

        if segment.eligible:
            cursor.prev_indentation = column
            cursor.prev_valid_index = segment.index
        return record

    def _close_contexts(self, column: int, cursor: Cursor, records: List[LineRecord]) -> bool:
        """Pops open contexts until the innermost one is shallower than `column`; True if any was popped."""
        popped = False
        while cursor.outer_index is not None and column <= records[cursor.outer_index].indentation:
            cursor.outer_index = records[cursor.outer_index].outer_index
            if cursor.outer_index is None:
                cursor.prev_indentation = 0
            else:
                cursor.prev_indentation = records[cursor.outer_index].indentation
            popped = True
        return popped
