#!/usr/bin/env python3
"""
WHEREAMI LEXER - Line Segmenter
-------------------------------
Splits a raw source buffer into logical lines, expands tabs into columns
and carries multi-line block comments across line boundaries. Each line
comes out as a Segment that the IndentStructurer links into the tree.

The buffer is never modified: lines are spans over it. A line's text
stops at its newline or at its first carriage return.
"""

import logging
import re
from typing import Iterator, Optional, Tuple

from whereami.core.config import DEFAULT_CONFIG, WhereamiConfig
from whereami.core.errors import CapacityError
from whereami.core.models import Cursor, LineKind, Segment
from whereami.parsing.classifier import LineClassifier

logger = logging.getLogger("whereami.lexer")

TAB, SPACE, CR = 0x09, 0x20, 0x0D
SLASH, STAR, BACKSLASH = 0x2F, 0x2A, 0x5C
DOUBLE_QUOTE, SINGLE_QUOTE = 0x22, 0x27

# Everything below 0x20 except TAB, LF and CR
CONTROL_BYTES = re.compile(rb'[\x00-\x08\x0b\x0c\x0e-\x1f]')


class SourceLexer:
    """
    Turns a byte buffer into Segments, one per logical line.

    All state that survives from one line to the next (line number, block
    comment state) lives on the Cursor passed in by the caller.
    """

    def __init__(self, filename: str = "<buffer>",
                 config: Optional[WhereamiConfig] = None,
                 classifier: Optional[LineClassifier] = None):
        self.filename = filename
        self.config = config or DEFAULT_CONFIG
        self.classifier = classifier or LineClassifier()

    def scan_limit(self, buffer: bytes) -> int:
        """Scanning stops at an embedded NUL byte."""
        nul = buffer.find(b'\0')
        return len(buffer) if nul < 0 else nul

    def count_lines(self, buffer: bytes) -> int:
        """Number of logical lines, counting an unterminated last line."""
        limit = self.scan_limit(buffer)
        count = buffer.count(b'\n', 0, limit)
        if limit and buffer[limit - 1] != 0x0A:
            count += 1
        if count > self.config.max_lines:
            raise CapacityError(
                f"file has more lines ({count}) than supported ({self.config.max_lines})")
        return count

    def segment(self, buffer: bytes, cursor: Cursor) -> Iterator[Segment]:
        """Yields one Segment per logical line, in file order."""
        limit = self.scan_limit(buffer)
        pos = 0
        index = 0
        while pos < limit:
            newline = buffer.find(b'\n', pos, limit)
            line_end = limit if newline < 0 else newline
            yield self.lex_line(buffer, pos, line_end, index, cursor)
            index += 1
            cursor.line += 1
            pos = line_end + 1

    def lex_line(self, buffer: bytes, start: int, end: int, index: int, cursor: Cursor) -> Segment:
        """Lexes the physical line buffer[start:end] (newline excluded)."""
        self._report_control_bytes(buffer, start, end, cursor.line)

        # 1. Indentation
        pos, column = start, 0
        tab_stop = self.config.tab_stop
        while pos < end and buffer[pos] in (SPACE, TAB, CR):
            ch = buffer[pos]
            if ch == TAB:
                column = (column // tab_stop + 1) * tab_stop
            elif ch == SPACE:
                column += 1
            pos += 1
        cursor.column = column

        text_end = buffer.find(b'\r', pos, end)
        if text_end < 0:
            text_end = end

        # 2. Classification
        if cursor.in_comment:
            segment = self._lex_comment_line(buffer, pos, text_end, index, cursor)
        elif pos == text_end:
            segment = Segment(index, None, pos, text_end, LineKind.BLANK, eligible=False, may_close=False)
        else:
            segment = self._lex_code(buffer, pos, text_end, index, cursor, column, continuation=False)

        cursor.eligible = segment.eligible
        return segment

    def _lex_comment_line(self, buffer: bytes, pos: int, end: int, index: int, cursor: Cursor) -> Segment:
        """A line that starts inside a block comment opened on an earlier line."""
        close = buffer.find(b'*/', pos, end)
        if close < 0:
            return Segment(index, cursor.column, pos, end, LineKind.COMMENT, eligible=False, may_close=False)

        cursor.in_comment = False
        code = self._skip_blanks(buffer, close + 2, end)
        if code == end or buffer.startswith(b'//', code):
            return Segment(index, cursor.column, pos, end, LineKind.COMMENT, eligible=False, may_close=False)

        # Code after a comment that crossed a newline: may close, never opens
        return self._lex_code(buffer, code, end, index, cursor, cursor.saved_indentation, continuation=True)

    def _lex_code(self, buffer: bytes, pos: int, end: int, index: int, cursor: Cursor,
                  indentation: int, continuation: bool) -> Segment:
        first = pos

        # Block comments that close on this line are transparent
        while buffer.startswith(b'/*', pos):
            close = buffer.find(b'*/', pos + 2, end)
            if close < 0:
                self._open_comment(cursor, indentation)
                return Segment(index, indentation, first, end, LineKind.COMMENT, eligible=False, may_close=False)
            pos = self._skip_blanks(buffer, close + 2, end)

        if pos == end or buffer.startswith(b'//', pos):
            return Segment(index, indentation, first, end, LineKind.COMMENT, eligible=False, may_close=False)

        eligible = self.classifier.is_eligible(buffer[pos:end])
        self._track_trailing_comments(buffer, pos, end, cursor, indentation)

        if continuation:
            return Segment(index, indentation, pos, end, LineKind.CONTINUATION,
                           eligible=False, may_close=eligible)
        return Segment(index, indentation, pos, end, LineKind.CODE, eligible=eligible, may_close=eligible)

    def _track_trailing_comments(self, buffer: bytes, pos: int, end: int, cursor: Cursor, indentation: int):
        """Detects a /* after code that is still open at the end of the line."""
        while True:
            marker, kind = self._find_comment_marker(buffer, pos, end)
            if marker < 0 or kind == b'//':
                return
            close = buffer.find(b'*/', marker + 2, end)
            if close < 0:
                self._open_comment(cursor, indentation)
                return
            pos = close + 2

    def _find_comment_marker(self, buffer: bytes, pos: int, end: int) -> Tuple[int, bytes]:
        """Protects quoted text: first // or /* outside quotes, or (-1, b'')."""
        in_double = in_single = escaped = False
        for i in range(pos, end):
            ch = buffer[i]
            if escaped:
                escaped = False
                continue
            if ch == BACKSLASH and (in_double or in_single):
                escaped = True
                continue
            if ch == DOUBLE_QUOTE and not in_single:
                in_double = not in_double
            elif ch == SINGLE_QUOTE and not in_double:
                in_single = not in_single
            elif ch == SLASH and not in_double and not in_single and i + 1 < end:
                if buffer[i + 1] == SLASH:
                    return i, b'//'
                if buffer[i + 1] == STAR:
                    return i, b'/*'
        return -1, b''

    def _open_comment(self, cursor: Cursor, indentation: int):
        cursor.in_comment = True
        cursor.saved_indentation = indentation

    def _skip_blanks(self, buffer: bytes, pos: int, end: int) -> int:
        while pos < end and buffer[pos] in (SPACE, TAB):
            pos += 1
        return pos

    def _report_control_bytes(self, buffer: bytes, start: int, end: int, line: int):
        for match in CONTROL_BYTES.finditer(buffer, start, end):
            logger.warning("%s:%u: warning: unexpected non-printable character 0x%02x encountered",
                           self.filename, line, match.group()[0])
