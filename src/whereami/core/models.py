#!/usr/bin/env python3
"""
WHEREAMI CORE MODELS
--------------------
Defines the fundamental data structures shared by the indexing pass and
the query pass. A LineRecord is the lowest level of source abstraction.

Author: Whereami Team
Date: 2026-10-19
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class LineKind(Enum):
    """How the segmenter saw a physical line."""
    CODE = "code"
    BLANK = "blank"
    COMMENT = "comment"            # only comment text (or inside a /* */ block)
    CONTINUATION = "continuation"  # code following the close of a multi-line comment


@dataclass
class LineRecord:
    """
    The atomic unit of the line index.

    One record exists per logical line, in file order. `outer_index` links
    to the nearest enclosing context line, forming an implicit tree rooted
    at None.
    """
    outer_index: Optional[int]   # Index of the enclosing context line, None at top level
    indentation: int             # Tab-expanded column of the first non-indentation byte
    start_offset: int            # Buffer offset of the first non-indentation byte
    end_offset: int = 0          # Exclusive end of the line text (stops at CR/LF)


@dataclass
class Segment:
    """
    One logical line as produced by the lexer, before it is linked.

    `indentation` is None for blank lines; the structurer substitutes the
    cursor's current indentation for them.
    """
    index: int
    indentation: Optional[int]
    start_offset: int
    end_offset: int
    kind: LineKind = LineKind.CODE
    eligible: bool = True        # may open and close contexts
    may_close: bool = True       # may close contexts (continuations close but never open)


@dataclass
class Context:
    """A resolved ancestor of a queried line, built fresh for every query."""
    index: int
    text: bytes


@dataclass
class Cursor:
    """
    Mutable parsing state for one indexing run.

    Threaded explicitly through the lexer and the structurer; discarded
    once the LineRecord list is complete.
    """
    line: int = 1                       # 1-based physical line being read
    column: int = 0                     # Column reached on the current line
    outer_index: Optional[int] = None   # Currently open context
    prev_indentation: int = 0           # Indentation associated with the open context
    prev_valid_index: Optional[int] = None
    eligible: bool = True
    in_comment: bool = False            # Inside a /* */ block that crossed a newline
    saved_indentation: int = 0          # Indentation of the line that opened the comment
