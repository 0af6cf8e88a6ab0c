#!/usr/bin/env python3
"""
WHEREAMI INDEX PIPELINE
-----------------------
Runs the lexer and the structurer over a buffer in one forward pass.
The Cursor is created here, threaded through both stages and dropped
when the pass ends.
"""

import logging
from typing import Optional

from whereami.core.config import DEFAULT_CONFIG, WhereamiConfig
from whereami.core.errors import IndexIntegrityError
from whereami.core.models import Cursor
from whereami.parsing.classifier import LineClassifier
from whereami.parsing.context import SourceIndex
from whereami.parsing.lexer import SourceLexer
from whereami.parsing.structurer import IndentStructurer

logger = logging.getLogger("whereami.pipeline")


class IndexPipeline:
    """
    Orchestrates segmentation, classification and linking so that every
    line ends up with exactly one LineRecord.
    """

    def __init__(self, config: Optional[WhereamiConfig] = None):
        self.config = config or DEFAULT_CONFIG
        self.classifier = LineClassifier()
        self.structurer = IndentStructurer()

    def run(self, buffer: bytes, filename: str = "<buffer>") -> SourceIndex:
        lexer = SourceLexer(filename, self.config, self.classifier)
        expected = lexer.count_lines(buffer)

        index = SourceIndex(filename=filename, buffer=buffer)
        cursor = Cursor()
        for segment in lexer.segment(buffer, cursor):
            self.structurer.place(segment, cursor, index.records)

        if index.line_count != expected:
            raise IndexIntegrityError(
                f"line index is inconsistent: {index.line_count} records for {expected} lines")
        logger.debug("Indexed %s: %d lines", filename, expected)
        return index
