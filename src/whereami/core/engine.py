#!/usr/bin/env python3
"""
WHEREAMI ENGINE - The Orchestrator
----------------------------------
Owns the thin I/O shell around the core: reads a source file into an
immutable buffer, runs the IndexPipeline over it once and answers either
a single-line query or the every-line summary.

All failures surface as WhereamiError subclasses raised where they occur;
the CLI is the only place that handles them.
"""

import logging
import os
from typing import BinaryIO, List, Optional

from whereami.core.config import DEFAULT_CONFIG, WhereamiConfig
from whereami.core.errors import CapacityError, ResourceError, SourceIOError
from whereami.parsing.context import SourceIndex
from whereami.parsing.pipeline import IndexPipeline
from whereami.query.chain import ContextChainWalker
from whereami.rendering.presenter import BreadcrumbPresenter

logger = logging.getLogger("whereami.engine")


class WhereamiEngine:
    """
    Principal orchestrator: file bytes in, breadcrumb lines out.
    """

    def __init__(self, config: Optional[WhereamiConfig] = None):
        self.config = config or DEFAULT_CONFIG
        self.pipeline = IndexPipeline(self.config)
        self.presenter = BreadcrumbPresenter(self.config)

    def load_source(self, path: str) -> bytes:
        """Reads the whole file; the handle is closed on every exit path."""
        logger.debug("Reading %s", path)
        try:
            handle = open(path, 'rb')
        except OSError as e:
            raise SourceIOError(f"could not open file '{path}'", e) from e

        try:
            with handle:
                data = self._read_all(handle, path)
        except OSError as e:
            raise SourceIOError(f"could not close file '{path}'", e) from e
        return data

    def _read_all(self, handle: BinaryIO, path: str) -> bytes:
        try:
            size = os.fstat(handle.fileno()).st_size
        except OSError as e:
            raise SourceIOError(f"could not get the size of file '{path}'", e) from e

        if size > self.config.max_file_size:
            raise CapacityError(
                f"file size {size} > {self.config.max_file_size} bytes is not supported")

        try:
            data = handle.read()
        except MemoryError as e:
            raise ResourceError(
                f"out of memory allocating buffer for file text (file_size = {size})") from e
        except OSError as e:
            raise SourceIOError(f"could not read file '{path}'", e) from e

        if len(data) != size:
            raise SourceIOError(
                f"reading file '{path}' gave {len(data)} bytes instead of the expected {size}")
        return data

    def build_index(self, buffer: bytes, filename: str = "<buffer>") -> SourceIndex:
        try:
            return self.pipeline.run(buffer, filename)
        except MemoryError as e:
            raise ResourceError("out of memory allocating the line index") from e

    def query(self, index: SourceIndex, line_number: int) -> List[str]:
        """
        Output lines for `line_number` (1-based). Zero asks for a summary of
        every line, each prefixed with its fixed-width header.
        """
        walker = ContextChainWalker(index)
        if line_number:
            target = line_number - 1
            return [self.presenter.breadcrumb(target, walker.chain(target))]

        return [self.presenter.summary_line(target, index.records[target], contexts)
                for target, contexts in walker.all_chains()]

    def describe(self, path: str, line_number: int) -> List[str]:
        """Full run over one file: read, index, query."""
        buffer = self.load_source(path)
        index = self.build_index(buffer, path)
        return self.query(index, line_number)
