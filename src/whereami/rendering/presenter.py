#!/usr/bin/env python3
"""
WHEREAMI PRESENTER - Breadcrumb Assembly
----------------------------------------
Joins the labels of a resolved chain into one output line. Contexts
that sit within a few lines of the target are already on screen for the
reader, so they are elided and a single ellipsis marks the gap.
"""

from typing import List, Optional

from whereami.core.config import DEFAULT_CONFIG, WhereamiConfig
from whereami.core.models import Context, LineRecord
from whereami.rendering.labeler import ContextLabeler


class BreadcrumbPresenter:
    """Turns chains into the text lines printed by the CLI."""

    def __init__(self, config: Optional[WhereamiConfig] = None,
                 labeler: Optional[ContextLabeler] = None):
        self.config = config or DEFAULT_CONFIG
        self.labeler = labeler or ContextLabeler(self.config)

    def is_near(self, target: int, context: Context) -> bool:
        return target - context.index < self.config.near_distance

    def breadcrumb(self, target: int, contexts: List[Context]) -> str:
        """Labels of all far contexts, outermost first, plus `...` if any was elided."""
        parts = []
        elided = False
        for context in contexts:
            if self.is_near(target, context):
                elided = True
                continue
            parts.append(self.labeler.label(context))
        if elided:
            parts.append(self.config.ellipsis)
        return "".join(parts)

    def header(self, target: int, record: LineRecord) -> str:
        """Fixed-width prefix used when every line is listed."""
        parent = 0 if record.outer_index is None else record.outer_index + 1
        return "%5u: %5u<- %2u: " % (target + 1, parent, record.indentation)

    def summary_line(self, target: int, record: LineRecord, contexts: List[Context]) -> str:
        return self.header(target, record) + self.breadcrumb(target, contexts)
