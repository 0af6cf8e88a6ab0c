#!/usr/bin/env python3
"""
WHEREAMI CLASSIFIER - Eligibility Gate
--------------------------------------
Decides whether a line may open or close an indentation context.
Preprocessor lines, comment-only lines, `identifier:` labels and `case`
labels sit outside the regular indentation scheme and are ignored when
nesting is computed.
"""

import re


class LineClassifier:
    """Stateless predicate over the first non-indentation text of a line."""

    # identifier, colon, then nothing but whitespace/colons (labels, access specifiers)
    LABEL_PATTERN = re.compile(rb'^[A-Za-z_][A-Za-z0-9_]*[ \t]*:[\s:]*$')
    CASE_PATTERN = re.compile(rb'^case\s')

    def is_eligible(self, text: bytes) -> bool:
        if text.startswith(b'#'):
            return False
        if text.startswith(b'//'):
            return False
        if self.LABEL_PATTERN.match(text):
            return False
        if self.CASE_PATTERN.match(text):
            return False
        return True
