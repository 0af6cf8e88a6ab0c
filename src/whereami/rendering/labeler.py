#!/usr/bin/env python3
"""
WHEREAMI LABELER - Context Formatter
------------------------------------
Squeezes a context line into a short breadcrumb label such as
`..12: void f(` or `..40: if(someLo$&&x)`.

Lines that could name a function are cut right after their first `(`
and keep identifiers whole. Control-flow headers keep their condition,
but long identifiers are shortened to a `$` marker and the whole label
is capped.
"""

from typing import Optional

from whereami.core.config import DEFAULT_CONFIG, WhereamiConfig
from whereami.core.models import Context

IDENT_BYTES = frozenset(b'abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789_')
SPACE_BYTES = frozenset(b' \t\n\v\f\r')
SLASH, OPEN_PAREN, DOLLAR, BLANK = 0x2F, 0x28, 0x24, 0x20


class ContextLabeler:
    """Renders Context objects into `..<line>: <text>` labels."""

    def __init__(self, config: Optional[WhereamiConfig] = None):
        self.config = config or DEFAULT_CONFIG
        self._keywords = tuple(k.encode('ascii') for k in self.config.control_keywords)
        self._namespace = self.config.namespace_prefix.encode('ascii')

    def strip_namespaces(self, text: bytes) -> bytes:
        while text.startswith(self._namespace):
            text = text[len(self._namespace):]
        return text

    def is_control_flow(self, text: bytes) -> bool:
        return text.startswith(self._keywords)

    def render(self, text: bytes) -> str:
        """The label body, without the line-number prefix."""
        text = self.strip_namespaces(text)
        is_control = self.is_control_flow(text)
        could_be_fn_name = not is_control
        max_ident = self.config.max_ident_len
        max_control = self.config.max_control_len

        out = bytearray()
        ident_len = 0
        before_space = 0
        prev_was_space = False

        for pos, ch in enumerate(text):
            if ch in SPACE_BYTES:
                ident_len = 0
                prev_was_space = True
                continue
            if ch == SLASH and text[pos + 1:pos + 2] == b'/':
                break

            if ch in IDENT_BYTES:
                if prev_was_space and before_space in IDENT_BYTES:
                    out.append(BLANK)
                if could_be_fn_name or ident_len < max_ident:
                    out.append(ch)
                elif ident_len == max_ident:
                    out.append(DOLLAR)
                    ch = DOLLAR
                else:
                    ch = DOLLAR
                ident_len += 1
            else:
                out.append(ch)
                ident_len = 0
                if ch == OPEN_PAREN and could_be_fn_name:
                    break

            prev_was_space = False
            before_space = ch
            if is_control and len(out) >= max_control:
                break

        return out.decode('utf-8', errors='replace')

    def label(self, context: Context) -> str:
        return f"..{context.index + 1}: {self.render(context.text)}"
