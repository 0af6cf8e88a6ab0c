#!/usr/bin/env python3
"""
WHEREAMI CONFIGURATION
----------------------
Tuning constants for the lexer, the labeler and the presenter. There are
no configuration files or environment variables; every run starts from
these defaults.
"""

from dataclasses import dataclass
from typing import Tuple

VERSION = "1.0.0"


@dataclass(frozen=True)
class WhereamiConfig:
    """Immutable settings shared by every component of one run."""
    tab_stop: int = 8
    max_ident_len: int = 6              # identifier/number chars kept in control-flow labels
    max_control_len: int = 20           # output chars after which a control-flow label stops
    near_distance: int = 20             # contexts closer than this to the target are elided
    ellipsis: str = "..."
    control_keywords: Tuple[str, ...] = ("if ", "do ", "for ", "case ", "while ", "switch ")
    namespace_prefix: str = "namespace "
    max_file_size: int = 2 ** 32 - 1
    max_lines: int = 2 ** 31 - 1


DEFAULT_CONFIG = WhereamiConfig()
