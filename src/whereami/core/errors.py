#!/usr/bin/env python3
"""
WHEREAMI ERRORS
---------------
Every fatal condition is raised where it is detected and handled once,
by the CLI, which prints a single diagnostic and exits.
"""

from typing import Optional


class WhereamiError(Exception):
    """Base class for all fatal whereami conditions."""
    exit_code = 1


class UsageError(WhereamiError):
    """Bad command line: wrong argument count or an unparseable line number."""
    exit_code = 2


class SourceIOError(WhereamiError):
    """Opening, sizing, reading or closing the source file failed."""

    def __init__(self, message: str, cause: Optional[OSError] = None):
        if cause is not None:
            message = f"{message}: ({cause.errno}) {cause.strerror or cause}"
        super().__init__(message)
        self.cause = cause


class ResourceError(WhereamiError):
    """Memory could not be obtained for the buffer or the line index."""


class CapacityError(WhereamiError):
    """The file or its line count exceeds what the index can represent."""


class QueryError(WhereamiError):
    """The requested line does not exist in the file."""


class IndexIntegrityError(WhereamiError):
    """The indexing pass produced a different number of records than lines."""
