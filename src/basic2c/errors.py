"""
basic2c Error Hierarchy
=======================

This module defines the root of the exception hierarchy for basic2c.
All exceptions inherit from BasicError, allowing callers to catch every
translator-related failure with a single except clause if desired.

Exception Hierarchy
-------------------
BasicError (base)
├── TranslationError (see basic2c.compiler.errors)
│   ├── LexError - the scanner cannot form a token
│   ├── BasicSyntaxError - a token does not fit the grammar
│   ├── SemanticError - undeclared variables, label problems
│   └── EmitterError - misuse of the output buffers
└── BasicIOError (reading source or writing output)
    ├── SourceReadError - the source text cannot be read
    └── OutputWriteError - the generated text cannot be written

Error messages for source problems follow this format:
    filename:line:column: error: description
        source_line_text
        ^ (pointer to error location)
    hint: suggestion for fixing (when available)
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Union


# =============================================================================
# Base Exception Class
# =============================================================================

class BasicError(Exception):
    """
    Base exception for all basic2c errors.

        try:
            compile_file("program.bas")
        except BasicError as e:
            print(f"Error: {e}")
    """
    pass


# =============================================================================
# Source Location Tracking
# =============================================================================

@dataclass(frozen=True)
class SourceLocation:
    """
    Represents a location in BASIC source for error reporting.

    Attributes:
        filename: Name of the source file (or "<input>" for string input)
        line: Line number (1-indexed)
        column: Column number (1-indexed)
    """
    filename: str
    line: int
    column: int

    def __str__(self) -> str:
        """Format as 'filename:line:column' for error messages."""
        return f"{self.filename}:{self.line}:{self.column}"


# =============================================================================
# I/O Exceptions
# =============================================================================

class BasicIOError(BasicError):
    """
    Base exception for failures of the read/write collaborators.

    Wraps the underlying OSError or UnicodeDecodeError (available as
    ``__cause__`` and ``os_error``) so callers can tell I/O failures apart from
    translation failures.

    Attributes:
        path: The file that could not be accessed
        os_error: The original exception
    """

    action = "access"

    def __init__(
        self,
        path: Union[str, Path],
        os_error: Union[OSError, UnicodeDecodeError],
    ):
        self.path = Path(path)
        self.os_error = os_error
        # UnicodeDecodeError has no strerror
        reason = getattr(os_error, "strerror", None) or str(os_error)
        super().__init__(f"cannot {self.action} '{self.path}': {reason}")


class SourceReadError(BasicIOError):
    """The BASIC source file could not be read."""

    action = "read"


class OutputWriteError(BasicIOError):
    """The generated C file could not be written."""

    action = "write"
