"""
Translation Error Hierarchy
===========================

This module defines the exceptions raised while translating BASIC to C.
All of them inherit from TranslationError, which itself inherits from
BasicError for consistent error handling across the package.

Translation is fail-fast: the first error raised aborts the whole run
and no output is produced.

Exception Hierarchy
-------------------
TranslationError (base for all translation errors)
├── LexError - the scanner cannot form a token
│   ├── InvalidCharacterError - character belongs to no token class
│   ├── IllegalStringCharacterError - forbidden character inside "..."
│   └── MalformedNumberError - decimal point without following digit
├── BasicSyntaxError - token does not fit the grammar
│   ├── UnexpectedTokenError - no rule starts with this token
│   ├── MissingTokenError - a required token is absent
│   └── MissingComparisonOperatorError - IF/WHILE without relop
├── SemanticError - grammatically valid but meaningless
│   ├── UndeclaredVariableError - variable used before LET/INPUT
│   ├── DuplicateLabelError - LABEL declared twice
│   └── UndeclaredLabelError - GOTO to a label that never appears
└── EmitterError - output buffers used out of order

Error Message Format
--------------------
    count.bas:3:7: error: referencing variable before assignment: 'cuont'
        PRINT cuont
              ^
    hint: did you mean 'count'?
"""

from typing import Optional, List

from basic2c.errors import BasicError, SourceLocation


# =============================================================================
# Base Translation Exception
# =============================================================================

class TranslationError(BasicError):
    """
    Base exception for all translation errors.

    Attributes:
        message: The error description
        location: Where in the source the error occurred
        hint: A suggestion for fixing the error
        source_line: The actual source text at the error location
    """

    def __init__(
        self,
        message: str,
        location: Optional[SourceLocation] = None,
        hint: Optional[str] = None,
        source_line: Optional[str] = None,
    ):
        self.message = message
        self.location = location
        self.hint = hint
        self.source_line = source_line
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """
        Format the error message with location, source context, and hint.

            loop.bas:4:1: error: expected ENDWHILE, got EOF
                <source line>
                ^
            hint: every WHILE needs a matching ENDWHILE
        """
        parts = []

        if self.location:
            parts.append(f"{self.location}: error: {self.message}")
        else:
            parts.append(f"error: {self.message}")

        # Source context with caret pointer
        if self.source_line is not None and self.location is not None:
            parts.append(f"    {self.source_line}")
            if self.location.column > 0:
                padding = " " * (4 + self.location.column - 1)
                parts.append(f"{padding}^")

        if self.hint:
            parts.append(f"hint: {self.hint}")

        return "\n".join(parts)


# =============================================================================
# Lexical Errors
# =============================================================================

class LexError(TranslationError):
    """
    The scanner could not form a token.

    Examples:
        - '!' not followed by '='
        - '@' or '$' anywhere outside a string
    """
    pass


class InvalidCharacterError(LexError):
    """Character that does not start any token."""

    def __init__(
        self,
        char: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.char = char
        super().__init__(
            f"unknown token '{char}' (0x{ord(char):02X})",
            location=location,
            source_line=source_line,
        )


class IllegalStringCharacterError(LexError):
    """
    Forbidden character inside a string literal.

    Strings are copied verbatim into a printf() format, so carriage
    return, line feed, tab, backslash and percent are rejected. An
    unterminated string runs into the end of its line and lands here too.
    """

    def __init__(
        self,
        char: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.char = char
        hint = None
        if char == "\n":
            hint = "add closing '\"' before the end of the line"
        super().__init__(
            f"illegal character {char!r} in string",
            location=location,
            hint=hint,
            source_line=source_line,
        )


class MalformedNumberError(LexError):
    """A decimal point must be followed by at least one digit."""

    def __init__(
        self,
        text: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.text = text
        super().__init__(
            f"illegal character in number '{text}'",
            location=location,
            hint="write at least one digit after the decimal point",
            source_line=source_line,
        )


# =============================================================================
# Syntax Errors
# =============================================================================

class BasicSyntaxError(TranslationError):
    """
    Token sequence does not match the grammar.

    Named so as not to shadow the builtin SyntaxError.
    """
    pass


class UnexpectedTokenError(BasicSyntaxError):
    """
    Unexpected token during parsing.

    Raised when no statement or operand can start with the current token.
    """

    def __init__(
        self,
        found: str,
        expected: Optional[str] = None,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
        hint: Optional[str] = None,
    ):
        self.found = found
        self.expected = expected

        if hint is None and expected:
            hint = f"expected {expected}"

        super().__init__(
            f"unexpected token {found}",
            location=location,
            hint=hint,
            source_line=source_line,
        )


class MissingTokenError(BasicSyntaxError):
    """A specific token kind was required here."""

    def __init__(
        self,
        expected: str,
        found: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
        hint: Optional[str] = None,
    ):
        self.expected = expected
        self.found = found
        super().__init__(
            f"expected {expected}, got {found}",
            location=location,
            hint=hint,
            source_line=source_line,
        )


class MissingComparisonOperatorError(BasicSyntaxError):
    """IF and WHILE conditions need at least one relational operator."""

    def __init__(
        self,
        found: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.found = found
        super().__init__(
            f"expected comparison operator at {found}",
            location=location,
            hint="use one of ==, !=, <, <=, >, >=",
            source_line=source_line,
        )


# =============================================================================
# Semantic Errors
# =============================================================================

class SemanticError(TranslationError):
    """
    Program is grammatically valid but violates a declaration rule.

    Examples:
        - Reading a variable before any LET or INPUT assigns it
        - Two LABEL statements with the same name
        - GOTO to a label that is never declared
    """
    pass


class UndeclaredVariableError(SemanticError):
    """
    Variable referenced before assignment.

    Declarations must textually precede use. When similar names are
    known they are suggested in the hint, to help catch typos.
    """

    def __init__(
        self,
        name: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
        similar_names: Optional[List[str]] = None,
    ):
        self.name = name
        self.similar_names = similar_names or []

        hint = None
        if self.similar_names:
            suggestions = ", ".join(f"'{s}'" for s in self.similar_names[:3])
            hint = f"did you mean {suggestions}?"
        else:
            hint = f"assign '{name}' with LET or INPUT before using it"

        super().__init__(
            f"referencing variable before assignment: '{name}'",
            location=location,
            hint=hint,
            source_line=source_line,
        )


class DuplicateLabelError(SemanticError):
    """Two LABEL statements share a name."""

    def __init__(
        self,
        name: str,
        location: Optional[SourceLocation] = None,
        original_location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.name = name
        self.original_location = original_location

        hint = None
        if original_location:
            hint = f"'{name}' was first declared at {original_location}"

        super().__init__(
            f"label already exists: '{name}'",
            location=location,
            hint=hint,
            source_line=source_line,
        )


class UndeclaredLabelError(SemanticError):
    """
    GOTO target never declared.

    Forward jumps are legal, so this is only raised once the whole
    program has been read. The location is that of the GOTO.
    """

    def __init__(
        self,
        name: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.name = name
        super().__init__(
            f"attempting to GOTO undeclared label: '{name}'",
            location=location,
            hint=f"add 'LABEL {name}' somewhere in the program",
            source_line=source_line,
        )


# =============================================================================
# Emitter Errors
# =============================================================================

class EmitterError(TranslationError):
    """Output buffers used after they were already flushed."""
    pass
