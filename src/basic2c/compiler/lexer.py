"""
BASIC Scanner (Tokenizer)
=========================

This module implements the pull-based scanner for the BASIC dialect.
The translator asks for one token at a time with next_token(); the
scanner never runs ahead of the translator.

Token Categories
----------------
- Structure: NEWLINE (statement separator), EOF
- Literals: NUMBER (123, 4.5), STRING ("text")
- Keywords: LABEL GOTO PRINT INPUT LET IF THEN ENDIF WHILE REPEAT ENDWHILE
- Identifiers: runs of ASCII letters that are not keywords
- Operators: = + - * / == != < <= > >=

Lexical Rules
-------------
- Spaces, tabs and carriage returns between tokens are ignored.
- '#' starts a comment that runs to the end of the line.
- Keywords are upper-case only; 'print' is an identifier.
- Identifiers contain letters only (no digits or underscores).
- Numbers are digits with an optional fraction; '1.' is an error.
- Strings are copied verbatim: no escapes, and no CR, LF, TAB,
  backslash or percent inside.

The source is always suffixed with one line break, so the last
statement is terminated even if the file does not end with one.

Example Usage
-------------
>>> from basic2c.compiler.lexer import Scanner
>>> for token in Scanner('LET a = 5').tokenize():
...     print(token)
Token(LET, 'LET', 1:1)
Token(IDENTIFIER, 'a', 1:5)
Token(EQ, '=', 1:7)
Token(NUMBER, '5', 1:9)
Token(NEWLINE, '\\n', 1:10)
Token(EOF, 2:1)
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Iterator, Optional
import string

from basic2c.errors import SourceLocation
from basic2c.compiler.errors import (
    LexError,
    InvalidCharacterError,
    IllegalStringCharacterError,
    MalformedNumberError,
)


# =============================================================================
# Token Type Enumeration
# =============================================================================

class TokenType(Enum):
    """Token kinds of the BASIC dialect."""

    # === Structural Tokens ===
    EOF = auto()            # End of source
    NEWLINE = auto()        # Statement separator
    NUMBER = auto()         # 42, 3.14
    IDENTIFIER = auto()     # Variable and label names
    STRING = auto()         # "text"

    # === Keywords ===
    LABEL = auto()
    GOTO = auto()
    PRINT = auto()
    INPUT = auto()
    LET = auto()
    IF = auto()
    THEN = auto()
    ENDIF = auto()
    WHILE = auto()
    REPEAT = auto()
    ENDWHILE = auto()

    # === Operators ===
    EQ = auto()             # =
    PLUS = auto()           # +
    MINUS = auto()          # -
    ASTERISK = auto()       # *
    SLASH = auto()          # /
    EQEQ = auto()           # ==
    NOTEQ = auto()          # !=
    LT = auto()             # <
    LTEQ = auto()           # <=
    GT = auto()             # >
    GTEQ = auto()           # >=


# =============================================================================
# Lookup Tables
# =============================================================================

KEYWORDS: dict[str, TokenType] = {
    "LABEL": TokenType.LABEL,
    "GOTO": TokenType.GOTO,
    "PRINT": TokenType.PRINT,
    "INPUT": TokenType.INPUT,
    "LET": TokenType.LET,
    "IF": TokenType.IF,
    "THEN": TokenType.THEN,
    "ENDIF": TokenType.ENDIF,
    "WHILE": TokenType.WHILE,
    "REPEAT": TokenType.REPEAT,
    "ENDWHILE": TokenType.ENDWHILE,
}

COMPARATORS: frozenset[TokenType] = frozenset({
    TokenType.EQEQ,
    TokenType.NOTEQ,
    TokenType.LT,
    TokenType.LTEQ,
    TokenType.GT,
    TokenType.GTEQ,
})


# =============================================================================
# Token Data Class
# =============================================================================

@dataclass(frozen=True)
class Token:
    """
    A single token from BASIC source.

    Attributes:
        type: The TokenType classification
        value: The literal text (string contents exclude the quotes)
        line: Line number in source (1-indexed)
        column: Column number in source (1-indexed)
        filename: Name of the source file
    """
    type: TokenType
    value: str
    line: int = 1
    column: int = 1
    filename: str = "<input>"

    def __repr__(self) -> str:
        """Format token for debugging output."""
        if self.value:
            return f"Token({self.type.name}, {self.value!r}, {self.line}:{self.column})"
        return f"Token({self.type.name}, {self.line}:{self.column})"

    @property
    def location(self) -> SourceLocation:
        """Return a SourceLocation for error reporting."""
        return SourceLocation(self.filename, self.line, self.column)

    def is_type(self, token_type: TokenType) -> bool:
        return self.type == token_type

    def is_comparator(self) -> bool:
        """Return True if this token is a relational operator."""
        return self.type in COMPARATORS

    def describe(self) -> str:
        """Human-readable form for error messages."""
        if self.type in (TokenType.IDENTIFIER, TokenType.NUMBER):
            return f"{self.type.name} '{self.value}'"
        if self.type == TokenType.STRING:
            return f'STRING "{self.value}"'
        return self.type.name


def lookup_keyword(text: str) -> TokenType:
    """Classify a word as a keyword, falling back to IDENTIFIER."""
    return KEYWORDS.get(text, TokenType.IDENTIFIER)


# =============================================================================
# Scanner Implementation
# =============================================================================

class Scanner:
    """
    Tokenizes BASIC source one token per call.

    The scanner keeps a current character and peeks at most one
    character ahead. Each call to next_token() leaves the scanner
    positioned on the first character after the token it returned.

    Usage:
        scanner = Scanner(source_text, filename)
        token = scanner.next_token()

    Attributes:
        source: The source text, with the implicit trailing line break
        filename: Name of the source file (for error reporting)
        current_char: The character under the cursor ("\\0" at the end)
    """

    WHITESPACE = " \t\r"
    ILLEGAL_STRING_CHARS = "\r\n\t\\%"
    DIGITS = string.digits
    LETTERS = string.ascii_letters

    # Sentinel returned past the end of the source
    END = "\0"

    def __init__(self, source: str, filename: str = "<input>"):
        """
        Initialize the scanner with source text.

        Args:
            source: The BASIC program
            filename: Name of the source file (for error messages)
        """
        self.source = f"{source}\n"
        self.filename = filename
        self.current_char = ""

        self._pos = -1
        self._line = 1
        self._column = 0
        self._line_start_pos = 0

        self._next_char()

    # =========================================================================
    # Character Access Methods
    # =========================================================================

    def _at_end(self) -> bool:
        return self._pos >= len(self.source)

    def _next_char(self) -> None:
        """Advance to the next character, tracking line and column."""
        if self.current_char == "\n":
            self._line += 1
            self._column = 0
            self._line_start_pos = self._pos + 1

        self._pos += 1
        self._column += 1

        if self._at_end():
            self.current_char = self.END
        else:
            self.current_char = self.source[self._pos]

    def _peek_char(self) -> str:
        """Return the character after the current one."""
        if self._pos + 1 >= len(self.source):
            return self.END
        return self.source[self._pos + 1]

    # =========================================================================
    # Whitespace and Comment Handling
    # =========================================================================

    def _skip_whitespace(self) -> None:
        """Skip whitespace except line breaks."""
        while not self._at_end() and self.current_char in self.WHITESPACE:
            self._next_char()

    def _skip_comment(self) -> None:
        """Skip a '#' comment, leaving the line break for the next token."""
        if self.current_char != "#":
            return
        while not self._at_end() and self.current_char != "\n":
            self._next_char()

    # =========================================================================
    # Token Scanning
    # =========================================================================

    def next_token(self) -> Token:
        """
        Return the next token.

        Raises:
            LexError: If the current character cannot start a token
        """
        self._skip_whitespace()
        self._skip_comment()

        line = self._line
        column = self._column
        char = self.current_char

        if self._at_end():
            return self._make_token(TokenType.EOF, "", line, column)

        if char == "+":
            token = self._make_token(TokenType.PLUS, char, line, column)
        elif char == "-":
            token = self._make_token(TokenType.MINUS, char, line, column)
        elif char == "*":
            token = self._make_token(TokenType.ASTERISK, char, line, column)
        elif char == "/":
            token = self._make_token(TokenType.SLASH, char, line, column)
        elif char == "=":
            token = self._scan_two_char(TokenType.EQ, TokenType.EQEQ, line, column)
        elif char == ">":
            token = self._scan_two_char(TokenType.GT, TokenType.GTEQ, line, column)
        elif char == "<":
            token = self._scan_two_char(TokenType.LT, TokenType.LTEQ, line, column)
        elif char == "!":
            if self._peek_char() != "=":
                raise LexError(
                    f"expected '!=', got '!{self._printable(self._peek_char())}'",
                    SourceLocation(self.filename, line, column),
                    hint="'!' is only valid as part of '!='",
                    source_line=self._current_line(),
                )
            self._next_char()
            token = self._make_token(TokenType.NOTEQ, "!=", line, column)
        elif char == '"':
            token = self._scan_string(line, column)
        elif char == "\n":
            token = self._make_token(TokenType.NEWLINE, char, line, column)
        elif char in self.DIGITS:
            token = self._scan_number(line, column)
        elif char in self.LETTERS:
            token = self._scan_word(line, column)
        else:
            raise InvalidCharacterError(
                char,
                SourceLocation(self.filename, line, column),
                self._current_line(),
            )

        self._next_char()
        return token

    def tokenize(self) -> Iterator[Token]:
        """
        Generate tokens up to and including EOF.

        Raises:
            LexError: If invalid input is encountered
        """
        while True:
            token = self.next_token()
            yield token
            if token.type == TokenType.EOF:
                return

    def _make_token(self, token_type: TokenType, value: str, line: int, column: int) -> Token:
        return Token(
            type=token_type,
            value=value,
            line=line,
            column=column,
            filename=self.filename,
        )

    def _scan_two_char(
        self, single: TokenType, double: TokenType, line: int, column: int
    ) -> Token:
        """Scan '=', '<' or '>' with an optional trailing '='."""
        first = self.current_char
        if self._peek_char() == "=":
            self._next_char()
            return self._make_token(double, f"{first}=", line, column)
        return self._make_token(single, first, line, column)

    def _scan_string(self, line: int, column: int) -> Token:
        """
        Scan a double-quoted string.

        Leaves current_char on the closing quote.
        """
        self._next_char()  # consume opening "
        start = self._pos

        while self.current_char != '"':
            if self._at_end() or self.current_char in self.ILLEGAL_STRING_CHARS:
                raise IllegalStringCharacterError(
                    self.current_char,
                    SourceLocation(self.filename, self._line, self._column),
                    self._current_line(),
                )
            self._next_char()

        return self._make_token(TokenType.STRING, self.source[start:self._pos], line, column)

    def _scan_number(self, line: int, column: int) -> Token:
        """Scan digits with an optional '.digits' fraction."""
        start = self._pos

        while self._peek_char() in self.DIGITS:
            self._next_char()

        if self._peek_char() == ".":
            self._next_char()

            if self._peek_char() not in self.DIGITS:
                raise MalformedNumberError(
                    self.source[start:self._pos + 1],
                    SourceLocation(self.filename, self._line, self._column),
                    self._current_line(),
                )

            while self._peek_char() in self.DIGITS:
                self._next_char()

        return self._make_token(TokenType.NUMBER, self.source[start:self._pos + 1], line, column)

    def _scan_word(self, line: int, column: int) -> Token:
        """Scan a keyword or identifier."""
        start = self._pos

        while self._peek_char() in self.LETTERS:
            self._next_char()

        text = self.source[start:self._pos + 1]
        return self._make_token(lookup_keyword(text), text, line, column)

    # =========================================================================
    # Utility Methods
    # =========================================================================

    def _current_line(self) -> str:
        """Get the current line of source text for error reporting."""
        line_end = self.source.find("\n", self._line_start_pos)
        if line_end == -1:
            line_end = len(self.source)
        return self.source[self._line_start_pos:line_end]

    def source_line(self, line: int) -> Optional[str]:
        """Return the text of a 1-indexed source line, if it exists."""
        lines = self.source.split("\n")
        if 0 < line <= len(lines):
            return lines[line - 1]
        return None

    @staticmethod
    def _printable(char: str) -> str:
        if char == Scanner.END:
            return ""
        return char.encode("unicode_escape").decode("ascii")
