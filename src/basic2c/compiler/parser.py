"""
BASIC to C Translator
=====================

This module implements a single-pass recursive descent translator.
Each grammar rule emits its C fragment as soon as it matches, so there
is no syntax tree: recognizing the program and generating the output
are the same walk over the token stream.

Grammar (EBNF)
--------------
program     ::= {break} {statement} EOF
statement   ::= PRINT (STRING | expression) break
              | IF comparison THEN break {statement} ENDIF break
              | WHILE comparison REPEAT break {statement} ENDWHILE break
              | LABEL IDENTIFIER break
              | GOTO IDENTIFIER break
              | LET IDENTIFIER "=" expression break
              | INPUT IDENTIFIER break
comparison  ::= expression relop expression {relop expression}
expression  ::= term {("+" | "-") term}
term        ::= unary {("*" | "/") unary}
unary       ::= ["+" | "-"] primary
primary     ::= NUMBER | IDENTIFIER
break       ::= NEWLINE {NEWLINE}

Generated C
-----------
| BASIC                    | C                                      |
|--------------------------|----------------------------------------|
| PRINT "hi"               | printf("hi\\n");                        |
| PRINT a + 1              | printf("%.2f\\n", (float)(a+1));        |
| IF a > 3 THEN ... ENDIF  | if (a>3) { ... }                       |
| WHILE a < 9 REPEAT ...   | while (a<9) { ... }                    |
| LABEL top / GOTO top     | top: / goto top;                       |
| LET a = 5                | a = 5;  (and 'float a;' in the header) |
| INPUT a                  | guarded scanf("%f", &a)                |

Semantic Checks
---------------
- A variable is declared by its first LET or INPUT and must be declared
  before it is read.
- Label names are unique.
- GOTO may jump forward; targets are checked once the whole program has
  been read.

Example Usage
-------------
>>> from basic2c.compiler.lexer import Scanner
>>> from basic2c.compiler.emitter import Emitter
>>> from basic2c.compiler.parser import Translator
>>> emitter = Emitter()
>>> context = Translator(Scanner('PRINT "hi"'), emitter).translate()
>>> print(emitter.finalize())
#include <stdio.h>
int main(void) {

printf("hi\\n");
return 0;
}
"""

import logging
from dataclasses import dataclass, field
from typing import Optional

from basic2c.errors import SourceLocation
from basic2c.compiler.lexer import Scanner, Token, TokenType
from basic2c.compiler.emitter import Emitter
from basic2c.compiler.errors import (
    UnexpectedTokenError,
    MissingTokenError,
    MissingComparisonOperatorError,
    UndeclaredVariableError,
    DuplicateLabelError,
    UndeclaredLabelError,
)

logger = logging.getLogger(__name__)

NUMERIC_TYPE = "float"


# =============================================================================
# Translation State
# =============================================================================

@dataclass
class TranslationContext:
    """
    Symbol and label state for one program.

    Attributes:
        symbols: Variable name -> location of its first LET/INPUT,
                 in first-use order
        declared_labels: Label name -> location of its LABEL statement
        referenced_labels: (name, location) of every GOTO, in source order
    """
    symbols: dict[str, SourceLocation] = field(default_factory=dict)
    declared_labels: dict[str, SourceLocation] = field(default_factory=dict)
    referenced_labels: list[tuple[str, SourceLocation]] = field(default_factory=list)

    def declare_variable(self, name: str, location: SourceLocation) -> bool:
        """Record a variable. Returns True if it was not known before."""
        if name in self.symbols:
            return False
        self.symbols[name] = location
        return True

    def is_declared(self, name: str) -> bool:
        return name in self.symbols

    def undeclared_labels(self) -> list[tuple[str, SourceLocation]]:
        """GOTO targets with no matching LABEL, in source order."""
        return [
            (name, location)
            for name, location in self.referenced_labels
            if name not in self.declared_labels
        ]


# =============================================================================
# Translator
# =============================================================================

class Translator:
    """
    Recursive descent parser that emits C while it parses.

    The translator owns a two-token lookahead window (current_token and
    peek_token) over the scanner, and a TranslationContext holding the
    program's variables and labels.

    Attributes:
        scanner: Token source
        emitter: Output sink
        context: Variables and labels seen so far
        print_precision: Digits after the point when printing numbers
    """

    def __init__(
        self,
        scanner: Scanner,
        emitter: Emitter,
        print_precision: int = 2,
    ):
        self.scanner = scanner
        self.emitter = emitter
        self.print_precision = print_precision
        self.context = TranslationContext()
        self.token_count = 0

        self.current_token: Optional[Token] = None
        self.peek_token: Optional[Token] = None

        # Fill both lookahead slots
        self._advance()
        self._advance()

    # =========================================================================
    # Token Access Methods
    # =========================================================================

    def _advance(self) -> None:
        """Discard current_token, promote peek_token, pull a new one."""
        self.current_token = self.peek_token
        self.peek_token = self.scanner.next_token()
        if self.current_token is not None:
            self.token_count += 1

    def _check_current(self, token_type: TokenType) -> bool:
        return self.current_token.is_type(token_type)

    def _check_peek(self, token_type: TokenType) -> bool:
        return self.peek_token.is_type(token_type)

    def _match(self, token_type: TokenType, hint: Optional[str] = None) -> Token:
        """
        Consume the current token if it has the expected type.

        Returns:
            The consumed token

        Raises:
            MissingTokenError: If the current token has another type
        """
        token = self.current_token
        if not token.is_type(token_type):
            raise MissingTokenError(
                token_type.name,
                token.describe(),
                token.location,
                self._source_line(token),
                hint=hint,
            )
        self._advance()
        return token

    def _source_line(self, token: Token) -> Optional[str]:
        return self.scanner.source_line(token.line)

    # =========================================================================
    # Program
    # =========================================================================

    def translate(self) -> TranslationContext:
        """
        Translate the whole program into the emitter.

        Returns:
            The final TranslationContext

        Raises:
            TranslationError: On the first lexical, syntax or semantic error
        """
        self.emitter.emit_header("#include <stdio.h>")
        self.emitter.emit_header("int main(void) {")

        # Leading blank lines
        while self._check_current(TokenType.NEWLINE):
            self._advance()

        while not self._check_current(TokenType.EOF):
            self._parse_statement()

        self.emitter.emit_line("return 0;")
        self.emitter.emit_line("}")

        self._check_goto_targets()

        logger.debug(
            f"Translated {self.token_count} tokens: "
            f"{len(self.context.symbols)} variables, "
            f"{len(self.context.declared_labels)} labels"
        )
        return self.context

    def _check_goto_targets(self) -> None:
        """Every GOTO must name a label declared somewhere in the program."""
        missing = self.context.undeclared_labels()
        if missing:
            name, location = missing[0]
            raise UndeclaredLabelError(
                name,
                location,
                self.scanner.source_line(location.line),
            )

    # =========================================================================
    # Statements
    # =========================================================================

    def _parse_statement(self) -> None:
        """Parse one statement and the line break(s) that end it."""
        token = self.current_token

        if token.type == TokenType.PRINT:
            self._parse_print_statement()
        elif token.type == TokenType.IF:
            self._parse_if_statement()
        elif token.type == TokenType.WHILE:
            self._parse_while_statement()
        elif token.type == TokenType.LABEL:
            self._parse_label_statement()
        elif token.type == TokenType.GOTO:
            self._parse_goto_statement()
        elif token.type == TokenType.LET:
            self._parse_let_statement()
        elif token.type == TokenType.INPUT:
            self._parse_input_statement()
        else:
            hint = "a statement starts with PRINT, IF, WHILE, LABEL, GOTO, LET or INPUT"
            if token.type == TokenType.IDENTIFIER and self._check_peek(TokenType.EQ):
                hint = f"assignments need LET: 'LET {token.value} = ...'"
            raise UnexpectedTokenError(
                token.describe(),
                expected="statement",
                location=token.location,
                source_line=self._source_line(token),
                hint=hint,
            )

        self._parse_newline()

    def _parse_print_statement(self) -> None:
        """PRINT (STRING | expression)"""
        self._advance()

        if self._check_current(TokenType.STRING):
            self.emitter.emit_line(f'printf("{self.current_token.value}\\n");')
            self._advance()
        else:
            self.emitter.emit(f'printf("%.{self.print_precision}f\\n", ({NUMERIC_TYPE})(')
            self._parse_expression()
            self.emitter.emit_line("));")

    def _parse_if_statement(self) -> None:
        """IF comparison THEN break {statement} ENDIF"""
        self._advance()

        self.emitter.emit("if (")
        self._parse_comparison()
        self._match(TokenType.THEN, hint="conditions end with THEN")
        self._parse_newline()
        self.emitter.emit_line(") {")

        self._parse_block(TokenType.ENDIF, "every IF needs a matching ENDIF")

        self._match(TokenType.ENDIF)
        self.emitter.emit_line("}")

    def _parse_while_statement(self) -> None:
        """WHILE comparison REPEAT break {statement} ENDWHILE"""
        self._advance()

        self.emitter.emit("while (")
        self._parse_comparison()
        self._match(TokenType.REPEAT, hint="loop conditions end with REPEAT")
        self._parse_newline()
        self.emitter.emit_line(") {")

        self._parse_block(TokenType.ENDWHILE, "every WHILE needs a matching ENDWHILE")

        self._match(TokenType.ENDWHILE)
        self.emitter.emit_line("}")

    def _parse_block(self, terminator: TokenType, hint: str) -> None:
        """Zero or more statements up to (not including) the terminator."""
        while not self._check_current(terminator):
            if self._check_current(TokenType.EOF):
                token = self.current_token
                raise MissingTokenError(
                    terminator.name,
                    token.describe(),
                    token.location,
                    self._source_line(token),
                    hint=hint,
                )
            self._parse_statement()

    def _parse_label_statement(self) -> None:
        """LABEL IDENTIFIER"""
        self._advance()
        token = self._match(TokenType.IDENTIFIER, hint="LABEL needs a name")
        label = token.value

        if label in self.context.declared_labels:
            raise DuplicateLabelError(
                label,
                token.location,
                self.context.declared_labels[label],
                self._source_line(token),
            )
        self.context.declared_labels[label] = token.location

        self.emitter.emit_line(f"{label}:")

    def _parse_goto_statement(self) -> None:
        """GOTO IDENTIFIER"""
        self._advance()
        token = self._match(TokenType.IDENTIFIER, hint="GOTO needs a label name")

        # Checked after the whole program so forward jumps work
        self.context.referenced_labels.append((token.value, token.location))

        self.emitter.emit_line(f"goto {token.value};")

    def _parse_let_statement(self) -> None:
        """LET IDENTIFIER "=" expression"""
        self._advance()
        token = self._match(TokenType.IDENTIFIER, hint="LET needs a variable name")
        self._declare_variable(token)

        self.emitter.emit(f"{token.value} = ")
        self._match(TokenType.EQ)
        self._parse_expression()
        self.emitter.emit_line(";")

    def _parse_input_statement(self) -> None:
        """INPUT IDENTIFIER"""
        self._advance()
        token = self._match(TokenType.IDENTIFIER, hint="INPUT needs a variable name")
        self._declare_variable(token)

        # Non-numeric input reads as zero and the rest of the line is dropped
        name = token.value
        self.emitter.emit_line(f'if (0 == scanf("%f", &{name})) {{')
        self.emitter.emit_line(f"{name} = 0;")
        self.emitter.emit_line('scanf("%*s");')
        self.emitter.emit_line("}")

    def _declare_variable(self, token: Token) -> None:
        """Declare a variable in the header the first time it is assigned."""
        if self.context.declare_variable(token.value, token.location):
            self.emitter.emit_header(f"{NUMERIC_TYPE} {token.value};")

    def _parse_newline(self) -> None:
        """One required line break, then any number of blank lines."""
        self._match(TokenType.NEWLINE, hint="put each statement on its own line")

        while self._check_current(TokenType.NEWLINE):
            self._advance()

    # =========================================================================
    # Expressions
    # =========================================================================

    def _parse_comparison(self) -> None:
        """expression relop expression {relop expression}"""
        self._parse_expression()

        token = self.current_token
        if not token.is_comparator():
            raise MissingComparisonOperatorError(
                token.describe(),
                token.location,
                self._source_line(token),
            )

        while self.current_token.is_comparator():
            self.emitter.emit(self.current_token.value)
            self._advance()
            self._parse_expression()

    def _parse_expression(self) -> None:
        """term {("+" | "-") term}"""
        self._parse_term()

        while self._check_current(TokenType.PLUS) or self._check_current(TokenType.MINUS):
            self.emitter.emit(self.current_token.value)
            self._advance()
            self._parse_term()

    def _parse_term(self) -> None:
        """unary {("*" | "/") unary}"""
        self._parse_unary()

        while self._check_current(TokenType.ASTERISK) or self._check_current(TokenType.SLASH):
            self.emitter.emit(self.current_token.value)
            self._advance()
            self._parse_unary()

    def _parse_unary(self) -> None:
        """["+" | "-"] primary"""
        if self._check_current(TokenType.PLUS) or self._check_current(TokenType.MINUS):
            self.emitter.emit(self.current_token.value)
            self._advance()

        self._parse_primary()

    def _parse_primary(self) -> None:
        """NUMBER | IDENTIFIER"""
        token = self.current_token

        if token.type == TokenType.NUMBER:
            self.emitter.emit(token.value)
            self._advance()
        elif token.type == TokenType.IDENTIFIER:
            if not self.context.is_declared(token.value):
                raise UndeclaredVariableError(
                    token.value,
                    token.location,
                    self._source_line(token),
                    self._find_similar_names(token.value),
                )
            self.emitter.emit(token.value)
            self._advance()
        else:
            raise UnexpectedTokenError(
                token.describe(),
                expected="a number or variable",
                location=token.location,
                source_line=self._source_line(token),
            )

    # =========================================================================
    # Error Hints
    # =========================================================================

    def _find_similar_names(self, name: str) -> list[str]:
        """Declared variables within two edits of name, closest first."""
        candidates = []
        for symbol in self.context.symbols:
            if abs(len(symbol) - len(name)) > 1:
                continue
            distance = _edit_distance(name.lower(), symbol.lower())
            if distance <= 2:
                candidates.append((distance, symbol))

        return [symbol for _, symbol in sorted(candidates)][:3]


def _edit_distance(a: str, b: str) -> int:
    """Levenshtein distance, keeping one row of the table at a time."""
    previous = list(range(len(b) + 1))
    for i, char_a in enumerate(a, 1):
        row = [i]
        for j, char_b in enumerate(b, 1):
            row.append(min(
                previous[j] + 1,
                row[j - 1] + 1,
                previous[j - 1] + (char_a != char_b),
            ))
        previous = row
    return previous[-1]
