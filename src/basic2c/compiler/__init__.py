"""
BASIC to C Compiler
===================

A single-pass translator from a minimal BASIC dialect to C.

- A pull-based scanner producing tokens on demand
- A recursive descent translator that checks and emits as it parses
- An emitter buffering the C header and body until the end

Pipeline
--------
    BASIC Source → Scanner → Translator → Emitter → C Source

There is no syntax tree: each grammar rule writes its C fragment as it
is recognized.

Language
--------
    LET n = 10
    WHILE n > 0 REPEAT
        PRINT n
        LET n = n - 1
    ENDWHILE
    PRINT "liftoff"

Statements: PRINT, INPUT, LET, IF/THEN/ENDIF, WHILE/REPEAT/ENDWHILE,
LABEL, GOTO. Every value is a float.
"""

from basic2c.compiler.compiler import (
    BasicCompiler,
    CompilerOptions,
    CompilerResult,
    compile_basic,
    compile_file,
)
from basic2c.compiler.errors import (
    TranslationError,
    LexError,
    InvalidCharacterError,
    IllegalStringCharacterError,
    MalformedNumberError,
    BasicSyntaxError,
    UnexpectedTokenError,
    MissingTokenError,
    MissingComparisonOperatorError,
    SemanticError,
    UndeclaredVariableError,
    DuplicateLabelError,
    UndeclaredLabelError,
    EmitterError,
)
from basic2c.compiler.lexer import Scanner, Token, TokenType, KEYWORDS, COMPARATORS
from basic2c.compiler.emitter import Emitter
from basic2c.compiler.parser import Translator, TranslationContext

__all__ = [
    # Main API
    "BasicCompiler",
    "CompilerOptions",
    "CompilerResult",
    "compile_basic",
    "compile_file",
    # Errors
    "TranslationError",
    "LexError",
    "InvalidCharacterError",
    "IllegalStringCharacterError",
    "MalformedNumberError",
    "BasicSyntaxError",
    "UnexpectedTokenError",
    "MissingTokenError",
    "MissingComparisonOperatorError",
    "SemanticError",
    "UndeclaredVariableError",
    "DuplicateLabelError",
    "UndeclaredLabelError",
    "EmitterError",
    # Scanner
    "Scanner",
    "Token",
    "TokenType",
    "KEYWORDS",
    "COMPARATORS",
    # Emitter
    "Emitter",
    # Translator
    "Translator",
    "TranslationContext",
]
