"""
basic2c - BASIC to C Translator
===============================

This package translates programs written in a small BASIC dialect into
equivalent C source that any C compiler can build.

Main Components
---------------
- **compiler**: scanner, single-pass translator and emitter
- **io**: the read/write collaborators used around the translator
- **cli**: the ``b2c`` command-line tool

Quick Start
-----------
Translate a string:
    >>> from basic2c import compile_basic
    >>> c_source = compile_basic('PRINT "hello, world"')

Translate a file:
    >>> from basic2c import BasicCompiler
    >>> result = BasicCompiler().compile_file("hello.bas")
    >>> result.output_path
    PosixPath('hello.c')

Or use the command-line tool:
    $ b2c hello.bas
    $ cc hello.c -o hello
"""

__version__ = "1.0.0"

# =============================================================================
# Public API Exports
# =============================================================================

from basic2c.errors import (
    BasicError,
    SourceLocation,
    BasicIOError,
    SourceReadError,
    OutputWriteError,
)
from basic2c.compiler import (
    BasicCompiler,
    CompilerOptions,
    CompilerResult,
    compile_basic,
    compile_file,
    TranslationError,
    LexError,
    BasicSyntaxError,
    SemanticError,
    UndeclaredVariableError,
    DuplicateLabelError,
    UndeclaredLabelError,
    MissingComparisonOperatorError,
)

__all__ = [
    "__version__",
    # Compiler
    "BasicCompiler",
    "CompilerOptions",
    "CompilerResult",
    "compile_basic",
    "compile_file",
    # Exception hierarchy
    "BasicError",
    "SourceLocation",
    "BasicIOError",
    "SourceReadError",
    "OutputWriteError",
    "TranslationError",
    "LexError",
    "BasicSyntaxError",
    "SemanticError",
    "UndeclaredVariableError",
    "DuplicateLabelError",
    "UndeclaredLabelError",
    "MissingComparisonOperatorError",
]
