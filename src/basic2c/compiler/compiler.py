"""
BASIC Compiler Main Module
==========================

This module provides the main interface for translating BASIC to C.
It sequences the whole run:

    read source → Scanner → Translator (+ Emitter) → finalize → write

Usage
-----
Command line:
    $ b2c hello.bas -o hello.c

Programmatic:
    >>> from basic2c import compile_basic
    >>> c_source = compile_basic('PRINT "hello"')

Error Handling
--------------
Translation is fail-fast. The first TranslationError propagates to the
caller and nothing is written: the emitter's buffers are simply dropped.
Reading finishes before scanning starts, and writing only happens after
a successful translation. I/O failures are raised as BasicIOError.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Union

from basic2c.io import read_text
from basic2c.compiler.lexer import Scanner
from basic2c.compiler.emitter import Emitter
from basic2c.compiler.parser import Translator

logger = logging.getLogger(__name__)

# Output suffix when no destination is given
OUTPUT_SUFFIX = ".c"

# printf() cannot usefully show more digits than a double holds
MAX_PRINT_PRECISION = 17


@dataclass
class CompilerOptions:
    """
    Compiler configuration options.

    Attributes:
        print_precision: Digits after the decimal point when PRINT shows a
                         number (the N in printf's "%.Nf")
        encoding: Text encoding for the source and output files
    """
    print_precision: int = 2
    encoding: str = "utf-8"

    def __post_init__(self):
        if not 0 <= self.print_precision <= MAX_PRINT_PRECISION:
            raise ValueError(
                f"print_precision must be between 0 and {MAX_PRINT_PRECISION}, "
                f"got {self.print_precision}"
            )


@dataclass
class CompilerResult:
    """
    Result of a successful translation.

    Attributes:
        filename: Source filename
        success: True if translation succeeded
        code: Generated C source
        token_count: Number of tokens consumed
        variables: Variable names in first-use order
        labels: Declared label names in source order
        output_path: Where the code was written, if it was
    """
    filename: str = ""
    success: bool = False
    code: str = ""
    token_count: int = 0
    variables: list[str] = field(default_factory=list)
    labels: list[str] = field(default_factory=list)
    output_path: Optional[Path] = None


class BasicCompiler:
    """
    BASIC to C compiler.

    Example:
        compiler = BasicCompiler()
        result = compiler.compile_file("hello.bas")
        print(result.code)

    Attributes:
        options: Compiler configuration options
    """

    def __init__(self, options: Optional[CompilerOptions] = None):
        self.options = options or CompilerOptions()

    def compile_source(self, source: str, filename: str = "<input>") -> CompilerResult:
        """
        Translate BASIC source text to C.

        Args:
            source: BASIC program text
            filename: Source filename for error messages

        Returns:
            CompilerResult containing the C code

        Raises:
            TranslationError: On the first error in the program
        """
        emitter = Emitter()
        result = self._translate(source, filename, emitter)
        result.code = emitter.finalize()
        return result

    def compile_file(
        self,
        input_path: Union[str, Path],
        output_path: Union[str, Path, None] = None,
    ) -> CompilerResult:
        """
        Translate a BASIC file and write the C file next to it.

        Args:
            input_path: Path to the BASIC source
            output_path: Destination (default: input with a .c suffix)

        Returns:
            CompilerResult containing the C code and where it went

        Raises:
            SourceReadError: If the source cannot be read or decoded
            TranslationError: If translation fails (nothing is written)
            OutputWriteError: If the output cannot be written
        """
        input_path = Path(input_path)
        if output_path is None:
            output_path = input_path.with_suffix(OUTPUT_SUFFIX)
        output_path = Path(output_path)

        source = read_text(input_path, encoding=self.options.encoding)

        emitter = Emitter(output_path, encoding=self.options.encoding)
        result = self._translate(source, str(input_path), emitter)
        result.code = emitter.write_file()
        result.output_path = output_path

        logger.debug(f"Compiled {input_path} -> {output_path}")
        return result

    def _translate(self, source: str, filename: str, emitter: Emitter) -> CompilerResult:
        """Run the translator into emitter; the caller finalizes it."""
        logger.debug(f"Translating {filename}")

        translator = Translator(
            Scanner(source, filename),
            emitter,
            print_precision=self.options.print_precision,
        )
        context = translator.translate()

        return CompilerResult(
            filename=filename,
            success=True,
            token_count=translator.token_count,
            variables=list(context.symbols),
            labels=list(context.declared_labels),
        )


# =============================================================================
# Convenience Functions
# =============================================================================

def compile_basic(
    source: str,
    filename: str = "<input>",
    options: Optional[CompilerOptions] = None,
) -> str:
    """
    Translate BASIC source code to C.

    Example:
        >>> print(compile_basic('LET a = 5'))
        #include <stdio.h>
        int main(void) {
        float a;
        <BLANKLINE>
        a = 5;
        return 0;
        }
        <BLANKLINE>
    """
    result = BasicCompiler(options).compile_source(source, filename)
    return result.code


def compile_file(
    filepath: Union[str, Path],
    output_path: Union[str, Path, None] = None,
    options: Optional[CompilerOptions] = None,
) -> str:
    """
    Translate a BASIC file to C and write the result.

    Returns:
        The generated C code
    """
    result = BasicCompiler(options).compile_file(filepath, output_path)
    return result.code
