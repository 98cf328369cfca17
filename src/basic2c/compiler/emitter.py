"""
C Output Emitter
================

The emitter accumulates generated C text in two ordered buffers and
serializes them exactly once:

- header: the include directive, the opening of main(), and one
  variable declaration per distinct BASIC variable
- code: the statement body, built from inline fragments and lines

Declarations can be added to the header at any point during
translation, which is what lets a single-pass translator declare a
variable the first time it sees it while the body is already being
written.

Output Layout
-------------
    #include <stdio.h>        <- header
    int main(void) {
    float a;
                              <- blank separator
    a = 5;                    <- code
    return 0;
    }
"""

import logging
from pathlib import Path
from typing import Union

from basic2c.io import write_text
from basic2c.compiler.errors import EmitterError

logger = logging.getLogger(__name__)


class Emitter:
    """
    Accumulates header and body text for one translation.

    Attributes:
        path: Default destination used by write_file()
        encoding: Text encoding used by write_file()
    """

    def __init__(
        self,
        path: Union[str, Path, None] = None,
        encoding: str = "utf-8",
    ):
        self.path = Path(path) if path is not None else None
        self.encoding = encoding
        self._header: list[str] = []
        self._code: list[str] = []
        self._finalized = False

    # =========================================================================
    # Output Methods
    # =========================================================================

    def emit(self, code: str) -> None:
        """Append a fragment to the body without a line terminator."""
        self._check_open()
        self._code.append(code)

    def emit_line(self, code: str) -> None:
        """Append a fragment to the body and end the line."""
        self._check_open()
        self._code.append(f"{code}\n")

    def emit_header(self, code: str) -> None:
        """Append a line to the header."""
        self._check_open()
        self._header.append(f"{code}\n")

    # =========================================================================
    # Serialization
    # =========================================================================

    def finalize(self) -> str:
        """
        Concatenate header, a blank separator line, and body.

        Returns:
            The complete C source text

        Raises:
            EmitterError: If called more than once
        """
        self._check_open()
        self._finalized = True

        text = f"{''.join(self._header)}\n{''.join(self._code)}"
        logger.debug(
            f"Finalized output: {len(self._header)} header lines, "
            f"{len(self._code)} body fragments"
        )
        return text

    def write_file(self, path: Union[str, Path, None] = None) -> str:
        """
        Finalize and persist the output.

        Args:
            path: Destination (defaults to the path given at construction)

        Returns:
            The text that was written

        Raises:
            EmitterError: If no destination is known or already finalized
            OutputWriteError: If the file cannot be written
        """
        destination = Path(path) if path is not None else self.path
        if destination is None:
            raise EmitterError("no output path given")

        text = self.finalize()
        write_text(destination, text, encoding=self.encoding)
        return text

    # =========================================================================
    # Inspection
    # =========================================================================

    @property
    def header(self) -> tuple[str, ...]:
        return tuple(self._header)

    @property
    def code(self) -> tuple[str, ...]:
        return tuple(self._code)

    @property
    def finalized(self) -> bool:
        return self._finalized

    def _check_open(self) -> None:
        if self._finalized:
            raise EmitterError("output has already been finalized")
