"""
Source and Output Collaborators
===============================

The translator never touches the filesystem itself. These two functions
are the only places where text enters or leaves the package, and both
are synchronous: reading completes before a Scanner is built, and
writing only happens after a successful translation.

Failures are never swallowed. Any OSError, and a source that does not
decode in the requested encoding, is re-raised as a BasicIOError
subclass so callers (and the CLI) can report it distinctly.
"""

import logging
from pathlib import Path
from typing import Union

from basic2c.errors import SourceReadError, OutputWriteError

logger = logging.getLogger(__name__)


def read_text(source: Union[str, Path], encoding: str = "utf-8") -> str:
    """
    Read a whole BASIC source file.

    Args:
        source: Path to the source file
        encoding: Text encoding of the file

    Returns:
        The complete file contents

    Raises:
        SourceReadError: If the file cannot be read or decoded
    """
    path = Path(source)
    try:
        text = path.read_text(encoding=encoding)
    except (OSError, UnicodeDecodeError) as e:
        raise SourceReadError(path, e) from e

    logger.debug(f"Read {len(text)} characters from {path}")
    return text


def write_text(destination: Union[str, Path], text: str, encoding: str = "utf-8") -> None:
    """
    Write the generated C text in one piece.

    Raises:
        OutputWriteError: If the file cannot be written
    """
    path = Path(destination)
    try:
        path.write_text(text, encoding=encoding)
    except OSError as e:
        raise OutputWriteError(path, e) from e

    logger.debug(f"Wrote {len(text)} characters to {path}")
