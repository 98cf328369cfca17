"""
Tests for the C Output Emitter
==============================

These tests verify the two-buffer layout of the generated text and the
single-use contract of finalize().
"""

from pathlib import Path

import pytest

from basic2c.compiler.emitter import Emitter
from basic2c.compiler.errors import EmitterError, TranslationError
from basic2c.errors import OutputWriteError


# =============================================================================
# Test Buffering
# =============================================================================

class TestBuffering:
    """Tests for emit(), emit_line() and emit_header()."""

    def test_empty_output(self):
        """An unused emitter produces just the separator line."""
        assert Emitter().finalize() == "\n"

    def test_layout(self):
        """Header, then a blank line, then the body."""
        emitter = Emitter()
        emitter.emit_header("#include <stdio.h>")
        emitter.emit("a = ")
        emitter.emit("5")
        emitter.emit_line(";")
        assert emitter.finalize() == "#include <stdio.h>\n\na = 5;\n"

    def test_fragments_join_without_separator(self):
        emitter = Emitter()
        emitter.emit("if (")
        emitter.emit("a")
        emitter.emit(">")
        emitter.emit("3")
        emitter.emit_line(") {")
        assert emitter.code == ("if (", "a", ">", "3", ") {\n")

    def test_late_header_lines(self):
        """Header lines added after body text still come first."""
        emitter = Emitter()
        emitter.emit_header("int main(void) {")
        emitter.emit_line("a = 1;")
        emitter.emit_header("float a;")
        emitter.emit_line("b = a;")
        emitter.emit_header("float b;")
        assert emitter.finalize() == (
            "int main(void) {\nfloat a;\nfloat b;\n\na = 1;\nb = a;\n"
        )

    def test_header_property(self):
        emitter = Emitter()
        emitter.emit_header("float a;")
        assert emitter.header == ("float a;\n",)


# =============================================================================
# Test Finalization
# =============================================================================

class TestFinalize:
    """Tests for the single-use finalize() contract."""

    def test_finalize_twice(self):
        emitter = Emitter()
        emitter.finalize()
        with pytest.raises(EmitterError):
            emitter.finalize()

    @pytest.mark.parametrize("method", ["emit", "emit_line", "emit_header"])
    def test_emit_after_finalize(self, method):
        emitter = Emitter()
        emitter.finalize()
        with pytest.raises(EmitterError) as exc_info:
            getattr(emitter, method)("x")
        assert "already been finalized" in str(exc_info.value)

    def test_finalized_flag(self):
        emitter = Emitter()
        assert not emitter.finalized
        emitter.finalize()
        assert emitter.finalized

    def test_emitter_error_is_translation_error(self):
        assert issubclass(EmitterError, TranslationError)


# =============================================================================
# Test File Output
# =============================================================================

class TestWriteFile:
    """Tests for write_file()."""

    def test_write_to_constructor_path(self, tmp_path):
        path = tmp_path / "out.c"
        emitter = Emitter(path)
        emitter.emit_header("int main(void) {")
        emitter.emit_line("}")

        text = emitter.write_file()

        assert text == "int main(void) {\n\n}\n"
        assert path.read_text() == text
        assert emitter.finalized

    def test_explicit_path_wins(self, tmp_path):
        default = tmp_path / "default.c"
        explicit = tmp_path / "explicit.c"
        emitter = Emitter(default)
        emitter.write_file(str(explicit))
        assert explicit.exists()
        assert not default.exists()

    def test_no_path(self):
        with pytest.raises(EmitterError) as exc_info:
            Emitter().write_file()
        assert "no output path" in str(exc_info.value)

    def test_no_path_leaves_emitter_open(self):
        emitter = Emitter()
        with pytest.raises(EmitterError):
            emitter.write_file()
        assert not emitter.finalized

    def test_unwritable_destination(self, tmp_path):
        path = tmp_path / "missing" / "out.c"
        with pytest.raises(OutputWriteError) as exc_info:
            Emitter(path).write_file()
        assert exc_info.value.path == Path(path)
        assert isinstance(exc_info.value.__cause__, OSError)

    def test_encoding(self, tmp_path):
        path = tmp_path / "out.c"
        emitter = Emitter(path, encoding="latin-1")
        emitter.emit_line('printf("caf\xe9\\n");')
        emitter.write_file()
        assert 'printf("caf\xe9\\n");'.encode("latin-1") in path.read_bytes()
