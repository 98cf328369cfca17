# =============================================================================
# test_lexer.py - Scanner Unit Tests
# =============================================================================
# Tests for the BASIC scanner (tokenizer).
#
# Test coverage includes:
#   - Keywords, identifiers and the keyword table
#   - Numbers with and without fractions
#   - String literals and their forbidden characters
#   - One- and two-character operators
#   - Comments, whitespace and the implicit trailing line break
#   - Source locations and error conditions
# =============================================================================

import pytest
from basic2c.compiler.lexer import (
    Scanner,
    Token,
    TokenType,
    KEYWORDS,
    COMPARATORS,
    lookup_keyword,
)
from basic2c.compiler.errors import (
    LexError,
    InvalidCharacterError,
    IllegalStringCharacterError,
    MalformedNumberError,
)


# =============================================================================
# Helper Functions
# =============================================================================

def tokenize(source: str) -> list[Token]:
    """Scan the whole source, EOF included."""
    return list(Scanner(source, "<test>").tokenize())


def types(source: str) -> list[TokenType]:
    """Token types without the trailing NEWLINE/EOF pair."""
    tokens = tokenize(source)
    assert tokens[-2].type == TokenType.NEWLINE
    assert tokens[-1].type == TokenType.EOF
    return [t.type for t in tokens[:-2]]


# =============================================================================
# Structure Tests
# =============================================================================

class TestStructure:
    """Line breaks, end of input and whitespace."""

    def test_empty_source(self):
        """Empty source still yields the implicit line break."""
        tokens = tokenize("")
        assert [t.type for t in tokens] == [TokenType.NEWLINE, TokenType.EOF]

    def test_missing_trailing_newline(self):
        """Last statement is terminated even without a final line break."""
        tokens = tokenize("PRINT a")
        assert [t.type for t in tokens] == [
            TokenType.PRINT,
            TokenType.IDENTIFIER,
            TokenType.NEWLINE,
            TokenType.EOF,
        ]

    def test_trailing_newline_is_kept(self):
        """Exactly one line break is appended."""
        tokens = tokenize("PRINT a\n")
        assert [t.type for t in tokens] == [
            TokenType.PRINT,
            TokenType.IDENTIFIER,
            TokenType.NEWLINE,
            TokenType.NEWLINE,
            TokenType.EOF,
        ]

    def test_whitespace_is_skipped(self):
        assert types("  LET \t a\r =  1  ") == [
            TokenType.LET,
            TokenType.IDENTIFIER,
            TokenType.EQ,
            TokenType.NUMBER,
        ]

    def test_crlf_line_endings(self):
        """Carriage returns are whitespace, line feeds are tokens."""
        tokens = tokenize("PRINT a\r\nPRINT b")
        assert [t.type for t in tokens].count(TokenType.NEWLINE) == 2

    def test_eof_repeats(self):
        """Asking past the end keeps returning EOF."""
        scanner = Scanner("")
        assert scanner.next_token().type == TokenType.NEWLINE
        assert scanner.next_token().type == TokenType.EOF
        assert scanner.next_token().type == TokenType.EOF

    def test_implicit_newline_in_source(self):
        assert Scanner("LET a = 1").source == "LET a = 1\n"


# =============================================================================
# Comment Tests
# =============================================================================

class TestComments:

    def test_full_line_comment(self):
        tokens = tokenize("# a comment\nPRINT a")
        assert [t.type for t in tokens] == [
            TokenType.NEWLINE,
            TokenType.PRINT,
            TokenType.IDENTIFIER,
            TokenType.NEWLINE,
            TokenType.EOF,
        ]

    def test_trailing_comment(self):
        """Comment runs to the end of the line but keeps the line break."""
        assert types("LET a = 1 # set a") == [
            TokenType.LET,
            TokenType.IDENTIFIER,
            TokenType.EQ,
            TokenType.NUMBER,
        ]

    def test_comment_hides_invalid_characters(self):
        assert types("PRINT a # $@! not scanned") == [
            TokenType.PRINT,
            TokenType.IDENTIFIER,
        ]


# =============================================================================
# Keyword and Identifier Tests
# =============================================================================

class TestWords:

    def test_all_keywords(self):
        for text, token_type in KEYWORDS.items():
            tokens = tokenize(text)
            assert tokens[0].type == token_type
            assert tokens[0].value == text

    def test_keyword_table(self):
        assert len(KEYWORDS) == 11
        assert lookup_keyword("WHILE") == TokenType.WHILE
        assert lookup_keyword("counter") == TokenType.IDENTIFIER

    def test_keywords_are_case_sensitive(self):
        tokens = tokenize("print")
        assert tokens[0].type == TokenType.IDENTIFIER
        assert tokens[0].value == "print"

    def test_keyword_prefix_is_identifier(self):
        """Longest run of letters wins, so ENDIFX is not ENDIF."""
        tokens = tokenize("ENDIFX")
        assert tokens[0].type == TokenType.IDENTIFIER
        assert tokens[0].value == "ENDIFX"

    def test_identifiers_are_letters_only(self):
        tokens = tokenize("abc123")
        assert tokens[0].type == TokenType.IDENTIFIER
        assert tokens[0].value == "abc"
        assert tokens[1].type == TokenType.NUMBER
        assert tokens[1].value == "123"

    def test_underscore_is_invalid(self):
        with pytest.raises(InvalidCharacterError):
            tokenize("my_var")


# =============================================================================
# Number Tests
# =============================================================================

class TestNumbers:

    def test_integer(self):
        tokens = tokenize("123")
        assert tokens[0].type == TokenType.NUMBER
        assert tokens[0].value == "123"

    def test_decimal(self):
        tokens = tokenize("3.14")
        assert tokens[0].type == TokenType.NUMBER
        assert tokens[0].value == "3.14"

    def test_leading_zeros_kept_verbatim(self):
        assert tokenize("007.50")[0].value == "007.50"

    def test_point_without_digit(self):
        with pytest.raises(MalformedNumberError) as exc_info:
            tokenize("LET a = 1.")
        assert exc_info.value.text == "1."

    def test_point_followed_by_letter(self):
        with pytest.raises(MalformedNumberError):
            tokenize("1.x")

    def test_malformed_number_is_lex_error(self):
        with pytest.raises(LexError):
            tokenize("2.")

    def test_no_exponent(self):
        """1e5 is a number followed by an identifier."""
        assert types("1e5") == [
            TokenType.NUMBER,
            TokenType.IDENTIFIER,
            TokenType.NUMBER,
        ]


# =============================================================================
# String Tests
# =============================================================================

class TestStrings:

    def test_simple_string(self):
        tokens = tokenize('"hello world"')
        assert tokens[0].type == TokenType.STRING
        assert tokens[0].value == "hello world"

    def test_empty_string(self):
        tokens = tokenize('""')
        assert tokens[0].type == TokenType.STRING
        assert tokens[0].value == ""

    def test_string_keeps_punctuation(self):
        """Anything but the forbidden characters is copied verbatim."""
        assert tokenize('"a #comment, LET x = 1!"')[0].value == "a #comment, LET x = 1!"

    @pytest.mark.parametrize("char", ["%", "\\", "\t", "\r"])
    def test_forbidden_characters(self, char):
        with pytest.raises(IllegalStringCharacterError) as exc_info:
            tokenize(f'"abc{char}def"')
        assert exc_info.value.char == char

    def test_unterminated_string(self):
        """An open string runs into the line break."""
        with pytest.raises(IllegalStringCharacterError) as exc_info:
            tokenize('PRINT "abc')
        assert exc_info.value.char == "\n"
        assert "closing" in exc_info.value.hint

    def test_string_across_lines(self):
        with pytest.raises(IllegalStringCharacterError):
            tokenize('PRINT "abc\ndef"')


# =============================================================================
# Operator Tests
# =============================================================================

class TestOperators:

    def test_all_operators(self):
        assert types("+ - * / = == != < <= > >=") == [
            TokenType.PLUS,
            TokenType.MINUS,
            TokenType.ASTERISK,
            TokenType.SLASH,
            TokenType.EQ,
            TokenType.EQEQ,
            TokenType.NOTEQ,
            TokenType.LT,
            TokenType.LTEQ,
            TokenType.GT,
            TokenType.GTEQ,
        ]

    def test_operators_without_spaces(self):
        tokens = tokenize("a<=b")
        assert [t.value for t in tokens[:3]] == ["a", "<=", "b"]

    def test_two_char_values(self):
        tokens = tokenize("== != <= >=")
        assert [t.value for t in tokens[:4]] == ["==", "!=", "<=", ">="]

    def test_bang_needs_equals(self):
        with pytest.raises(LexError) as exc_info:
            tokenize("IF a ! b")
        assert "!=" in str(exc_info.value)
        assert exc_info.value.location.column == 6

    def test_bang_at_end_of_line(self):
        with pytest.raises(LexError):
            tokenize("a !")

    def test_comparators(self):
        assert len(COMPARATORS) == 6
        comparators = [t for t in tokenize("== != < <= > >= = +") if t.is_comparator()]
        assert len(comparators) == 6


# =============================================================================
# Error Tests
# =============================================================================

class TestInvalidCharacters:

    @pytest.mark.parametrize("char", ["@", "$", "(", ")", ";", ",", "."])
    def test_invalid_character(self, char):
        with pytest.raises(InvalidCharacterError) as exc_info:
            tokenize(f"LET a = {char}")
        assert exc_info.value.char == char

    def test_error_message_format(self):
        with pytest.raises(InvalidCharacterError) as exc_info:
            list(Scanner("LET a = 1\nLET b = @", "prog.bas").tokenize())
        message = str(exc_info.value)
        assert message.startswith("prog.bas:2:9: error: unknown token '@'")
        assert "    LET b = @" in message
        assert message.splitlines()[2] == " " * 12 + "^"

    def test_nul_character_is_not_end_of_input(self):
        with pytest.raises(InvalidCharacterError):
            tokenize("a\0b")


# =============================================================================
# Location Tests
# =============================================================================

class TestLocations:

    def test_token_locations(self):
        tokens = tokenize("LET a = 5\nPRINT a")
        print_token = tokens[5]
        assert print_token.type == TokenType.PRINT
        assert (print_token.line, print_token.column) == (2, 1)
        assert (tokens[6].line, tokens[6].column) == (2, 7)

    def test_string_location_is_opening_quote(self):
        tokens = tokenize('PRINT "hi"')
        assert tokens[1].column == 7

    def test_location_property(self):
        token = Scanner("  PRINT", "x.bas").next_token()
        assert str(token.location) == "x.bas:1:3"

    def test_repr(self):
        tokens = tokenize("LET")
        assert repr(tokens[0]) == "Token(LET, 'LET', 1:1)"
        assert repr(tokens[-1]) == "Token(EOF, 2:1)"

    def test_is_type(self):
        token = tokenize("WHILE")[0]
        assert token.is_type(TokenType.WHILE)
        assert not token.is_type(TokenType.IDENTIFIER)

    def test_source_line_lookup(self):
        scanner = Scanner("PRINT a\nPRINT b")
        assert scanner.source_line(2) == "PRINT b"
        assert scanner.source_line(99) is None
