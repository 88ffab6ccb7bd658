# =============================================================================
# test_scanner.py - rc Scanner Unit Tests
# =============================================================================
# Tests for the pull-based rc configuration scanner.
#
# Test coverage includes:
#   - Words, options, whitespace, comments and terminators
#   - Quoted sections and escape sequences
#   - Token positions (line and column)
#   - Unterminated strings reported as INVALID tokens
#   - Idempotent EOF and sticky stream failures
# =============================================================================

from io import StringIO

import pytest

from grvrc.errors import TokenSourceError
from grvrc.scanner import (
    ConfigScanner,
    ConfigToken,
    ConfigTokenType,
    TokenSource,
    token_name,
)


# =============================================================================
# Helper Functions
# =============================================================================

def scan_all(source: str) -> list[ConfigToken]:
    """Scan source up to and including the first EOF token."""
    scanner = ConfigScanner(StringIO(source))
    tokens = []
    while True:
        token = scanner.scan()
        tokens.append(token)
        if token.type == ConfigTokenType.EOF:
            return tokens


def significant(source: str) -> list[ConfigToken]:
    """Scan source, dropping whitespace, comments and EOF."""
    return [
        t for t in scan_all(source)
        if t.type not in (
            ConfigTokenType.WHITE_SPACE,
            ConfigTokenType.COMMENT,
            ConfigTokenType.EOF,
        )
    ]


class FailingReader:
    """Text stream whose reads fail after a given number of characters."""

    def __init__(self, text: str):
        self._text = text
        self._pos = 0
        self.reads = 0

    def read(self, size: int = -1) -> str:
        self.reads += 1
        if self._pos >= len(self._text):
            raise OSError("device not ready")
        char = self._text[self._pos]
        self._pos += 1
        return char


# =============================================================================
# Basic Token Recognition Tests
# =============================================================================

class TestBasicTokens:
    """Test basic token recognition for simple inputs."""

    def test_empty_input(self):
        """Empty input produces only EOF."""
        tokens = scan_all("")
        assert len(tokens) == 1
        assert tokens[0].type == ConfigTokenType.EOF

    def test_simple_statement(self):
        """Words are separated by whitespace tokens."""
        tokens = scan_all("set x y")
        assert [t.type for t in tokens] == [
            ConfigTokenType.WORD,
            ConfigTokenType.WHITE_SPACE,
            ConfigTokenType.WORD,
            ConfigTokenType.WHITE_SPACE,
            ConfigTokenType.WORD,
            ConfigTokenType.EOF,
        ]
        assert [t.value for t in tokens if t.type == ConfigTokenType.WORD] == ["set", "x", "y"]

    def test_option(self):
        """Words starting with -- are options."""
        tokens = significant("--name t1")
        assert tokens[0].type == ConfigTokenType.OPTION
        assert tokens[0].value == "--name"
        assert tokens[1].type == ConfigTokenType.WORD

    def test_single_dash_is_word(self):
        """A single leading dash does not make an option."""
        tokens = significant("-x")
        assert tokens[0].type == ConfigTokenType.WORD

    def test_newline_is_terminator(self):
        """Newlines end statements."""
        tokens = significant("q\nq")
        assert [t.type for t in tokens] == [
            ConfigTokenType.WORD,
            ConfigTokenType.TERMINATOR,
            ConfigTokenType.WORD,
        ]

    def test_whitespace_run(self):
        """Consecutive spaces and tabs form one whitespace token."""
        tokens = scan_all("a \t \tb")
        assert tokens[1].type == ConfigTokenType.WHITE_SPACE
        assert tokens[1].value == " \t \t"

    def test_carriage_return_is_whitespace(self):
        """CRLF line endings scan as whitespace followed by a terminator."""
        tokens = scan_all("q\r\n")
        assert [t.type for t in tokens] == [
            ConfigTokenType.WORD,
            ConfigTokenType.WHITE_SPACE,
            ConfigTokenType.TERMINATOR,
            ConfigTokenType.EOF,
        ]


# =============================================================================
# Comment Tests
# =============================================================================

class TestComments:
    """Test comment scanning."""

    def test_comment_line(self):
        """A comment runs to the end of the line, excluding the newline."""
        tokens = scan_all("# colours\nq")
        assert tokens[0].type == ConfigTokenType.COMMENT
        assert tokens[0].value == "# colours"
        assert tokens[1].type == ConfigTokenType.TERMINATOR

    def test_trailing_comment(self):
        """A comment may follow a statement."""
        tokens = significant("set x y # note")
        assert [t.value for t in tokens] == ["set", "x", "y"]

    def test_hash_inside_word(self):
        """A hash that does not start a token is part of the word."""
        tokens = significant("a#b")
        assert len(tokens) == 1
        assert tokens[0].value == "a#b"


# =============================================================================
# Quoting Tests
# =============================================================================

class TestQuoting:
    """Test quoted sections and escapes."""

    def test_quoted_word_with_space(self):
        """Whitespace inside quotes is part of the word."""
        tokens = significant('set theme "my theme"')
        assert len(tokens) == 3
        assert tokens[2].type == ConfigTokenType.WORD
        assert tokens[2].value == "my theme"

    def test_quoted_section_inside_word(self):
        """Quotes may appear in the middle of a word."""
        tokens = significant('a"b c"d')
        assert len(tokens) == 1
        assert tokens[0].value == "ab cd"

    def test_quoted_option_is_word(self):
        """A quoted --flag is a plain word."""
        tokens = significant('"--name"')
        assert tokens[0].type == ConfigTokenType.WORD
        assert tokens[0].value == "--name"

    def test_escaped_quote(self):
        """Backslash escapes a quote inside quotes."""
        tokens = significant('"a\\"b"')
        assert tokens[0].value == 'a"b'

    def test_escaped_backslash(self):
        """Backslash escapes a backslash inside quotes."""
        tokens = significant('"a\\\\b"')
        assert tokens[0].value == "a\\b"

    def test_other_backslash_is_literal(self):
        """Backslash before other characters is kept."""
        tokens = significant('"a\\nb"')
        assert tokens[0].value == "a\\nb"

    def test_hash_inside_quotes(self):
        """A hash inside quotes does not start a comment."""
        tokens = significant('"#fff"')
        assert tokens[0].type == ConfigTokenType.WORD
        assert tokens[0].value == "#fff"

    def test_unterminated_string(self):
        """An unterminated quote produces an INVALID token with an error."""
        tokens = significant('set x "abc')
        assert tokens[2].type == ConfigTokenType.INVALID
        assert tokens[2].value == "abc"
        assert tokens[2].error == "unterminated string"

    def test_unterminated_string_stops_at_newline(self):
        """An unterminated quote does not swallow the next line."""
        tokens = significant('"abc\nq')
        assert [t.type for t in tokens] == [
            ConfigTokenType.INVALID,
            ConfigTokenType.TERMINATOR,
            ConfigTokenType.WORD,
        ]
        assert tokens[2].value == "q"


# =============================================================================
# Position Tracking Tests
# =============================================================================

class TestPositions:
    """Test line and column tracking."""

    def test_columns_on_first_line(self):
        """Columns are 1-indexed positions of the first character."""
        tokens = significant("set x y")
        assert [(t.line, t.column) for t in tokens] == [(1, 1), (1, 5), (1, 7)]

    def test_second_line(self):
        """Line numbers advance after each newline."""
        tokens = significant("set x\nmap a b c")
        terminator = tokens[2]
        assert (terminator.line, terminator.column) == (1, 6)
        assert (tokens[3].line, tokens[3].column) == (2, 1)
        assert (tokens[6].line, tokens[6].column) == (2, 9)

    def test_invalid_token_position(self):
        """INVALID tokens point at the opening quote."""
        tokens = significant('set x "abc')
        assert (tokens[2].line, tokens[2].column) == (1, 7)

    def test_eof_position(self):
        """EOF is positioned just past the last character."""
        tokens = scan_all("q\n")
        assert (tokens[-1].line, tokens[-1].column) == (2, 1)


# =============================================================================
# Token Source Contract Tests
# =============================================================================

class TestTokenSourceContract:
    """Test EOF idempotence and stream failures."""

    def test_eof_is_idempotent(self):
        """EOF keeps being returned after input is exhausted."""
        scanner = ConfigScanner(StringIO("q"))
        assert scanner.scan().type == ConfigTokenType.WORD
        for _ in range(3):
            assert scanner.scan().type == ConfigTokenType.EOF

    def test_scanner_is_a_token_source(self):
        """The scanner satisfies the interface the parser reads through."""
        source: TokenSource = ConfigScanner(StringIO("q"))
        assert source.scan() == ConfigToken(ConfigTokenType.WORD, "q")
        assert source.scan().type == ConfigTokenType.EOF

    def test_stream_failure_raises(self):
        """A failing stream raises TokenSourceError."""
        scanner = ConfigScanner(FailingReader(""))
        with pytest.raises(TokenSourceError, match="device not ready"):
            scanner.scan()

    def test_stream_failure_is_sticky(self):
        """After a failure, every scan raises again without reading."""
        reader = FailingReader("q")
        scanner = ConfigScanner(reader)
        with pytest.raises(TokenSourceError):
            scanner.scan()
        reads = reader.reads
        with pytest.raises(TokenSourceError):
            scanner.scan()
        assert reader.reads == reads


# =============================================================================
# Token Tests
# =============================================================================

class TestConfigToken:
    """Test token equality and naming."""

    def test_equality_ignores_position(self):
        """Tokens with the same type and value are equal anywhere."""
        a = ConfigToken(ConfigTokenType.WORD, "x", 1, 1)
        b = ConfigToken(ConfigTokenType.WORD, "x", 7, 12)
        assert a == b

    def test_equality_ignores_error(self):
        """The embedded lexical error is not part of equality."""
        a = ConfigToken(ConfigTokenType.INVALID, "x", error="unterminated string")
        b = ConfigToken(ConfigTokenType.INVALID, "x")
        assert a == b

    def test_type_matters(self):
        """Tokens of different types are not equal."""
        a = ConfigToken(ConfigTokenType.WORD, "--x")
        b = ConfigToken(ConfigTokenType.OPTION, "--x")
        assert a != b

    def test_token_names(self):
        """Token types have human-readable names for diagnostics."""
        assert token_name(ConfigTokenType.WORD) == "Word"
        assert token_name(ConfigTokenType.OPTION) == "Option"
        assert token_name(ConfigTokenType.WHITE_SPACE) == "White Space"
        assert token_name(ConfigTokenType.EOF) == "EOF"
        assert ConfigToken(ConfigTokenType.TERMINATOR, "\n").name == "Terminator"
