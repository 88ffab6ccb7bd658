"""
rc Configuration Scanner
========================

This module implements the token source consumed by the parser. It reads
configuration text from a stream one character at a time and produces
tokens on demand through ``scan()``.

Token Types
-----------
- WORD: A run of non-whitespace characters (``set``, ``Main``, ``"a b"``)
- OPTION: A word whose text starts with ``--`` (``--name``)
- WHITE_SPACE: A run of spaces, tabs and other non-newline whitespace
- COMMENT: ``#`` up to the end of the line
- TERMINATOR: A newline (statements are one per line)
- EOF: End of input, returned again on every later call
- INVALID: A malformed word; carries a lexical error

Quoting
-------
A ``"`` inside a word starts a quoted section in which whitespace and ``#``
are literal. Inside quotes ``\\"`` and ``\\\\`` escape the next character.
The quotes themselves are removed from the token value, so ``"--name"``
is a WORD with the value ``--name`` rather than an OPTION.

Example
-------
>>> from io import StringIO
>>> from grvrc.scanner import ConfigScanner
>>> scanner = ConfigScanner(StringIO('set theme "my theme"'))
>>> scanner.scan()
Token(WORD, 'set', 1:1)
>>> scanner.scan()
Token(WHITE_SPACE, ' ', 1:4)
"""

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Optional, Protocol, TextIO

from grvrc.errors import TokenSourceError


# =============================================================================
# Token Type Enumeration
# =============================================================================

class ConfigTokenType(Enum):
    """Token types produced by the scanner."""

    INVALID = auto()        # Malformed input, always carries an error
    WORD = auto()           # Command keywords and argument values
    OPTION = auto()         # --flag
    WHITE_SPACE = auto()    # Skipped by the parser
    COMMENT = auto()        # Skipped by the parser
    TERMINATOR = auto()     # End of statement (newline)
    EOF = auto()            # End of input


# Names used in diagnostics, e.g. 'expected Word but got Option'
TOKEN_NAMES: dict[ConfigTokenType, str] = {
    ConfigTokenType.INVALID: "Invalid",
    ConfigTokenType.WORD: "Word",
    ConfigTokenType.OPTION: "Option",
    ConfigTokenType.WHITE_SPACE: "White Space",
    ConfigTokenType.COMMENT: "Comment",
    ConfigTokenType.TERMINATOR: "Terminator",
    ConfigTokenType.EOF: "EOF",
}


def token_name(token_type: ConfigTokenType) -> str:
    """Return the human-readable name of a token type."""
    return TOKEN_NAMES[token_type]


# =============================================================================
# Token Data Class
# =============================================================================

@dataclass(frozen=True)
class ConfigToken:
    """
    A single token from configuration source.

    Equality only considers the type and value: two tokens spelling the
    same word are equal wherever they appear in the input, and whether or
    not the scanner attached an error to them.

    Attributes:
        type: The ConfigTokenType classification
        value: The token text (quotes and escapes already resolved)
        line: Line number of the first character (1-indexed)
        column: Column number of the first character (1-indexed)
        error: Lexical error reported by the scanner, if any
    """
    type: ConfigTokenType
    value: str
    line: int = field(default=1, compare=False)
    column: int = field(default=1, compare=False)
    error: Optional[str] = field(default=None, compare=False)

    def __repr__(self) -> str:
        if self.value:
            return f"Token({self.type.name}, {self.value!r}, {self.line}:{self.column})"
        return f"Token({self.type.name}, {self.line}:{self.column})"

    @property
    def name(self) -> str:
        """Return the human-readable name of this token's type."""
        return token_name(self.type)


class TokenSource(Protocol):
    """
    Protocol defining the token source interface.

    The parser pulls tokens through this interface. Once end of input is
    reached every call returns an EOF token, and a failed source raises
    TokenSourceError on every call.
    """
    def scan(self) -> ConfigToken:
        """Return the next token."""
        ...


# =============================================================================
# Scanner Implementation
# =============================================================================

class ConfigScanner:
    """
    Pull-based tokenizer over a text stream.

    Each call to ``scan()`` reads just enough characters to produce one
    token. Once the stream is exhausted every call returns an EOF token.
    A failure of the stream itself is raised as TokenSourceError and is
    sticky: the same error is raised again on every later call.

    Usage:
        scanner = ConfigScanner(open("grvrc"))
        token = scanner.scan()
        while token.type != ConfigTokenType.EOF:
            ...
            token = scanner.scan()
    """

    ESCAPABLE = ('"', "\\")

    def __init__(self, reader: TextIO):
        """
        Initialize the scanner.

        Args:
            reader: Text stream to read configuration from
        """
        self._reader = reader

        # Position of the next character to be consumed
        self._line = 1
        self._column = 1

        # One character of lookahead ("" means end of input)
        self._lookahead: Optional[str] = None
        self._exhausted = False
        self._failure: Optional[TokenSourceError] = None

    def scan(self) -> ConfigToken:
        """
        Produce the next token.

        Returns:
            The next ConfigToken (EOF once input is exhausted)

        Raises:
            TokenSourceError: If the underlying stream cannot be read
        """
        if self._failure is not None:
            raise self._failure

        start_line = self._line
        start_column = self._column
        char = self._advance()

        if char == "":
            return ConfigToken(ConfigTokenType.EOF, "", start_line, start_column)

        if char == "\n":
            return ConfigToken(ConfigTokenType.TERMINATOR, char, start_line, start_column)

        if char.isspace():
            return self._scan_white_space(char, start_line, start_column)

        if char == "#":
            return self._scan_comment(char, start_line, start_column)

        return self._scan_word(char, start_line, start_column)

    # =========================================================================
    # Character Access Methods
    # =========================================================================

    def _read_char(self) -> str:
        """Read one character from the stream, wrapping stream failures."""
        if self._exhausted:
            return ""

        try:
            char = self._reader.read(1)
        except (OSError, UnicodeDecodeError, ValueError) as e:
            self._failure = TokenSourceError(f"failed to read configuration: {e}")
            raise self._failure from e

        if char == "":
            self._exhausted = True
        return char

    def _peek(self) -> str:
        """Look at the next character without consuming it."""
        if self._lookahead is None:
            self._lookahead = self._read_char()
        return self._lookahead

    def _advance(self) -> str:
        """Consume and return the next character, updating the position."""
        char = self._peek()
        self._lookahead = None

        if char == "\n":
            self._line += 1
            self._column = 1
        elif char:
            self._column += 1

        return char

    # =========================================================================
    # Token Scanning
    # =========================================================================

    def _scan_white_space(self, first: str, line: int, column: int) -> ConfigToken:
        """Scan a run of whitespace, stopping before any newline."""
        chars = [first]

        while True:
            char = self._peek()
            if char == "" or char == "\n" or not char.isspace():
                break
            chars.append(self._advance())

        return ConfigToken(ConfigTokenType.WHITE_SPACE, "".join(chars), line, column)

    def _scan_comment(self, first: str, line: int, column: int) -> ConfigToken:
        """Scan a comment up to (not including) the end of the line."""
        chars = [first]

        while self._peek() not in ("", "\n"):
            chars.append(self._advance())

        return ConfigToken(ConfigTokenType.COMMENT, "".join(chars), line, column)

    def _scan_word(self, first: str, line: int, column: int) -> ConfigToken:
        """
        Scan a word, resolving quoted sections.

        The raw text (with quotes) decides whether the word is an OPTION;
        the token value is the text with quotes and escapes resolved.
        """
        raw = []
        value = []
        in_quotes = False
        char = first

        while True:
            raw.append(char)

            if in_quotes:
                if char == '"':
                    in_quotes = False
                elif char == "\\" and self._peek() in self.ESCAPABLE:
                    escaped = self._advance()
                    raw.append(escaped)
                    value.append(escaped)
                else:
                    value.append(char)
            elif char == '"':
                in_quotes = True
            else:
                value.append(char)

            next_char = self._peek()
            if in_quotes:
                if next_char in ("", "\n"):
                    return ConfigToken(
                        ConfigTokenType.INVALID,
                        "".join(value),
                        line,
                        column,
                        error="unterminated string",
                    )
            elif next_char == "" or next_char.isspace():
                break

            char = self._advance()

        token_type = ConfigTokenType.WORD
        if "".join(raw).startswith("--"):
            token_type = ConfigTokenType.OPTION

        return ConfigToken(token_type, "".join(value), line, column)
