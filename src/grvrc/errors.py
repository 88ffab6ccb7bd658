"""
grvrc Error Hierarchy
=====================

This module defines the exception hierarchy for the rc configuration
parser. All exceptions inherit from GrvrcError, allowing callers to catch
every parser-related error with a single except clause if desired.

Exception Hierarchy
-------------------
GrvrcError (base)
├── ConfigParseError - positioned, recoverable statement errors
│   ├── ConfigLexicalError - scanner-reported fault in an argument
│   ├── UnexpectedTokenError - wrong token type for the grammar
│   ├── UnknownCommandError - keyword not in the grammar table
│   ├── UnknownOptionError - theme command given an unknown --flag
│   └── UnexpectedEndOfInputError - input ended mid-statement
├── TokenSourceError - the underlying stream failed (terminal)
└── ConfigLoadError - aggregate report of collected errors

Error Message Format
--------------------
Parse errors use a compact positional format so the same convention can be
shared by file-backed and inline configuration:

    grvrc:3:1 invalid command "foo"
    grvrc:5:7 syntax error: unterminated string

When no source label is given (inline configuration) the location prefix
is omitted entirely:

    invalid command "foo"
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING, List

if TYPE_CHECKING:
    from grvrc.scanner import ConfigToken


# =============================================================================
# Base Exception Class
# =============================================================================

class GrvrcError(Exception):
    """
    Base exception for all grvrc errors.

    Callers can catch every error raised by the scanner, parser and loader
    with a single except clause:

        try:
            command = parser.parse_next()
        except GrvrcError as e:
            print(f"Error: {e}")
    """
    pass


# =============================================================================
# Source Location Tracking
# =============================================================================

@dataclass(frozen=True)
class SourceLocation:
    """
    Represents a location in configuration source for error reporting.

    Attributes:
        filename: Source label (file path, or "" for inline input)
        line: Line number (1-indexed)
        column: Column number (1-indexed)
    """
    filename: str
    line: int
    column: int

    def __str__(self) -> str:
        """Format as 'filename:line:column', or 'line:column' without a label."""
        if self.filename:
            return f"{self.filename}:{self.line}:{self.column}"
        return f"{self.line}:{self.column}"


# =============================================================================
# Diagnostic Formatting
# =============================================================================

def format_config_error(
    input_source: str,
    token: "ConfigToken",
    message: str,
) -> str:
    """
    Build a positioned diagnostic for a configuration error.

    The location prefix is only written when a source label is available,
    which lets file-backed and inline configuration share one reporter.
    A lexical error carried by the token is appended after the message.

    Args:
        input_source: Source label, or "" for inline input
        token: The token the diagnostic points at
        message: The already formatted error description

    Returns:
        The diagnostic string, e.g. 'grvrc:2:5 syntax error: unterminated string'
    """
    parts = []

    if input_source:
        parts.append(f"{input_source}:{token.line}:{token.column} ")

    parts.append(message)

    if token.error is not None:
        parts.append(f": {token.error}")

    return "".join(parts)


# =============================================================================
# Parse Errors
# =============================================================================

class ConfigParseError(GrvrcError):
    """
    Base exception for recoverable errors in a single statement.

    A parse error never leaves the parser unusable: by the time it is
    raised the parser has already discarded the rest of the offending
    statement, so the next call starts cleanly at the following one.

    Attributes:
        message: The error description (without location)
        token: The token the error points at
        input_source: Source label used for the location prefix
        eof: True if the error also means the input is exhausted
    """

    eof = False

    def __init__(
        self,
        message: str,
        token: "ConfigToken",
        input_source: str = "",
    ):
        self.message = message
        self.token = token
        self.input_source = input_source
        super().__init__(format_config_error(input_source, token, message))

    @property
    def location(self) -> SourceLocation:
        """Return the SourceLocation of the offending token."""
        return SourceLocation(self.input_source, self.token.line, self.token.column)


class ConfigLexicalError(ConfigParseError):
    """
    Lexical fault reported by the scanner.

    Raised when an argument token carries an embedded scanner error.

    Example:
        set theme "unterminated
    """

    def __init__(self, token: "ConfigToken", input_source: str = ""):
        super().__init__("syntax error", token, input_source)


class UnexpectedTokenError(ConfigParseError):
    """
    Token of the wrong type for the grammar.

    Raised when a statement supplies a token whose type differs from the
    one its grammar rule expects, and when an option or an invalid token
    appears where a command keyword was expected.
    """
    pass


class UnknownCommandError(ConfigParseError):
    """
    Command keyword not present in the grammar table.

    Example:
        foo bar   # 'foo' is not a command
    """

    def __init__(self, token: "ConfigToken", input_source: str = ""):
        self.keyword = token.value
        super().__init__(f'invalid command "{token.value}"', token, input_source)


class UnknownOptionError(ConfigParseError):
    """
    Unrecognised option passed to the theme command.

    Example:
        theme --size 10 --name t1 --bgcolor red --fgcolor blue
    """

    def __init__(self, token: "ConfigToken", input_source: str = ""):
        self.option = token.value
        super().__init__(
            f'invalid option for theme command: "{token.value}"',
            token,
            input_source,
        )


class UnexpectedEndOfInputError(ConfigParseError):
    """
    Input ended before a statement was complete.

    Example:
        map Main a    # missing the third word, then end of file
    """

    eof = True

    def __init__(self, token: "ConfigToken", input_source: str = ""):
        super().__init__("unexpected end of input", token, input_source)


# =============================================================================
# Terminal Errors
# =============================================================================

class TokenSourceError(GrvrcError):
    """
    The underlying token source failed.

    Raised when the input stream cannot be read (I/O failure, undecodable
    bytes). Unlike parse errors this is not recoverable: the scanner stays
    in the failed state and every later read raises the same error.
    """
    pass


class ConfigLoadError(GrvrcError):
    """
    Aggregate error containing every collected diagnostic.

    The message is an already formatted report from ConfigErrorCollector
    and is passed through unchanged.
    """
    pass


# =============================================================================
# Error Collection (for multi-error reporting)
# =============================================================================

class ConfigErrorCollector:
    """
    Collects multiple errors for batch reporting.

    The loader uses this to keep processing an rc file after a malformed
    statement, so that every mistake in the file is reported in one run.

    Example:
        collector = ConfigErrorCollector(max_errors=100)

        while True:
            try:
                command = parser.parse_next()
            except ConfigParseError as e:
                collector.add(e)
                if collector.should_stop():
                    break
                continue
            if command is None:
                break

        if collector.has_errors():
            print(collector.report())
    """

    def __init__(self, max_errors: int = 100):
        """
        Initialize the error collector.

        Args:
            max_errors: Maximum errors to collect before stopping
        """
        self.errors: List[GrvrcError] = []
        self.max_errors = max_errors

    def add(self, error: GrvrcError) -> None:
        """Add an error to the collection."""
        self.errors.append(error)

    def has_errors(self) -> bool:
        """Return True if any errors have been collected."""
        return len(self.errors) > 0

    def should_stop(self) -> bool:
        """Return True if max_errors has been reached."""
        return len(self.errors) >= self.max_errors

    def error_count(self) -> int:
        """Return the number of collected errors."""
        return len(self.errors)

    def report(self) -> str:
        """Format all errors for display, followed by a count."""
        lines = [str(error) for error in self.errors]

        error_word = "error" if len(self.errors) == 1 else "errors"
        lines.append(f"{len(self.errors)} {error_word}")

        return "\n".join(lines)

    def clear(self) -> None:
        """Clear all collected errors."""
        self.errors.clear()

    def raise_if_errors(self) -> None:
        """Raise a ConfigLoadError if any errors were collected."""
        if self.has_errors():
            raise ConfigLoadError(self.report())
