"""
rc Command Parser
=================

This module implements the parser that turns the scanner's token stream
into command objects, one statement at a time.

Parsing Model
-------------
The parser is pull-based. Each call to ``parse_next()`` does exactly one
of the following:

- returns the next command,
- returns None when the input is exhausted (and keeps doing so),
- raises one ConfigParseError describing a malformed statement.

Statements are matched against the fixed-arity rules in
``grvrc.grammar``: the first significant token names the command, and
exactly the token types listed for it must follow.

Error Recovery
--------------
Before a parse error is raised, the parser discards the remaining tokens
of the offending statement, up to the next terminator or end of input.
A caller that catches the error and calls ``parse_next()`` again starts
cleanly at the following statement, so one mistake never hides the
commands after it. Only a failure of the token source itself
(TokenSourceError) is terminal.

Example Usage
-------------
>>> from grvrc.parser import ConfigParser
>>> parser = ConfigParser.from_string("set x y\\nq\\n")
>>> print(parser.parse_next())
set x y
>>> print(parser.parse_next())
q
>>> parser.parse_next() is None
True
"""

import io
import logging
from pathlib import Path
from typing import Iterator, Optional, TextIO, Union

from grvrc.commands import ConfigCommand
from grvrc.errors import (
    ConfigErrorCollector,
    ConfigLexicalError,
    ConfigParseError,
    TokenSourceError,
    UnexpectedEndOfInputError,
    UnexpectedTokenError,
    UnknownCommandError,
)
from grvrc.grammar import get_command_descriptor
from grvrc.scanner import (
    ConfigScanner,
    ConfigToken,
    ConfigTokenType,
    TokenSource,
    token_name,
)

logger = logging.getLogger(__name__)


class ConfigParser:
    """
    Parser for rc configuration statements.

    The token source can be any TokenSource (an object whose ``scan()``
    returns ConfigTokens, repeating EOF forever once reached). By default a
    ConfigScanner is built over the reader.

    Attributes:
        input_source: Source label used in diagnostics ("" for inline input)
        eof: True once end of input has been reached
    """

    # Token types that never carry meaning for the grammar
    SKIPPED_TYPES = (ConfigTokenType.WHITE_SPACE, ConfigTokenType.COMMENT)

    # Token types that end a statement
    BOUNDARY_TYPES = (ConfigTokenType.TERMINATOR, ConfigTokenType.EOF)

    def __init__(
        self,
        reader: Optional[TextIO] = None,
        input_source: str = "",
        token_source: Optional[TokenSource] = None,
    ):
        """
        Initialize the parser.

        Args:
            reader: Text stream to parse (ignored if token_source is given)
            input_source: Label for diagnostics, e.g. the rc file path
            token_source: Pre-built token source to read from instead
        """
        if token_source is None:
            if reader is None:
                raise ValueError("either reader or token_source is required")
            token_source = ConfigScanner(reader)

        self._token_source = token_source
        self.input_source = input_source
        self.eof = False

    @classmethod
    def from_string(cls, text: str, input_source: str = "") -> "ConfigParser":
        """Create a parser over inline configuration text."""
        return cls(io.StringIO(text), input_source)

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "ConfigParser":
        """
        Create a parser over an rc file, labelled with its path.

        The file is read into memory and closed before parsing.

        Raises:
            FileNotFoundError: If the file does not exist
            TokenSourceError: If the file is not valid text
        """
        path = Path(path)
        try:
            text = path.read_text(encoding="utf-8")
        except UnicodeDecodeError as e:
            raise TokenSourceError(f"failed to read configuration from {path}: {e}") from e
        return cls.from_string(text, str(path))

    @classmethod
    def from_token_source(
        cls, token_source: TokenSource, input_source: str = ""
    ) -> "ConfigParser":
        """Create a parser over an existing token source."""
        return cls(input_source=input_source, token_source=token_source)

    # =========================================================================
    # Public Interface
    # =========================================================================

    def parse_next(self) -> Optional[ConfigCommand]:
        """
        Parse the next statement.

        Returns:
            The next command, or None if the input is exhausted

        Raises:
            ConfigParseError: If the statement is malformed; the rest of
                the statement has already been discarded
            TokenSourceError: If the token source failed
        """
        if self.eof:
            return None

        try:
            command = self._parse_statement()
        except ConfigParseError as e:
            if e.eof:
                self.eof = True
            elif e.token.type not in self.BOUNDARY_TYPES:
                self._discard_tokens_until_next_command()
            raise

        if command is not None:
            logger.debug(f"Parsed command: {command}")

        return command

    def parse_all(
        self,
        collector: Optional[ConfigErrorCollector] = None,
    ) -> list[ConfigCommand]:
        """
        Parse every remaining statement, collecting errors.

        Parsing continues past malformed statements until end of input or
        until the collector's error limit is reached.

        Args:
            collector: Where to collect parse errors (created if omitted)

        Returns:
            The successfully parsed commands, in input order

        Raises:
            TokenSourceError: If the token source failed
        """
        if collector is None:
            collector = ConfigErrorCollector()

        commands = []

        while True:
            try:
                command = self.parse_next()
            except ConfigParseError as e:
                collector.add(e)
                if collector.should_stop():
                    break
                continue

            if command is None:
                break
            commands.append(command)

        return commands

    def __iter__(self) -> Iterator[ConfigCommand]:
        """Yield commands until end of input; parse errors propagate."""
        while True:
            command = self.parse_next()
            if command is None:
                return
            yield command

    # =========================================================================
    # Token Access Methods
    # =========================================================================

    def _scan(self) -> ConfigToken:
        """Return the next token that is not whitespace or a comment."""
        while True:
            token = self._token_source.scan()
            if token.type not in self.SKIPPED_TYPES:
                return token

    def _discard_tokens_until_next_command(self) -> None:
        """
        Skip the rest of a malformed statement.

        Stops after a terminator, at end of input, or when the token source
        fails; a source failure is raised again by the next read.
        """
        discarded = 0

        while True:
            try:
                token = self._scan()
            except TokenSourceError:
                return

            if token.type in self.BOUNDARY_TYPES:
                break
            discarded += 1

        if discarded:
            logger.debug(f"Discarded {discarded} token(s) to resynchronize")

    # =========================================================================
    # Statement Parsing
    # =========================================================================

    def _parse_statement(self) -> Optional[ConfigCommand]:
        """Find the next significant token and parse the statement it starts."""
        while True:
            token = self._scan()

            if token.type == ConfigTokenType.TERMINATOR:
                continue

            if token.type == ConfigTokenType.EOF:
                self.eof = True
                return None

            if token.type == ConfigTokenType.WORD:
                return self._parse_command(token)

            if token.type == ConfigTokenType.OPTION:
                raise UnexpectedTokenError(
                    f'unexpected option "{token.value}"', token, self.input_source
                )

            if token.type == ConfigTokenType.INVALID:
                raise UnexpectedTokenError("syntax error", token, self.input_source)

            raise UnexpectedTokenError(
                f'unexpected token "{token.value}"', token, self.input_source
            )

    def _parse_command(self, keyword: ConfigToken) -> ConfigCommand:
        """
        Match the tokens following a command keyword against its rule.

        Args:
            keyword: The WORD token naming the command

        Returns:
            The constructed command

        Raises:
            ConfigParseError: If the keyword is unknown or the tokens do not
                match the rule
        """
        descriptor = get_command_descriptor(keyword.value)
        if descriptor is None:
            raise UnknownCommandError(keyword, self.input_source)

        tokens = []

        for expected_type in descriptor.token_types:
            token = self._scan()

            if token.error is not None:
                raise ConfigLexicalError(token, self.input_source)

            if token.type == ConfigTokenType.EOF:
                raise UnexpectedEndOfInputError(token, self.input_source)

            if token.type != expected_type:
                raise UnexpectedTokenError(
                    f"expected {token_name(expected_type)} but got "
                    f'{token_name(token.type)}: "{token.value}"',
                    token,
                    self.input_source,
                )

            tokens.append(token)

        return descriptor.constructor(tuple(tokens), self.input_source)


def parse_string(text: str, input_source: str = "") -> list[ConfigCommand]:
    """
    Parse inline configuration text into commands.

    Raises:
        ConfigLoadError: If any statement is malformed
    """
    collector = ConfigErrorCollector()
    commands = ConfigParser.from_string(text, input_source).parse_all(collector)
    collector.raise_if_errors()
    return commands
