"""
grvrc - rc Configuration Parser
===============================

This package parses the ``.rc``-style configuration language of a terminal
application into typed command objects. Configuration is read from a file
(``$XDG_CONFIG_HOME/grv/grvrc`` by default) or from an inline string.

Main Components
---------------
- **scanner**: Pull-based tokenizer over a text stream
- **grammar**: Read-only table of command keywords and their token rules
- **parser**: Statement-at-a-time parser with error recovery
- **commands**: The closed set of command objects (set, theme, map, q)
- **loader**: Best-effort loading of whole rc files with error collection

Language
--------
One command per line; blank lines and ``#`` comments are ignored:

    # colours
    set theme solarized
    theme --name mine --component CommitView.Date --bgcolor None --fgcolor Blue
    map Main gg G
    q

Quick Start
-----------
Parse statements one at a time:
    >>> from grvrc import ConfigParser
    >>> parser = ConfigParser.from_string("set x y")
    >>> command = parser.parse_next()
    >>> command.kind
    <CommandKind.SET: 'set'>

Load an rc file, collecting every error:
    >>> from grvrc import load_config
    >>> result = load_config("grvrc")
    >>> for error in result.errors.errors:
    ...     print(error)

Or use the command-line tool:
    $ grvrc grvrc
"""

__version__ = "1.0.0"

# =============================================================================
# Public API Exports
# =============================================================================

from grvrc.errors import (
    GrvrcError,
    SourceLocation,
    ConfigParseError,
    ConfigLexicalError,
    UnexpectedTokenError,
    UnknownCommandError,
    UnknownOptionError,
    UnexpectedEndOfInputError,
    TokenSourceError,
    ConfigLoadError,
    ConfigErrorCollector,
    format_config_error,
)
from grvrc.scanner import (
    ConfigScanner,
    ConfigToken,
    ConfigTokenType,
    TokenSource,
    token_name,
)
from grvrc.commands import (
    CommandKind,
    ConfigCommand,
    SetCommand,
    ThemeCommand,
    MapCommand,
    QuitCommand,
)
from grvrc.grammar import (
    COMMAND_GRAMMAR,
    CommandDescriptor,
    get_command_descriptor,
    command_keywords,
)
from grvrc.parser import ConfigParser, parse_string
from grvrc.settings import RcSettings
from grvrc.loader import ConfigLoader, LoadResult, load_config

__all__ = [
    "__version__",
    # Errors
    "GrvrcError",
    "SourceLocation",
    "ConfigParseError",
    "ConfigLexicalError",
    "UnexpectedTokenError",
    "UnknownCommandError",
    "UnknownOptionError",
    "UnexpectedEndOfInputError",
    "TokenSourceError",
    "ConfigLoadError",
    "ConfigErrorCollector",
    "format_config_error",
    # Scanner
    "ConfigScanner",
    "ConfigToken",
    "ConfigTokenType",
    "TokenSource",
    "token_name",
    # Commands
    "CommandKind",
    "ConfigCommand",
    "SetCommand",
    "ThemeCommand",
    "MapCommand",
    "QuitCommand",
    # Grammar
    "COMMAND_GRAMMAR",
    "CommandDescriptor",
    "get_command_descriptor",
    "command_keywords",
    # Parser and loader
    "ConfigParser",
    "parse_string",
    "RcSettings",
    "ConfigLoader",
    "LoadResult",
    "load_config",
]
