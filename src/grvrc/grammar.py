"""
rc Command Grammar Table
========================

This module holds the grammar of the configuration language: for each
command keyword, the exact sequence of token types that must follow it
and the constructor that turns those tokens into a command.

Grammar
-------
| keyword | token sequence        |
|---------|-----------------------|
| set     | Word Word             |
| theme   | (Option Word) x 4     |
| map     | Word Word Word        |
| q       | (none)                |

The grammar is flat: every rule is a fixed-arity sequence match with no
recursion, optional parts or repetition. ``theme`` therefore always takes
exactly four option/value pairs.

The table is a read-only mapping built once at import time. It is never
mutated, so any number of parsers may read it concurrently.
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Callable, Mapping, Optional, Sequence

from grvrc.commands import (
    ConfigCommand,
    MapCommand,
    QuitCommand,
    SetCommand,
    ThemeCommand,
)
from grvrc.errors import UnknownOptionError
from grvrc.scanner import ConfigToken, ConfigTokenType


CommandConstructor = Callable[[Sequence[ConfigToken], str], ConfigCommand]


@dataclass(frozen=True)
class CommandDescriptor:
    """
    Grammar rule for one command keyword.

    Attributes:
        keyword: The command keyword
        token_types: Token types that must follow the keyword, in order
        constructor: Builds the command from the validated tokens; receives
            the tokens and the parser's source label for diagnostics
    """
    keyword: str
    token_types: tuple[ConfigTokenType, ...]
    constructor: CommandConstructor

    @property
    def arity(self) -> int:
        """Number of tokens following the keyword."""
        return len(self.token_types)


# =============================================================================
# Command Constructors
# =============================================================================

def construct_set_command(tokens: Sequence[ConfigToken], input_source: str) -> ConfigCommand:
    return SetCommand(variable=tokens[0], value=tokens[1])


@dataclass
class ThemeCommandBuilder:
    """Mutable record the theme options are assigned into."""
    name: Optional[ConfigToken] = None
    component: Optional[ConfigToken] = None
    bgcolor: Optional[ConfigToken] = None
    fgcolor: Optional[ConfigToken] = None

    def build(self) -> ThemeCommand:
        return ThemeCommand(
            name=self.name,
            component=self.component,
            bgcolor=self.bgcolor,
            fgcolor=self.fgcolor,
        )


def construct_theme_command(tokens: Sequence[ConfigToken], input_source: str) -> ConfigCommand:
    """
    Build a ThemeCommand from alternating option/value tokens.

    Pairs are applied left to right, so a repeated option keeps the value
    of its last occurrence.

    Raises:
        UnknownOptionError: If an option is not one of the theme options
    """
    builder = ThemeCommandBuilder()

    for i in range(0, len(tokens) - 1, 2):
        option = tokens[i]
        value = tokens[i + 1]

        if option.value == "--name":
            builder.name = value
        elif option.value == "--component":
            builder.component = value
        elif option.value == "--bgcolor":
            builder.bgcolor = value
        elif option.value == "--fgcolor":
            builder.fgcolor = value
        else:
            raise UnknownOptionError(option, input_source)

    return builder.build()


def construct_map_command(tokens: Sequence[ConfigToken], input_source: str) -> ConfigCommand:
    return MapCommand(view=tokens[0], from_keys=tokens[1], to_keys=tokens[2])


def construct_quit_command(tokens: Sequence[ConfigToken], input_source: str) -> ConfigCommand:
    return QuitCommand()


# =============================================================================
# Grammar Table
# =============================================================================

_WORD = ConfigTokenType.WORD
_OPTION = ConfigTokenType.OPTION

COMMAND_GRAMMAR: Mapping[str, CommandDescriptor] = MappingProxyType({
    descriptor.keyword: descriptor
    for descriptor in (
        CommandDescriptor("set", (_WORD, _WORD), construct_set_command),
        CommandDescriptor("theme", (_OPTION, _WORD) * 4, construct_theme_command),
        CommandDescriptor("map", (_WORD, _WORD, _WORD), construct_map_command),
        CommandDescriptor("q", (), construct_quit_command),
    )
})


def get_command_descriptor(keyword: str) -> Optional[CommandDescriptor]:
    """Return the grammar rule for a keyword, or None if it is not a command."""
    return COMMAND_GRAMMAR.get(keyword)


def command_keywords() -> list[str]:
    """Return all command keywords, sorted."""
    return sorted(COMMAND_GRAMMAR)
