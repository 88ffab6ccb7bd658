"""
rc Command Definitions
======================

This module defines the command objects produced by the parser. The set
of commands is closed: every command is one of the variants below, and
each variant carries a ``kind`` tag so that interpreters can dispatch on
``command.kind`` rather than inspecting types.

Command Variants
----------------
ConfigCommand (base)
├── SetCommand    - set <variable> <value>
├── ThemeCommand  - theme --name N --component C --bgcolor B --fgcolor F
├── MapCommand    - map <view> <from> <to>
└── QuitCommand   - q

Design Notes
------------
- All commands are frozen dataclasses, so equality is field-wise and two
  commands of different variants are never equal.
- Field values are ConfigTokens, whose equality ignores source position.
  ``set x y`` on line 1 equals ``set x y`` on line 10.
- ``str(command)`` renders the command back to canonical rc syntax.
"""

from dataclasses import dataclass
from enum import Enum
from typing import ClassVar, Optional

from grvrc.scanner import ConfigToken


class CommandKind(Enum):
    """Tag identifying each command variant."""
    SET = "set"
    THEME = "theme"
    MAP = "map"
    QUIT = "q"


def _quote(token: ConfigToken) -> str:
    """Render a token value so the scanner reads it back as the same word."""
    value = token.value
    if value and not value.startswith("--") and not any(
        c.isspace() or c in '"#\\' for c in value
    ):
        return value
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


# =============================================================================
# Command Base Class
# =============================================================================

@dataclass(frozen=True)
class ConfigCommand:
    """
    Base class for all commands.

    Attributes:
        kind: The CommandKind tag of the concrete variant
    """
    kind: ClassVar[CommandKind]


# =============================================================================
# Command Variants
# =============================================================================

@dataclass(frozen=True)
class SetCommand(ConfigCommand):
    """
    Set a configuration variable to a value.

    Attributes:
        variable: Name of the variable
        value: New value of the variable
    """
    kind: ClassVar[CommandKind] = CommandKind.SET

    variable: ConfigToken
    value: ConfigToken

    def __str__(self) -> str:
        return f"set {_quote(self.variable)} {_quote(self.value)}"


@dataclass(frozen=True)
class ThemeCommand(ConfigCommand):
    """
    Set the colours of one component of a theme.

    Every field is optional; an absent field was not supplied on the
    command line.

    Attributes:
        name: Theme name
        component: Component to colour
        bgcolor: Background colour
        fgcolor: Foreground colour
    """
    kind: ClassVar[CommandKind] = CommandKind.THEME

    name: Optional[ConfigToken] = None
    component: Optional[ConfigToken] = None
    bgcolor: Optional[ConfigToken] = None
    fgcolor: Optional[ConfigToken] = None

    def __str__(self) -> str:
        parts = ["theme"]
        for option, token in (
            ("--name", self.name),
            ("--component", self.component),
            ("--bgcolor", self.bgcolor),
            ("--fgcolor", self.fgcolor),
        ):
            if token is not None:
                parts.append(f"{option} {_quote(token)}")
        return " ".join(parts)


@dataclass(frozen=True)
class MapCommand(ConfigCommand):
    """
    Map a key sequence to another in a view.

    Attributes:
        view: View the mapping applies to
        from_keys: Key sequence being mapped
        to_keys: Key sequence it is mapped to
    """
    kind: ClassVar[CommandKind] = CommandKind.MAP

    view: ConfigToken
    from_keys: ConfigToken
    to_keys: ConfigToken

    def __str__(self) -> str:
        return f"map {_quote(self.view)} {_quote(self.from_keys)} {_quote(self.to_keys)}"


@dataclass(frozen=True)
class QuitCommand(ConfigCommand):
    """Quit the application."""
    kind: ClassVar[CommandKind] = CommandKind.QUIT

    def __str__(self) -> str:
        return "q"
