"""
grvrc Settings
==============

Settings for locating and loading rc files. Values come from:
- Default values (defined here)
- Environment variables (``RcSettings.from_env()``)
- Explicit overrides by the caller (e.g. CLI options)

The default rc file follows the XDG base directory convention:

    $XDG_CONFIG_HOME/grv/grvrc    (XDG_CONFIG_HOME defaults to ~/.config)
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional
import os


@dataclass
class RcSettings:
    """
    Settings for rc file loading.

    Attributes:
        config_home: Base configuration directory (default: ~/.config)
        app_dir: Application directory under config_home (default: "grv")
        rc_filename: Name of the rc file (default: "grvrc")
        rc_file: Explicit rc file path, overriding the default location
        max_errors: Errors to collect before a load stops (default: 100)
    """

    config_home: Path = field(default_factory=lambda: Path.home() / ".config")
    app_dir: str = "grv"
    rc_filename: str = "grvrc"
    rc_file: Optional[Path] = None
    max_errors: int = 100

    @classmethod
    def from_env(cls) -> "RcSettings":
        """
        Create RcSettings from environment variables.

        Environment variables (all optional):
            XDG_CONFIG_HOME: Base configuration directory
            GRVRC_FILE: Explicit rc file path
            GRVRC_MAX_ERRORS: Error limit (positive integer)

        Returns:
            RcSettings with values from environment variables
        """
        settings = cls()

        if config_home := os.environ.get("XDG_CONFIG_HOME"):
            settings.config_home = Path(config_home)

        if rc_file := os.environ.get("GRVRC_FILE"):
            settings.rc_file = Path(rc_file)

        if max_errors := os.environ.get("GRVRC_MAX_ERRORS"):
            try:
                value = int(max_errors)
            except ValueError:
                value = 0  # Ignore invalid values
            if value > 0:
                settings.max_errors = value

        return settings

    def rc_path(self) -> Path:
        """Return the rc file to load: rc_file if set, else the default location."""
        if self.rc_file is not None:
            return self.rc_file
        return self.config_home / self.app_dir / self.rc_filename
