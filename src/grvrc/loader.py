"""
rc File Loader
==============

Drives the parser over a whole rc file or inline string, processing it on
a best-effort basis: every malformed statement is logged and collected,
and loading carries on with the next statement. A file with several
independent mistakes therefore reports all of them and still yields every
valid command.

Example
-------
>>> from grvrc.loader import ConfigLoader
>>> result = ConfigLoader().load_string("set x y\\nfoo\\nq\\n")
>>> [str(c) for c in result.commands]
['set x y', 'q']
>>> result.errors.error_count()
1
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Union

from grvrc.commands import ConfigCommand
from grvrc.errors import ConfigErrorCollector, ConfigParseError, TokenSourceError
from grvrc.parser import ConfigParser
from grvrc.settings import RcSettings

logger = logging.getLogger(__name__)


@dataclass
class LoadResult:
    """
    Outcome of loading one configuration source.

    Attributes:
        source: Source label ("" for inline input)
        commands: Successfully parsed commands, in input order
        errors: Collected diagnostics
    """
    source: str
    commands: list[ConfigCommand] = field(default_factory=list)
    errors: ConfigErrorCollector = field(default_factory=ConfigErrorCollector)

    @property
    def ok(self) -> bool:
        """True if no errors were collected."""
        return not self.errors.has_errors()


class ConfigLoader:
    """
    Loads rc configuration from files or strings.

    Usage:
        loader = ConfigLoader(RcSettings.from_env())
        result = loader.load_default()
        for command in result.commands:
            interpreter.execute(command)
    """

    def __init__(self, settings: Optional[RcSettings] = None):
        self.settings = settings or RcSettings()

    def load_string(self, text: str, input_source: str = "") -> LoadResult:
        """Load inline configuration text."""
        return self._load(ConfigParser.from_string(text, input_source))

    def load_file(self, path: Union[str, Path]) -> LoadResult:
        """
        Load an rc file.

        Raises:
            FileNotFoundError: If the file does not exist
        """
        try:
            parser = ConfigParser.from_file(path)
        except TokenSourceError as e:
            logger.warning(str(e))
            result = LoadResult(str(path), errors=self._new_collector())
            result.errors.add(e)
            return result

        logger.debug(f"Loading {path}")
        return self._load(parser)

    def load_default(self) -> LoadResult:
        """
        Load the rc file from the configured location.

        A missing rc file is not an error: an empty result is returned.
        """
        path = self.settings.rc_path()
        if not path.is_file():
            logger.info(f"No rc file found at {path}")
            return LoadResult(str(path), errors=self._new_collector())

        return self.load_file(path)

    def _new_collector(self) -> ConfigErrorCollector:
        return ConfigErrorCollector(max_errors=self.settings.max_errors)

    def _load(self, parser: ConfigParser) -> LoadResult:
        result = LoadResult(parser.input_source, errors=self._new_collector())

        try:
            while True:
                try:
                    command = parser.parse_next()
                except ConfigParseError as e:
                    logger.warning(str(e))
                    result.errors.add(e)
                    if result.errors.should_stop():
                        logger.warning(
                            f"Error limit reached after {result.errors.error_count()} errors"
                        )
                        break
                    continue

                if command is None:
                    break
                result.commands.append(command)
        except TokenSourceError as e:
            logger.warning(str(e))
            result.errors.add(e)

        logger.debug(
            f"Loaded {len(result.commands)} command(s) with "
            f"{result.errors.error_count()} error(s) from {parser.input_source or '<string>'}"
        )
        return result


def load_config(
    path: Optional[Union[str, Path]] = None,
    settings: Optional[RcSettings] = None,
) -> LoadResult:
    """
    Load an rc file, or the default rc file if no path is given.

    Args:
        path: rc file to load (default: settings.rc_path())
        settings: Loader settings (default: RcSettings.from_env())

    Returns:
        LoadResult with the parsed commands and collected errors
    """
    loader = ConfigLoader(settings or RcSettings.from_env())
    if path is None:
        return loader.load_default()
    return loader.load_file(path)
