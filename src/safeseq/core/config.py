from typing import Self
from pathlib import Path
from dataclasses import dataclass
import logging
import tomllib

from .errors import ConfigError

__all__ = ['SafeSeqConfig', 'load_config', 'LOG_LEVELS']

LOG_LEVELS = ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL')


@dataclass(kw_only=True, slots=True)
class SafeSeqConfig:
    """
    Configuration of the safeseq command line tool

    It is stored in TOML format, under the [logging] section::

        [logging]
        level = "DEBUG"
        color = false
    """
    log_level: str = 'WARNING'
    color_log: bool = True

    @property
    def log_level_no(self) -> int:
        return logging.getLevelName(self.log_level)

    @classmethod
    def load_toml(cls, path: Path) -> Self:
        """
        Load config from TOML file.

        :param path: Path to the TOML file
        :return: SafeSeqConfig instance
        :raises ConfigError: If the file is not valid TOML or a field is invalid
        """
        try:
            with open(path, 'rb') as f:
                data = tomllib.load(f)
        except (tomllib.TOMLDecodeError, UnicodeDecodeError) as e:
            raise ConfigError(f"Invalid TOML in config file '{path}': {e}") from e

        section = data.get('logging', {})
        if not isinstance(section, dict):
            raise ConfigError("The [logging] section must be a table!")

        level = section.get('level', 'WARNING')
        if not isinstance(level, str) or level.upper() not in LOG_LEVELS:
            raise ConfigError(f"Invalid log level: {level!r}, must be one of {', '.join(LOG_LEVELS)}")

        color = section.get('color', True)
        if not isinstance(color, bool):
            raise ConfigError(f"Invalid color setting: {color!r}, must be true or false")

        return cls(log_level=level.upper(), color_log=color)


def load_config(path: Path | None) -> SafeSeqConfig:
    """
    Load the config file if it exists, otherwise return the defaults.

    :param path: Path to the config file, or None
    :return: The loaded or the default config
    """
    if path is None or not Path(path).exists():
        return SafeSeqConfig()
    return SafeSeqConfig.load_toml(Path(path))
