"""
config_manager.py
-----------------
Reads and writes the sectioned settings file (INI format).

Features:
- Resolves an OS-appropriate user config directory
- Typed per-key readers that fall back instead of raising
- Writes through a temp file so a failed save never truncates the old file
"""

import math
import os
import sys
from configparser import ConfigParser, Error as ConfigParserError
from typing import Any, Callable, Dict

from engine_settings.core.debug.debug_logger import DebugLogger
from engine_settings.core.runtime.game_settings import Persistence


class SettingsFileError(Exception):
    """The settings file is missing or cannot be parsed."""


# ===========================================================
# Path Resolution
# ===========================================================

def user_config_dir() -> str:
    """Return the per-user configuration root for this platform."""
    if sys.platform.startswith("win"):
        base = os.environ.get("APPDATA") or os.path.expanduser("~")
    elif sys.platform == "darwin":
        base = os.path.expanduser("~/Library/Application Support")
    else:
        base = os.environ.get("XDG_CONFIG_HOME") or os.path.expanduser("~/.config")
    return base


def default_settings_path() -> str:
    """Full path of the settings file inside the user config directory."""
    return os.path.join(user_config_dir(), Persistence.APP_DIR, Persistence.FILE_NAME)


# ===========================================================
# Reading
# ===========================================================

def read_settings_file(path: str) -> ConfigParser:
    """
    Parse the settings file.

    Args:
        path: File to read

    Returns:
        Parsed ConfigParser

    Raises:
        SettingsFileError: File missing, unreadable or malformed
    """
    parser = ConfigParser(interpolation=None)
    try:
        with open(path, "r", encoding="utf-8") as f:
            parser.read_file(f)
    except FileNotFoundError as e:
        raise SettingsFileError(f"Settings file not found: {path}") from e
    except (OSError, UnicodeDecodeError, ConfigParserError) as e:
        raise SettingsFileError(f"Cannot parse settings file {path}: {e}") from e

    DebugLogger.system(f"Read {os.path.basename(path)}", category="loading")
    return parser


_GETTERS: Dict[type, Callable[..., Any]] = {
    bool: ConfigParser.getboolean,
    int: ConfigParser.getint,
    float: ConfigParser.getfloat,
}


def read_value(parser: ConfigParser, section: str, key: str, kind: type, fallback):
    """
    Read one typed value, returning fallback when absent or malformed.

    Args:
        parser: Parsed settings file
        section: Section name
        key: Key inside the section
        kind: bool, int or float
        fallback: Value used when the key is missing or invalid
    """
    if not parser.has_option(section, key):
        return fallback

    try:
        value = _GETTERS[kind](parser, section, key)
        # getfloat accepts "nan" and "inf"
        if kind is float and not math.isfinite(value):
            raise ValueError(f"non-finite value {value!r}")
        return value
    except (ValueError, ConfigParserError):
        raw = parser.get(section, key, raw=True)
        DebugLogger.warn(
            f"Invalid value for [{section}] {key}: {raw!r} - keeping {fallback!r}",
            category="loading"
        )
        return fallback


# ===========================================================
# Writing
# ===========================================================

def format_value(value) -> str:
    """Serialize a setting value the way read_value expects it back."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        return repr(value)
    return str(value)


def write_settings_file(path: str, sections: Dict[str, Dict[str, Any]]) -> None:
    """
    Write sections of key/value pairs to path.

    Args:
        path: Destination file
        sections: {section: {key: value}} in write order

    Raises:
        OSError: Directory or file could not be written
    """
    parser = ConfigParser(interpolation=None)
    for section, values in sections.items():
        parser[section] = {key: format_value(value) for key, value in values.items()}

    directory = os.path.dirname(path)
    if directory:
        os.makedirs(directory, exist_ok=True)

    tmp_path = path + ".tmp"
    try:
        with open(tmp_path, "w", encoding="utf-8") as f:
            parser.write(f)
        os.replace(tmp_path, path)
    except OSError:
        if os.path.exists(tmp_path):
            os.remove(tmp_path)
        raise
