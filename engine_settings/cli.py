"""
cli.py
------
Inspect and edit the settings file without starting the game.

Usage:
    engine-settings show                 # Print every setting
    engine-settings path                 # Print the settings file location
    engine-settings set max_fps 144      # Change one setting and save
    engine-settings set resolution 2560x1440
    engine-settings reset                # Restore and save defaults
"""

import argparse
import sys

from engine_settings.core.debug.debug_logger import LoggerConfig
from engine_settings.core.runtime.game_settings import Persistence
from engine_settings.core.services.settings_store import FIELDS, FIELDS_BY_NAME, SettingsStore


def _parse_value(name: str, raw: str):
    """Turn command-line text into a value set_setting accepts."""
    if name == "resolution":
        parts = raw.lower().replace(",", "x").split("x")
        if len(parts) != 2:
            raise ValueError(f"Resolution must look like 1920x1080, got {raw!r}")
        return tuple(parts)
    return raw


def _print_settings(store: SettingsStore):
    for section in Persistence.SECTIONS:
        print(f"[{section}]")
        for field in FIELDS:
            if field.section != section:
                continue
            value = store.get_setting(field.name)
            if field.name == "resolution":
                value = f"{value[0]}x{value[1]}"
            print(f"  {field.name} = {value}")


def build_parser():
    parser = argparse.ArgumentParser(prog="engine-settings",
                                     description="Inspect and edit game settings")
    parser.add_argument("--file", help="Settings file (default: user config directory)")
    parser.add_argument("--verbose", action="store_true", help="Show store log output")

    commands = parser.add_subparsers(dest="command", required=True)
    commands.add_parser("show", help="Print every setting")
    commands.add_parser("path", help="Print the settings file location")
    commands.add_parser("reset", help="Restore and save default settings")

    set_cmd = commands.add_parser("set", help="Change one setting and save")
    set_cmd.add_argument("name", choices=sorted(FIELDS_BY_NAME))
    set_cmd.add_argument("value")
    return parser


def main(argv=None):
    """Main entry point."""
    args = build_parser().parse_args(argv)
    if not args.verbose:
        LoggerConfig.LOG_LEVEL = "ERROR"

    store = SettingsStore(settings_path=args.file)

    if args.command == "path":
        print(store.settings_path)
        return 0

    store.load()

    if args.command == "reset":
        store.reset_to_defaults()
    elif args.command == "set":
        try:
            store.set_setting(args.name, _parse_value(args.name, args.value))
        except ValueError as e:
            print(f"error: {e}", file=sys.stderr)
            return 2

    _print_settings(store)
    return 0


if __name__ == "__main__":
    sys.exit(main())
