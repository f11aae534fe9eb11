"""
debug_logger.py
---------------
Console logger for the settings component and its engine collaborators.

Responsibilities
----------------
- Category filtering (settings, display, audio, player, loading).
- Level filtering (NONE, ERROR, WARN, INFO, VERBOSE).
- Source-tagged, colorized single-line output.
"""

import sys
from datetime import datetime


# ===========================================================
# Logger Configuration
# ===========================================================

class LoggerConfig:
    """Controls which components emit log messages and at what verbosity."""

    ENABLE_LOGGING = True
    LOG_LEVEL = "INFO"  # NONE, ERROR, WARN, INFO, VERBOSE
    USE_COLORS = True

    CATEGORIES = {
        # Boot and lifecycle
        "system": True,
        "loading": True,

        # Settings store
        "settings": True,
        "event_manager": False,

        # Engine collaborators
        "display": True,
        "audio": True,
        "player": False,
    }


# ===========================================================
# ANSI Colors
# ===========================================================

class Colors:
    """ANSI escape codes for terminal colors."""
    RESET = "\033[0m"
    WHITE = "\033[97m"
    GREEN = "\033[92m"
    MAGENTA = "\033[95m"
    CYAN = "\033[96m"
    BLUE = "\033[94m"
    YELLOW = "\033[93m"
    RED = "\033[91m"


# ===========================================================
# Debug Logger
# ===========================================================

class DebugLogger:
    """Static logger with category filtering and colored output."""

    LINE_LENGTH = 59

    COLOR_MAP = {
        "system": Colors.MAGENTA,
        "state": Colors.CYAN,
        "trace": Colors.BLUE,
        "warn": Colors.YELLOW,
        "fail": Colors.RED,
    }

    LEVEL_VALUES = {
        "NONE": 0,
        "ERROR": 1,
        "WARN": 2,
        "INFO": 3,
        "VERBOSE": 4
    }

    # ===========================================================
    # Caller Detection
    # ===========================================================

    @staticmethod
    def _get_caller() -> str:
        """Detect calling class or module name via frame inspection."""
        try:
            frame = sys._getframe(3)

            if 'self' in frame.f_locals:
                return frame.f_locals['self'].__class__.__name__
            if 'cls' in frame.f_locals:
                return frame.f_locals['cls'].__name__

            filename = frame.f_code.co_filename.replace("\\", "/").split("/")[-1]
            parts = filename.replace(".py", "").split("_")
            return "".join(p.capitalize() for p in parts)

        except (ValueError, AttributeError, KeyError):
            return "Unknown"

    # ===========================================================
    # Core Logging
    # ===========================================================

    @staticmethod
    def _should_log(category: str, level: str) -> bool:
        """Check if message should be logged based on config."""
        if not LoggerConfig.ENABLE_LOGGING:
            return False
        # Failures always pass the category filter
        if level != "ERROR" and not LoggerConfig.CATEGORIES.get(category, False):
            return False
        level_val = DebugLogger.LEVEL_VALUES.get(level, 3)
        config_val = DebugLogger.LEVEL_VALUES.get(LoggerConfig.LOG_LEVEL, 3)
        return level_val <= config_val

    @staticmethod
    def _log(tag: str, message: str, color: str, category: str, level: str):
        """Internal logging method."""
        if not DebugLogger._should_log(category, level):
            return

        timestamp = datetime.now().strftime("%H:%M:%S")
        source = DebugLogger._get_caller()
        line = f"[{timestamp}] [{source}][{tag}] {message}"

        if LoggerConfig.USE_COLORS:
            line = f"{DebugLogger.COLOR_MAP.get(color, Colors.RESET)}{line}{Colors.RESET}"

        stream = sys.stderr if level in ("ERROR", "WARN") else sys.stdout
        print(line, file=stream)

    # ===========================================================
    # Public Log Methods
    # ===========================================================

    @staticmethod
    def system(msg: str, category: str = "system"):
        """System-level log."""
        DebugLogger._log("SYSTEM", msg, "system", category, "INFO")

    @staticmethod
    def state(msg: str, category: str = "settings"):
        """State change log."""
        DebugLogger._log("STATE", msg, "state", category, "INFO")

    @staticmethod
    def trace(msg: str, category: str = "settings"):
        """Verbose trace log."""
        DebugLogger._log("TRACE", msg, "trace", category, "VERBOSE")

    @staticmethod
    def warn(msg: str, category: str = "system"):
        """Warning log."""
        DebugLogger._log("WARN", msg, "warn", category, "WARN")

    @staticmethod
    def fail(msg: str, category: str = "system"):
        """Error/failure log."""
        DebugLogger._log("FAIL", msg, "fail", category, "ERROR")

    # ===========================================================
    # Boot Report
    # ===========================================================

    @staticmethod
    def init_entry(module: str, status: str = "OK"):
        """Print a dotted boot-report line, e.g. '> AudioMixer ..... [OK]'."""
        if not LoggerConfig.ENABLE_LOGGING:
            return

        status_str = f"[{status.upper()}]"
        prefix = f"> {module} "
        dots = "." * max(DebugLogger.LINE_LENGTH - len(prefix) - len(status_str) - 1, 1)

        if LoggerConfig.USE_COLORS:
            color = Colors.GREEN if status.upper() == "OK" else Colors.RED
            print(f"{Colors.WHITE}{prefix}{dots} {color}{status_str}{Colors.RESET}")
        else:
            print(f"{prefix}{dots} {status_str}")
