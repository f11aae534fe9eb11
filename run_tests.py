#!/usr/bin/env python3
"""
run_tests.py
------------
Re-runs the engine-settings test suite whenever a package or test file
is saved.

Usage:
    python run_tests.py                    # Watch and re-run on save
    python run_tests.py --run-once         # Run tests once and exit
    python run_tests.py --store-only       # Only the SettingsStore tests
    python run_tests.py --coverage         # Add a coverage report
"""

import argparse
import subprocess
import sys
import time
from pathlib import Path

from watchdog.events import FileSystemEventHandler
from watchdog.observers import Observer

PROJECT_ROOT = Path(__file__).resolve().parent
WATCHED_DIRS = ("engine_settings", "tests")
STORE_TESTS = "tests/core/services/test_settings_store.py"


def build_command(args) -> list:
    """pytest invocation for the selected options."""
    cmd = [sys.executable, "-m", "pytest", "-v"]
    if args.store_only:
        cmd.append(STORE_TESTS)
    if args.coverage:
        cmd.extend(["--cov=engine_settings", "--cov-report=term-missing"])
    return cmd


def run_suite(args) -> int:
    """Run pytest once and return its exit code."""
    print("\n" + "=" * 60)
    print("Running tests...")
    print("=" * 60)
    result = subprocess.run(build_command(args), cwd=PROJECT_ROOT)
    print("All tests passed!" if result.returncode == 0 else "Some tests failed!")
    return result.returncode


class SourceChangeHandler(FileSystemEventHandler):
    """Runs the suite when a watched .py file is modified, debounced."""

    def __init__(self, args, debounce: float = 1.0):
        self.args = args
        self.debounce = debounce
        self._last_run = 0.0

    def on_modified(self, event):
        if event.is_directory or not str(event.src_path).endswith(".py"):
            return

        now = time.monotonic()
        if now - self._last_run < self.debounce:
            return
        self._last_run = now
        run_suite(self.args)


def main():
    parser = argparse.ArgumentParser(description="Watch runner for engine-settings tests")
    parser.add_argument("--run-once", action="store_true", help="Run tests once and exit")
    parser.add_argument("--store-only", action="store_true",
                        help="Run only the SettingsStore tests")
    parser.add_argument("--coverage", action="store_true", help="Generate coverage report")
    args = parser.parse_args()

    if args.run_once:
        return run_suite(args)

    run_suite(args)

    observer = Observer()
    handler = SourceChangeHandler(args)
    for directory in WATCHED_DIRS:
        path = PROJECT_ROOT / directory
        if path.is_dir():
            observer.schedule(handler, str(path), recursive=True)

    print(f"Watching {', '.join(WATCHED_DIRS)} (Ctrl+C to stop)")
    observer.start()
    try:
        while True:
            time.sleep(1)
    except KeyboardInterrupt:
        observer.stop()
        print("\nFile watcher stopped")
    observer.join()
    return 0


if __name__ == "__main__":
    sys.exit(main())
