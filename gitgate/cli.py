"""CLI: argparse and command dispatch."""

from __future__ import annotations

import argparse
import logging
import os
import shlex
import stat
import sys
from pathlib import Path

from .constants import EXIT_CHECK_FAILED, HOOK_MARKER
from .errors import GateError
from .git import Git
from .hook import run_hook
from .ui import Reporter

HOOK_NAME = "pre-commit"


def hook_script(python: str) -> str:
    """Shell hook that hands over to this interpreter's gitgate."""
    return f'#!/bin/sh\n{HOOK_MARKER}\nexec {shlex.quote(python)} -m gitgate run "$@"\n'


def _hook_path() -> Path:
    git = Git(Git(Path.cwd()).toplevel())
    return git.git_path("hooks") / HOOK_NAME


def _reporter(args: argparse.Namespace) -> Reporter:
    return Reporter(color=False if getattr(args, "no_color", False) else None)


def cmd_run(args: argparse.Namespace) -> int:
    return run_hook(Path.cwd(), reporter=_reporter(args))


def cmd_install(args: argparse.Namespace) -> int:
    out = _reporter(args)
    path = _hook_path()
    if path.exists() and HOOK_MARKER not in path.read_text(encoding="utf-8", errors="replace"):
        if not args.force:
            out.error(f"Error: {path} already exists and was not installed by gitgate (use --force to replace it)")
            return EXIT_CHECK_FAILED
        out.warn(f"Replacing existing hook {path}")
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(hook_script(args.python or sys.executable), encoding="utf-8")
    mode = path.stat().st_mode
    os.chmod(path, mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    out.success(f"Installed {HOOK_NAME} hook: {path}")
    return 0


def cmd_uninstall(args: argparse.Namespace) -> int:
    out = _reporter(args)
    path = _hook_path()
    if not path.exists():
        out.info(f"No {HOOK_NAME} hook installed")
        return 0
    if HOOK_MARKER not in path.read_text(encoding="utf-8", errors="replace"):
        out.error(f"Error: {path} was not installed by gitgate; leaving it in place")
        return EXIT_CHECK_FAILED
    path.unlink()
    out.success(f"Removed {HOOK_NAME} hook: {path}")
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="gitgate", description="Pre-commit checks: ASCII file names, whitespace, clang-format, flake8"
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log every external command")
    parser.add_argument("--no-color", action="store_true", help="Plain output even on a terminal")
    sub = parser.add_subparsers(dest="command", help="Commands")

    sub.add_parser("run", help="Check the staged changes (what the hook runs)")

    p_install = sub.add_parser("install", help="Install gitgate as this repository's pre-commit hook")
    p_install.add_argument("-f", "--force", action="store_true", help="Replace a hook gitgate did not install")
    p_install.add_argument("--python", default=None, help="Interpreter the hook runs (default: this one)")

    sub.add_parser("uninstall", help="Remove the pre-commit hook installed by gitgate")

    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(name)s: %(message)s",
        stream=sys.stderr,
    )

    handlers = {
        "run": cmd_run,
        "install": cmd_install,
        "uninstall": cmd_uninstall,
    }
    handler = handlers.get(args.command or "run")
    try:
        return handler(args) or 0
    except GateError as e:
        _reporter(args).error(f"Error: {e}")
        return e.exit_code


if __name__ == "__main__":
    sys.exit(main())
