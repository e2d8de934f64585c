"""Format check: run clang-format over staged sources and collect the changes it wants as a patch."""

from __future__ import annotations

import fnmatch
import logging
import os
import posixpath
import shutil
import subprocess
from pathlib import Path
from typing import Iterable, List, Optional

from .config import HookConfig
from .constants import STAGE_FORMAT
from .errors import CheckFailed, GateError, ToolUnavailableError, ToolVersionError
from .git import Git, decode_path
from .patch import PatchBuffer, patch_path, remove_stale
from .ui import Reporter

logger = logging.getLogger(__name__)


def resolve_tool(command: str) -> Optional[str]:
    """Return an executable path for command (a bare name is looked up on PATH), or None."""
    if os.sep in command or (os.altsep and os.altsep in command):
        p = Path(command).expanduser()
        if p.is_file() and os.access(p, os.X_OK):
            return str(p)
        return None
    return shutil.which(command)


def check_formatter(config: HookConfig) -> str:
    """
    Verify the formatter before any stage runs.

    Returns the resolved executable. Raises ToolUnavailableError if it is
    missing or not executable, ToolVersionError if its --version output does
    not contain config.formatter_version.
    """
    exe = resolve_tool(config.formatter)
    if not exe:
        raise ToolUnavailableError(
            f"{config.formatter} not found or not executable; install it or set hooks.clangformat.path"
        )
    r = subprocess.run([exe, "--version"], capture_output=True)
    version = r.stdout.decode("utf-8", errors="replace").strip()
    if r.returncode != 0 or not version:
        raise ToolVersionError(f"{exe} --version failed (exit code {r.returncode})")
    if config.formatter_version not in version:
        raise ToolVersionError(
            f"{exe} reports {version!r}; a version containing {config.formatter_version!r} is required "
            "(see hooks.clangformat.version)"
        )
    logger.debug("formatter %s: %s", exe, version)
    return exe


def extension_of(path: str) -> str:
    """Text after the last '.' of the file name, or '' if there is none."""
    name = posixpath.basename(path)
    return name.rsplit(".", 1)[1] if "." in name else ""


def is_skipped(path: str, patterns: Iterable[str]) -> bool:
    return any(fnmatch.fnmatch(path, pat) for pat in patterns)


def select_files(paths: Iterable[str], config: HookConfig) -> List[str]:
    """Staged paths the formatter should see: allowed extension (when parsing) and no skip match."""
    allowed = set(config.extensions)
    result: List[str] = []
    for path in paths:
        if config.parse_extensions and extension_of(path) not in allowed:
            continue
        if is_skipped(path, config.skip_patterns):
            logger.debug("skip %s (matches hooks.clangformat.skip)", path)
            continue
        result.append(path)
    return result


def format_file(exe: str, style: str, root: Path, path: str) -> bytes:
    """Return what the formatter says path should look like."""
    r = subprocess.run([exe, f"-style={style}", path], cwd=root, capture_output=True)
    if r.returncode != 0:
        err = r.stderr.decode("utf-8", errors="replace").strip()
        raise GateError(f"{exe} failed on {path} (exit code {r.returncode})" + (f": {err}" if err else ""))
    return r.stdout


def build_patch(exe: str, root: Path, files: Iterable[str], style: str) -> PatchBuffer:
    """Diff formatter output against each file on disk."""
    buf = PatchBuffer()
    for path in files:
        full = root / path
        if full.is_symlink() or not full.is_file():
            continue
        formatted = format_file(exe, style, root, path)
        if buf.add(path, full.read_bytes(), formatted):
            logger.debug("%s needs formatting", path)
    return buf


def verify_format(
    git: Git,
    against: str,
    config: HookConfig,
    reporter: Reporter,
    exe: Optional[str] = None,
    tmpdir: Optional[str] = None,
) -> Path:
    """
    Raise CheckFailed if any selected staged file is not formatted.

    The patch is written to the temp patch path and printed with instructions.
    A clean run removes any patch left at that path. Returns the patch path.
    """
    exe = exe or check_formatter(config)
    root = git.cwd
    files = select_files((decode_path(p) for p in git.staged_paths(against, "ACMR")), config)
    buf = build_patch(exe, root, files, config.formatter_style)
    target = patch_path(root, git.short_head(), tmpdir)
    if not buf:
        remove_stale(target)
        reporter.success("Files in this commit comply with the clang-format rules.")
        return target
    buf.write(target)
    reporter.error("The following differences were found between the code to commit and the clang-format rules:")
    reporter.write()
    reporter.forward(buf.render())
    reporter.write()
    reporter.info("You can apply these changes with:")
    reporter.info(f" git apply {target}")
    reporter.info("(may need to be called from the root directory of your repository)")
    reporter.error(
        "Aborting commit. Apply changes and commit again or skip checking with --no-verify (not recommended)."
    )
    raise CheckFailed(STAGE_FORMAT)
