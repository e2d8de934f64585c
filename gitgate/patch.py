"""PatchBuffer: unified diffs of formatter changes, accumulated per file and written once."""

from __future__ import annotations

import difflib
import io
import os
import tempfile
from pathlib import Path
from typing import Iterator, List, Optional

from .constants import PATCH_SUFFIX

NO_NEWLINE = b"\\ No newline at end of file\n"


def unified_diff(path: str, old: bytes, new: bytes) -> bytes:
    """Unified diff from old to new with a/<path> and b/<path> headers, applicable with git apply."""
    # Split on \n only; a bare \r is part of the line for git apply.
    a = io.BytesIO(old).readlines()
    b = io.BytesIO(new).readlines()
    name = os.fsencode(path)
    lines = difflib.diff_bytes(
        difflib.unified_diff, a, b, fromfile=b"a/" + name, tofile=b"b/" + name
    )
    return b"".join(_terminate(lines))


def _terminate(lines: Iterator[bytes]) -> Iterator[bytes]:
    """Mark body lines that lack a newline the way diff(1) does."""
    for line in lines:
        if line.endswith(b"\n"):
            yield line
        else:
            yield line + b"\n" + NO_NEWLINE


class PatchBuffer:
    """Ordered diff fragments, one per file that needs reformatting."""

    def __init__(self) -> None:
        self.fragments: List[bytes] = []
        self.paths: List[str] = []

    def add(self, path: str, original: bytes, formatted: bytes) -> bool:
        """Append the diff for path if formatting changes it. Return True if appended."""
        if original == formatted:
            return False
        fragment = unified_diff(path, original, formatted)
        if not fragment:
            return False
        self.fragments.append(fragment)
        self.paths.append(path)
        return True

    def __bool__(self) -> bool:
        return bool(self.fragments)

    def __len__(self) -> int:
        return len(self.fragments)

    def render(self) -> bytes:
        return b"".join(self.fragments)

    def write(self, path: Path) -> Path:
        """Write the whole buffer to path, replacing any previous content."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(self.render())
        return path


def patch_path(repo_root: Path, short_head: Optional[str], tmpdir: Optional[str] = None) -> Path:
    """<tmp>/<repo-name>-<short-head|initial>-clang-format.patch"""
    base = Path(tmpdir or tempfile.gettempdir())
    return base / f"{Path(repo_root).name}-{short_head or 'initial'}-{PATCH_SUFFIX}"


def remove_stale(path: Path) -> bool:
    """Delete a patch left by an earlier run. Return True if one was removed."""
    try:
        Path(path).unlink()
        return True
    except FileNotFoundError:
        return False
