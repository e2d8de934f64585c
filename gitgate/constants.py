"""Constants for gitgate: comparison targets, exit codes, tool defaults, config keys."""

from __future__ import annotations

# Tree object of an empty directory; the comparison target before the first commit
EMPTY_TREE = "4b825dc642cb6eb9a060e54bf8d69288fbee4904"
HEAD = "HEAD"

# Exit codes
EXIT_OK = 0
EXIT_CHECK_FAILED = 1
EXIT_LINT_FAILED = 2

# Printable ASCII range accepted in added file names (space through tilde)
ASCII_MIN = 0x20
ASCII_MAX = 0x7E

# Formatter
CLANG_FORMAT = "clang-format"
CLANG_FORMAT_VERSION = "clang-format version"
CLANG_FORMAT_STYLE = "file"
FORMAT_EXTENSIONS = ("c", "h", "cpp", "hpp", "cc", "hh", "cxx", "hxx", "m")
PATCH_SUFFIX = "clang-format.patch"

# Linter
FLAKE8 = "flake8"
PYTHON_EXTENSION = ".py"

# Stash
STASH_MESSAGE = "gitgate: unstaged changes"

# Config keys (git config)
KEY_ALLOW_NON_ASCII = "hooks.allownonascii"
KEY_FORMAT_PATH = "hooks.clangformat.path"
KEY_FORMAT_VERSION = "hooks.clangformat.version"
KEY_FORMAT_STYLE = "hooks.clangformat.style"
KEY_FORMAT_EXTENSIONS = "hooks.clangformat.extensions"
KEY_FORMAT_PARSE_EXTS = "hooks.clangformat.parseexts"
KEY_FORMAT_SKIP = "hooks.clangformat.skip"
KEY_LINT_PATH = "hooks.flake8.path"
KEY_SKIP_STAGES = "hooks.gitgate.skip"

# Stage names, in execution order
STAGE_FILENAMES = "filenames"
STAGE_WHITESPACE = "whitespace"
STAGE_FORMAT = "format"
STAGE_LINT = "lint"
STAGES = (STAGE_FILENAMES, STAGE_WHITESPACE, STAGE_FORMAT, STAGE_LINT)

# Marker written into hooks installed by `gitgate install`
HOOK_MARKER = "# installed by gitgate"
