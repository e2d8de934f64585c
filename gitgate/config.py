"""Hook configuration: read hooks.* settings through git config."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from .constants import (
    CLANG_FORMAT,
    CLANG_FORMAT_STYLE,
    CLANG_FORMAT_VERSION,
    FLAKE8,
    FORMAT_EXTENSIONS,
    KEY_ALLOW_NON_ASCII,
    KEY_FORMAT_EXTENSIONS,
    KEY_FORMAT_PARSE_EXTS,
    KEY_FORMAT_PATH,
    KEY_FORMAT_SKIP,
    KEY_FORMAT_STYLE,
    KEY_FORMAT_VERSION,
    KEY_LINT_PATH,
    KEY_SKIP_STAGES,
    STAGES,
)
from .errors import ConfigError, InvalidConfigKeyError
from .git import Git

# git config exits 1 when the key is not set
_MISSING = 1


@dataclass
class HookConfig:
    """Resolved settings for one hook run."""

    allow_non_ascii: bool = False
    formatter: str = CLANG_FORMAT
    formatter_version: str = CLANG_FORMAT_VERSION
    formatter_style: str = CLANG_FORMAT_STYLE
    extensions: Tuple[str, ...] = FORMAT_EXTENSIONS
    parse_extensions: bool = True
    skip_patterns: List[str] = field(default_factory=list)
    linter: str = FLAKE8
    skip_stages: List[str] = field(default_factory=list)

    def stage_enabled(self, stage: str) -> bool:
        return stage not in self.skip_stages


def _parse_key(key: str) -> Tuple[str, str]:
    """Return (section, option); the section may carry a subsection. Raises InvalidConfigKeyError."""
    parts = key.split(".")
    if len(parts) < 2 or not all(p.strip() for p in parts):
        raise InvalidConfigKeyError(f"invalid config key: {key!r} (expected section.option)")
    return ".".join(parts[:-1]), parts[-1]


def _get(git: Git, key: str, *extra: str) -> Optional[str]:
    _parse_key(key)
    r = git.run(["config", *extra, "--get", key], check=False)
    if r.returncode == _MISSING:
        return None
    if r.returncode != 0:
        raise ConfigError(f"cannot read {key}: {r.stderr.decode('utf-8', errors='replace').strip()}")
    return r.stdout.decode("utf-8", errors="replace").rstrip("\n")


def get_value(git: Git, key: str) -> Optional[str]:
    """Get config value for key. Return None if missing."""
    return _get(git, key)


def get_bool(git: Git, key: str, default: bool = False) -> bool:
    """Get a boolean config value (git's true/yes/on/1 spellings). Raises ConfigError if not a boolean."""
    value = _get(git, key, "--type=bool")
    if value is None:
        return default
    return value == "true"


def get_all(git: Git, key: str) -> List[str]:
    """Return every value of a multi-valued key, in config order."""
    _parse_key(key)
    r = git.run(["config", "--get-all", key], check=False)
    if r.returncode == _MISSING:
        return []
    if r.returncode != 0:
        raise ConfigError(f"cannot read {key}: {r.stderr.decode('utf-8', errors='replace').strip()}")
    return [v for v in r.stdout.decode("utf-8", errors="replace").splitlines() if v.strip()]


def _parse_extensions(value: str) -> Tuple[str, ...]:
    """'.c h, cpp' -> ('c', 'h', 'cpp')."""
    return tuple(e.lstrip(".") for e in value.replace(",", " ").split() if e.lstrip("."))


def load_hook_config(git: Git) -> HookConfig:
    """Read every hooks.* setting; unset keys keep their defaults."""
    cfg = HookConfig()
    cfg.allow_non_ascii = get_bool(git, KEY_ALLOW_NON_ASCII, False)
    cfg.formatter = get_value(git, KEY_FORMAT_PATH) or cfg.formatter
    version = get_value(git, KEY_FORMAT_VERSION)
    if version is not None:
        cfg.formatter_version = version
    cfg.formatter_style = get_value(git, KEY_FORMAT_STYLE) or cfg.formatter_style
    exts = get_value(git, KEY_FORMAT_EXTENSIONS)
    if exts is not None:
        cfg.extensions = _parse_extensions(exts)
    cfg.parse_extensions = get_bool(git, KEY_FORMAT_PARSE_EXTS, True)
    cfg.skip_patterns = get_all(git, KEY_FORMAT_SKIP)
    cfg.linter = get_value(git, KEY_LINT_PATH) or cfg.linter
    stages: List[str] = []
    for value in get_all(git, KEY_SKIP_STAGES):
        stages.extend(value.replace(",", " ").split())
    unknown = [s for s in stages if s not in STAGES]
    if unknown:
        raise ConfigError(f"{KEY_SKIP_STAGES}: unknown stage(s) {', '.join(unknown)} (expected {', '.join(STAGES)})")
    cfg.skip_stages = stages
    return cfg
