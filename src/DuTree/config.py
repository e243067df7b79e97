"""Settings read from the environment."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping

_TRUE = frozenset({"1", "true", "yes", "on"})
_FALSE = frozenset({"0", "false", "no", "off", ""})


class ConfigurationError(Exception):
    """Raised when an environment variable holds an invalid value."""

    def __init__(self, variable: str, value: str, reason: str):
        self.variable = variable
        self.value = value
        super().__init__(f"{variable}={value!r}: {reason}")


@dataclass(frozen=True)
class Settings:
    max_workers: int | None = None  # None: one worker per CPU
    depth: int | None = None  # None: unbounded
    use_ascii: bool = False
    sort_by_size: bool = False
    truncate_names: bool = True


def _positive_int(environ: Mapping[str, str], name: str) -> int | None:
    raw = environ.get(name)
    if raw is None or not raw.strip():
        return None
    try:
        value = int(raw)
    except ValueError as exc:
        raise ConfigurationError(name, raw, "not an integer") from exc
    if value <= 0:
        raise ConfigurationError(name, raw, "must be >= 1")
    return value


def _flag(environ: Mapping[str, str], name: str, default: bool) -> bool:
    raw = environ.get(name)
    if raw is None:
        return default
    lowered = raw.strip().lower()
    if lowered in _TRUE:
        return True
    if lowered in _FALSE:
        return False
    raise ConfigurationError(name, raw, "expected a boolean")


def load_settings(environ: Mapping[str, str] | None = None) -> Settings:
    """Build Settings from ``DUTREE_*`` environment variables."""
    if environ is None:
        environ = os.environ
    defaults = Settings()
    return Settings(
        max_workers=_positive_int(environ, "DUTREE_WORKERS"),
        depth=_positive_int(environ, "DUTREE_DEPTH"),
        use_ascii=_flag(environ, "DUTREE_ASCII", defaults.use_ascii),
        sort_by_size=_flag(environ, "DUTREE_SORT_BY_SIZE", defaults.sort_by_size),
        truncate_names=_flag(environ, "DUTREE_TRUNCATE", defaults.truncate_names),
    )
