"""Default precision settings loaded from YAML.

The kernel never reads these values behind a caller's back: every
operation takes an explicit ``oom``/``rm``.  The settings only seed
:meth:`ratgeom.precision.NumericContext.default`, the pi guard digits
and the finest ``oom`` the library accepts.

A settings file is a YAML mapping, for example::

    oom: -6
    rm: HALF_EVEN
    min_oom: -200
    pi_guard_digits: 6
    log_level: DEBUG
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from ratgeom.precision import RoundingMode

log = logging.getLogger(__name__)

CONFIG_ENV_VAR = "RATGEOM_CONFIG"

_LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


@dataclass(frozen=True)
class Settings:
    """Library wide defaults."""

    oom: int = -3
    rm: RoundingMode = RoundingMode.HALF_UP
    min_oom: int = -1000
    pi_guard_digits: int = 4
    log_level: str = "WARNING"

    def __post_init__(self):
        for name in ("oom", "min_oom", "pi_guard_digits"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise ValueError(f"{name} must be an integer, got {value!r}")
        if self.pi_guard_digits < 1:
            raise ValueError("pi_guard_digits must be at least 1")
        if self.min_oom > 0:
            raise ValueError("min_oom must not be positive")
        if self.oom < self.min_oom:
            raise ValueError(f"default oom {self.oom} is finer than min_oom {self.min_oom}")
        object.__setattr__(self, "rm", RoundingMode.parse(self.rm))
        level = str(self.log_level).upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"unknown log level: {self.log_level!r}")
        object.__setattr__(self, "log_level", level)

    @classmethod
    def from_mapping(cls, data: Dict[str, Any]) -> "Settings":
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ValueError(f"unknown settings: {', '.join(unknown)}")
        return cls(**data)

    def to_mapping(self) -> Dict[str, Any]:
        return {
            "oom": self.oom,
            "rm": self.rm.name,
            "min_oom": self.min_oom,
            "pi_guard_digits": self.pi_guard_digits,
            "log_level": self.log_level,
        }


def load_settings(path: Optional[os.PathLike] = None) -> Settings:
    """Load settings from ``path``, or from ``$RATGEOM_CONFIG`` if unset.

    With neither a path nor the environment variable the defaults are
    returned.
    """

    if path is None:
        env = os.environ.get(CONFIG_ENV_VAR)
        if not env:
            return Settings()
        path = env
    path = Path(path)
    with path.open("r", encoding="utf-8") as fp:
        data = yaml.safe_load(fp) or {}
    if not isinstance(data, dict):
        raise ValueError(f"{path}: settings must be a mapping")
    log.debug("loaded settings from %s", path)
    return Settings.from_mapping(data)


def save_settings(settings: Settings, path: os.PathLike) -> None:
    with Path(path).open("w", encoding="utf-8") as fp:
        yaml.safe_dump(settings.to_mapping(), fp, sort_keys=False)


_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Process defaults, loaded on first use."""

    global _settings
    if _settings is None:
        _settings = load_settings()
    return _settings


def set_settings(settings: Settings) -> None:
    global _settings
    _settings = settings


def reset_settings() -> None:
    """Forget the cached settings so they are reloaded on next use."""

    global _settings
    _settings = None


__all__ = [
    "CONFIG_ENV_VAR",
    "Settings",
    "get_settings",
    "load_settings",
    "reset_settings",
    "save_settings",
    "set_settings",
]
