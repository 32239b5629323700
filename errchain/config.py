"""Frame filtering and display configuration.

Set ``ERRCHAIN_SHOW_ALL=1`` to keep runtime and test-harness frames, or
``ERRCHAIN_SKIP_MODULES=pkg_a,pkg_b`` to hide more modules:
    export ERRCHAIN_SKIP_MODULES=sqlalchemy.engine,tenacity
"""

from __future__ import annotations

import os
from dataclasses import dataclass, replace

DEFAULT_SKIP_MODULES: tuple[str, ...] = (
    "errchain",
    "threading",
    "asyncio",
    "concurrent.futures",
    "contextlib",
    "importlib",
)

# Frames from these modules, and every frame outward of them, are entry points.
DEFAULT_HARNESS_MODULES: tuple[str, ...] = (
    "_pytest",
    "pytest",
    "pluggy",
    "unittest",
    "doctest",
    "runpy",
)

_TRUTHY = ("1", "true", "yes")
_FALSY = ("", "0", "false", "no")


def _parse_flag(name: str, raw: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUTHY:
        return True
    if value in _FALSY:
        return False
    raise ValueError(f"{name} must be a boolean flag (1/0, true/false, yes/no), got {raw!r}")


def _parse_modules(raw: str) -> tuple[str, ...]:
    return tuple(part.strip() for part in raw.split(",") if part.strip())


def _current_directory() -> str | None:
    try:
        return os.getcwd()
    except OSError:
        return None


def _matches(module: str, prefixes: tuple[str, ...]) -> bool:
    return any(module == prefix or module.startswith(prefix + ".") for prefix in prefixes)


@dataclass(frozen=True)
class TraceConfig:
    """How captured call sites are filtered and displayed.

    Attributes:
        root: Directory that display paths are made relative to. ``None``
            keeps absolute paths.
        skip_modules: Modules whose frames are dropped one by one.
        harness_modules: Modules that drive the program (test runners, ``-m``
            launchers). Their frames and everything outward are dropped.
        show_all: Disable all filtering.
    """

    root: str | None = None
    skip_modules: tuple[str, ...] = DEFAULT_SKIP_MODULES
    harness_modules: tuple[str, ...] = DEFAULT_HARNESS_MODULES
    show_all: bool = False

    @classmethod
    def from_env(cls) -> TraceConfig:
        extra = _parse_modules(os.environ.get("ERRCHAIN_SKIP_MODULES", ""))
        return cls(
            root=_current_directory(),
            skip_modules=DEFAULT_SKIP_MODULES + extra,
            show_all=_parse_flag("ERRCHAIN_SHOW_ALL", os.environ.get("ERRCHAIN_SHOW_ALL", "")),
        )

    def with_root(self, root: str | None) -> TraceConfig:
        return replace(self, root=root)

    def is_skipped(self, module: str) -> bool:
        return _matches(module, self.skip_modules)

    def is_harness(self, module: str) -> bool:
        return _matches(module, self.harness_modules)


__all__ = [
    "DEFAULT_HARNESS_MODULES",
    "DEFAULT_SKIP_MODULES",
    "TraceConfig",
]
