"""Process-wide debug configuration.

The debug mask is read once from the environment, on first use, and turned
into logger levels for the library's subsystems:

    SMARTCOLS_DEBUG=all                 # every subsystem
    SMARTCOLS_DEBUG=tab,line            # selected subsystems
    SMARTCOLS_DEBUG=0x10                # numeric mask
    SMARTCOLS_DEBUG_PADDING=on          # make cell padding visible
"""

from __future__ import annotations

import functools
import logging
import os
from dataclasses import dataclass
from enum import IntFlag

DEBUG_ENV_VAR = "SMARTCOLS_DEBUG"
PADDING_ENV_VAR = "SMARTCOLS_DEBUG_PADDING"

logger = logging.getLogger(__name__)


class DebugMask(IntFlag):
    """Subsystems that can be traced."""

    INIT = 1 << 1
    LINE = 1 << 3
    TAB = 1 << 4
    COL = 1 << 5
    ALL = 0xFFFF


# mask bit -> loggers that trace it
_SUBSYSTEM_LOGGERS = {
    DebugMask.INIT: ("smartcols.debug", "smartcols.refcount"),
    DebugMask.LINE: ("smartcols.line",),
    DebugMask.TAB: ("smartcols.table", "smartcols.sort"),
    DebugMask.COL: ("smartcols.column",),
}

_MASK_NAMES = {
    "init": DebugMask.INIT,
    "line": DebugMask.LINE,
    "tab": DebugMask.TAB,
    "col": DebugMask.COL,
    "all": DebugMask.ALL,
}


def parse_mask(value: str | None) -> DebugMask:
    """
    Parse a debug mask from its environment representation.

    Args:
        value: A decimal/hex number or comma-separated subsystem names

    Returns:
        The parsed mask; unknown names are ignored
    """
    if not value:
        return DebugMask(0)
    try:
        return DebugMask(int(value, 0) & DebugMask.ALL)
    except ValueError:
        pass

    mask = DebugMask(0)
    for name in value.split(","):
        bit = _MASK_NAMES.get(name.strip().lower())
        if bit is not None:
            mask |= bit
    return mask


@dataclass(frozen=True)
class DebugConfig:
    """Debug settings of the current process."""

    mask: DebugMask = DebugMask(0)
    padding: bool = False

    @property
    def enabled(self) -> bool:
        return bool(self.mask)

    def traces(self, subsystem: DebugMask) -> bool:
        """True if ``subsystem`` is part of the mask."""
        return bool(self.mask & subsystem)

    @classmethod
    def from_environment(cls) -> DebugConfig:
        """Create DebugConfig from environment variables."""
        padding = os.environ.get(PADDING_ENV_VAR, "").strip().lower() in ("on", "1")
        return cls(mask=parse_mask(os.environ.get(DEBUG_ENV_VAR)), padding=padding)


@functools.cache
def get_debug_config() -> DebugConfig:
    """
    Return the process debug configuration, initializing it on first call.

    The environment is read only once; later changes to it are ignored
    until :func:`reset_debug_config` is called.
    """
    config = DebugConfig.from_environment()
    if config.enabled:
        _apply(config)
    return config


def reset_debug_config() -> None:
    """Forget the cached configuration so the next call re-reads it."""
    get_debug_config.cache_clear()


def _apply(config: DebugConfig) -> None:
    root = logging.getLogger("smartcols")
    if not any(getattr(h, "_smartcols_debug", False) for h in root.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("%(name)s: %(levelname)s: %(message)s"))
        handler._smartcols_debug = True  # type: ignore[attr-defined]
        root.addHandler(handler)

    for bit, names in _SUBSYSTEM_LOGGERS.items():
        if config.traces(bit):
            for name in names:
                logging.getLogger(name).setLevel(logging.DEBUG)

    logger.debug("library debug mask: 0x%04x", int(config.mask))
