"""Data types shared by the logger: levels, records and level events."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Callable, Optional


class Level(enum.IntEnum):
    """Logging levels; the numeric values leave room for levels in between."""

    DEBUG = -4
    INFO = 0
    WARN = 4
    ERROR = 8


@dataclass
class Record:
    """The data that is being logged."""

    time: datetime
    message: str
    level: int
    attributes: dict[str, Any] = field(default_factory=dict)
    source: Optional[tuple[str, int]] = None


EventFn = Callable[[Any, Record], None]


@dataclass
class Events:
    """Functions to run when a record of a given level is logged."""

    debug: Optional[EventFn] = None
    info: Optional[EventFn] = None
    warn: Optional[EventFn] = None
    error: Optional[EventFn] = None

    def for_level(self, level: int) -> Optional[EventFn]:
        """Return the event function bound to exactly this level, if any."""
        return {
            Level.DEBUG: self.debug,
            Level.INFO: self.info,
            Level.WARN: self.warn,
            Level.ERROR: self.error,
        }.get(level)

    def is_empty(self) -> bool:
        """Report whether no event function is configured."""
        return all(fn is None for fn in (self.debug, self.info, self.warn, self.error))