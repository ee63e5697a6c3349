"""
Card Events Logging

Leveled stderr logging per component (dispatch, tracker, lifecycle,
session) and a record hook that receives one structured record per
dispatched card event.

Usage:
    from card_events.logging import get_logger
    log = get_logger('lifecycle')
    log.debug("Load %s -> %s", previous, current)

    from card_events.logging import register_sink
    register_sink('dispatch', my_sink)    # anything with emit(module, record)

Configuration:
    CARD_EVENTS_LOG_LEVEL=DEBUG          # level for every component
    CARD_EVENTS_LOG_TRACKER=TRACE        # level for one component
"""

import os
import sys
from enum import IntEnum
from functools import lru_cache
from typing import Any, Dict, Optional, Protocol

ENV_PREFIX = 'CARD_EVENTS_LOG_'


class LogLevel(IntEnum):
    """Log levels; TRACE sits below DEBUG for per-event chatter."""
    TRACE = 5
    DEBUG = 10
    INFO = 20
    WARNING = 30
    ERROR = 40
    OFF = 100

    @classmethod
    def parse(cls, name: str) -> 'LogLevel':
        """Level from its name ('WARN' accepted); unknown names mean INFO."""
        name = name.strip().upper()
        if name == 'WARN':
            name = 'WARNING'
        return cls.__members__.get(name, cls.INFO)


class RecordSink(Protocol):
    """Receiver for structured records."""

    def emit(self, module: str, record: Dict[str, Any]) -> None:
        ...


_levels: Dict[str, LogLevel] = {}
_default_level = LogLevel.INFO
_sinks: Dict[str, RecordSink] = {}


def _read_env() -> None:
    """CARD_EVENTS_LOG_LEVEL sets the default; CARD_EVENTS_LOG_<NAME> one component."""
    global _default_level
    for key, value in os.environ.items():
        if not key.startswith(ENV_PREFIX):
            continue
        component = key[len(ENV_PREFIX):].lower()
        if component == 'level':
            _default_level = LogLevel.parse(value)
        else:
            _levels[component] = LogLevel.parse(value)


_read_env()


def configure_logging(level: str = 'INFO', components: Optional[Dict[str, str]] = None) -> None:
    """Set the default level and, optionally, per-component levels."""
    global _default_level
    _default_level = LogLevel.parse(level)
    for component, component_level in (components or {}).items():
        _levels[component.lower()] = LogLevel.parse(component_level)


def disable_logging() -> None:
    global _default_level
    _default_level = LogLevel.OFF
    _levels.clear()


class CardEventsLogger:
    """Logger for one component; messages use %-style args."""

    def __init__(self, component: str):
        self.component = component

    @property
    def level(self) -> LogLevel:
        return _levels.get(self.component.lower(), _default_level)

    def _log(self, level: LogLevel, msg: str, args: tuple) -> None:
        if level < self.level:
            return
        if args:
            msg = msg % args
        print(f"[{self.component}] {level.name}: {msg}", file=sys.stderr)

    def trace(self, msg: str, *args) -> None:
        self._log(LogLevel.TRACE, msg, args)

    def debug(self, msg: str, *args) -> None:
        self._log(LogLevel.DEBUG, msg, args)

    def info(self, msg: str, *args) -> None:
        self._log(LogLevel.INFO, msg, args)

    def warning(self, msg: str, *args) -> None:
        self._log(LogLevel.WARNING, msg, args)

    def error(self, msg: str, *args) -> None:
        self._log(LogLevel.ERROR, msg, args)


@lru_cache(maxsize=None)
def get_logger(component: str) -> CardEventsLogger:
    """Cached logger per component name."""
    return CardEventsLogger(component)


def register_sink(module: str, sink: RecordSink) -> None:
    """Route structured records for ``module`` to ``sink``."""
    _sinks[module] = sink


def clear_sinks() -> None:
    _sinks.clear()


def emit_record(module: str, record: Dict[str, Any]) -> bool:
    """Send a record to the module's sink. False when none is registered."""
    sink = _sinks.get(module)
    if sink is None:
        return False
    sink.emit(module, record)
    return True
