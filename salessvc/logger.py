"""Structured JSON logger with optional per-level event hooks."""

from __future__ import annotations

import json
import logging
import os
import platform
import sys
import threading
from dataclasses import dataclass, replace
from datetime import datetime
from importlib import metadata
from typing import Any, Callable, Optional

from .logmodel import Events, Level, Record

_BAD_KEY = "!BADKEY"


@dataclass(frozen=True)
class _Source:
    file: str
    line: int


class _Discard:
    def write(self, text: str) -> int:
        return len(text)


def _level_name(level: int) -> str:
    base = next((b for b in (Level.ERROR, Level.WARN, Level.INFO) if level >= b), Level.DEBUG)
    offset = level - base
    return base.name if offset == 0 else f"{base.name}{offset:+d}"


def _json_default(value: Any) -> Any:
    if isinstance(value, _Source):
        return {"file": value.file, "line": value.line}
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, (set, frozenset)):
        return list(value)
    return str(value)


def _arg_pairs(args):
    """Turn alternating key/value arguments into pairs."""
    it = iter(args)
    for item in it:
        if not isinstance(item, str):
            yield _BAD_KEY, item
            continue
        try:
            yield item, next(it)
        except StopIteration:
            yield _BAD_KEY, item


class JsonHandler:
    """Writes each record as one JSON object per line."""

    def __init__(self, stream, level=Level.INFO, add_source=False, replace_attr=None):
        self._stream = stream
        self._level = level
        self._add_source = add_source
        self._replace = replace_attr
        self._preset: tuple = ()
        self._groups: tuple = ()
        self._lock = threading.Lock()

    def _derive(self, preset: tuple, groups: tuple) -> "JsonHandler":
        handler = JsonHandler(self._stream, self._level, self._add_source, self._replace)
        handler._preset, handler._groups, handler._lock = preset, groups, self._lock
        return handler

    def enabled(self, ctx, level) -> bool:
        return level >= self._level

    def with_attrs(self, attrs) -> "JsonHandler":
        items = attrs.items() if hasattr(attrs, "items") else attrs
        added = tuple((self._groups, key, value) for key, value in items)
        return self._derive(self._preset + added, self._groups) if added else self

    def with_group(self, name) -> "JsonHandler":
        return self._derive(self._preset, self._groups + (name,)) if name else self

    def _put(self, out: dict, groups: tuple, key: str, value: Any) -> None:
        if self._replace is not None:
            key, value = self._replace(groups, key, value)
            if not key:
                return
        for group in groups:
            if not isinstance(out.get(group), dict):
                out[group] = {}
            out = out[group]
        out[key] = value

    def handle(self, ctx, record) -> None:
        out: dict = {}
        self._put(out, (), "time", record.time)
        self._put(out, (), "level", _level_name(record.level))
        if self._add_source and record.source is not None:
            self._put(out, (), "source", _Source(*record.source))
        self._put(out, (), "msg", record.message)
        for groups, key, value in self._preset:
            self._put(out, groups, key, value)
        for key, value in record.attributes.items():
            self._put(out, self._groups, key, value)

        line = json.dumps(out, default=_json_default, ensure_ascii=False, separators=(",", ":"))
        with self._lock:
            self._stream.write(line + "\n")
            if hasattr(self._stream, "flush"):
                self._stream.flush()


class EventHandler:
    """Wraps a handler and runs the configured event for a record's level."""

    def __init__(self, handler, events: Events) -> None:
        self._handler = handler
        self._events = events

    def enabled(self, ctx, level) -> bool:
        return self._handler.enabled(ctx, level)

    def with_attrs(self, attrs) -> "EventHandler":
        return EventHandler(self._handler.with_attrs(attrs), self._events)

    def with_group(self, name) -> "EventHandler":
        return EventHandler(self._handler.with_group(name), self._events)

    def handle(self, ctx, record) -> None:
        event = self._events.for_level(record.level)
        if event is not None:
            event(ctx, replace(record, attributes=dict(record.attributes)))
        self._handler.handle(ctx, record)


class Logger:
    """Logger for application use."""

    def __init__(self, handler, trace_id_fn: Optional[Callable[[Any], str]] = None, discard=False):
        self.handler = handler
        self.trace_id_fn = trace_id_fn
        self.discard = discard

    def debug(self, ctx, msg, *args):
        self._write(ctx, Level.DEBUG, 3, msg, args)

    def debugc(self, ctx, caller, msg, *args):
        self._write(ctx, Level.DEBUG, caller, msg, args)

    def info(self, ctx, msg, *args):
        self._write(ctx, Level.INFO, 3, msg, args)

    def infoc(self, ctx, caller, msg, *args):
        self._write(ctx, Level.INFO, caller, msg, args)

    def warn(self, ctx, msg, *args):
        self._write(ctx, Level.WARN, 3, msg, args)

    def warnc(self, ctx, caller, msg, *args):
        self._write(ctx, Level.WARN, caller, msg, args)

    def error(self, ctx, msg, *args):
        self._write(ctx, Level.ERROR, 3, msg, args)

    def errorc(self, ctx, caller, msg, *args):
        self._write(ctx, Level.ERROR, caller, msg, args)

    def _write(self, ctx, level: Level, caller: int, msg: str, args: tuple) -> None:
        if self.discard or not self.handler.enabled(ctx, level):
            return

        # caller counts this method as 1, the public method as 2, its caller as 3.
        try:
            frame = sys._getframe(max(caller - 1, 0))
            source = (frame.f_code.co_filename, frame.f_lineno)
        except ValueError:
            source = None

        pairs = list(_arg_pairs(args))
        if self.trace_id_fn is not None:
            pairs.append(("trace_id", self.trace_id_fn(ctx)))

        self.handler.handle(ctx, Record(
            time=datetime.now().astimezone(),
            message=msg,
            level=level,
            attributes=dict(pairs),
            source=source,
        ))

    def build_info(self, ctx) -> None:
        """Log information about the running interpreter and package."""
        settings = [
            ("implementation", platform.python_implementation()),
            ("platform", sys.platform),
            ("machine", platform.machine()),
            ("executable", sys.executable),
        ]
        values: list = []
        for key, value in settings:
            values.append(json.dumps(key, ensure_ascii=False) if quote_key(key) else key)
            values.append(json.dumps(value, ensure_ascii=False) if quote_value(value) else value)
        try:
            version = metadata.version("salessvc")
        except metadata.PackageNotFoundError:
            version = "(devel)"
        values += ["pythonversion", platform.python_version(), "modversion", version]
        self.info(ctx, "build info", *values)


def quote_key(key: str) -> bool:
    """Report whether key must be quoted."""
    return not key or any(c in key for c in "= \t\r\n\"`")


def quote_value(value: str) -> bool:
    """Report whether value must be quoted."""
    return any(c in value for c in " \t\r\n\"`")


def _file_only(groups: tuple, key: str, value: Any) -> tuple:
    if key == "source" and isinstance(value, _Source):
        return "file", f"{os.path.basename(value.file)}:{value.line}"
    return key, value


def new(stream, min_level, service_name, trace_id_fn) -> Logger:
    """Construct a logger writing JSON to stream; None discards everything."""
    return new_with_events(stream, min_level, service_name, trace_id_fn, Events())


def new_with_events(stream, min_level, service_name, trace_id_fn, events) -> Logger:
    """Construct a logger that also runs events for logged levels."""
    handler = JsonHandler(
        stream if stream is not None else _Discard(),
        level=min_level,
        add_source=True,
        replace_attr=_file_only,
    )
    if not events.is_empty():
        handler = EventHandler(handler, events)
    handler = handler.with_attrs([("service", service_name)])
    return Logger(handler, trace_id_fn, discard=stream is None)


def new_with_handler(handler) -> Logger:
    """Construct a logger over an existing handler."""
    return Logger(handler)


class _BridgeHandler(logging.Handler):
    def __init__(self, target, level: int) -> None:
        super().__init__()
        self._target = target
        self._record_level = level

    def emit(self, rec: logging.LogRecord) -> None:
        if self._target.enabled(None, self._record_level):
            self._target.handle(None, Record(
                time=datetime.fromtimestamp(rec.created).astimezone(),
                message=rec.getMessage(),
                level=self._record_level,
                source=(rec.pathname, rec.lineno),
            ))


def new_std_logger(logger: Logger, level: int) -> logging.Logger:
    """Return a standard library logger that writes through logger at level."""
    std = logging.Logger(f"salessvc.std.{_level_name(level)}")
    std.propagate = False
    std.addHandler(_BridgeHandler(logger.handler, level))
    return std