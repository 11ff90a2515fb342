"""Turn structured JSON log lines into readable text."""

from __future__ import annotations

import argparse
import json
import math
import signal
import sys
import threading
from decimal import Decimal
from typing import Any, Optional

_DEFAULT_TRACE_ID = "00000000-0000-0000-0000-000000000000"
_HEADER_KEYS = ("service", "time", "file", "level", "trace_id", "msg")


def _reject_constant(name: str) -> Any:
    raise ValueError(f"invalid JSON constant {name}")


def _format_float(value: float) -> str:
    """Format a float with the shortest digits, in exponent form outside 1e-4..1e6."""
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "+Inf" if value > 0 else "-Inf"
    number = Decimal(repr(value))
    ndigits = len(number.normalize().as_tuple().digits)
    exp = number.adjusted()
    if exp < -4 or exp >= 6:
        return f"{value:.{ndigits - 1}e}"
    return f"{value:.{max(ndigits - 1 - exp, 0)}f}"


def _as_value(value: Any) -> str:
    if value is None:
        return "<nil>"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        return _format_float(value)
    if isinstance(value, list):
        return "[" + " ".join(_as_value(v) for v in value) + "]"
    if isinstance(value, dict):
        return "map[" + " ".join(f"{k}:{_as_value(value[k])}" for k in sorted(value)) + "]"
    return str(value)


def _as_string(value: Any) -> str:
    if value is None:
        return "%!s(<nil>)"
    if isinstance(value, bool):
        return f"%!s(bool={_as_value(value)})"
    if isinstance(value, float):
        return f"%!s(float64={_as_value(value)})"
    if isinstance(value, list):
        return "[" + " ".join(_as_string(v) for v in value) + "]"
    if isinstance(value, dict):
        return "map[" + " ".join(f"{k}:{_as_string(value[k])}" for k in sorted(value)) + "]"
    return str(value)


def format_line(line: str, service: str = "") -> Optional[str]:
    """Return the readable form of line, or None when it is filtered out."""
    service = service.lower()
    try:
        entry = json.loads(line, parse_int=float, parse_constant=_reject_constant)
    except ValueError:
        entry = line
    if entry is None:
        entry = {}

    if not isinstance(entry, dict):
        return None if service else line

    if service:
        name = entry.get("service")
        if not isinstance(name, str) or name.lower() != service:
            return None

    trace_id = _as_value(entry["trace_id"]) if "trace_id" in entry else _DEFAULT_TRACE_ID
    parts = [_as_string(entry.get(key)) for key in ("service", "time", "file", "level")]
    parts += [trace_id, _as_string(entry.get("msg"))]
    parts += [f"{k}[{_as_value(v)}]" for k, v in entry.items() if k not in _HEADER_KEYS]
    return ": ".join(parts)


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(prog="logfmt", description="Make structured log output readable.")
    parser.add_argument("-service", "--service", default="", help="filter which service to see")
    args = parser.parse_args(argv)

    previous = None
    if threading.current_thread() is threading.main_thread():
        previous = signal.signal(signal.SIGINT, signal.SIG_IGN)
    try:
        for raw in sys.stdin:
            line = raw.rstrip("\n")
            if line.endswith("\r"):
                line = line[:-1]
            out = format_line(line, args.service)
            if out is not None:
                print(out)
    finally:
        if previous is not None:
            signal.signal(signal.SIGINT, previous)
    return 0


if __name__ == "__main__":
    sys.exit(main())