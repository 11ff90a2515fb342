"""The sales service entry point."""

from __future__ import annotations

import argparse
import os
import signal
import sys
import threading
from typing import Any, Callable, Optional

from .logger import Logger, new_with_events
from .logmodel import Events, Level


def _wait_for_shutdown_signal() -> signal.Signals:
    """Block until SIGINT or SIGTERM arrives and return it."""
    received: list = []
    done = threading.Event()

    def on_signal(signum: int, frame: Any) -> None:
        received.append(signal.Signals(signum))
        done.set()

    previous = {sig: signal.signal(sig, on_signal) for sig in (signal.SIGINT, signal.SIGTERM)}
    try:
        while not done.wait(0.5):
            pass
    finally:
        for sig, handler in previous.items():
            signal.signal(sig, handler)
    return received[0]


def _new_sales_logger(stream) -> Logger:
    log: Optional[Logger] = None

    def alert(ctx: Any, record: Any) -> None:
        if log is not None:
            log.info(ctx, "******* SEND ALERT *******")

    log = new_with_events(stream, Level.INFO, "SALES", lambda ctx: "", Events(error=alert))
    return log


def run(ctx, log: Logger, wait_for_signal: Optional[Callable[[], Any]] = None) -> None:
    """Log startup, wait for a shutdown signal and log the shutdown."""
    log.info(ctx, "startup", "GOMAXPROCS", os.cpu_count())
    sig = (wait_for_signal or _wait_for_shutdown_signal)()
    log.info(ctx, "shutdown", "status", "shutdown started", "signal", sig)
    log.info(ctx, "shutdown", "status", "shutdown complete", "signal", sig)


def main(argv=None) -> int:
    argparse.ArgumentParser(prog="sales", description="Run the sales service.").parse_args(argv)
    log = _new_sales_logger(sys.stdout)
    try:
        run(None, log)
    except Exception as exc:
        log.error(None, "startup", "msg", exc)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())