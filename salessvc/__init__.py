"""Structured JSON logging, a sales service entry point and a log formatter."""

__version__ = "0.0.1"
__all__ = ["logger", "logmodel", "sales", "logfmt"]