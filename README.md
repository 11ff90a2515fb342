# salessvc

Structured JSON logging for services, plus two small commands:

- `sales` — logs its startup as a JSON line on stdout, waits for SIGINT
  or SIGTERM, then logs that shutdown started and completed.
- `logfmt` — reads JSON log lines on stdin and prints them in a readable
  form.

## Installation

```
pip install .
```

## Running

Pipe the service's output through the formatter:

```
sales | logfmt
```

Show only the lines of one service (the match ignores case):

```
sales | logfmt --service sales
```

`-service` is accepted as well as `--service`. `logfmt` ignores SIGINT
while it reads, so stopping the pipeline with Ctrl-C lets it print the
service's shutdown lines before stdin closes.

Lines that are not JSON objects are passed through unchanged when no
service filter is given, and dropped when one is.

Each formatted line is the service, time, source file, level, trace id
and message, joined by `": "`, followed by every remaining attribute
written as `key[value]`:

```
SALES: 2024-01-01T12:00:00.000000+00:00: sales.py:42: INFO: : startup: GOMAXPROCS[8]
```

When a record has no `trace_id` key, the all-zero id
`00000000-0000-0000-0000-000000000000` is shown. The `sales` command
sets an empty trace id, so its lines show an empty field there.

## Using the logger

```python
import sys
from salessvc import logger
from salessvc.logmodel import Events, Level

def alert(ctx, record):
    print("alert:", record.message, record.attributes)

log = logger.new_with_events(
    sys.stdout,
    Level.INFO,
    "SALES",
    lambda ctx: "",
    Events(error=alert),
)

log.info(None, "startup", "port", 3000)
log.error(None, "request failed", "status", 500)
```

Each line written is a JSON object holding, in order, `time` (ISO 8601
with the local offset), `level` (`DEBUG`, `INFO`, `WARN`, `ERROR`, or
e.g. `INFO+2` for levels in between), `file` (`name.py:line` of the
calling code), `msg`, `service`, the key/value pairs you passed, and
`trace_id` when a trace-id function is set. A value passed without a key
is logged under `!BADKEY`.

- `logger.new(stream, min_level, service_name, trace_id_fn)` builds a
  logger without events; passing `None` as the stream discards everything.
- `logger.new_with_events(...)` also takes an `Events` value; the event
  function bound to a record's exact level runs before the line is written.
- `logger.new_with_handler(handler)` wraps an existing handler such as
  `JsonHandler` or `EventHandler`.
- `Logger.debug`, `info`, `warn` and `error` log at their level; the
  `debugc`, `infoc`, `warnc` and `errorc` variants take a stack depth
  that chooses which caller is reported in `file`.
- `Logger.build_info(ctx)` logs the Python implementation, platform,
  machine, executable, Python version and the installed package version.
- `logger.new_std_logger(log, level)` returns a standard-library
  `logging.Logger` whose messages are written through the same handler at
  the given level.

Records below the minimum level are dropped.

## What it does not do

The `sales` command serves no requests: it has no HTTP server, API or
storage. It only logs its startup and shutdown around waiting for a
signal. Trace ids come only from the function you pass in; nothing
generates or propagates them.