"""JSON log output for applications embedding the client.

The library itself only logs through module loggers. To get one JSON object
per line, call this once at startup::

    configure_logging(ClientSettings().log_level)

Records emitted by the transport carry the exchange fields listed in
``EXCHANGE_FIELDS`` through ``extra``; they are lifted into the JSON entry.
"""

from __future__ import annotations

import json
import logging
import re
from datetime import datetime, timezone

EXCHANGE_FIELDS = ("op", "method", "path", "status_code", "duration_ms", "trace_id")

# key=value / key: value pairs whose value must never reach a log sink
_SECRET_PAIR = re.compile(
    r"(api.key|secret|password|token|credential|authorization|cookie)\s*[=:]\s*\S+",
    re.IGNORECASE,
)
_REDACTED = "[REDACTED]"


def redact(text: str) -> str:
    return _SECRET_PAIR.sub(_REDACTED, text)


class JsonFormatter(logging.Formatter):
    """Render a record as a single JSON object.

    Always present: ``timestamp``, ``level``, ``logger``, ``message``.
    Exchange fields and a redacted ``exception`` are added when available.
    """

    def format(self, record: logging.LogRecord) -> str:
        created = datetime.fromtimestamp(record.created, tz=timezone.utc)
        entry: dict = dict(
            timestamp=created.isoformat(),
            level=record.levelname,
            logger=record.name,
            message=redact(record.getMessage()),
        )
        entry.update(
            (field, record.__dict__[field]) for field in EXCHANGE_FIELDS if field in record.__dict__
        )
        if record.exc_info and record.exc_info[1]:
            entry["exception"] = redact(self.formatException(record.exc_info))
        return json.dumps(entry, default=str)


def configure_logging(level: str = "INFO") -> None:
    """Route root logging through a single JSON stream handler at ``level``.

    Unknown level names fall back to INFO. Any previously installed root
    handlers are replaced.
    """
    handler = logging.StreamHandler()
    handler.setFormatter(JsonFormatter())

    root = logging.getLogger()
    root.handlers[:] = [handler]
    root.setLevel(logging.getLevelNamesMapping().get(level.upper(), logging.INFO))

