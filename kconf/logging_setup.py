"""
JSONL logging bootstrap.
Initializes a single JSONL sink early in CLI startup.
"""

import json
import logging
import os
from datetime import UTC
from datetime import datetime
from pathlib import Path

from .settings import SettingsPaths

# Standard LogRecord attributes; anything else on a record is an extra
_RECORD_ATTRS = frozenset({
    "msg",
    "args",
    "levelname",
    "levelno",
    "pathname",
    "filename",
    "module",
    "exc_info",
    "exc_text",
    "stack_info",
    "lineno",
    "funcName",
    "created",
    "msecs",
    "relativeCreated",
    "thread",
    "threadName",
    "processName",
    "process",
    "taskName",
    "name",
})


class JsonlHandler(logging.Handler):
    def __init__(self, path: str | Path):
        super().__init__()
        self.path = Path(path)
        self.path.parent.mkdir(parents=True, exist_ok=True)

    def emit(self, record: logging.LogRecord) -> None:
        try:
            base = {
                "ts": datetime.now(UTC).isoformat(timespec="milliseconds"),
                "lvl": record.levelname,
                "schema": {"name": "kconf.log", "ver": "1.0.0"},
                "logger": record.name,
                "event": getattr(record, "event", None),
                "message": record.getMessage(),
            }
            # Merge extras if the message is a dict
            msg = record.msg
            if isinstance(msg, dict):
                base.update(msg)
            for k, v in record.__dict__.items():
                if k in _RECORD_ATTRS:
                    continue
                base.setdefault(k, v)
            with self.path.open("a", encoding="utf-8") as f:
                f.write(json.dumps(base, ensure_ascii=False, default=str) + "\n")
        except Exception:
            self.handleError(record)


def default_log_path() -> str:
    return os.environ.get("KCONF_LOG_PATH") or str(SettingsPaths.default().log_file)


def init_json_logging(path: str | Path | None = None, level: str | None = None) -> JsonlHandler:
    path = path or default_log_path()
    level = (level or os.environ.get("KCONF_LOG_LEVEL", "INFO")).upper()
    root = logging.getLogger()
    root.setLevel(getattr(logging, level, logging.INFO))
    # Remove existing handlers of the same kind to avoid duplicates
    for h in list(root.handlers):
        if isinstance(h, JsonlHandler):
            root.removeHandler(h)
            h.close()
    handler = JsonlHandler(path)
    root.addHandler(handler)
    return handler
