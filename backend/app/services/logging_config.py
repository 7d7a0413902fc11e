"""Logging setup for the quote engine service: JSON lines in production, plain text locally."""
import logging
import json
import sys
from datetime import datetime, timezone

# Record attributes passed through ``extra=`` that belong on the JSON line
_CONTEXT_FIELDS = (
    # request tracing
    "request_id",
    "duration_ms",
    "http_method",
    "http_path",
    "http_status",
    # quote payloads
    "quote_id",
    "quote_ids",
    "participant_count",
    "workdays",
    "total_internal_cost",
    "service",
    "service_ids",
    "campus_id",
    "currency",
    "rate",
    "engine_function",
)


class JSONFormatter(logging.Formatter):
    """Renders a record and its quote context as a single JSON object."""
    def format(self, record):
        log_entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }
        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)
        log_entry.update(
            {field: getattr(record, field) for field in _CONTEXT_FIELDS if hasattr(record, field)}
        )
        return json.dumps(log_entry, default=str)


def setup_logging(level: str = "INFO", json_output: bool = True):
    """Install one stdout handler on the root logger; unknown level names fall back to INFO."""
    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.INFO))

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        JSONFormatter() if json_output
        else logging.Formatter("%(asctime)s %(levelname)-7s %(name)s: %(message)s")
    )
    root.handlers = [handler]

    # Access lines duplicate RequestTimingMiddleware output
    for name in ["uvicorn.access", "httpx"]:
        logging.getLogger(name).setLevel(logging.WARNING)
