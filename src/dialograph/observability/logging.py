"""Logging setup for dialog previews and graph tooling.

Everything dialograph logs goes through loggers under the `dialograph`
namespace:

- `dialograph.inference.engine` logs each transition at INFO and warns when an
  auto-advance node has more than one eligible edge.
- `dialograph.inference.evaluator` logs rule scores at DEBUG, which is what
  `dialograph play --debug` turns on.
- `dialograph.runtime.session` logs session start, finish and misses, tagged
  with `session_id` and `graph_id` through ContextLogger.
- Graph stores and the embedding scorer log saves and model loads at INFO.

The console shows the session tag in front of the message. The optional JSON
file keeps `session_id` and `graph_id` as separate fields.
"""

import logging
import logging.config
from typing import Any

# Chatty during model download and load
_QUIET_LIBRARIES = ("sentence_transformers", "transformers", "huggingface_hub", "urllib3")


class SessionContextFilter(logging.Filter):
    """Sets `record.session` to "[<session_id> <graph_id>] " when the record has them."""

    def filter(self, record: logging.LogRecord) -> bool:
        parts = [
            str(value)
            for value in (getattr(record, "session_id", None), getattr(record, "graph_id", None))
            if value
        ]
        record.session = f"[{' '.join(parts)}] " if parts else ""
        return True


def setup_logging(level: str = "INFO", json_file: str | None = None) -> None:
    """
    Route dialograph logs to the console and, optionally, a JSON file.

    Third-party model libraries are held at WARNING whatever `level` is, so
    `--debug` shows rule scores rather than download progress.

    Args:
        level: Level for dialograph loggers (DEBUG shows every rule evaluation)
        json_file: Optional path of a rotating file with one JSON record per line
    """
    config: dict[str, Any] = {
        "version": 1,
        "disable_existing_loggers": False,
        "filters": {
            "session": {"()": SessionContextFilter},
        },
        "formatters": {
            "console": {
                "format": "%(asctime)s - %(name)s - %(levelname)s - %(session)s%(message)s",
                "datefmt": "%H:%M:%S",
            },
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": "console",
                "filters": ["session"],
                "level": level,
            },
        },
        "loggers": {
            "dialograph": {
                "handlers": ["console"],
                "level": level,
                "propagate": False,
            },
            **{name: {"level": "WARNING"} for name in _QUIET_LIBRARIES},
        },
        "root": {
            "handlers": ["console"],
            "level": "WARNING",
        },
    }

    if json_file is not None:
        config["formatters"]["json"] = {
            "()": "pythonjsonlogger.json.JsonFormatter",
            "format": "%(asctime)s %(name)s %(levelname)s %(message)s",
        }
        config["handlers"]["file"] = {
            "class": "logging.handlers.RotatingFileHandler",
            "filename": json_file,
            "maxBytes": 10485760,  # 10MB
            "backupCount": 5,
            "formatter": "json",
            "level": level,
        }
        config["loggers"]["dialograph"]["handlers"].append("file")

    logging.config.dictConfig(config)


class ContextLogger:
    """Named logger that hands out session-tagged adapters."""

    def __init__(self, name: str):
        self.logger = logging.getLogger(name)

    def with_context(self, **context: Any) -> logging.LoggerAdapter:
        """
        Tag every record with the given fields.

        A preview session passes `session_id` and `graph_id`, so lines from
        concurrent sessions can be told apart.

        Args:
            **context: Fields added to each record's `extra`

        Returns:
            LoggerAdapter carrying the fields
        """
        return logging.LoggerAdapter(self.logger, context)
