import logging
import json
import os
from logging.handlers import RotatingFileHandler
from datetime import datetime

from tradelink.core.config import settings

EXTRA_FIELDS = (
    "request_id",
    "user_id",
    "path",
    "method",
    "status_code",
    "duration_ms",
    "entity_id",
    "resource",
    "response_started",
)


def json_formatter(record):
    log = {
        "timestamp": datetime.utcnow().isoformat() + "Z",
        "level": record.levelname,
        "service": "tradelink-backend",
        "logger": record.name,
        "message": record.getMessage(),
    }

    for field in EXTRA_FIELDS:
        if hasattr(record, field):
            log[field] = getattr(record, field)

    if record.exc_info:
        log["exception"] = logging.Formatter().formatException(record.exc_info)

    return json.dumps(log, default=str)

class JSONFormatter(logging.Formatter):
    def format(self, record):
        return json_formatter(record)

logger = logging.getLogger("tradelink")
logger.setLevel(settings.LOG_LEVEL)

json_f = JSONFormatter()

console_handler = logging.StreamHandler()
console_handler.setLevel(settings.LOG_LEVEL)
console_handler.setFormatter(json_f)

if not logger.handlers:
    logger.addHandler(console_handler)

    if settings.LOG_TO_FILE:
        os.makedirs(settings.LOG_DIR, exist_ok=True)
        file_handler = RotatingFileHandler(
            os.path.join(settings.LOG_DIR, "app.json.log"),
            maxBytes=5 * 1024 * 1024,
            backupCount=5
        )
        file_handler.setLevel(settings.LOG_LEVEL)
        file_handler.setFormatter(json_f)
        logger.addHandler(file_handler)


def get_logger(name: str) -> logging.Logger:
    """Child of the ``tradelink`` logger, e.g. ``get_logger(__name__)``."""
    if name.startswith("tradelink."):
        name = name[len("tradelink."):]
    return logger.getChild(name)
