import json
import logging
from datetime import datetime, timezone

ROOT_LOGGER = "shoplist_session"


def get_logger(name: str = ROOT_LOGGER) -> logging.Logger:
    logger = logging.getLogger(name)
    if logger.handlers:
        return logger
    logger.setLevel(logging.INFO)
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
    return logger


def configure_logging(level: str = "INFO") -> logging.Logger:
    logger = get_logger(ROOT_LOGGER)
    logger.setLevel(level.upper())
    return logger


def log_transition(
    logger: logging.Logger,
    action: str,
    sequence: int,
    outcome: str,
    status_code: int | None = None,
    duration_ms: int | None = None,
) -> None:
    logger.info(
        json.dumps(
            {
                "ts": datetime.now(timezone.utc).isoformat(),
                "level": "INFO",
                "action": action,
                "sequence": sequence,
                "status_code": status_code,
                "duration_ms": duration_ms,
                "outcome": outcome,
            }
        )
    )
