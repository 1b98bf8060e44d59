import logging
import sys
from datetime import datetime, timezone

from pythonjsonlogger import jsonlogger

from .config import get_settings

SERVICE_NAME = "castle-api"


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    def add_fields(self, log_record, record, message_dict):
        super(CustomJsonFormatter, self).add_fields(log_record, record, message_dict)

        if not log_record.get("@timestamp"):
            log_record["@timestamp"] = datetime.now(timezone.utc).isoformat(timespec="milliseconds")

        log_record["level"] = record.levelname
        log_record["service"] = SERVICE_NAME
        log_record["logger"] = record.name

        log_record.pop("timestamp", None)
        log_record.pop("color_message", None)


def get_logger(name: str = SERVICE_NAME) -> logging.Logger:
    logger = logging.getLogger(name)

    if not logger.handlers:
        logger.setLevel(get_settings().log_level)

        formatter = CustomJsonFormatter("%(@timestamp)s %(level)s %(message)s")

        # stdout only; the container runtime ships it
        stream_handler = logging.StreamHandler(sys.stdout)
        stream_handler.setFormatter(formatter)
        logger.addHandler(stream_handler)
        logger.propagate = False

    return logger


logger = get_logger()
