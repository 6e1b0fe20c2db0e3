"""Structured JSON logging for production observability"""

import logging
import sys
from datetime import datetime
from decimal import Decimal
from typing import Any, Dict
from pythonjsonlogger import jsonlogger


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """Custom JSON formatter with timestamp and service metadata"""

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record["timestamp"] = datetime.utcnow().isoformat()
        log_record["level"] = record.levelname
        log_record["service"] = "sepa-gateway"


def setup_logging(level: str = "INFO") -> None:
    """Configure structured JSON logging"""
    logger = logging.getLogger()
    logger.setLevel(level)

    # Remove existing handlers
    logger.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    formatter = CustomJsonFormatter(
        "%(timestamp)s %(level)s %(name)s %(message)s"
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)


def log_export(
    request_id: str,
    month: str,
    export_format: str,
    transaction_count: int,
    control_sum: Decimal,
    duration_ms: float,
) -> None:
    """Log export outcome; account numbers are never part of the record"""
    logging.info(
        "Export completed",
        extra={
            "request_id": request_id,
            "step": "export_complete",
            "month": month,
            "format": export_format,
            "transaction_count": transaction_count,
            "control_sum": str(control_sum),
            "duration_ms": duration_ms,
        },
    )
