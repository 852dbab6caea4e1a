"""Structured JSON logging for production observability"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict

from pythonjsonlogger.json import JsonFormatter

SERVICE_NAME = "runway-engine"


class CustomJsonFormatter(JsonFormatter):
    """Custom JSON formatter with timestamp and service metadata"""

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record["timestamp"] = datetime.now(timezone.utc).isoformat()
        log_record["level"] = record.levelname
        log_record["service"] = SERVICE_NAME


def setup_logging(level: str = "INFO") -> None:
    """Configure structured JSON logging"""
    logger = logging.getLogger()
    logger.setLevel(level)

    # Remove existing handlers
    logger.handlers.clear()

    # JSON handler for stderr, stdout carries command output
    handler = logging.StreamHandler(sys.stderr)
    formatter = CustomJsonFormatter(
        "%(timestamp)s %(level)s %(name)s %(message)s"
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)


def log_analysis(
    analysis_id: str,
    transaction_count: int,
    salary_source: str,
    runway_probability: float,
    trend: str,
    duration_ms: float,
) -> None:
    """Log structured analysis outcome"""
    logging.info(
        "Health analysis completed",
        extra={
            "analysis_id": analysis_id,
            "step": "analysis_complete",
            "transaction_count": transaction_count,
            "salary_source": salary_source,
            "runway_probability": round(runway_probability, 2),
            "trend": trend,
            "duration_ms": duration_ms,
        },
    )
