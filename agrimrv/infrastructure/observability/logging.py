"""Structured JSON logging for production observability"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict
from pythonjsonlogger import jsonlogger

from agrimrv.config import settings


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """Custom JSON formatter with timestamp and service metadata"""

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record["timestamp"] = datetime.now(timezone.utc).isoformat()
        log_record["level"] = record.levelname
        log_record["service"] = settings.service_name


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


def log_scoring(
    request_id: str,
    profile_id: str,
    credit_score: int,
    grade: str,
    eligible_loan_amount: int,
    duration_ms: float,
) -> None:
    """Log structured scoring outcome for analysis"""
    logging.info(
        "Scoring completed",
        extra={
            "request_id": request_id,
            "profile_id": profile_id,
            "step": "scoring_complete",
            "credit_score": credit_score,
            "grade": grade,
            "eligible_loan_amount": eligible_loan_amount,
            "duration_ms": duration_ms,
        },
    )
