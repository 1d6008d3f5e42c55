"""Structured JSON logging for production observability"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Optional
from pythonjsonlogger import jsonlogger

from credit_service.config import settings


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

    # JSON handler for stdout
    handler = logging.StreamHandler(sys.stdout)
    formatter = CustomJsonFormatter(
        "%(timestamp)s %(level)s %(name)s %(message)s"
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)


def log_credit_event(
    request_id: str,
    action: str,
    credit_id: Optional[str],
    customer_id: Optional[str] = None,
    credit_type: Optional[str] = None,
) -> None:
    """Log a credit lifecycle change (created, updated, deleted)"""
    logging.info(
        f"Credit {action}",
        extra={
            "request_id": request_id,
            "step": f"credit_{action}",
            "credit_id": credit_id,
            "customer_id": customer_id,
            "credit_type": credit_type,
        },
    )


def log_settlement(
    request_id: str,
    credit_id: str,
    transaction_type: str,
    amount: str,
    outcome: str,
    duration_ms: float,
    reason: Optional[str] = None,
) -> None:
    """Log structured settlement outcome; rejections at WARNING"""
    level = logging.INFO if outcome == "accepted" else logging.WARNING
    logging.log(
        level,
        "Settlement completed" if outcome == "accepted" else "Settlement rejected",
        extra={
            "request_id": request_id,
            "step": "settlement",
            "credit_id": credit_id,
            "transaction_type": transaction_type,
            "amount": amount,
            "outcome": outcome,
            "reason": reason,
            "duration_ms": duration_ms,
        },
    )
