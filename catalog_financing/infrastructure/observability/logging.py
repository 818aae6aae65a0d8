"""Structured JSON logging for production observability"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict
from pythonjsonlogger import jsonlogger

from catalog_financing.config import settings


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


def log_offers(
    request_id: str,
    item_kind: str,
    item_id: int,
    tier: str,
    candidate_count: int,
    offer_count: int,
    duration_ms: float,
) -> None:
    """Log structured plan resolution outcome for analysis"""
    logging.info(
        "Financing offers built",
        extra={
            "request_id": request_id,
            "item_kind": item_kind,
            "item_id": item_id,
            "step": "offers_complete",
            "tier": tier,
            "candidate_plans": candidate_count,
            "offers": offer_count,
            "duration_ms": duration_ms,
        },
    )
