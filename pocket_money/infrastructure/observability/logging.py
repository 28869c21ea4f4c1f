"""Structured JSON logging"""

import logging
import sys
from datetime import datetime, timezone
from decimal import Decimal
from typing import Any, Dict
from pythonjsonlogger.json import JsonFormatter

from pocket_money.config import settings


class CustomJsonFormatter(JsonFormatter):
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


def log_month_initialized(monthly_allowance: Decimal, weekend_multiplier: Decimal) -> None:
    logging.info(
        "Month initialized",
        extra={
            "step": "month_initialized",
            "monthly_allowance": str(monthly_allowance),
            "weekend_multiplier": str(weekend_multiplier),
        },
    )


def log_settlement(action: str, spent: Decimal, diff: Decimal, total_remaining: Decimal, savings_pot: Decimal) -> None:
    """Log structured end-of-day outcome"""
    logging.info(
        "Day settled",
        extra={
            "step": "day_settled",
            "action": action,
            "spent": str(spent),
            "diff": str(diff),
            "total_remaining": str(total_remaining),
            "savings_pot": str(savings_pot),
        },
    )


def log_deductions_pruned(expired_count: int, remaining_count: int) -> None:
    logging.info(
        "Expired deductions pruned",
        extra={
            "step": "deductions_pruned",
            "expired_count": expired_count,
            "remaining_count": remaining_count,
        },
    )


def log_deduction_added(daily_amount: Decimal, end_date: datetime) -> None:
    logging.info(
        "Temporary deduction added",
        extra={
            "step": "deduction_added",
            "daily_amount": str(daily_amount),
            "end_date": end_date.isoformat(),
        },
    )
