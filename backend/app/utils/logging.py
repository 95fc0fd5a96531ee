"""Structured logging for trip store operations."""

import logging
from typing import Any

logger = logging.getLogger(__name__)


class StructuredStoreLogger:
    """Structured logger for store operations."""

    def log_operation(
        self,
        operation: str,
        outcome: str,
        *,
        trip_id: str | None = None,
        item_id: str | None = None,
        latency_ms: float | None = None,
        error_reason: str | None = None,
        **fields: Any,
    ) -> None:
        """Log a store operation with structured data."""
        log_data: dict[str, Any] = {
            "operation": operation,
            "outcome": outcome,
        }

        if trip_id:
            log_data["trip_id"] = trip_id
        if item_id:
            log_data["item_id"] = item_id
        if latency_ms is not None:
            log_data["latency_ms"] = round(latency_ms, 2)
        if error_reason:
            log_data["error_reason"] = error_reason
        log_data.update(fields)

        log_msg = f"Trip store: {operation} - {outcome}"

        if outcome == "success":
            logger.info(log_msg, extra={"structured": log_data})
        else:
            logger.warning(log_msg, extra={"structured": log_data})
