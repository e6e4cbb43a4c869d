"""Logging for stock given back after a failed commit."""

from __future__ import annotations

import structlog

from greenmarket.domain.service.stock_reservation_service import Compensation

logger = structlog.get_logger(__name__)


def report_compensation(compensation: Compensation, **context) -> None:
    for product_id, amount in compensation.restored:
        logger.warning(
            "stock_compensated", product_id=product_id, amount=str(amount), **context
        )
    # stock is now lower than the stored orders and requests account for
    for product_id, amount, error in compensation.failed:
        logger.error(
            "stock_compensation_failed",
            product_id=product_id,
            amount=str(amount),
            error=repr(error),
            **context,
        )
