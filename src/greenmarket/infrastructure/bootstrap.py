"""Composition root: wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.

One ``Container`` is shared per process: the product locks and the
in-memory stores only protect anything if every request sees the same
instances.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache

import structlog

from greenmarket.application.interfaces import PasswordHasher
from greenmarket.config import Settings, settings
from greenmarket.domain.repository.order_repository import OrderRepository
from greenmarket.domain.repository.product_repository import ProductRepository
from greenmarket.domain.repository.shipping_repository import (
    ShippingRequestRepository,
)
from greenmarket.domain.repository.user_repository import UserRepository
from greenmarket.domain.service.product_locks import ProductLocks
from greenmarket.domain.service.stock_reservation_service import (
    StockReservationService,
)
from greenmarket.infrastructure.persistence.in_memory import (
    InMemoryOrderRepository,
    InMemoryProductRepository,
    InMemoryShippingRequestRepository,
    InMemoryUserRepository,
)
from greenmarket.infrastructure.persistence.json_order_repository import (
    JsonOrderRepository,
)
from greenmarket.infrastructure.persistence.json_product_repository import (
    JsonProductRepository,
)
from greenmarket.infrastructure.persistence.json_shipping_repository import (
    JsonShippingRequestRepository,
)
from greenmarket.infrastructure.persistence.json_user_repository import (
    JsonUserRepository,
)
from greenmarket.infrastructure.security import BcryptPasswordHasher

logger = structlog.get_logger(__name__)


@dataclass
class Container:
    user_repo: UserRepository
    product_repo: ProductRepository
    order_repo: OrderRepository
    shipping_repo: ShippingRequestRepository
    locks: ProductLocks
    stock: StockReservationService
    hasher: PasswordHasher


def build_container(config: Settings) -> Container:
    """Build a fresh container for the configured storage backend."""
    if config.STORAGE_BACKEND == "memory":
        user_repo = InMemoryUserRepository()
        product_repo = InMemoryProductRepository()
        order_repo = InMemoryOrderRepository()
        shipping_repo = InMemoryShippingRequestRepository()
    elif config.STORAGE_BACKEND == "json":
        data_dir = config.DATA_DIR
        user_repo = JsonUserRepository(data_dir / "users.json")
        product_repo = JsonProductRepository(data_dir / "products.json")
        order_repo = JsonOrderRepository(data_dir / "orders.json")
        shipping_repo = JsonShippingRequestRepository(data_dir / "shipping_requests.json")
    else:
        raise ValueError(
            f"Unknown storage backend '{config.STORAGE_BACKEND}' "
            f"(expected 'json' or 'memory')"
        )

    locks = ProductLocks(timeout=config.LOCK_TIMEOUT_SECONDS)
    logger.debug(
        "container_built",
        storage=config.STORAGE_BACKEND,
        data_dir=str(config.DATA_DIR),
    )
    return Container(
        user_repo=user_repo,
        product_repo=product_repo,
        order_repo=order_repo,
        shipping_repo=shipping_repo,
        locks=locks,
        stock=StockReservationService(product_repo, locks),
        hasher=BcryptPasswordHasher(rounds=config.BCRYPT_ROUNDS),
    )


@lru_cache(maxsize=1)
def container() -> Container:
    """The process-wide container, built from ``greenmarket.config.settings``."""
    return build_container(settings)
