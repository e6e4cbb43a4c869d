"""Abstract repository for the Product aggregate.

Defined in the domain layer so the domain never depends on
infrastructure. Concrete implementations (JSON, in-memory) live in the
infrastructure layer.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from greenmarket.domain.model.product import Product


class ProductRepository(ABC):

    @abstractmethod
    def get_by_id(self, product_id: str) -> Product | None:
        """Return a product by its ID, or None if not found."""

    @abstractmethod
    def get_by_producer(self, producer_id: str) -> list[Product]:
        """Return every product listed by a producer."""

    @abstractmethod
    def exists_by_name_for_producer(self, name: str, producer_id: str) -> bool:
        """True if the producer already lists ``name`` (case-insensitive)."""

    @abstractmethod
    def add(self, product: Product) -> None:
        """Persist a new product.

        Raises DuplicateProductError if the producer already lists a
        product with the same name (case-insensitive).
        """

    @abstractmethod
    def save(self, product: Product) -> None:
        """Persist an updated product (compare-and-swap on ``version``).

        Raises ConcurrencyError if the stored version no longer matches
        ``product.version``. On success both versions are incremented.
        Raises DuplicateProductError on a rename onto another product's name.
        """

    @abstractmethod
    def delete(self, product: Product) -> None:
        """Remove a product from the catalog."""
