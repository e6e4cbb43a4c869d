"""Unit tests for the Product aggregate."""

from decimal import Decimal

import pytest

from greenmarket.domain.exceptions import (
    InsufficientStockError,
    InvalidAmountError,
    ValidationError,
)
from greenmarket.domain.model.product import Product
from greenmarket.domain.model.value_objects import Price, Quantity
from tests.fakes import make_producer, make_product


class TestRegister:

    def test_happy_path(self):
        product = Product.register(
            producer_id="p-1",
            name="  Tomatoes ",
            description="Vine ripened",
            quantity=Quantity.of("100", "kg"),
            price=Price.of("2.50", "USD"),
        )
        assert product.name == "Tomatoes"
        assert product.version == 0
        assert product.id

    def test_zero_quantity_rejected(self):
        with pytest.raises(ValidationError, match="Quantity must be greater than 0"):
            Product.register("p-1", "Tomatoes", "d", Quantity.of("0", "kg"), Price.of("1", "USD"))

    def test_zero_price_rejected(self):
        with pytest.raises(ValidationError, match="Price must be greater than 0"):
            Product.register("p-1", "Tomatoes", "d", Quantity.of("1", "kg"), Price.of("0", "USD"))

    def test_blank_name_rejected(self):
        with pytest.raises(ValidationError, match="Product name cannot be empty"):
            Product.register("p-1", " ", "d", Quantity.of("1", "kg"), Price.of("1", "USD"))


class TestStock:

    def test_reduce(self):
        product = make_product(make_producer())
        product.reduce_quantity(Decimal("30"))
        assert product.quantity == Quantity.of("70", "kg")

    def test_reduce_to_exactly_zero(self):
        product = make_product(make_producer(), quantity="5")
        product.reduce_quantity(Decimal("5"))
        assert product.quantity.value == Decimal("0")

    def test_reduce_more_than_stock_rejected(self):
        product = make_product(make_producer(), quantity="70")
        with pytest.raises(InsufficientStockError, match="Insufficient quantity"):
            product.reduce_quantity(Decimal("80"))
        assert product.quantity.value == Decimal("70")

    @pytest.mark.parametrize("amount", ["0", "-1"])
    def test_non_positive_reduce_rejected(self, amount):
        product = make_product(make_producer())
        with pytest.raises(InvalidAmountError):
            product.reduce_quantity(Decimal(amount))

    def test_increase(self):
        product = make_product(make_producer(), quantity="10")
        product.increase_quantity(Decimal("2.5"))
        assert product.quantity.value == Decimal("12.5")

    def test_non_positive_increase_rejected(self):
        product = make_product(make_producer())
        with pytest.raises(InvalidAmountError):
            product.increase_quantity(Decimal("0"))


class TestUpdateDetails:

    def test_replaces_fields(self):
        product = make_product(make_producer())
        product.update_details("Cherry Tomatoes", "Small", Quantity.of("5", "kg"), Price.of("4", "usd"))
        assert product.name == "Cherry Tomatoes"
        assert product.price == Price.of("4", "USD")

    def test_equality_is_by_id(self):
        product = make_product(make_producer())
        other = make_product(make_producer())
        other.id = product.id
        assert product == other
        assert len({product, other}) == 1
