"""Unit tests for OrderLine and the Order <-> OrderLine association."""

from datetime import datetime, timezone
from decimal import Decimal

import pytest

from ros.domain.exceptions import InvalidStateError, ValidationError
from ros.domain.model.customer import Customer
from ros.domain.model.order import Order, OrderStatus, PaymentStatus
from ros.domain.model.order_line import OrderLine
from ros.domain.model.pricing import RegularPricingService
from ros.domain.model.product import Food, Product
from ros.domain.model.value_objects import Address, Money, Quantity


def _order() -> Order:
    customer = Customer.create(
        id="1", name="Alice", email="alice@example.com", phone="+48123456789",
        address=Address(country="Poland", postal_code="00-001"),
    )
    return Order.create(
        customer=customer,
        pricing_service=RegularPricingService(id="1", name="Regular"),
        order_time=datetime(2024, 3, 1, 12, 0, tzinfo=timezone.utc),
        table_number=2,
    )


def _product(pid: str = "1", name: str = "Pierogi", price: str = "7.50") -> Product:
    return Food.create(
        id=pid, name=name, price=Money.of(price), calorie=300,
        weight_grams=200, ingredients=["dough"],
    )


class TestCreate:

    def test_links_both_sides(self):
        order, product = _order(), _product()
        line = OrderLine.create(product, order, 2, Money.of("7.50"))
        assert order.lines == (line,)
        assert product.order_lines == (line,)
        assert line.order is order and line.product is product

    def test_subtotal(self):
        line = OrderLine.create(_product(), _order(), 3, Money.of("7.50"))
        assert line.subtotal == Money.of("22.50")

    def test_zero_quantity_rejected_and_order_unchanged(self):
        order, product = _order(), _product()
        with pytest.raises(ValidationError, match="must be positive"):
            OrderLine.create(product, order, 0, Money.of("7.50"))
        assert order.lines == ()
        assert product.order_lines == ()

    def test_negative_price_rejected(self):
        with pytest.raises(ValidationError, match="cannot be negative"):
            OrderLine.create(_product(), _order(), 1, Money.of("-1"))

    @pytest.mark.parametrize("price", [Decimal("-5"), Decimal("7.50"), "7.50", 7])
    def test_unit_price_must_be_money(self, price):
        order, product = _order(), _product()
        with pytest.raises(ValidationError, match="Unit price"):
            OrderLine.create(product, order, 1, price)
        assert order.lines == ()
        assert product.order_lines == ()

    def test_free_item_allowed(self):
        line = OrderLine.create(_product(price="0"), _order(), 1, Money.of("0"))
        assert line.subtotal == Money.of("0")

    @pytest.mark.parametrize("missing", ["product", "order", "price"])
    def test_missing_arguments_rejected(self, missing):
        args = {"product": _product(), "order": _order(), "price": Money.of("1")}
        args[missing] = None
        with pytest.raises(ValidationError):
            OrderLine.create(args["product"], args["order"], 1, args["price"])

    def test_duplicate_product_rejected(self):
        order, product = _order(), _product()
        OrderLine.create(product, order, 1, product.price)
        with pytest.raises(ValidationError, match="already contains"):
            OrderLine.create(product, order, 1, product.price)
        assert len(order.lines) == 1
        assert len(product.order_lines) == 1

    def test_distinct_products_sharing_an_id_both_allowed(self):
        order = _order()
        soup = _product(pid="1", name="Borscht")
        dumplings = _product(pid="1", name="Pierogi")
        OrderLine.create(soup, order, 1, soup.price)
        OrderLine.create(dumplings, order, 1, dumplings.price)
        assert [line.product for line in order.lines] == [soup, dumplings]

    def test_frozen_order_refuses_new_lines(self):
        order, product = _order(), _product()
        order.update_status_and_payment(OrderStatus.SERVED, PaymentStatus.UNPAID)
        with pytest.raises(InvalidStateError, match="SERVED"):
            OrderLine.create(product, order, 1, product.price)
        assert product.order_lines == ()


class TestQuantity:

    def test_set_quantity(self):
        line = OrderLine.create(_product(), _order(), 1, Money.of("7.50"))
        line.set_quantity(4)
        assert line.quantity == Quantity(4)

    def test_set_non_positive_quantity_rejected(self):
        line = OrderLine.create(_product(), _order(), 1, Money.of("7.50"))
        with pytest.raises(ValidationError):
            line.set_quantity(0)
        assert line.quantity.value == 1

    def test_served_order_quantities_are_frozen(self):
        order = _order()
        line = OrderLine.create(_product(), order, 1, Money.of("7.50"))
        order.update_status_and_payment(OrderStatus.SERVED, PaymentStatus.UNPAID)
        with pytest.raises(InvalidStateError):
            line.set_quantity(2)


class TestRemoval:

    def test_remove_line_unlinks_both_sides(self):
        order, product = _order(), _product()
        line = OrderLine.create(product, order, 1, product.price)
        order.remove_line(line)
        assert order.lines == ()
        assert product.order_lines == ()
        assert line.order is None and line.product is None

    def test_remove_foreign_line_rejected(self):
        line = OrderLine.create(_product(), _order(), 1, Money.of("1"))
        with pytest.raises(ValidationError, match="reference this order"):
            _order().remove_line(line)

    def test_add_foreign_line_rejected(self):
        line = OrderLine.create(_product(), _order(), 1, Money.of("1"))
        with pytest.raises(ValidationError, match="reference this order"):
            _order().add_line(line)

    def test_completed_order_refuses_removal(self):
        order = _order()
        line = OrderLine.create(_product(), order, 1, Money.of("1"))
        order.update_status_and_payment(OrderStatus.SERVED, PaymentStatus.PAID)
        with pytest.raises(InvalidStateError):
            order.remove_line(line)
        assert order.lines == (line,)

    def test_lines_view_is_read_only(self):
        order = _order()
        OrderLine.create(_product(), order, 1, Money.of("1"))
        with pytest.raises(AttributeError):
            order.lines.append(None)

    def test_unlink_directly(self):
        order, product = _order(), _product()
        line = OrderLine.create(product, order, 1, product.price)
        line.unlink()
        assert order.lines == () and product.order_lines == ()
