"""Integration tests for the employee and customer order workflow:
cancel, reactivate, status updates, payment and deletion."""

import pytest

from ros.application.cancel_order import CancelOrderHandler
from ros.application.cart import CartHandler
from ros.application.delete_order import DeleteOrderHandler
from ros.application.dto import CartItemSpec
from ros.application.pay_order import PayOrderHandler
from ros.application.place_order import PlaceOrderHandler
from ros.application.reactivate_order import ReactivateOrderHandler
from ros.application.show_order import ShowOrderHandler
from ros.application.update_order_status import UpdateOrderStatusHandler
from ros.domain.exceptions import EntityNotFoundError, InvalidStateError, ValidationError
from ros.domain.model.customer import Customer
from ros.domain.model.order import OrderStatus, PaymentStatus
from ros.domain.model.pricing import RegularPricingService
from ros.domain.model.product import Food
from ros.domain.model.value_objects import Address, Money
from tests.fakes import (
    FakeCustomerRepository,
    FakeOrderRepository,
    FakePricingServiceRepository,
    FakeProductRepository,
)


def _setup():
    """Return the order repository and the ID of one freshly placed order."""
    order_repo = FakeOrderRepository()
    product_repo = FakeProductRepository([
        Food.create(
            id="1", name="Pierogi", price=Money.of("7.50"), calorie=450,
            weight_grams=250, ingredients=["dough", "potato"],
        ),
    ])
    customer_repo = FakeCustomerRepository([
        Customer.create(
            id="1", name="Alice", email="alice@example.com", phone="123456789",
            address=Address(country="Poland", postal_code="00-001"),
        ),
    ])
    pricing_repo = FakePricingServiceRepository([RegularPricingService(id="1", name="Regular")])
    cart = CartHandler(order_repo, product_repo, customer_repo, pricing_repo, "1")
    dto = PlaceOrderHandler(cart, product_repo).handle(
        "1", table_number=4, item_specs=[CartItemSpec("Pierogi", 2)]
    )
    return order_repo, dto.id


class TestCancelAndReactivate:

    def test_cancel_new_order(self):
        repo, order_id = _setup()
        CancelOrderHandler(repo).handle(order_id)
        assert repo.get_by_id(order_id).status == OrderStatus.CANCELED

    def test_cancel_in_progress_rejected(self):
        repo, order_id = _setup()
        UpdateOrderStatusHandler(repo).handle(order_id, "IN_PROGRESS", "UNPAID")
        with pytest.raises(InvalidStateError, match="NEW and UNPAID"):
            CancelOrderHandler(repo).handle(order_id)

    def test_cancel_paid_order_rejected(self):
        repo, order_id = _setup()
        PayOrderHandler(repo).handle(order_id)
        with pytest.raises(InvalidStateError):
            CancelOrderHandler(repo).handle(order_id)
        assert repo.get_by_id(order_id).status == OrderStatus.NEW

    def test_cancel_missing_order(self):
        repo, _ = _setup()
        with pytest.raises(EntityNotFoundError, match="not found"):
            CancelOrderHandler(repo).handle(999)

    def test_reactivate_cancelled(self):
        repo, order_id = _setup()
        CancelOrderHandler(repo).handle(order_id)
        assert ReactivateOrderHandler(repo).handle(order_id) is True
        assert repo.get_by_id(order_id).status == OrderStatus.NEW

    def test_reactivate_active_order_is_noop(self):
        repo, order_id = _setup()
        assert ReactivateOrderHandler(repo).handle(order_id) is False
        assert repo.get_by_id(order_id).status == OrderStatus.NEW


class TestStatusAndPayment:

    def test_served_and_paid_completes(self):
        repo, order_id = _setup()
        dto = UpdateOrderStatusHandler(repo).handle(order_id, "served", "paid")
        assert dto.status == "COMPLETED"
        assert dto.payment_status == "PAID"

    def test_paying_served_order_completes_it(self):
        repo, order_id = _setup()
        UpdateOrderStatusHandler(repo).handle(order_id, OrderStatus.SERVED, PaymentStatus.UNPAID)
        dto = PayOrderHandler(repo).handle(order_id)
        assert dto.status == "COMPLETED"

    def test_paying_new_order_keeps_status(self):
        repo, order_id = _setup()
        dto = PayOrderHandler(repo).handle(order_id)
        assert dto.status == "NEW"
        assert dto.payment_status == "PAID"

    def test_updates_ignored_once_cancelled(self):
        repo, order_id = _setup()
        CancelOrderHandler(repo).handle(order_id)
        dto = UpdateOrderStatusHandler(repo).handle(order_id, "IN_PROGRESS", "PAID")
        assert dto.status == "CANCELED"
        assert dto.payment_status == "UNPAID"

    def test_paying_cancelled_order_rejected(self):
        repo, order_id = _setup()
        CancelOrderHandler(repo).handle(order_id)
        with pytest.raises(InvalidStateError, match="CANCELED"):
            PayOrderHandler(repo).handle(order_id)

    def test_unknown_status_token(self):
        repo, order_id = _setup()
        with pytest.raises(ValidationError, match="Unknown order status"):
            UpdateOrderStatusHandler(repo).handle(order_id, "EATEN", "PAID")
        assert repo.get_by_id(order_id).status == OrderStatus.NEW

    def test_show_reflects_updates(self):
        repo, order_id = _setup()
        UpdateOrderStatusHandler(repo).handle(order_id, "IN_PROGRESS", "UNPAID")
        dto = ShowOrderHandler(repo).handle(order_id)
        assert dto.status == "IN_PROGRESS"
        assert dto.final_price == "$16.50"


class TestDeleteOrder:

    def test_delete_new_order(self):
        repo, order_id = _setup()
        order = repo.get_by_id(order_id)
        customer = order.customer
        DeleteOrderHandler(repo).handle(order_id)
        assert repo.get_by_id(order_id) is None
        assert order not in customer.orders
        assert order.lines == ()

    def test_delete_cancelled_order(self):
        repo, order_id = _setup()
        CancelOrderHandler(repo).handle(order_id)
        DeleteOrderHandler(repo).handle(order_id)
        assert repo.list_all() == []

    def test_delete_served_order_rejected(self):
        repo, order_id = _setup()
        UpdateOrderStatusHandler(repo).handle(order_id, "SERVED", "UNPAID")
        with pytest.raises(InvalidStateError, match="can be deleted"):
            DeleteOrderHandler(repo).handle(order_id)
        assert repo.get_by_id(order_id) is not None

    def test_delete_missing_order(self):
        repo, _ = _setup()
        with pytest.raises(EntityNotFoundError):
            DeleteOrderHandler(repo).handle(42)
