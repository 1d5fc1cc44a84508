"""Integration tests for feedback and the order listing queries."""

from datetime import datetime, timedelta, timezone

import pytest

from ros.application.cancel_order import CancelOrderHandler
from ros.application.leave_feedback import LeaveFeedbackHandler
from ros.application.list_orders import ListOrdersHandler
from ros.domain.exceptions import EntityNotFoundError, InvalidStateError, ValidationError
from ros.domain.model.customer import Customer
from ros.domain.model.order import Order, OrderStatus, PaymentStatus
from ros.domain.model.order_line import OrderLine
from ros.domain.model.pricing import RegularPricingService
from ros.domain.model.product import Food
from ros.domain.model.value_objects import Address, Money
from tests.fakes import FakeCustomerRepository, FakeOrderRepository

HOME = Address(country="Poland", postal_code="00-001", city="Warsaw")


def _setup():
    alice = Customer.create(
        id="1", name="Alice", email="alice@example.com", phone="123456789", address=HOME
    )
    bob = Customer.create(
        id="2", name="Bob", email="bob@example.com", phone="987654321", address=HOME
    )
    customer_repo = FakeCustomerRepository([alice, bob])
    order_repo = FakeOrderRepository()
    return order_repo, customer_repo, alice, bob


def _place(order_repo, customer, minutes_ago=0):
    product = Food.create(
        id="1", name="Pierogi", price=Money.of("7.50"), calorie=450,
        weight_grams=250, ingredients=["dough", "potato"],
    )
    order = Order.create(
        customer=customer,
        pricing_service=RegularPricingService(id="1", name="Regular"),
        order_time=datetime.now(timezone.utc) - timedelta(minutes=minutes_ago),
        table_number=2,
    )
    OrderLine.create(product=product, order=order, quantity=1, unit_price=product.price)
    return order_repo.save(order)


class TestLeaveFeedback:

    def test_feedback_on_completed_order(self):
        order_repo, _, alice, _ = _setup()
        order = _place(order_repo, alice)
        order.update_status_and_payment(OrderStatus.SERVED, PaymentStatus.PAID)

        dto = LeaveFeedbackHandler(order_repo).handle(order.id, "1", "  Lovely pierogi ")

        assert dto.description == "Lovely pierogi"
        assert len(order.feedbacks) == 1
        assert order.feedbacks[0] in alice.feedbacks

    def test_feedback_before_completion_rejected(self):
        order_repo, _, alice, _ = _setup()
        order = _place(order_repo, alice)
        with pytest.raises(InvalidStateError, match="COMPLETED"):
            LeaveFeedbackHandler(order_repo).handle(order.id, "1", "Too slow")
        assert order.feedbacks == ()

    def test_feedback_from_other_customer_rejected(self):
        order_repo, _, alice, _ = _setup()
        order = _place(order_repo, alice)
        order.update_status_and_payment("SERVED", "PAID")
        with pytest.raises(EntityNotFoundError):
            LeaveFeedbackHandler(order_repo).handle(order.id, "2", "Not mine")

    def test_blank_feedback_rejected(self):
        order_repo, _, alice, _ = _setup()
        order = _place(order_repo, alice)
        order.update_status_and_payment("SERVED", "PAID")
        with pytest.raises(ValidationError, match="description is required"):
            LeaveFeedbackHandler(order_repo).handle(order.id, "1", "   ")


class TestListOrders:

    def test_customer_orders_newest_first(self):
        order_repo, customer_repo, alice, _ = _setup()
        older = _place(order_repo, alice, minutes_ago=30)
        newer = _place(order_repo, alice, minutes_ago=5)

        dtos = ListOrdersHandler(order_repo, customer_repo).for_customer("1")

        assert [d.id for d in dtos] == [newer.id, older.id]

    def test_cancelled_orders_hidden_by_default(self):
        order_repo, customer_repo, alice, _ = _setup()
        kept = _place(order_repo, alice)
        dropped = _place(order_repo, alice)
        CancelOrderHandler(order_repo).handle(dropped.id)

        handler = ListOrdersHandler(order_repo, customer_repo)

        assert [d.id for d in handler.for_customer("1")] == [kept.id]
        assert len(handler.for_customer("1", include_canceled=True)) == 2

    def test_other_customers_orders_excluded(self):
        order_repo, customer_repo, alice, bob = _setup()
        _place(order_repo, alice)
        _place(order_repo, bob)
        dtos = ListOrdersHandler(order_repo, customer_repo).for_customer("2")
        assert [d.customer_name for d in dtos] == ["Bob"]

    def test_unknown_customer(self):
        order_repo, customer_repo, _, _ = _setup()
        with pytest.raises(EntityNotFoundError):
            ListOrdersHandler(order_repo, customer_repo).for_customer("9")

    def test_all_orders_for_board(self):
        order_repo, customer_repo, alice, bob = _setup()
        _place(order_repo, alice)
        _place(order_repo, bob)
        assert len(ListOrdersHandler(order_repo, customer_repo).all()) == 2
