"""Application service: Register Customer use case."""

from __future__ import annotations

import logging

from ros.domain.exceptions import ValidationError
from ros.domain.model.customer import Customer
from ros.domain.model.value_objects import Address
from ros.domain.repository.customer_repository import CustomerRepository

logger = logging.getLogger(__name__)


class AddCustomerHandler:

    def __init__(self, customer_repo: CustomerRepository) -> None:
        self._customer_repo = customer_repo

    def handle(
        self,
        name: str,
        email: str,
        phone: str,
        country: str,
        postal_code: str,
        surname: str | None = None,
        city: str | None = None,
        street: str | None = None,
        house_number: str | None = None,
    ) -> Customer:
        if email and self._customer_repo.get_by_email(email.strip()) is not None:
            raise ValidationError(f"A customer with email '{email}' already exists")

        all_customers = self._customer_repo.list_all()
        if all_customers:
            next_id = str(max(int(c.id) for c in all_customers) + 1)
        else:
            next_id = "1"

        address = Address(
            country=country,
            postal_code=postal_code,
            city=city,
            street=street,
            house_number=house_number,
        )
        customer = Customer.create(
            id=next_id,
            name=name,
            email=email,
            phone=phone,
            address=address,
            surname=surname,
        )
        self._customer_repo.save(customer)
        logger.info("Customer #%s registered", customer.id)
        return customer
