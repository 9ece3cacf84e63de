from dataclasses import replace
from uuid import uuid4

from booking_api.application.interfaces.customer_repo import CustomerRepo
from booking_api.domain.entities.customer import Customer


class InMemoryCustomerRepo(CustomerRepo):
    def __init__(self) -> None:
        self._customers: dict[str, Customer] = {}

    async def get_by_email(self, email: str) -> Customer | None:
        for customer in self._customers.values():
            if customer.email == email:
                return customer
        return None

    async def get_by_id(self, customer_id: str) -> Customer | None:
        return self._customers.get(customer_id)

    async def create(self, customer: Customer) -> Customer:
        stored = replace(customer, id=customer.id or str(uuid4()))
        self._customers[stored.id] = stored
        return stored

    def all(self) -> list[Customer]:
        return list(self._customers.values())
