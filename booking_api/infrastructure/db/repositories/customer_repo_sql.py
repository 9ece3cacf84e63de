from dataclasses import replace
from uuid import uuid4

from sqlalchemy import insert, select
from sqlalchemy.ext.asyncio import AsyncSession

from booking_api.application.interfaces.customer_repo import CustomerRepo
from booking_api.domain.entities.customer import Customer, CustomerType
from booking_api.infrastructure.db.tables import customers


def _row_to_customer(data) -> Customer:
    return Customer(
        id=data["id"],
        name=data["name"],
        email=data["email"],
        phone=data["phone"],
        customer_type=CustomerType(data["type"]),
        status=data["status"],
    )


class CustomerRepoSQL(CustomerRepo):
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get_by_email(self, email: str) -> Customer | None:
        stmt = select(customers).where(customers.c.email == email).limit(1)
        row = (await self._session.execute(stmt)).first()
        return _row_to_customer(row._mapping) if row else None

    async def get_by_id(self, customer_id: str) -> Customer | None:
        stmt = select(customers).where(customers.c.id == customer_id)
        row = (await self._session.execute(stmt)).first()
        return _row_to_customer(row._mapping) if row else None

    async def create(self, customer: Customer) -> Customer:
        stored = replace(customer, id=customer.id or str(uuid4()))
        await self._session.execute(
            insert(customers).values(
                id=stored.id,
                name=stored.name,
                email=stored.email,
                phone=stored.phone,
                type=stored.customer_type.value,
                status=stored.status,
            )
        )
        return stored
