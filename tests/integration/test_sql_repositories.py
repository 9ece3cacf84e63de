"""
Repositorios SQL sobre SQLite en memoria (aiosqlite).

- Inserción condicional de rentas (una Active por Individual)
- Transacciones: commit al salir, rollback ante error
- Outbox: claim / retry / done
"""

from datetime import date, datetime, timedelta, timezone
from decimal import Decimal

import pytest
import pytest_asyncio
from sqlalchemy import select

from booking_api.config import Settings
from booking_api.domain.constants import EVENT_GENERATE_FIRST_CHARGE, EVENT_SYNC_VEHICLE_STATUS
from booking_api.domain.entities import Customer, Rental, RentalStatus, VehicleStatus
from booking_api.infrastructure.db.engine import build_engine, build_sessionmaker, create_schema
from booking_api.infrastructure.db.repositories import (
    ChargeServiceSQL,
    CustomerRepoSQL,
    DraftStorageSQL,
    OutboxRepoSQL,
    PricingExtraRepoSQL,
    RentalRepoSQL,
    VehicleRepoSQL,
)
from booking_api.infrastructure.db.tables import pricing_extras, rental_charges, vehicles
from booking_api.infrastructure.db.transaction_manager import SQLAlchemyTransactionManager


@pytest_asyncio.fixture
async def db_session():
    engine = build_engine(Settings(database_url="sqlite+aiosqlite:///:memory:"))
    await create_schema(engine)
    async with build_sessionmaker(engine)() as session:
        for row in [
            {"id": "veh-rolls", "reg": "RR23 GHO", "make": "Rolls-Royce", "model": "Ghost",
             "monthly_rate": Decimal("2000.00"), "status": "Available"},
            {"id": "veh-bentley", "reg": "BE22 CON", "make": "Bentley",
             "monthly_rate": Decimal("1800.00"), "status": "Available"},
            {"id": "veh-range", "reg": "RA21 VER", "weekly_rate": Decimal("600.00"),
             "status": "Available"},
            {"id": "veh-shop", "reg": "MA20 INT", "monthly_rate": Decimal("100.00"),
             "status": "Maintenance"},
        ]:
            await session.execute(vehicles.insert(), row)
        await session.execute(
            pricing_extras.insert(),
            [
                {"id": "extra-seat", "extra_name": "Child Seat", "price": Decimal("50.00"),
                 "is_active": True},
                {"id": "extra-retired", "extra_name": "Roof Box", "price": Decimal("30.00"),
                 "is_active": False},
            ],
        )
        await session.commit()
        yield session
    await engine.dispose()


async def _customer(session) -> Customer:
    return await CustomerRepoSQL(session).create(
        Customer(name="Ada Lovelace", email="ada@example.com", phone="+44 7700 900123")
    )


def _rental(customer_id: str, vehicle_id: str = "veh-rolls") -> Rental:
    return Rental(
        customer_id=customer_id,
        vehicle_id=vehicle_id,
        start_date=date(2025, 3, 1),
        end_date=date(2025, 4, 5),
        amount=Decimal("2050.00"),
        status=RentalStatus.ACTIVE,
    )


class TestFleetRepositories:
    async def test_available_vehicles_sorted_with_missing_rate_last(self, db_session):
        fleet = await VehicleRepoSQL(db_session).list_available()

        assert [v.id for v in fleet] == ["veh-bentley", "veh-rolls", "veh-range"]

    async def test_update_status(self, db_session):
        repo = VehicleRepoSQL(db_session)

        await repo.update_status("veh-rolls", VehicleStatus.RENTED)

        assert (await repo.get_by_id("veh-rolls")).status == VehicleStatus.RENTED

    async def test_update_status_unknown_vehicle(self, db_session):
        with pytest.raises(LookupError):
            await VehicleRepoSQL(db_session).update_status("missing", VehicleStatus.RENTED)

    async def test_only_active_extras(self, db_session):
        extras = await PricingExtraRepoSQL(db_session).list_active()

        assert [e.id for e in extras] == ["extra-seat"]


class TestRentalRepository:
    async def test_customer_lookup_is_exact(self, db_session):
        customer = await _customer(db_session)
        repo = CustomerRepoSQL(db_session)

        assert (await repo.get_by_email("ada@example.com")).id == customer.id
        assert await repo.get_by_email("ADA@example.com") is None

    async def test_exclusive_insert_rejects_second_active(self, db_session):
        customer = await _customer(db_session)
        repo = RentalRepoSQL(db_session)

        first = await repo.create(_rental(customer.id), exclusive_active=True)
        second = await repo.create(_rental(customer.id, "veh-bentley"), exclusive_active=True)

        assert first is not None
        assert second is None
        assert await repo.has_active_for_customer(customer.id)
        stored = await repo.get_by_id(first.id)
        assert stored.amount == Decimal("2050.00")
        assert stored.start_date == date(2025, 3, 1)

    async def test_non_exclusive_insert(self, db_session):
        customer = await _customer(db_session)
        repo = RentalRepoSQL(db_session)

        await repo.create(_rental(customer.id))
        again = await repo.create(_rental(customer.id, "veh-bentley"))

        assert again is not None

    async def test_active_rental_per_vehicle(self, db_session):
        customer = await _customer(db_session)
        repo = RentalRepoSQL(db_session)
        rental = await repo.create(_rental(customer.id))

        assert await repo.has_active_for_vehicle("veh-rolls")
        assert not await repo.has_active_for_vehicle("veh-bentley")

        await repo.delete(rental.id)
        assert not await repo.has_active_for_vehicle("veh-rolls")

    async def test_delete_and_status(self, db_session):
        customer = await _customer(db_session)
        repo = RentalRepoSQL(db_session)
        rental = await repo.create(_rental(customer.id))

        await repo.update_status(rental.id, RentalStatus.CLOSED)
        assert not await repo.has_active_for_customer(customer.id)

        await repo.delete(rental.id)
        assert await repo.get_by_id(rental.id) is None


class TestTransactionManager:
    async def test_commit_on_clean_exit(self, db_session):
        tm = SQLAlchemyTransactionManager(db_session)

        async with tm.start():
            customer = await _customer(db_session)

        assert await CustomerRepoSQL(db_session).get_by_id(customer.id) is not None

    async def test_rollback_on_error(self, db_session):
        tm = SQLAlchemyTransactionManager(db_session)

        with pytest.raises(RuntimeError):
            async with tm.start():
                customer = await _customer(db_session)
                raise RuntimeError("boom")

        assert await CustomerRepoSQL(db_session).get_by_id(customer.id) is None

    async def test_nested_blocks_join_outer(self, db_session):
        tm = SQLAlchemyTransactionManager(db_session)

        with pytest.raises(RuntimeError):
            async with tm.start():
                async with tm.start():
                    customer = await _customer(db_session)
                raise RuntimeError("boom")

        assert await CustomerRepoSQL(db_session).get_by_id(customer.id) is None


class TestDraftStorage:
    async def test_set_get_and_overwrite(self, db_session):
        storage = DraftStorageSQL(db_session, "tab-1")

        assert await storage.get("booking_context") is None
        await storage.set("booking_context", b'{"v":1}')
        await storage.set("booking_context", b'{"v":2}')

        assert await storage.get("booking_context") == b'{"v":2}'
        assert await DraftStorageSQL(db_session, "tab-2").get("booking_context") is None


class TestOutboxAndCharges:
    async def test_claim_retry_done(self, db_session):
        repo = OutboxRepoSQL(db_session)
        now = datetime(2025, 3, 1, 12, 0, tzinfo=timezone.utc)
        event = await repo.enqueue(
            event_type=EVENT_GENERATE_FIRST_CHARGE,
            aggregate_type="RENTAL",
            aggregate_code="rental-1",
            payload={"rental_id": "rental-1"},
        )

        claimed = await repo.claim_ready(locked_by="worker-1", now=now)
        assert [e.id for e in claimed] == [event.id]
        assert claimed[0].payload == {"rental_id": "rental-1"}
        assert await repo.claim_ready(locked_by="worker-2", now=now) == []

        await repo.mark_retry(
            event.id,
            attempts=1,
            next_attempt_at=now + timedelta(seconds=15),
            error_code="TimeoutError",
            error_message="billing timed out",
        )
        assert await repo.claim_ready(locked_by="worker-1", now=now) == []

        later = now + timedelta(seconds=15)
        claimed = await repo.claim_ready(locked_by="worker-1", now=later)
        assert claimed[0].attempts == 1

        await repo.mark_done(event.id)
        assert await repo.claim_ready(locked_by="worker-1", now=later + timedelta(hours=1)) == []

    async def test_claim_filters_by_rental(self, db_session):
        repo = OutboxRepoSQL(db_session)
        now = datetime(2025, 3, 1, 12, 0, tzinfo=timezone.utc)
        for code in ("rental-1", "rental-2"):
            await repo.enqueue(
                event_type=EVENT_GENERATE_FIRST_CHARGE,
                aggregate_type="RENTAL",
                aggregate_code=code,
                payload={"rental_id": code},
            )

        claimed = await repo.claim_ready(locked_by="worker-1", now=now, aggregate_code="rental-2")

        assert [e.aggregate_code for e in claimed] == ["rental-2"]

    async def test_cancel_pending_for_rental(self, db_session):
        repo = OutboxRepoSQL(db_session)
        now = datetime(2025, 3, 1, 12, 0, tzinfo=timezone.utc)
        done = await repo.enqueue(
            event_type=EVENT_GENERATE_FIRST_CHARGE,
            aggregate_type="RENTAL",
            aggregate_code="rental-1",
            payload={"rental_id": "rental-1"},
        )
        await repo.mark_done(done.id)
        for code in ("rental-1", "rental-2"):
            await repo.enqueue(
                event_type=EVENT_SYNC_VEHICLE_STATUS,
                aggregate_type="RENTAL",
                aggregate_code=code,
                payload={"vehicle_id": "veh-rolls", "status": "Rented"},
            )

        cancelled = await repo.cancel_pending("rental-1", reason="Rental cancelled before payment")

        assert cancelled == 1
        claimed = await repo.claim_ready(locked_by="worker-1", now=now)
        assert [e.aggregate_code for e in claimed] == ["rental-2"]

    async def test_first_charge_is_idempotent(self, db_session):
        customer = await _customer(db_session)
        rental = await RentalRepoSQL(db_session).create(_rental(customer.id))
        charges = ChargeServiceSQL(db_session)

        await charges.generate_first_charge(rental.id)
        await charges.generate_first_charge(rental.id)

        rows = (await db_session.execute(select(rental_charges))).all()
        assert len(rows) == 1
        assert rows[0]._mapping["amount"] == Decimal("2050.00")
        assert rows[0]._mapping["due_date"] == date(2025, 3, 1)

    async def test_charge_for_unknown_rental(self, db_session):
        with pytest.raises(LookupError):
            await ChargeServiceSQL(db_session).generate_first_charge("missing")
