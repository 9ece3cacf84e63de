from booking_api.infrastructure.in_memory.charge_service import InMemoryChargeService
from booking_api.infrastructure.in_memory.customer_repo import InMemoryCustomerRepo
from booking_api.infrastructure.in_memory.draft_storage import InMemoryDraftStorage
from booking_api.infrastructure.in_memory.outbox_repo import InMemoryOutboxRepo
from booking_api.infrastructure.in_memory.payment_gateway import StubPaymentGateway
from booking_api.infrastructure.in_memory.pricing_extra_repo import InMemoryPricingExtraRepo
from booking_api.infrastructure.in_memory.rental_repo import InMemoryRentalRepo
from booking_api.infrastructure.in_memory.transaction_manager import NoopTransactionManager
from booking_api.infrastructure.in_memory.vehicle_repo import InMemoryVehicleRepo

__all__ = [
    "InMemoryChargeService",
    "InMemoryCustomerRepo",
    "InMemoryDraftStorage",
    "InMemoryOutboxRepo",
    "InMemoryPricingExtraRepo",
    "InMemoryRentalRepo",
    "InMemoryVehicleRepo",
    "NoopTransactionManager",
    "StubPaymentGateway",
]
