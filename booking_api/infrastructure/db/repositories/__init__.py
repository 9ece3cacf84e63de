from booking_api.infrastructure.db.repositories.charge_service_sql import ChargeServiceSQL
from booking_api.infrastructure.db.repositories.customer_repo_sql import CustomerRepoSQL
from booking_api.infrastructure.db.repositories.draft_storage_sql import DraftStorageSQL
from booking_api.infrastructure.db.repositories.outbox_repo_sql import OutboxRepoSQL
from booking_api.infrastructure.db.repositories.pricing_extra_repo_sql import PricingExtraRepoSQL
from booking_api.infrastructure.db.repositories.rental_repo_sql import RentalRepoSQL
from booking_api.infrastructure.db.repositories.vehicle_repo_sql import VehicleRepoSQL

__all__ = [
    "ChargeServiceSQL",
    "CustomerRepoSQL",
    "DraftStorageSQL",
    "OutboxRepoSQL",
    "PricingExtraRepoSQL",
    "RentalRepoSQL",
    "VehicleRepoSQL",
]
