"""Constantes del dominio de reservas."""

MIN_RENTAL_DAYS = 30
MAX_RENTAL_DAYS = 90

MONTHLY_TIER_MIN_DAYS = 28
WEEKLY_TIER_MIN_DAYS = 7
DAYS_PER_WEEK = 7

PROMO_CODE_MAX_LENGTH = 20
LOCATION_MIN_LENGTH = 5

DRAFT_STORAGE_KEY = "booking_context"
DRAFT_SCHEMA_VERSION = 1

BOOKING_ENTRY_PATH = "/booking"

CUSTOMER_STATUS_ACTIVE = "Active"

EVENT_SYNC_VEHICLE_STATUS = "SYNC_VEHICLE_STATUS"
EVENT_GENERATE_FIRST_CHARGE = "GENERATE_FIRST_CHARGE"
