from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    Date,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    LargeBinary,
    MetaData,
    Numeric,
    String,
    Table,
    Text,
)

metadata = MetaData()

vehicles = Table(
    "vehicles",
    metadata,
    Column("id", String(36), primary_key=True),
    Column("reg", String(20), nullable=False),
    Column("make", String(100)),
    Column("model", String(100)),
    Column("colour", String(50)),
    Column("daily_rate", Numeric(12, 2)),
    Column("weekly_rate", Numeric(12, 2)),
    Column("monthly_rate", Numeric(12, 2)),
    Column("status", String(20), nullable=False, default="Available"),
    Column("photo_url", String(500)),
)

pricing_extras = Table(
    "pricing_extras",
    metadata,
    Column("id", String(36), primary_key=True),
    Column("extra_name", String(150), nullable=False),
    Column("price", Numeric(12, 2), nullable=False),
    Column("description", Text),
    Column("is_active", Boolean, nullable=False, default=True),
)

customers = Table(
    "customers",
    metadata,
    Column("id", String(36), primary_key=True),
    Column("name", String(255), nullable=False),
    Column("email", String(255), nullable=False),
    Column("phone", String(50)),
    Column("type", String(20), nullable=False),
    Column("status", String(20), nullable=False, default="Active"),
    Index("ix_customers_email", "email"),
)

rentals = Table(
    "rentals",
    metadata,
    Column("id", String(36), primary_key=True),
    Column("customer_id", String(36), ForeignKey("customers.id"), nullable=False),
    Column("vehicle_id", String(36), ForeignKey("vehicles.id"), nullable=False),
    Column("start_date", Date, nullable=False),
    Column("end_date", Date, nullable=False),
    Column("monthly_amount", Numeric(12, 2), nullable=False),
    Column("status", String(20), nullable=False),
    Column("created_at", DateTime, nullable=False),
    Index("ix_rentals_customer_status", "customer_id", "status"),
)

rental_charges = Table(
    "rental_charges",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("rental_id", String(36), nullable=False, unique=True),
    Column("customer_id", String(36), nullable=False),
    Column("vehicle_id", String(36), nullable=False),
    Column("due_date", Date, nullable=False),
    Column("amount", Numeric(12, 2), nullable=False),
    Column("category", String(32), nullable=False, default="Rental"),
    Column("created_at", DateTime, nullable=False),
)

booking_drafts = Table(
    "booking_drafts",
    metadata,
    Column("namespace", String(64), primary_key=True),
    Column("storage_key", String(64), primary_key=True),
    Column("value", LargeBinary, nullable=False),
    Column("updated_at", DateTime, nullable=False),
)

outbox_events = Table(
    "outbox_events",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("event_type", String(64), nullable=False),
    Column("aggregate_type", String(64), nullable=False),
    Column("aggregate_code", String(64), nullable=False),
    Column("payload", JSON, nullable=False),
    Column("status", String(20), nullable=False),
    Column("attempts", Integer, nullable=False, default=0),
    Column("next_attempt_at", DateTime),
    Column("locked_by", String(64)),
    Column("locked_at", DateTime),
    Column("lock_expires_at", DateTime),
    Column("error_code", String(64)),
    Column("error_message", Text),
    Column("created_at", DateTime, nullable=False),
    Column("updated_at", DateTime),
    Index("ix_outbox_status_next_attempt", "status", "next_attempt_at"),
)
