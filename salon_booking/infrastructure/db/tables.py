from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    DateTime,
    Index,
    Integer,
    MetaData,
    Numeric,
    String,
    Table,
    Text,
    text,
)
from sqlalchemy.dialects.postgresql import ExcludeConstraint

metadata = MetaData()

reservations = Table(
    "reservations",
    metadata,
    Column("id", String(36), primary_key=True),
    Column("salon_id", String(36), nullable=False),
    Column("customer_id", String(36), nullable=False),
    Column("staff_id", String(36), nullable=False),
    Column("service_id", String(36), nullable=False),
    Column("start_time", DateTime(timezone=True), nullable=False),
    Column("end_time", DateTime(timezone=True), nullable=False),
    Column("status", String(16), nullable=False, default="pending"),
    Column("notes", Text),
    Column("total_amount", Numeric(12, 2), nullable=False),
    Column("deposit_amount", Numeric(12, 2)),
    Column("is_paid", Boolean, nullable=False, default=False),
    Column("created_at", DateTime(timezone=True), nullable=False),
    Column("updated_at", DateTime(timezone=True), nullable=False),
    Column("created_by", String(255)),
    Column("updated_by", String(255)),
    Column("confirmed_at", DateTime(timezone=True)),
    Column("confirmed_by", String(255)),
    Column("cancelled_at", DateTime(timezone=True)),
    Column("cancelled_by", String(255)),
    Column("cancellation_reason", Text),
    Column("completed_at", DateTime(timezone=True)),
    Column("completed_by", String(255)),
    Column("marked_no_show_at", DateTime(timezone=True)),
    Column("marked_no_show_by", String(255)),
    Column("lock_version", Integer, nullable=False, default=0),
    CheckConstraint("start_time <= end_time", name="reservations_time_order"),
    CheckConstraint("total_amount >= 0", name="reservations_total_non_negative"),
    CheckConstraint(
        "deposit_amount IS NULL OR (deposit_amount >= 0 AND deposit_amount <= total_amount)",
        name="reservations_deposit_bounds",
    ),
    CheckConstraint(
        "status IN ('pending', 'confirmed', 'cancelled', 'completed', 'no_show')",
        name="reservations_status_values",
    ),
    Index("ix_reservations_staff_start", "staff_id", "start_time"),
    Index("ix_reservations_salon_start", "salon_id", "start_time"),
    Index("ix_reservations_customer", "customer_id"),
)

# Closes the check-then-act race on PostgreSQL: no two live reservations of the
# same staff member may overlap on [start_time, end_time). Requires btree_gist.
reservations.append_constraint(
    ExcludeConstraint(
        ("staff_id", "="),
        (text("tstzrange(start_time, end_time, '[)')"), "&&"),
        name="reservations_staff_no_overlap",
        using="gist",
        where=text("status <> 'cancelled'"),
    ).ddl_if(dialect="postgresql")
)
