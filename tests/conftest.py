"""
Pytest configuration and shared fixtures.

Este módulo provee fixtures reutilizables para:
- Reloj fijo (FakeClock) y identificadores válidos
- Fábrica de reservas en cualquier estado
- Repositorio in-memory y sesión SQLite in-memory (aiosqlite)
- Cliente HTTP de prueba (FastAPI TestClient)
"""

import uuid
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from decimal import Decimal
from typing import AsyncGenerator, Generator

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from salon_booking.api.dependencies import get_clock, get_reservation_repo
from salon_booking.application.interfaces.clock import FakeClock
from salon_booking.domain.entities.reservation import (
    ReservationData,
    ReservationStatus,
    reservation_from_status,
)
from salon_booking.domain.ids import CustomerId, ReservationId, SalonId, ServiceId, StaffId
from salon_booking.infrastructure.db.tables import metadata
from salon_booking.infrastructure.in_memory.reservation_repo import InMemoryReservationRepo
from salon_booking.main import app

# Lunes 2 de junio de 2025, 09:00 UTC
NOW = datetime(2025, 6, 2, 9, 0, tzinfo=timezone.utc)

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@dataclass(frozen=True)
class SampleIds:
    salon: SalonId
    customer: CustomerId
    staff: StaffId
    other_staff: StaffId
    service: ServiceId


# ============================================================================
# FIXTURES DE DOMINIO
# ============================================================================

@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(NOW)


@pytest.fixture
def ids() -> SampleIds:
    return SampleIds(
        salon=SalonId(str(uuid.uuid4())),
        customer=CustomerId(str(uuid.uuid4())),
        staff=StaffId(str(uuid.uuid4())),
        other_staff=StaffId(str(uuid.uuid4())),
        service=ServiceId(str(uuid.uuid4())),
    )


@pytest.fixture
def make_reservation(ids: SampleIds):
    """
    Fábrica de reservas en memoria (sin repositorio).

    Por defecto crea una reserva pendiente que empieza mañana a las 10:00
    y dura una hora.
    """

    def _make(
        status: ReservationStatus = ReservationStatus.PENDING,
        start_time: datetime | None = None,
        duration: timedelta = timedelta(hours=1),
        total_amount=Decimal("5000"),
        deposit_amount=None,
        staff_id: StaffId | None = None,
    ):
        start = start_time or NOW + timedelta(days=1, hours=1)
        data = ReservationData(
            id=ReservationId(str(uuid.uuid4())),
            salon_id=ids.salon,
            customer_id=ids.customer,
            staff_id=staff_id or ids.staff,
            service_id=ids.service,
            start_time=start,
            end_time=start + duration,
            total_amount=total_amount,
            deposit_amount=deposit_amount,
            created_at=NOW,
            updated_at=NOW,
            created_by="front-desk",
            updated_by="front-desk",
        )
        return reservation_from_status(
            status,
            data,
            confirmed_at=NOW,
            confirmed_by="front-desk",
            cancelled_at=NOW,
            cancelled_by="front-desk",
            cancellation_reason="customer request",
            completed_at=NOW,
            completed_by="stylist",
            marked_no_show_at=NOW,
            marked_no_show_by="stylist",
        )

    return _make


@pytest.fixture
def in_memory_repo(clock: FakeClock) -> InMemoryReservationRepo:
    return InMemoryReservationRepo(clock=clock)


# ============================================================================
# FIXTURES DE BASE DE DATOS
# ============================================================================

@pytest_asyncio.fixture
async def test_engine():
    """Engine SQLite in-memory con el esquema creado; se descarta al final del test."""
    engine = create_async_engine(TEST_DATABASE_URL, echo=False)
    async with engine.begin() as conn:
        await conn.run_sync(metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(test_engine) -> AsyncGenerator[AsyncSession, None]:
    session_factory = async_sessionmaker(test_engine, expire_on_commit=False)
    async with session_factory() as session:
        yield session


# ============================================================================
# FIXTURES DE CLIENTE HTTP
# ============================================================================

@pytest.fixture
def client(clock: FakeClock) -> Generator[TestClient, None, None]:
    """
    FastAPI TestClient con repositorio in-memory aislado y reloj fijo.
    """
    repo = InMemoryReservationRepo(clock=clock)
    app.dependency_overrides[get_reservation_repo] = lambda: repo
    app.dependency_overrides[get_clock] = lambda: clock

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


def pytest_configure(config):
    config.addinivalue_line(
        "markers",
        "integration: tests that exercise the SQL adapter against SQLite"
    )
