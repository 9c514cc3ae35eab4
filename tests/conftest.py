import uuid

import httpx
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from patient_booking.api import app
from patient_booking.database import Clinic, Doctor, Order, Patient, get_session, init_models

SURGERY_TYPE = 1
PATIENT_ID = 100
OTHER_PATIENT_ID = 101
DOCTOR_ID = 1
OTHER_DOCTOR_ID = 2


@pytest_asyncio.fixture
async def engine():
    eng = create_async_engine("sqlite+aiosqlite://", poolclass=StaticPool)
    await init_models(eng)
    yield eng
    await eng.dispose()


@pytest_asyncio.fixture
async def session_factory(engine):
    factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with factory() as s:
        s.add(Clinic(id=1, name="Riverside Surgery", surgery_type=SURGERY_TYPE))
        s.add_all([
            Patient(id=PATIENT_ID, first_name="Ada", last_name="Lovelace", clinic_id=1),
            Patient(id=OTHER_PATIENT_ID, first_name="Alan", last_name="Turing", clinic_id=1),
            Doctor(id=DOCTOR_ID, first_name="Grace", last_name="Hopper"),
            Doctor(id=OTHER_DOCTOR_ID, first_name="Edsger", last_name="Dijkstra"),
        ])
        await s.commit()
    return factory


@pytest_asyncio.fixture
async def session(session_factory):
    async with session_factory() as s:
        yield s


@pytest_asyncio.fixture
async def client(session_factory):
    async def _override_session():
        async with session_factory() as s:
            yield s

    app.dependency_overrides[get_session] = _override_session
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
        yield c
    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def add_order(session_factory):
    """Insert an order row directly, bypassing validation."""
    async def _add(start, end, patient_id=PATIENT_ID, doctor_id=DOCTOR_ID, is_cancelled=False):
        async with session_factory() as s:
            order = Order(
                id=uuid.uuid4(),
                patient_id=patient_id,
                doctor_id=doctor_id,
                start_time=start,
                end_time=end,
                is_cancelled=is_cancelled,
                surgery_type=SURGERY_TYPE,
            )
            s.add(order)
            await s.commit()
            return order

    return _add
