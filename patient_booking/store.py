"""Order and patient persistence on top of an explicit AsyncSession."""
from __future__ import annotations

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from .database import Order, Patient


class OrderStore:
    """Reads and writes rows of the ``orders`` table."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def add(self, order: Order) -> Order:
        self.session.add(order)
        await self.session.commit()
        await self.session.refresh(order)
        return order

    async def update(self, order: Order) -> Order:
        """Persist changes made to an order loaded from this session."""
        await self.session.commit()
        await self.session.refresh(order)
        return order

    async def find_by_id(self, order_id: UUID) -> Order | None:
        return await self.session.get(Order, order_id)

    async def all(self) -> list[Order]:
        """Every order, earliest start first."""
        result = await self.session.execute(select(Order).order_by(Order.start_time.asc()))
        return list(result.scalars().all())

    async def find_by_patient(self, patient_id: int) -> list[Order]:
        result = await self.session.execute(
            select(Order).where(Order.patient_id == patient_id).order_by(Order.start_time.asc())
        )
        return list(result.scalars().all())

    async def find_by_doctor(self, doctor_id: int, include_cancelled: bool = False) -> list[Order]:
        query = select(Order).where(Order.doctor_id == doctor_id)
        if not include_cancelled:
            query = query.where(Order.is_cancelled.is_(False))
        result = await self.session.execute(query.order_by(Order.start_time.asc()))
        return list(result.scalars().all())


class PatientStore:
    """Patient lookups; the clinic is loaded with the patient."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def find_patient(self, patient_id: int) -> Patient | None:
        return await self.session.get(Patient, patient_id)
