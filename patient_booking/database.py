"""SQLAlchemy async engine, session factory and ORM tables."""
from __future__ import annotations

import logging
import uuid

from sqlalchemy import BigInteger, Boolean, Column, DateTime, ForeignKey, Integer, String, Uuid
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base, relationship

from .config import DATABASE_URL, DB_ECHO

logger = logging.getLogger(__name__)

engine = create_async_engine(DATABASE_URL, echo=DB_ECHO, pool_pre_ping=True)
SessionLocal = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
Base = declarative_base()


class Clinic(Base):
    __tablename__ = "clinics"

    id = Column(BigInteger, primary_key=True)
    name = Column(String(255), nullable=False)
    surgery_type = Column(Integer, nullable=False)


class Patient(Base):
    __tablename__ = "patients"

    id = Column(BigInteger, primary_key=True)  # identification number
    first_name = Column(String(255), nullable=True)
    last_name = Column(String(255), nullable=True)
    email = Column(String(255), nullable=True)
    clinic_id = Column(BigInteger, ForeignKey("clinics.id"), nullable=False)

    clinic = relationship(Clinic, lazy="joined")


class Doctor(Base):
    __tablename__ = "doctors"

    id = Column(BigInteger, primary_key=True)
    first_name = Column(String(255), nullable=True)
    last_name = Column(String(255), nullable=True)


class Order(Base):
    """A booked appointment. Never deleted, only flagged as cancelled."""

    __tablename__ = "orders"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    patient_id = Column(BigInteger, ForeignKey("patients.id"), nullable=False, index=True)
    doctor_id = Column(BigInteger, ForeignKey("doctors.id"), nullable=False, index=True)
    start_time = Column(DateTime, nullable=False, index=True)  # naive UTC
    end_time = Column(DateTime, nullable=False)
    is_cancelled = Column(Boolean, default=False, nullable=False)
    surgery_type = Column(Integer, nullable=False)

    def __repr__(self) -> str:
        return (
            f"Order(id={self.id}, patient_id={self.patient_id}, doctor_id={self.doctor_id}, "
            f"start_time={self.start_time}, end_time={self.end_time}, is_cancelled={self.is_cancelled})"
        )


async def init_models(bind: AsyncEngine = engine) -> None:
    """Create any missing tables."""
    async with bind.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database tables ready")


async def get_session():
    """FastAPI dependency yielding one session per request."""
    async with SessionLocal() as session:
        yield session
