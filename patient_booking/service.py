"""Booking service: the only entry point that changes appointment state."""
from __future__ import annotations

import logging
import uuid
from datetime import datetime
from typing import Callable
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from .database import Order
from .errors import NotFoundError, ValidationError
from .models import BookingRequest, NextAppointmentResponse, utcnow
from .store import OrderStore, PatientStore
from .validation import BookingValidator

logger = logging.getLogger(__name__)


class BookingService:
    def __init__(
        self,
        session: AsyncSession,
        validator: BookingValidator | None = None,
        clock: Callable[[], datetime] = utcnow,
    ):
        self.orders = OrderStore(session)
        self.patients = PatientStore(session)
        self.validator = validator or BookingValidator(session, clock=clock)
        self.clock = clock

    async def add_order(self, request: BookingRequest) -> Order:
        """Validate and store a new booking.

        Raises ValidationError with the first violated rule's message, or
        NotFoundError when the patient is unknown. The created order is
        returned for Python callers only; the HTTP route replies with an
        empty body.
        """
        validation = await self.validator.validate_request(request)
        if not validation.passed:
            logger.warning(f"Booking rejected for patient {request.patient_id}: {validation.errors}")
            raise ValidationError(validation.errors[0])

        patient = await self.patients.find_patient(request.patient_id)
        if patient is None:
            raise NotFoundError("Patient does not exist")

        order = Order(
            id=uuid.uuid4(),
            patient_id=request.patient_id,
            doctor_id=request.doctor_id,
            start_time=request.start_time,
            end_time=request.end_time,
            is_cancelled=False,
            # snapshot; later clinic changes do not touch existing orders
            surgery_type=int(patient.clinic.surgery_type),
        )
        await self.orders.add(order)
        logger.info(f"Created order {order.id} for patient {order.patient_id} with doctor {order.doctor_id}")
        return order

    async def cancel_order(self, order_id: UUID) -> None:
        order = await self.orders.find_by_id(order_id)
        if order is None:
            raise NotFoundError("Order does not exist")

        order.is_cancelled = True
        await self.orders.update(order)
        logger.info(f"Cancelled order {order_id}")

    async def get_patient_next_appointment(self, patient_id: int) -> NextAppointmentResponse:
        """Earliest order of the patient starting after now.

        Cancelled orders are not filtered out.
        """
        bookings = [o for o in await self.orders.all() if o.patient_id == patient_id]
        if not bookings:
            raise NotFoundError("Patient does not exist")

        now = self.clock()
        upcoming = [o for o in bookings if o.start_time > now]
        if not upcoming:
            raise NotFoundError("There are no next appointment")

        nxt = upcoming[0]
        return NextAppointmentResponse(
            id=nxt.id,
            doctor_id=nxt.doctor_id,
            start_time=nxt.start_time,
            end_time=nxt.end_time,
        )
