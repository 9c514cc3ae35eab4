"""Business rules a booking request must satisfy before it is stored.

Rules run in order and the first failing rule ends validation, so a result
never mixes errors from two rules.
"""
from __future__ import annotations

from datetime import datetime
from typing import Callable

from sqlalchemy.ext.asyncio import AsyncSession

from .models import BookingRequest, ValidationResult, utcnow
from .store import OrderStore

# Wording is kept as clients already match on it, even though the rule
# rejects times in the past.
START_IN_PAST = "Start Time must be set in the past"
END_IN_PAST = "End Time must be set in the past"
DOCTOR_BOOKED = "A doctor is currently booked in the date time range specified"


class BookingValidator:
    def __init__(self, session: AsyncSession, clock: Callable[[], datetime] = utcnow):
        self.orders = OrderStore(session)
        self.clock = clock

    async def validate_request(self, request: BookingRequest) -> ValidationResult:
        result = ValidationResult()

        if self.check_booking_in_past(request, result):
            return result

        if await self.check_doctor_is_booked(request, result):
            return result

        return result

    def check_booking_in_past(self, request: BookingRequest, result: ValidationResult) -> bool:
        now = self.clock()
        errors = []

        if request.start_time < now:
            errors.append(START_IN_PAST)

        if request.end_time < now:
            errors.append(END_IN_PAST)

        if errors:
            result.passed = False
            result.errors.extend(errors)
            return True

        return False

    async def check_doctor_is_booked(self, request: BookingRequest, result: ValidationResult) -> bool:
        existing = await self.orders.find_by_doctor(request.doctor_id)
        if any(overlaps(request.start_time, request.end_time, o.start_time, o.end_time) for o in existing):
            result.passed = False
            result.errors.append(DOCTOR_BOOKED)
            return True

        return False


def overlaps(start: datetime, end: datetime, booked_start: datetime, booked_end: datetime) -> bool:
    """True when either end of the requested window falls inside the booked one.

    Bounds are inclusive. A request that strictly contains a booked window
    is not reported.
    """
    return booked_start <= start <= booked_end or booked_start <= end <= booked_end
