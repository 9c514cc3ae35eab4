from datetime import datetime, timezone
from uuid import UUID

from pydantic import BaseModel, Field, field_serializer, field_validator


def utcnow() -> datetime:
    """Current time as naive UTC, the form stored in the database."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


class BookingRequest(BaseModel):
    patient_id: int = Field(alias="patientId")
    doctor_id: int = Field(alias="doctorId")
    start_time: datetime = Field(alias="startTime")  # ISO-8601 dateTime
    end_time: datetime = Field(alias="endTime")

    model_config = {
        "populate_by_name": True
    }

    @field_validator("start_time", "end_time")
    @classmethod
    def to_naive_utc(cls, v: datetime) -> datetime:
        if v.tzinfo is not None:
            return v.astimezone(timezone.utc).replace(tzinfo=None)
        return v


class NextAppointmentResponse(BaseModel):
    id: UUID
    doctor_id: int = Field(alias="doctorId")
    start_time: datetime = Field(alias="startTime")
    end_time: datetime = Field(alias="endTime")

    model_config = {
        "populate_by_name": True
    }

    @field_serializer("start_time", "end_time")
    def as_utc(self, v: datetime) -> datetime:
        # stored naive UTC; emit with an explicit offset
        return v.replace(tzinfo=timezone.utc) if v.tzinfo is None else v


class ValidationResult(BaseModel):
    """Outcome of checking a booking request; errors keep rule order."""
    passed: bool = True
    errors: list[str] = Field(default_factory=list)
