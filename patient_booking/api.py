import logging
from contextlib import asynccontextmanager
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, FastAPI, HTTPException, Query, Response
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from . import config
from .database import get_session, init_models
from .errors import NotFoundError, ValidationError
from .models import BookingRequest, NextAppointmentResponse
from .service import BookingService

logging.basicConfig(
    level=config.LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

logging.getLogger("httpx").setLevel(logging.WARNING)
logging.getLogger("httpcore").setLevel(logging.WARNING)

# HTTPBearer scheme so Swagger-UI can attach the Authorization header globally
auth_scheme = HTTPBearer(auto_error=False)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Patient booking service starting up...")
    await init_models()
    yield


app = FastAPI(title="Patient Booking Service", lifespan=lifespan)


def verify_api_key(credentials: Optional[HTTPAuthorizationCredentials] = Depends(auth_scheme)):
    """Validate Bearer token when BOOKING_API_KEY is configured"""
    if not config.BOOKING_API_KEY:
        return
    if credentials is None or credentials.scheme.lower() != "bearer" or credentials.credentials != config.BOOKING_API_KEY:
        raise HTTPException(status_code=401, detail="Invalid API key")


def get_booking_service(session: AsyncSession = Depends(get_session)) -> BookingService:
    return BookingService(session)


router = APIRouter(prefix="/api/booking", tags=["Booking"], dependencies=[Depends(verify_api_key)])


@router.get("/patient/{identificationNumber}/next", response_model=NextAppointmentResponse)
async def get_patient_next_appointment(
    identificationNumber: int,
    service: BookingService = Depends(get_booking_service),
):
    """Return the patient's earliest upcoming appointment."""
    try:
        return await service.get_patient_next_appointment(identificationNumber)
    except NotFoundError as e:
        raise HTTPException(status_code=502, detail=e.message)
    except Exception:
        logger.exception(f"Next appointment lookup failed for patient {identificationNumber}")
        raise HTTPException(status_code=500, detail="Internal server error")


@router.post("")
async def add_booking(req: BookingRequest, service: BookingService = Depends(get_booking_service)):
    """Book an appointment; empty body on success."""
    try:
        await service.add_order(req)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=e.message)
    except NotFoundError as e:
        raise HTTPException(status_code=502, detail=e.message)
    except Exception:
        logger.exception(f"Booking failed for patient {req.patient_id}")
        raise HTTPException(status_code=500, detail="Internal server error")
    return Response(status_code=200)


@router.delete("")
async def cancel_booking(
    bookingId: UUID = Query(..., description="Order id to cancel"),
    service: BookingService = Depends(get_booking_service),
):
    """Mark a booking as cancelled; empty body on success."""
    try:
        await service.cancel_order(bookingId)
    except NotFoundError as e:
        raise HTTPException(status_code=502, detail=e.message)
    except Exception:
        logger.exception(f"Cancelling order {bookingId} failed")
        raise HTTPException(status_code=500, detail="Internal server error")
    return Response(status_code=200)


app.include_router(router)


@app.get("/health")
async def health():
    return {"status": "ok", "service": "patient-booking"}
