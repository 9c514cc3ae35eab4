"""Environment-driven settings for the booking service."""
import os

from dotenv import load_dotenv

load_dotenv()

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite+aiosqlite:///./patient_booking.db")
DB_ECHO = os.getenv("DB_ECHO", "0") == "1"

# Empty key disables bearer auth on the booking routes
BOOKING_API_KEY = os.getenv("BOOKING_API_KEY", "")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
