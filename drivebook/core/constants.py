# drivebook/core/constants.py
"""Application-wide constants."""

BRAND_NAME = "DriveBook"
API_VERSION = "1.0.0"
API_PREFIX = "/api/v1"

# Persistence keys shared with the mobile client's local storage
DEFAULT_AVAILABILITY_KEY = "schedule_availability"
DEFAULT_BOOKINGS_KEY = "schedule_bookings"

DEFAULT_NOTIFICATION_CHANNEL = "drivebook:notifications"

DEFAULT_LESSON_MINUTES = 60

STUDENT_COLOR_PALETTE = (
    "#FF6B6B",
    "#6BCB77",
    "#4D96FF",
    "#FFD93D",
    "#B088F9",
    "#FF8FAB",
    "#20C997",
)
