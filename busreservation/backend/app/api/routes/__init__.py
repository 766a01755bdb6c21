from . import (
    auth,
    schedules,
    bookings,
    admin,
    contact,
    feedback,
    misc,
)

__all__ = [
    "auth",
    "schedules",
    "bookings",
    "admin",
    "contact",
    "feedback",
    "misc",
]
