from . import (
    admin_service,
    availability_service,
    booking_service,
    catalogue_service,
    contact_service,
    feedback_service,
)
__all__ = [
    "admin_service",
    "availability_service",
    "booking_service",
    "catalogue_service",
    "contact_service",
    "feedback_service",
]
