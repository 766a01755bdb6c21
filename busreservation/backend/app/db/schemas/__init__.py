from .base import Created
from .route import City, Route, RouteSave
from .bus import Bus, BusCreate, BusCreated
from .schedule import (
    Schedule,
    ScheduleAvailability,
    ScheduleCreate,
    ScheduleCreated,
    ScheduleSearchResponse,
)
from .booking import (
    Booking,
    BookingCancel,
    BookingCreate,
    BookingCreated,
    BookingList,
    BookingStats,
)
from .contact import ContactMessage, ContactMessageCreate, ContactMessageList, ContactReply
from .feedback import Feedback, FeedbackCreate, FeedbackList
