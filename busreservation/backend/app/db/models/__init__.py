from .city import City, DEFAULT_COUNTRY
from .route import Route
from .bus import Bus
from .schedule import Schedule
from .booking import Booking, BookingStatus
from .contact_message import ContactMessage, ContactMessageStatus
from .feedback import Feedback
from .admin_user import AdminUser, AdminRole
