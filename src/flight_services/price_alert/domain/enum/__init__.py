from .alert_frequency import AlertFrequency as AlertFrequency
from .alert_type import AlertType as AlertType
from .cabin_class import CabinClass as CabinClass
from .notification_kind import NotificationKind as NotificationKind
from .trip_type import TripType as TripType
