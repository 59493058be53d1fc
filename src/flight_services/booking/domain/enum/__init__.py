from .actor_type import ActorType as ActorType
from .booking_status import BookingStatus as BookingStatus
from .modification_type import ModificationType as ModificationType
from .passenger_type import PassengerType as PassengerType
from .refund_status import RefundStatus as RefundStatus
from .trip_type import TripType as TripType
