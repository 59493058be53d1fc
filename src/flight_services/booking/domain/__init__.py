from .entity import FlightBooking as FlightBooking
from .enum import BookingStatus as BookingStatus
from .factory import BookingDetails as BookingDetails
from .factory import BookingFactory as BookingFactory
from .policy import CancellationFeePolicy as CancellationFeePolicy
from .repository import BookingRepository as BookingRepository
from .value_object import Actor as Actor
from .value_object import BookingId as BookingId
from .value_object import BookingReference as BookingReference
