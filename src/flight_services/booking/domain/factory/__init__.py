from .booking_factory import BookingDetails as BookingDetails
from .booking_factory import BookingFactory as BookingFactory
from .booking_factory import PassengerDetails as PassengerDetails
from .booking_factory import PricingDetails as PricingDetails
