from .actor import Actor as Actor
from .booking_id import BookingId as BookingId
from .booking_modification import BookingModification as BookingModification
from .booking_modification import FieldChange as FieldChange
from .booking_pricing import BookingAddOns as BookingAddOns
from .booking_pricing import BookingDiscounts as BookingDiscounts
from .booking_pricing import BookingFees as BookingFees
from .booking_pricing import BookingPricing as BookingPricing
from .booking_pricing import PromoCodeDiscount as PromoCodeDiscount
from .booking_reference import BookingReference as BookingReference
from .booking_reference import format_booking_reference as format_booking_reference
from .cancellation import Cancellation as Cancellation
from .passenger import Passenger as Passenger
