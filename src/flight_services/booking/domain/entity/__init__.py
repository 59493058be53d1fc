from .flight_booking import FlightBooking as FlightBooking
