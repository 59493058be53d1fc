from __future__ import annotations

from dataclasses import dataclass

from flight_services.booking.domain.enum import PassengerType


@dataclass(frozen=True)
class Passenger:
    """搭乗者"""

    id: str
    type: PassengerType
    first_name: str
    last_name: str
    date_of_birth: str | None = None
    nationality: str | None = None
    seat_number: str | None = None

    def __post_init__(self) -> None:
        if not self.first_name.strip() or not self.last_name.strip():
            raise ValueError("Passenger name cannot be empty")

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"
