from dataclasses import dataclass


@dataclass(frozen=True)
class PassengerCounts:
    """搭乗者数

    adults の下限チェックは PriceAlertFactory が行う。
    """

    adults: int = 1
    children: int = 0
    infants: int = 0

    def __post_init__(self) -> None:
        if self.children < 0 or self.infants < 0:
            raise ValueError("Passenger counts cannot be negative")

    @property
    def total(self) -> int:
        return self.adults + self.children + self.infants
