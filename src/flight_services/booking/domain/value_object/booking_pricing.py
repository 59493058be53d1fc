from __future__ import annotations

from dataclasses import dataclass, field, fields
from decimal import Decimal

from flight_services.shared.domain import Currency, Money

ZERO = Decimal("0")


def _sum_components(component: object) -> Decimal:
    total = ZERO
    for f in fields(component):  # type: ignore[arg-type]
        value = getattr(component, f.name)
        if isinstance(value, Decimal):
            total += value
    return total


def _ensure_non_negative(component: object) -> None:
    for f in fields(component):  # type: ignore[arg-type]
        value = getattr(component, f.name)
        if isinstance(value, Decimal) and value < 0:
            raise ValueError(f"{f.name} cannot be negative")


@dataclass(frozen=True)
class BookingFees:
    """各種手数料"""

    booking_fee: Decimal = ZERO
    service_fee: Decimal = ZERO
    payment_fee: Decimal = ZERO
    security_fee: Decimal = ZERO
    facility_fee: Decimal = ZERO

    def __post_init__(self) -> None:
        _ensure_non_negative(self)

    @property
    def total(self) -> Decimal:
        return _sum_components(self)


@dataclass(frozen=True)
class BookingAddOns:
    """追加サービス料金"""

    seat_selection: Decimal = ZERO
    extra_baggage: Decimal = ZERO
    meals: Decimal = ZERO
    insurance: Decimal = ZERO
    priority_boarding: Decimal = ZERO
    lounge_access: Decimal = ZERO

    def __post_init__(self) -> None:
        _ensure_non_negative(self)

    @property
    def total(self) -> Decimal:
        return _sum_components(self)


@dataclass(frozen=True)
class PromoCodeDiscount:
    code: str
    discount: Decimal
    description: str = ""


@dataclass(frozen=True)
class BookingDiscounts:
    """割引"""

    promo_code: PromoCodeDiscount | None = None
    loyalty_discount: Decimal = ZERO
    member_discount: Decimal = ZERO

    def __post_init__(self) -> None:
        _ensure_non_negative(self)
        if self.promo_code is not None and self.promo_code.discount < 0:
            raise ValueError("promo_code discount cannot be negative")

    @property
    def total(self) -> Decimal:
        promo = self.promo_code.discount if self.promo_code else ZERO
        return promo + self.loyalty_discount + self.member_discount


@dataclass(frozen=True)
class BookingPricing:
    """予約料金

    total = subtotal - discounts（0 未満にはならない）
    """

    base_price: Decimal
    taxes: Decimal
    currency: Currency
    fees: BookingFees = field(default_factory=BookingFees)
    add_ons: BookingAddOns = field(default_factory=BookingAddOns)
    discounts: BookingDiscounts = field(default_factory=BookingDiscounts)

    def __post_init__(self) -> None:
        if self.base_price < 0:
            raise ValueError("base_price cannot be negative")
        if self.taxes < 0:
            raise ValueError("taxes cannot be negative")

    @property
    def subtotal(self) -> Money:
        return Money(
            amount=self.base_price + self.taxes + self.fees.total + self.add_ons.total,
            currency=self.currency,
        )

    @property
    def discount_total(self) -> Money:
        return Money(amount=self.discounts.total, currency=self.currency)

    @property
    def total(self) -> Money:
        return self.subtotal.subtract_floored(self.discount_total)
