from flight_services.booking.domain.entity import FlightBooking
from flight_services.shared.domain import Money


def calculate_refund(booking: FlightBooking, cancellation_fees: Money) -> Money:
    """払い戻し額を計算する

    払い戻し額 = max(0, 予約総額 - キャンセル手数料)
    手数料の算出ポリシーは呼び出し側の責務で、ここでは下限 0 のみを保証する。
    """
    return booking.pricing.total.subtract_floored(cancellation_fees)
