from dataclasses import dataclass, field

from flight_services.booking.domain.enum import BookingStatus
from flight_services.booking.domain.repository import BookingRepository
from flight_services.booking.domain.service import transition
from flight_services.booking.domain.value_object import Actor
from flight_services.shared.domain import IsoDateTime
from flight_services.shared.domain.exception import DomainException
from flight_services.shared.utils import get_logger

logger = get_logger("booking")


@dataclass
class ExpiryReport:
    """期限切れ処理の結果"""

    expired: list[str] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)


class ExpirePendingBookingsService:
    """支払い期限切れ予約の失効サービス

    支払い待ちのまま期限を過ぎた予約を EXPIRED に遷移させる。
    1件の失敗で処理全体を中断しない。
    """

    def __init__(self, repository: BookingRepository) -> None:
        self._repository = repository

    def expire(self, now: IsoDateTime | None = None) -> ExpiryReport:
        now = now or IsoDateTime.now()
        actor = Actor.system()
        report = ExpiryReport()

        for booking in self._repository.find_pending_payment():
            if not booking.is_payment_overdue(now):
                continue

            result = transition(
                booking,
                BookingStatus.EXPIRED,
                actor,
                "Payment not received within the payment window",
                now=now,
            )
            if result.failed:
                report.errors.append(f"{booking.id}: {result.error}")
                continue

            try:
                self._repository.update(
                    result.unwrap(), expected_status=BookingStatus.PENDING_PAYMENT
                )
            except DomainException as e:
                logger.warning(
                    "Failed to expire booking",
                    extra={"booking_id": str(booking.id), "error": str(e)},
                )
                report.errors.append(f"{booking.id}: {e}")
                continue

            report.expired.append(str(booking.id))

        logger.info(
            "Expired pending bookings",
            extra={"expired": len(report.expired), "errors": len(report.errors)},
        )
        return report
