from __future__ import annotations

from dataclasses import dataclass, replace

from flight_services.booking.domain.enum import RefundStatus
from flight_services.shared.domain import IsoDateTime, Money

from .actor import Actor


@dataclass(frozen=True)
class Cancellation:
    """キャンセル情報

    予約が CANCELLED を経由した場合にのみ存在する。
    """

    reason: str
    cancelled_at: IsoDateTime
    cancelled_by: Actor
    refund_amount: Money
    cancellation_fees: Money
    refund_status: RefundStatus = RefundStatus.PENDING

    def with_refund_status(self, refund_status: RefundStatus) -> Cancellation:
        return replace(self, refund_status=refund_status)
