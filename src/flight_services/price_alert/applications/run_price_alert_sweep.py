import os
import uuid
from dataclasses import dataclass
from typing import Callable

from flight_services.price_alert.domain.entity import PriceAlert
from flight_services.price_alert.domain.gateway import (
    NotificationDelivery,
    PriceSampler,
)
from flight_services.price_alert.domain.repository import PriceAlertRepository
from flight_services.price_alert.domain.service import evaluate, is_eligible_for_sweep
from flight_services.shared.domain import IsoDateTime
from flight_services.shared.utils import get_logger

logger = get_logger("price_alert")

DEFAULT_LEASE_SECONDS = 300


@dataclass
class SweepReport:
    """巡回チェックの結果"""

    evaluated: int = 0
    notified: int = 0
    skipped: int = 0
    failed: int = 0


class RunPriceAlertSweepService:
    """価格アラート巡回チェックサービス

    有効なアラートごとにリースを取得し、最新の状態を読み直してから
    価格を取得・評価し、発火したアラートの通知を配信する。
    - 価格取得に失敗したアラートはスキップし、次回の巡回で再評価する
    - 通知の配信失敗は評価結果の保存を取り消さない
    """

    def __init__(
        self,
        repository: PriceAlertRepository,
        sampler: PriceSampler,
        delivery: NotificationDelivery,
        lease_seconds: int | None = None,
        owner: str | None = None,
    ) -> None:
        self._repository = repository
        self._sampler = sampler
        self._delivery = delivery
        self._lease_seconds = lease_seconds or int(
            os.getenv("ALERT_LEASE_SECONDS", DEFAULT_LEASE_SECONDS)
        )
        self._owner = owner or f"sweep_{uuid.uuid4().hex}"

    def run(
        self,
        now: IsoDateTime | None = None,
        should_stop: Callable[[], bool] = lambda: False,
    ) -> SweepReport:
        now = now or IsoDateTime.now()
        report = SweepReport()

        for alert in self._repository.find_active():
            if should_stop():
                logger.info("Price alert sweep cancelled")
                break
            if not is_eligible_for_sweep(alert, now):
                report.skipped += 1
                continue
            if not self._repository.acquire_lease(
                alert.id, self._owner, self._lease_seconds
            ):
                logger.info(
                    "Price alert is leased by another sweep",
                    extra={"alert_id": str(alert.id)},
                )
                report.skipped += 1
                continue

            try:
                current = self._repository.find_by_id(alert.id)
                if current is None or not is_eligible_for_sweep(current, now):
                    report.skipped += 1
                    continue
                self._process(current, now, report)
            finally:
                self._repository.release_lease(alert.id, self._owner)

        logger.info(
            "Price alert sweep finished",
            extra={
                "evaluated": report.evaluated,
                "notified": report.notified,
                "skipped": report.skipped,
                "failed": report.failed,
            },
        )
        return report

    def _process(self, alert: PriceAlert, now: IsoDateTime, report: SweepReport) -> None:
        try:
            sampled_price = self._sampler.sample_current_price(alert)
        except Exception:
            logger.exception(
                "Failed to sample current price", extra={"alert_id": str(alert.id)}
            )
            report.failed += 1
            return

        outcome = evaluate(alert, sampled_price, now=now)
        self._repository.save(outcome.updated_alert)
        report.evaluated += 1

        if outcome.notification is None:
            return

        try:
            self._delivery.deliver(outcome.notification, str(alert.user_id))
        except Exception:
            logger.exception(
                "Failed to deliver price alert notification",
                extra={"alert_id": str(alert.id), "kind": outcome.notification.kind.value},
            )
            return
        report.notified += 1
