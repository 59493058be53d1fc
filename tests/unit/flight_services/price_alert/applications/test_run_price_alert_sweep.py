from decimal import Decimal
from unittest.mock import MagicMock

import pytest

from flight_services.price_alert.applications.run_price_alert_sweep import (
    RunPriceAlertSweepService,
)
from flight_services.price_alert.domain.enum import AlertType, NotificationKind
from flight_services.price_alert.domain.service import evaluate


@pytest.fixture
def create_service():
    """RunPriceAlertSweepService とモックを生成する Factory fixture"""

    def _factory(alerts, prices):
        repository = MagicMock()
        repository.find_active.return_value = alerts
        repository.acquire_lease.return_value = True
        repository.find_by_id.side_effect = lambda alert_id: {
            a.id: a for a in alerts
        }.get(alert_id)
        sampler = MagicMock()
        sampler.sample_current_price.side_effect = prices
        delivery = MagicMock()
        service = RunPriceAlertSweepService(
            repository=repository,
            sampler=sampler,
            delivery=delivery,
            lease_seconds=60,
            owner="sweep-test",
        )
        return service, repository, sampler, delivery

    return _factory


class TestRunPriceAlertSweepService:
    """RunPriceAlertSweepService のテスト"""

    def test_triggered_alert_is_saved_and_delivered(self, create_alert, create_service, now):
        """発火したアラートは保存され、通知が配信される"""
        alert = create_alert(alert_type=AlertType.PRICE_BELOW, target_price=Decimal("500"))
        service, repository, _, delivery = create_service([alert], [Decimal("480")])

        report = service.run(now=now)

        assert (report.evaluated, report.notified, report.skipped, report.failed) == (
            1,
            1,
            0,
            0,
        )
        saved = repository.save.call_args[0][0]
        assert saved.current_price == Decimal("480")
        directive, user_id = delivery.deliver.call_args[0]
        assert directive.kind == NotificationKind.TARGET_REACHED
        assert user_id == "user-123"
        repository.acquire_lease.assert_called_once_with(alert.id, "sweep-test", 60)
        repository.release_lease.assert_called_once_with(alert.id, "sweep-test")

    def test_sampling_failure_skips_alert(self, create_alert, create_service, now):
        """価格取得に失敗したアラートは保存せず次に進む"""
        first = create_alert(alert_id="a-1")
        second = create_alert(alert_id="a-2")
        service, repository, _, _ = create_service(
            [first, second], [RuntimeError("provider down"), Decimal("520")]
        )

        report = service.run(now=now)

        assert report.failed == 1
        assert report.evaluated == 1
        repository.save.assert_called_once()
        assert repository.release_lease.call_count == 2

    def test_delivery_failure_keeps_saved_alert(self, create_alert, create_service, now):
        """配信に失敗しても評価結果の保存は取り消されない"""
        alert = create_alert(target_price=Decimal("500"))
        service, repository, _, delivery = create_service([alert], [Decimal("400")])
        delivery.deliver.side_effect = RuntimeError("sns unavailable")

        report = service.run(now=now)

        assert report.evaluated == 1
        assert report.notified == 0
        repository.save.assert_called_once()
        repository.delete.assert_not_called()

    def test_leased_alert_is_skipped(self, create_alert, create_service, now):
        alert = create_alert()
        service, repository, sampler, _ = create_service([alert], [])
        repository.acquire_lease.return_value = False

        report = service.run(now=now)

        assert report.skipped == 1
        sampler.sample_current_price.assert_not_called()
        repository.release_lease.assert_not_called()

    def test_ineligible_alerts_are_skipped(self, create_alert, create_service, now):
        expired = create_alert(alert_id="a-1", expires_at="2026-01-01T00:00:00Z")
        inactive = create_alert(alert_id="a-2", is_active=False)
        service, repository, _, _ = create_service([expired, inactive], [])

        report = service.run(now=now)

        assert report.skipped == 2
        repository.acquire_lease.assert_not_called()

    def test_sweep_stops_between_alerts(self, create_alert, create_service, now):
        """停止条件が成立したら次のアラートに進まない"""
        alerts = [create_alert(alert_id=f"a-{i}") for i in range(3)]
        service, repository, _, _ = create_service(
            alerts, [Decimal("600"), Decimal("600"), Decimal("600")]
        )
        calls = []

        def should_stop() -> bool:
            calls.append(1)
            return len(calls) > 1

        report = service.run(now=now, should_stop=should_stop)

        assert report.evaluated == 1
        assert repository.save.call_count == 1

    def test_lease_seconds_from_environment(self, monkeypatch):
        monkeypatch.setenv("ALERT_LEASE_SECONDS", "120")
        service = RunPriceAlertSweepService(
            repository=MagicMock(), sampler=MagicMock(), delivery=MagicMock()
        )
        assert service._lease_seconds == 120

    def test_alert_is_reloaded_after_lease(self, create_alert, create_service, now):
        """リース取得後に読み直した最新の状態を評価する"""
        stale = create_alert(target_price=Decimal("500"))
        fresh = evaluate(stale, Decimal("600"), now=now).updated_alert
        service, repository, _, _ = create_service([stale], [Decimal("590")])
        repository.find_by_id.side_effect = None
        repository.find_by_id.return_value = fresh

        report = service.run(now=now)

        assert report.evaluated == 1
        repository.find_by_id.assert_called_once_with(stale.id)
        saved = repository.save.call_args[0][0]
        assert len(saved.price_history) == 2
        assert saved.current_price == Decimal("590")

    def test_alert_changed_before_lease_is_skipped(
        self, create_alert, create_service, now
    ):
        """リース取得前に無効化・削除されたアラートは評価しない"""
        alert = create_alert()
        service, repository, sampler, _ = create_service([alert], [Decimal("480")])
        repository.find_by_id.side_effect = None
        repository.find_by_id.return_value = None

        report = service.run(now=now)

        assert report.skipped == 1
        sampler.sample_current_price.assert_not_called()
        repository.save.assert_not_called()
        repository.release_lease.assert_called_once_with(alert.id, "sweep-test")
