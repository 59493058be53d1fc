from abc import abstractmethod

from flight_services.booking.domain.entity import FlightBooking
from flight_services.booking.domain.enum import BookingStatus
from flight_services.booking.domain.value_object import BookingId
from flight_services.shared.domain import Repository


class BookingRepository(Repository[FlightBooking, BookingId]):
    """フライト予約レポジトリ

    同一予約への同時遷移は update の expected_status による楽観ロックで直列化する。
    """

    @abstractmethod
    def save(self, booking: FlightBooking) -> None:
        """新規予約を永続化する"""
        raise NotImplementedError

    @abstractmethod
    def find_by_id(self, booking_id: BookingId) -> FlightBooking | None:
        """予約IDで検索"""
        raise NotImplementedError

    @abstractmethod
    def find_pending_payment(self) -> list[FlightBooking]:
        """支払い待ちの予約を取得する"""
        raise NotImplementedError

    @abstractmethod
    def update(
        self, booking: FlightBooking, expected_status: BookingStatus | None = None
    ) -> None:
        """予約を更新する

        expected_status を指定した場合、保存済みのステータスが一致しなければ
        OptimisticLockException を送出する。
        """
        raise NotImplementedError

    @abstractmethod
    def reference_exists(self, reference: str) -> bool:
        """予約番号が採番済みかどうか"""
        raise NotImplementedError
