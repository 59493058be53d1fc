"""予約ステータスの遷移表

許可される遷移 (from, to) はこのモジュールの表だけで定義する。
"""

from types import MappingProxyType
from typing import Mapping

from flight_services.booking.domain.enum import BookingStatus

_S = BookingStatus

TERMINAL_STATUSES: frozenset[BookingStatus] = frozenset(
    {_S.COMPLETED, _S.CANCELLED, _S.REFUNDED, _S.EXPIRED}
)

_ALLOWED_TRANSITIONS: Mapping[BookingStatus, frozenset[BookingStatus]] = MappingProxyType(
    {
        _S.PENDING_PAYMENT: frozenset(
            {_S.PAYMENT_FAILED, _S.CONFIRMED, _S.CANCELLED, _S.EXPIRED}
        ),
        # 決済失敗後は再決済 (PENDING_PAYMENT) かキャンセルのみ
        _S.PAYMENT_FAILED: frozenset({_S.PENDING_PAYMENT, _S.CANCELLED}),
        _S.CONFIRMED: frozenset({_S.TICKETED, _S.CHECKED_IN, _S.CANCELLED}),
        _S.TICKETED: frozenset({_S.CHECKED_IN, _S.CANCELLED}),
        _S.CHECKED_IN: frozenset({_S.BOARDING, _S.CANCELLED}),
        _S.BOARDING: frozenset({_S.DEPARTED, _S.CANCELLED}),
        _S.DEPARTED: frozenset({_S.COMPLETED, _S.CANCELLED}),
        # CANCELLED は終端扱いだが、払い戻し完了の記録のみ許可する
        _S.CANCELLED: frozenset({_S.REFUNDED}),
        _S.COMPLETED: frozenset(),
        _S.REFUNDED: frozenset(),
        _S.EXPIRED: frozenset(),
    }
)

_missing = set(BookingStatus) - set(_ALLOWED_TRANSITIONS)
if _missing:
    raise RuntimeError(
        f"Transition table is missing statuses: {sorted(s.value for s in _missing)}"
    )


def _ensure_status(status: object) -> BookingStatus:
    if not isinstance(status, BookingStatus):
        raise TypeError(f"Expected BookingStatus, got {status!r}")
    return status


def allowed_transitions(status: BookingStatus) -> frozenset[BookingStatus]:
    """指定ステータスから遷移可能なステータス"""
    return _ALLOWED_TRANSITIONS[_ensure_status(status)]


def can_transition(from_status: BookingStatus, to_status: BookingStatus) -> bool:
    _ensure_status(to_status)
    return to_status in allowed_transitions(from_status)


def is_terminal(status: BookingStatus) -> bool:
    return _ensure_status(status) in TERMINAL_STATUSES
