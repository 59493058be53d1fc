from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from decimal import Decimal

from flight_services.booking.domain.enum import ModificationType
from flight_services.shared.domain import IsoDateTime

from .actor import Actor


@dataclass(frozen=True)
class FieldChange:
    """フィールド単位の差分"""

    field: str
    old_value: object
    new_value: object


@dataclass(frozen=True)
class BookingModification:
    """予約変更履歴の1レコード

    履歴は追記のみで、一度記録したレコードは変更も削除もしない。
    """

    type: ModificationType
    description: str
    timestamp: IsoDateTime
    performed_by: Actor
    changes: tuple[FieldChange, ...] = ()
    cost: Decimal | None = None
    id: str = field(default_factory=lambda: f"mod_{uuid.uuid4().hex}")
