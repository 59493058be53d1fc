from __future__ import annotations

from dataclasses import dataclass

from flight_services.booking.domain.enum import ActorType


@dataclass(frozen=True)
class Actor:
    """操作者

    変更履歴に記録されるだけで、このドメインでは認可に使わない。
    """

    user_type: ActorType
    name: str
    user_id: str | None = None

    @classmethod
    def system(cls, name: str = "system") -> Actor:
        return cls(user_type=ActorType.SYSTEM, name=name)

    @classmethod
    def customer(cls, user_id: str, name: str) -> Actor:
        return cls(user_type=ActorType.CUSTOMER, name=name, user_id=user_id)
