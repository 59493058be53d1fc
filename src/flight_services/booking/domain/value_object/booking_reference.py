from __future__ import annotations

import re
import secrets
from dataclasses import dataclass
from typing import ClassVar

REFERENCE_ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789"
REFERENCE_LENGTH = 6


def format_booking_reference(reference: str) -> str:
    """表示用に予約番号を整形する

    6文字の場合のみ "ABC-123" 形式に区切り、それ以外はそのまま返す。
    """
    if len(reference) == REFERENCE_LENGTH:
        return f"{reference[:3]}-{reference[3:]}"
    return reference


@dataclass(frozen=True)
class BookingReference:
    """予約番号（利用者向けの短いコード）

    英大文字・数字6文字。採番後は変更されない。
    """

    PATTERN: ClassVar[re.Pattern[str]] = re.compile(r"^[A-Z0-9]{6}$")

    value: str

    def __post_init__(self) -> None:
        if not self.value or len(self.value.strip()) == 0:
            raise ValueError("Booking reference cannot be empty")
        normalized = self.value.strip().upper()
        if not self.is_valid(normalized):
            raise ValueError(f"Invalid booking reference: {self.value}")
        object.__setattr__(self, "value", normalized)

    def __str__(self) -> str:
        return self.value

    def formatted(self) -> str:
        return format_booking_reference(self.value)

    @classmethod
    def is_valid(cls, reference: str) -> bool:
        return bool(cls.PATTERN.match(reference))

    @classmethod
    def generate(cls) -> BookingReference:
        return cls(
            value="".join(
                secrets.choice(REFERENCE_ALPHABET) for _ in range(REFERENCE_LENGTH)
            )
        )
