from __future__ import annotations

import uuid
from dataclasses import dataclass


@dataclass(frozen=True)
class AlertId:
    """価格アラートID"""

    value: str

    def __post_init__(self) -> None:
        if not self.value:
            raise ValueError("AlertId cannot be empty")

    def __str__(self) -> str:
        return self.value

    @classmethod
    def generate(cls) -> AlertId:
        return cls(value=f"alert_{uuid.uuid4().hex}")
