from dataclasses import dataclass


@dataclass(frozen=True)
class UserId:
    """ユーザーID（全サービス共通）

    予約・価格アラートの所有者を表す。
    """

    value: str

    def __post_init__(self) -> None:
        if not self.value:
            raise ValueError("UserId cannot be empty")

    def __str__(self) -> str:
        return self.value
