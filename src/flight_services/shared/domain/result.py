from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar

from .exception import DomainException

T = TypeVar("T")
E = TypeVar("E", bound=DomainException)


@dataclass(frozen=True)
class Result(Generic[T, E]):
    """ドメイン処理の結果

    想定内の失敗（バリデーション違反・不正な遷移など）は例外を送出せず、
    error を持つ Result として呼び出し側に返す。
    """

    success: bool
    value: T | None = None
    error: E | None = None

    @classmethod
    def ok(cls, value: T) -> Result[T, E]:
        return cls(success=True, value=value)

    @classmethod
    def failure(cls, error: E) -> Result[T, E]:
        return cls(success=False, error=error)

    @property
    def failed(self) -> bool:
        return not self.success

    def unwrap(self) -> T:
        """成功時は値を返し、失敗時は保持しているエラーを送出する"""
        if not self.success:
            raise self.error  # type: ignore[misc]
        return self.value  # type: ignore[return-value]
