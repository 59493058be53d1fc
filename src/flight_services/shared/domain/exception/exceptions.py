class DomainException(Exception):
    """ドメイン層で発生する基底例外"""

    pass


class ResourceNotFoundException(DomainException):
    """リソースが見つからない場合"""

    def __init__(self, kind: str, id: object) -> None:
        super().__init__(f"{kind} not found: {id}")
        self.kind = kind
        self.id = str(id)


class UnauthorizedException(DomainException):
    """他ユーザーが所有するリソースを操作しようとした場合

    認可の判定自体は呼び出し側の責務。エラー種別のみをここで定義する。
    """

    def __init__(self, kind: str, id: object) -> None:
        super().__init__(f"Not allowed to access {kind}: {id}")
        self.kind = kind
        self.id = str(id)


class ValidationException(DomainException):
    """入力値がポリシーに違反している場合（最初に失敗したフィールドを保持）"""

    def __init__(self, field: str, reason: str) -> None:
        super().__init__(f"{field}: {reason}")
        self.field = field
        self.reason = reason


class InvalidTransitionException(DomainException):
    """予約ステータスの遷移が許可されていない場合"""

    def __init__(self, from_status: object, to_status: object) -> None:
        from_value = getattr(from_status, "value", from_status)
        to_value = getattr(to_status, "value", to_status)
        super().__init__(f"Invalid booking status transition: {from_value} -> {to_value}")
        self.from_status = from_status
        self.to_status = to_status


class BusinessRuleViolationException(DomainException):
    """ビジネスルールに違反した場合"""

    pass


class DuplicateResourceException(DomainException):
    """リソースの重複エラー（条件付き書き込みの失敗時）"""

    pass


class OptimisticLockException(DomainException):
    """楽観ロックの競合エラー（ステータスが期待値と異なる場合）"""

    pass
