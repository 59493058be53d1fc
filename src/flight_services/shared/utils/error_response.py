from __future__ import annotations

from pydantic import BaseModel

from flight_services.shared.domain.exception import (
    DomainException,
    InvalidTransitionException,
    OptimisticLockException,
    ResourceNotFoundException,
    UnauthorizedException,
    ValidationException,
)


class ErrorResponse(BaseModel):
    """エラーレスポンスモデル"""

    status: str = "error"
    error_code: str
    message: str
    details: list | None = None


_ERROR_CODES: dict[type[DomainException], str] = {
    ValidationException: "VALIDATION_ERROR",
    InvalidTransitionException: "INVALID_TRANSITION",
    ResourceNotFoundException: "NOT_FOUND",
    UnauthorizedException: "UNAUTHORIZED",
    OptimisticLockException: "CONFLICT",
}


def error_response(error: DomainException) -> dict:
    """ドメインエラーをレスポンス辞書に変換する"""
    error_code = _ERROR_CODES.get(type(error), "DOMAIN_ERROR")
    details = None
    if isinstance(error, ValidationException):
        details = [{"field": error.field, "reason": error.reason}]

    return ErrorResponse(
        error_code=error_code,
        message=str(error),
        details=details,
    ).model_dump(exclude_none=True)
