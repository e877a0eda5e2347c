"""业务错误分类。

核心层只抛出 ValidationFailure 与 NotFoundError；ConflictError / BadRequestError /
InternalFailure 留给边界层使用。捕获处按 ``kind`` 判别，不依赖类名字符串。
"""
from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from app.domain.validators import ValidationResult


class ErrorKind(str, Enum):
    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    BAD_REQUEST = "bad_request"
    INTERNAL = "internal"


class AppError(Exception):
    """应用错误基类，携带错误类别与对应的 HTTP 状态码。"""

    kind: ErrorKind = ErrorKind.INTERNAL
    status_code: int = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationFailure(AppError):
    """Activity 配置校验失败，携带完整的 ValidationResult（所有字段的所有错误）。"""

    kind = ErrorKind.VALIDATION
    status_code = 400

    def __init__(self, result: ValidationResult):
        joined = "; ".join(f"{field}: {msg}" for field, msg in result.iter_messages())
        super().__init__(f"Validation failed: {joined}")
        self.result = result


class NotFoundError(AppError):
    kind = ErrorKind.NOT_FOUND
    status_code = 404

    def __init__(self, entity: str, entity_id: str):
        super().__init__(f"{entity} not found: {entity_id}")
        self.entity = entity
        self.entity_id = entity_id


class ConflictError(AppError):
    kind = ErrorKind.CONFLICT
    status_code = 409

    def __init__(self, message: str = "Resource conflict"):
        super().__init__(message)


class BadRequestError(AppError):
    kind = ErrorKind.BAD_REQUEST
    status_code = 400

    def __init__(self, message: str = "Bad request"):
        super().__init__(message)


class InternalFailure(AppError):
    kind = ErrorKind.INTERNAL
    status_code = 500

    def __init__(self, message: str = "Internal server error"):
        super().__init__(message)
