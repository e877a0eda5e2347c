"""把业务错误统一转换为 JSON 错误响应。状态码与 app.core.errors 中的错误类别一一对应。"""
import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from app.core.errors import AppError, ErrorKind

logger = logging.getLogger(__name__)


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    if exc.kind is ErrorKind.VALIDATION:
        logger.warning("%s %s 校验失败: %s", request.method, request.url.path, exc.message)
        return JSONResponse(
            status_code=exc.status_code,
            content={
                "error": "Validation Error",
                "message": "Activity configuration is invalid",
                "details": exc.result.all_messages(),
                "errors": exc.result.as_dict(),
            },
        )
    if exc.status_code >= 500:
        logger.error("%s %s 失败: %s", request.method, request.url.path, exc.message)
    else:
        logger.warning("%s %s -> %d: %s", request.method, request.url.path, exc.status_code, exc.message)
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": type(exc).__name__, "message": exc.message},
    )


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    details = [
        f"{'.'.join(str(part) for part in err.get('loc', ()) if part != 'body')}: {err.get('msg')}"
        for err in exc.errors()
    ]
    logger.warning("%s %s 请求体不合法: %s", request.method, request.url.path, details)
    return JSONResponse(
        status_code=400,
        content={"error": "Bad Request", "message": "Request body is invalid", "details": details},
    )


async def database_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.exception("数据库访问失败 %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=500,
        content={"error": "Database Error", "message": "Failed to access the database"},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(SQLAlchemyError, database_error_handler)
