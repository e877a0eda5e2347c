import logging

from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.core.db import get_db
from app.schemas.health import HealthResponse

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health(db: AsyncSession = Depends(get_db)):
    """服务存活检查；数据库不可达时仍返回 200，status 标记为 degraded。"""
    try:
        await db.execute(text("SELECT 1"))
        database = "ok"
    # asyncpg 建连被拒时抛出的 ConnectionRefusedError 不经 SQLAlchemy 包装
    except (SQLAlchemyError, OSError):
        logger.warning("健康检查：数据库不可达", exc_info=True)
        database = "unavailable"
    return HealthResponse(
        status="ok" if database == "ok" else "degraded",
        environment=settings.environment,
        database=database,
    )
