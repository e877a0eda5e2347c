"""参数说明 schema（ConfigParamsSchema）数据访问层。

任何时刻最多只有一条 is_current=True：save 在同一事务内先降级全部当前记录再写入新记录。
"""
import logging

from sqlalchemy import select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.domain.entities import ConfigParamDefinition, ConfigParamsSchema
from app.models.config_params_schema import ConfigParamsSchemaModel
from app.utils.datetime_utils import ensure_utc

logger = logging.getLogger(__name__)


def _to_entity(row: ConfigParamsSchemaModel) -> ConfigParamsSchema:
    return ConfigParamsSchema(
        id=row.id,
        params=tuple(ConfigParamDefinition.from_dict(item) for item in row.params or []),
        created_at=ensure_utc(row.created_at),
        updated_at=ensure_utc(row.updated_at),
    )


class ConfigParamsSchemaRepository:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def save(self, schema: ConfigParamsSchema) -> ConfigParamsSchema:
        try:
            await self.db.execute(
                update(ConfigParamsSchemaModel)
                .where(ConfigParamsSchemaModel.is_current.is_(True))
                .values(is_current=False)
            )
            row = ConfigParamsSchemaModel(
                id=schema.id,
                params=schema.params_list(),
                is_current=True,
                created_at=schema.created_at,
                updated_at=schema.updated_at,
            )
            await self.db.merge(row)
            await self.db.commit()
        except SQLAlchemyError:
            await self.db.rollback()
            logger.exception("保存参数 schema 失败 id=%s", schema.id)
            raise
        return schema

    async def get_current(self) -> ConfigParamsSchema | None:
        result = await self.db.execute(
            select(ConfigParamsSchemaModel).where(ConfigParamsSchemaModel.is_current.is_(True))
        )
        row = result.scalars().first()
        return _to_entity(row) if row else None

    async def find_by_id(self, schema_id: str) -> ConfigParamsSchema | None:
        result = await self.db.execute(
            select(ConfigParamsSchemaModel).where(ConfigParamsSchemaModel.id == schema_id)
        )
        row = result.scalars().first()
        return _to_entity(row) if row else None

    async def find_all(self) -> list[ConfigParamsSchema]:
        """全部历史版本，最新在前。"""
        result = await self.db.execute(
            select(ConfigParamsSchemaModel).order_by(ConfigParamsSchemaModel.created_at.desc())
        )
        return [_to_entity(row) for row in result.scalars().all()]

    async def is_current(self, schema_id: str) -> bool:
        result = await self.db.execute(
            select(ConfigParamsSchemaModel.is_current).where(ConfigParamsSchemaModel.id == schema_id)
        )
        return bool(result.scalar_one_or_none())
