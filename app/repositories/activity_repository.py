"""Activity 数据访问层。"""
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.domain.entities import Activity
from app.models.activity import ActivityModel
from app.utils.datetime_utils import ensure_utc


def _to_entity(row: ActivityModel) -> Activity:
    return Activity(id=row.id, cfg=row.cfg, created_at=ensure_utc(row.created_at))


class ActivityRepository:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def save(self, activity: Activity) -> Activity:
        """按 id upsert，Activity 本身不可变，重复保存不会改变内容。"""
        row = ActivityModel(
            id=activity.id,
            title=activity.title,
            cfg=activity.config_dict(),
            created_at=activity.created_at,
        )
        await self.db.merge(row)
        await self.db.commit()
        return activity

    async def find_by_id(self, activity_id: str) -> Activity | None:
        """按 ID 查询，不存在返回 None。"""
        result = await self.db.execute(select(ActivityModel).where(ActivityModel.id == activity_id))
        row = result.scalars().first()
        return _to_entity(row) if row else None

    async def find_all(self) -> list[Activity]:
        result = await self.db.execute(select(ActivityModel).order_by(ActivityModel.created_at.asc()))
        return [_to_entity(row) for row in result.scalars().all()]

    async def exists(self, activity_id: str) -> bool:
        result = await self.db.execute(
            select(func.count()).select_from(ActivityModel).where(ActivityModel.id == activity_id)
        )
        return (result.scalar_one() or 0) > 0

    async def delete(self, activity_id: str) -> bool:
        result = await self.db.execute(
            ActivityModel.__table__.delete().where(ActivityModel.id == activity_id)
        )
        await self.db.commit()
        return result.rowcount > 0
