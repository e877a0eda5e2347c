"""部署实例（DeploymentInstance）数据访问层。"""
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.domain.entities import DeploymentInstance
from app.models.deployment_instance import DeploymentInstanceModel
from app.utils.datetime_utils import ensure_utc


def _to_entity(row: DeploymentInstanceModel) -> DeploymentInstance:
    return DeploymentInstance(
        instance_id=row.id,
        activity_id=row.activity_id,
        created_at=ensure_utc(row.created_at),
        expires_at=ensure_utc(row.expires_at),
        session_params=row.session_params,
    )


class InstanceRepository:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def save(self, instance: DeploymentInstance) -> DeploymentInstance:
        row = DeploymentInstanceModel(
            id=instance.instance_id,
            activity_id=instance.activity_id,
            created_at=instance.created_at,
            expires_at=instance.expires_at,
            session_params=instance.session_params_dict(),
        )
        await self.db.merge(row)
        await self.db.commit()
        return instance

    async def find_by_id(self, instance_id: str) -> DeploymentInstance | None:
        result = await self.db.execute(
            select(DeploymentInstanceModel).where(DeploymentInstanceModel.id == instance_id)
        )
        row = result.scalars().first()
        return _to_entity(row) if row else None

    async def find_by_activity_id(self, activity_id: str) -> list[DeploymentInstance]:
        """某 Activity 下的全部实例，按 created_at 升序。"""
        result = await self.db.execute(
            select(DeploymentInstanceModel)
            .where(DeploymentInstanceModel.activity_id == activity_id)
            .order_by(DeploymentInstanceModel.created_at.asc())
        )
        return [_to_entity(row) for row in result.scalars().all()]

    async def find_all(self) -> list[DeploymentInstance]:
        result = await self.db.execute(
            select(DeploymentInstanceModel).order_by(DeploymentInstanceModel.created_at.asc())
        )
        return [_to_entity(row) for row in result.scalars().all()]

    async def exists(self, instance_id: str) -> bool:
        result = await self.db.execute(
            select(func.count())
            .select_from(DeploymentInstanceModel)
            .where(DeploymentInstanceModel.id == instance_id)
        )
        return (result.scalar_one() or 0) > 0

    async def delete(self, instance_id: str) -> bool:
        result = await self.db.execute(
            DeploymentInstanceModel.__table__.delete().where(DeploymentInstanceModel.id == instance_id)
        )
        await self.db.commit()
        return result.rowcount > 0
