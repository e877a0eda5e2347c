"""学生提交（Submission）数据访问层。attempts 以 camelCase JSON 原样存储。"""
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.domain.entities import AttemptResult, Submission
from app.models.submission import SubmissionModel
from app.utils.datetime_utils import ensure_utc


def _to_entity(row: SubmissionModel) -> Submission:
    # number_of_attempts 不从库里读，始终由 attempts 推导
    return Submission(
        submission_id=row.id,
        instance_id=row.instance_id,
        student_id=row.student_id,
        attempts=tuple(AttemptResult.from_dict(item) for item in row.attempts or []),
        created_at=ensure_utc(row.created_at),
    )


class SubmissionRepository:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def save(self, submission: Submission) -> Submission:
        row = SubmissionModel(
            id=submission.submission_id,
            instance_id=submission.instance_id,
            student_id=submission.student_id,
            number_of_attempts=submission.number_of_attempts,
            attempts=[attempt.to_dict() for attempt in submission.attempts],
            created_at=submission.created_at,
        )
        await self.db.merge(row)
        await self.db.commit()
        return submission

    async def find_by_id(self, submission_id: str) -> Submission | None:
        result = await self.db.execute(select(SubmissionModel).where(SubmissionModel.id == submission_id))
        row = result.scalars().first()
        return _to_entity(row) if row else None

    async def find_by_instance_id(self, instance_id: str) -> list[Submission]:
        """某实例下的全部提交，按 created_at 升序。"""
        result = await self.db.execute(
            select(SubmissionModel)
            .where(SubmissionModel.instance_id == instance_id)
            .order_by(SubmissionModel.created_at.asc())
        )
        return [_to_entity(row) for row in result.scalars().all()]

    async def find_all(self) -> list[Submission]:
        result = await self.db.execute(select(SubmissionModel).order_by(SubmissionModel.created_at.asc()))
        return [_to_entity(row) for row in result.scalars().all()]

    async def delete(self, submission_id: str) -> bool:
        result = await self.db.execute(
            SubmissionModel.__table__.delete().where(SubmissionModel.id == submission_id)
        )
        await self.db.commit()
        return result.rowcount > 0
