"""学生提交：记录多次作答结果，按实例 / 实例+学生查询。"""
import logging

from fastapi import APIRouter, Depends

from app.api.deps import get_activity_facade
from app.domain.entities import AttemptResult, Submission
from app.schemas.submissions import (
    SubmissionListResponse,
    SubmissionRequest,
    SubmissionResponse,
)
from app.services.activity_facade import ActivityFacade

logger = logging.getLogger(__name__)
router = APIRouter()


def _submission_to_response(submission: Submission) -> SubmissionResponse:
    return SubmissionResponse(
        submission_id=submission.submission_id,
        instance_id=submission.instance_id,
        student_id=submission.student_id,
        number_of_attempts=submission.number_of_attempts,
        attempts=[attempt.to_dict() for attempt in submission.attempts],
        created_at=submission.created_at.isoformat(),
    )


@router.post("", response_model=SubmissionResponse, status_code=201)
async def record_submission(body: SubmissionRequest, facade: ActivityFacade = Depends(get_activity_facade)):
    """记录一次提交；实例不存在时返回 404。结果由前端计算，这里原样保存。"""
    logger.info("[submissions] instance_id=%s student_id=%s", body.instance_id, body.student_id)
    attempts = [AttemptResult.from_dict(item.model_dump()) for item in body.attempts]
    submission = await facade.record_submission(body.instance_id, body.student_id, attempts)
    return _submission_to_response(submission)


@router.get("/instance/{instance_id}", response_model=SubmissionListResponse)
async def list_submissions_for_instance(instance_id: str, facade: ActivityFacade = Depends(get_activity_facade)):
    submissions = await facade.get_submissions_for_instance(instance_id)
    return SubmissionListResponse(
        count=len(submissions),
        submissions=[_submission_to_response(submission) for submission in submissions],
    )


@router.get("/instance/{instance_id}/student/{student_id}", response_model=SubmissionResponse)
async def get_submission_for_student(
    instance_id: str,
    student_id: str,
    facade: ActivityFacade = Depends(get_activity_facade),
):
    """某学生在该实例下最近一次提交，没有则 404。"""
    submission = await facade.get_submission_by_instance_and_student(instance_id, student_id)
    return _submission_to_response(submission)
