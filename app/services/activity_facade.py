"""ActivityFacade：对外的稳定入口，全部操作原样转发给 ActivityService。

不含任何校验或业务规则；唯一例外是 get_activity 把 NotFound 转为 None。
"""
import logging
from collections.abc import Iterable, Mapping, Sequence
from typing import Any

from app.core.errors import AppError, ErrorKind
from app.domain.entities import (
    Activity,
    AttemptResult,
    ConfigParamDefinition,
    ConfigParamsSchema,
    DeploymentInstance,
    Submission,
)
from app.services.activity_service import ActivityService, DeploymentResult

logger = logging.getLogger(__name__)


class ActivityFacade:
    def __init__(self, activity_service: ActivityService):
        self.activity_service = activity_service

    async def create_activity(self, candidate: Any) -> Activity:
        logger.debug("Facade: creating activity from JSON")
        return await self.activity_service.create_from_json(candidate)

    async def get_activity(self, activity_id: str) -> Activity | None:
        logger.debug("Facade: retrieving activity %s", activity_id)
        try:
            return await self.activity_service.get_activity(activity_id)
        except AppError as exc:
            if exc.kind is ErrorKind.NOT_FOUND:
                return None
            raise

    async def get_all_activities(self) -> list[Activity]:
        return await self.activity_service.get_all_activities()

    async def create_instance(
        self,
        activity_id: str,
        session_params: Mapping[str, Any] | None = None,
    ) -> DeploymentResult:
        logger.debug("Facade: creating instance for activity %s", activity_id)
        return await self.activity_service.create_instance(activity_id, session_params)

    async def get_instance(self, instance_id: str) -> DeploymentInstance:
        return await self.activity_service.get_instance(instance_id)

    async def get_instances_for_activity(self, activity_id: str) -> list[DeploymentInstance]:
        return await self.activity_service.get_instances_for_activity(activity_id)

    async def record_submission(
        self,
        instance_id: str,
        student_id: str,
        attempts: Sequence[AttemptResult],
    ) -> Submission:
        logger.debug("Facade: recording submission for instance %s", instance_id)
        return await self.activity_service.record_submission(instance_id, student_id, attempts)

    async def get_submissions_for_instance(self, instance_id: str) -> list[Submission]:
        return await self.activity_service.get_submissions_for_instance(instance_id)

    async def get_submission_by_instance_and_student(self, instance_id: str, student_id: str) -> Submission:
        return await self.activity_service.get_submission_by_instance_and_student(instance_id, student_id)

    async def get_submissions_for_activity(self, activity_id: str) -> list[Submission]:
        return await self.activity_service.get_submissions_for_activity(activity_id)

    async def save_config_params_schema(
        self,
        params: Iterable[ConfigParamDefinition | Mapping[str, Any]],
    ) -> ConfigParamsSchema:
        return await self.activity_service.save_config_params_schema(params)

    async def get_current_config_params_schema(self) -> ConfigParamsSchema | None:
        return await self.activity_service.get_current_config_params_schema()

    async def get_all_config_params_schemas(self) -> list[ConfigParamsSchema]:
        return await self.activity_service.get_all_config_params_schemas()
