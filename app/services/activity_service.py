"""Activity 业务编排：构建并保存 Activity、创建部署实例、记录学生提交、维护参数 schema。

服务层只通过 app.repositories.interfaces 中的窄接口访问存储；存储异常原样上抛，不做重试。
"""
import logging
import uuid
from collections.abc import Callable, Iterable, Mapping, Sequence
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any

from app.core.errors import NotFoundError
from app.domain.builder import ActivityBuilder
from app.domain.entities import (
    Activity,
    AttemptResult,
    ConfigParamDefinition,
    ConfigParamsSchema,
    DeploymentInstance,
    Submission,
)
from app.repositories.interfaces import (
    ActivityStore,
    ConfigParamsSchemaStore,
    InstanceStore,
    SubmissionStore,
)
from app.utils.datetime_utils import seconds_until, utcnow

logger = logging.getLogger(__name__)

DEFAULT_INSTANCE_TTL = timedelta(days=7)
DEFAULT_DEPLOY_BASE_URL = "https://mrnewton.example.com"


def generate_instance_id() -> str:
    return f"inst_{uuid.uuid4().hex}"


@dataclass(frozen=True)
class DeploymentResult:
    instance_id: str
    activity_id: str
    deploy_url: str
    expires_in_seconds: int
    expires_at: datetime


class ActivityService:
    def __init__(
        self,
        activities: ActivityStore,
        instances: InstanceStore,
        submissions: SubmissionStore,
        config_params_schemas: ConfigParamsSchemaStore,
        *,
        deploy_base_url: str = DEFAULT_DEPLOY_BASE_URL,
        instance_ttl: timedelta = DEFAULT_INSTANCE_TTL,
        activity_defaults: Mapping[str, Any] | None = None,
        activity_overrides: Mapping[str, Any] | None = None,
        clock: Callable[[], datetime] = utcnow,
    ):
        self.activities = activities
        self.instances = instances
        self.submissions = submissions
        self.config_params_schemas = config_params_schemas
        self.deploy_base_url = deploy_base_url.rstrip("/")
        self.instance_ttl = instance_ttl
        self.activity_defaults = dict(activity_defaults or {})
        self.activity_overrides = dict(activity_overrides or {})
        self.clock = clock

    def deploy_url_for(self, instance_id: str) -> str:
        return f"{self.deploy_base_url}/instances/{instance_id}"

    # ----- Activity -----
    async def create_from_json(self, candidate: Any) -> Activity:
        """经 ActivityBuilder 构建并校验，成功后立即保存。校验失败的 ValidationFailure 原样抛出。"""
        logger.info("Creating activity from JSON configuration")
        activity = (
            ActivityBuilder.create(clock=self.clock)
            .with_defaults(self.activity_defaults)
            .with_json(candidate)
            .with_overrides(self.activity_overrides)
            .build()
        )
        saved = await self.activities.save(activity)
        logger.info("Activity created: %s", saved.id)
        return saved

    async def get_activity(self, activity_id: str) -> Activity:
        activity = await self.activities.find_by_id(activity_id)
        if activity is None:
            raise NotFoundError("Activity", activity_id)
        return activity

    async def get_all_activities(self) -> list[Activity]:
        return list(await self.activities.find_all())

    # ----- 部署实例 -----
    async def create_instance(
        self,
        activity_id: str,
        session_params: Mapping[str, Any] | None = None,
    ) -> DeploymentResult:
        """
        为已存在的 Activity 创建部署实例，有效期固定为 instance_ttl（默认 7 天）。
        过期时间只作展示，核心层不做过期拦截。
        """
        logger.info("Creating deployment instance for activity: %s", activity_id)
        if await self.activities.find_by_id(activity_id) is None:
            raise NotFoundError("Activity", activity_id)

        now = self.clock()
        instance = DeploymentInstance(
            instance_id=generate_instance_id(),
            activity_id=activity_id,
            created_at=now,
            expires_at=now + self.instance_ttl,
            session_params=session_params,
        )
        await self.instances.save(instance)
        logger.info("Deployment instance created: %s", instance.instance_id)
        return DeploymentResult(
            instance_id=instance.instance_id,
            activity_id=activity_id,
            deploy_url=self.deploy_url_for(instance.instance_id),
            expires_in_seconds=seconds_until(instance.expires_at, self.clock()),
            expires_at=instance.expires_at,
        )

    async def get_instance(self, instance_id: str) -> DeploymentInstance:
        instance = await self.instances.find_by_id(instance_id)
        if instance is None:
            raise NotFoundError("DeploymentInstance", instance_id)
        return instance

    async def get_instances_for_activity(self, activity_id: str) -> list[DeploymentInstance]:
        return list(await self.instances.find_by_activity_id(activity_id))

    # ----- 学生提交 -----
    async def record_submission(
        self,
        instance_id: str,
        student_id: str,
        attempts: Sequence[AttemptResult],
    ) -> Submission:
        """
        记录学生提交。attempts 由前端算好结果后整体提交，这里不重新判分；
        number_of_attempts 由 attempts 长度推导，不接受调用方单独传入。
        同一学生可多次提交，每次生成独立记录。
        """
        logger.info("Recording submission for instance: %s", instance_id)
        if await self.instances.find_by_id(instance_id) is None:
            raise NotFoundError("DeploymentInstance", instance_id)

        submission = Submission(
            submission_id=str(uuid.uuid4()),
            instance_id=instance_id,
            student_id=student_id,
            attempts=tuple(attempts),
            created_at=self.clock(),
        )
        saved = await self.submissions.save(submission)
        logger.info(
            "Submission recorded: %s for student: %s with %d attempt(s)",
            saved.submission_id,
            student_id,
            saved.number_of_attempts,
        )
        return saved

    async def get_submissions_for_instance(self, instance_id: str) -> list[Submission]:
        return list(await self.submissions.find_by_instance_id(instance_id))

    async def get_submission_by_instance_and_student(self, instance_id: str, student_id: str) -> Submission:
        """某学生在某实例下最近一次提交，没有则抛 NotFoundError。"""
        matches = [
            submission
            for submission in await self.submissions.find_by_instance_id(instance_id)
            if submission.student_id == student_id
        ]
        if not matches:
            raise NotFoundError("Submission", f"{instance_id}/{student_id}")
        return max(matches, key=lambda submission: submission.created_at)

    async def get_submissions_for_activity(self, activity_id: str) -> list[Submission]:
        """某 Activity 所有实例下的全部提交（供统计分析使用）。"""
        out: list[Submission] = []
        for instance in await self.instances.find_by_activity_id(activity_id):
            out.extend(await self.submissions.find_by_instance_id(instance.instance_id))
        return out

    # ----- 参数 schema -----
    async def save_config_params_schema(
        self,
        params: Iterable[ConfigParamDefinition | Mapping[str, Any]],
    ) -> ConfigParamsSchema:
        """每次保存都生成新的 id 与时间戳，并成为唯一的当前版本。"""
        logger.info("Saving parameter schema configuration")
        now = self.clock()
        schema = ConfigParamsSchema(
            id=str(uuid.uuid4()),
            params=tuple(
                param if isinstance(param, ConfigParamDefinition) else ConfigParamDefinition.from_dict(param)
                for param in params
            ),
            created_at=now,
            updated_at=now,
        )
        saved = await self.config_params_schemas.save(schema)
        logger.info("Parameter schema saved: %s", saved.id)
        return saved

    async def get_current_config_params_schema(self) -> ConfigParamsSchema | None:
        return await self.config_params_schemas.get_current()

    async def get_all_config_params_schemas(self) -> list[ConfigParamsSchema]:
        return list(await self.config_params_schemas.find_all())
