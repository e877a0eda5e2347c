"""API 依赖项：按请求组装仓储、ActivityService 与 ActivityFacade。"""
from datetime import timedelta

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.core.db import get_db
from app.repositories.activity_repository import ActivityRepository
from app.repositories.config_params_repository import ConfigParamsSchemaRepository
from app.repositories.instance_repository import InstanceRepository
from app.repositories.submission_repository import SubmissionRepository
from app.services.activity_facade import ActivityFacade
from app.services.activity_service import ActivityService


def get_activity_service(db: AsyncSession = Depends(get_db)) -> ActivityService:
    return ActivityService(
        ActivityRepository(db),
        InstanceRepository(db),
        SubmissionRepository(db),
        ConfigParamsSchemaRepository(db),
        deploy_base_url=settings.deploy_base_url,
        instance_ttl=timedelta(days=settings.instance_ttl_days),
        activity_defaults=settings.activity_defaults,
        activity_overrides=settings.activity_overrides,
    )


def get_activity_facade(service: ActivityService = Depends(get_activity_service)) -> ActivityFacade:
    return ActivityFacade(service)
