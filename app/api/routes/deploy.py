"""部署实例：为 Activity 创建限时实例，查询实例详情与某 Activity 下的实例列表。"""
import logging

from fastapi import APIRouter, Depends

from app.api.deps import get_activity_facade
from app.domain.entities import DeploymentInstance
from app.schemas.deploy import (
    DeployRequest,
    DeployResponse,
    InstanceListResponse,
    InstanceResponse,
    InstanceSummary,
)
from app.services.activity_facade import ActivityFacade

logger = logging.getLogger(__name__)
router = APIRouter()


def _instance_to_summary(instance: DeploymentInstance) -> InstanceSummary:
    return InstanceSummary(
        instance_id=instance.instance_id,
        activity_id=instance.activity_id,
        created_at=instance.created_at.isoformat(),
        expires_at=instance.expires_at.isoformat(),
    )


@router.post("", response_model=DeployResponse, status_code=201)
async def deploy(body: DeployRequest, facade: ActivityFacade = Depends(get_activity_facade)):
    """创建部署实例，Activity 不存在时返回 404。"""
    logger.info("[deploy] activity_id=%s", body.activity_id)
    deployment = await facade.create_instance(body.activity_id, body.session_params)
    return DeployResponse(
        instance_id=deployment.instance_id,
        activity_id=deployment.activity_id,
        deploy_url=deployment.deploy_url,
        expires_in_seconds=deployment.expires_in_seconds,
        expires_at=deployment.expires_at.isoformat(),
    )


@router.get("/activity/{activity_id}", response_model=InstanceListResponse)
async def list_instances_for_activity(activity_id: str, facade: ActivityFacade = Depends(get_activity_facade)):
    instances = await facade.get_instances_for_activity(activity_id)
    return InstanceListResponse(
        count=len(instances),
        instances=[_instance_to_summary(instance) for instance in instances],
    )


@router.get("/{instance_id}", response_model=InstanceResponse)
async def get_instance(instance_id: str, facade: ActivityFacade = Depends(get_activity_facade)):
    instance = await facade.get_instance(instance_id)
    return InstanceResponse(
        instance_id=instance.instance_id,
        activity_id=instance.activity_id,
        created_at=instance.created_at.isoformat(),
        expires_at=instance.expires_at.isoformat(),
        session_params=instance.session_params_dict(),
    )
