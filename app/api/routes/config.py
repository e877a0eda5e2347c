"""Activity 配置：参数说明 schema 的读取/更新，Activity 的创建、查询与列表。"""
import logging
from typing import Any

from fastapi import APIRouter, Body, Depends

from app.api.deps import get_activity_facade
from app.core.errors import NotFoundError
from app.domain.entities import Activity, ConfigParamsSchema
from app.schemas.activity import ActivityListResponse, ActivityResponse, ActivitySummary
from app.schemas.config_params import (
    ConfigParamItem,
    ConfigParamsResponse,
    ConfigParamsUpdateRequest,
    ConfigParamsUpdateResponse,
)
from app.services.activity_facade import ActivityFacade

logger = logging.getLogger(__name__)
router = APIRouter()


def _activity_to_response(activity: Activity) -> ActivityResponse:
    """配置字段平铺返回；activity_id、created_at 为服务端生成的值，与配置中的同名键冲突时以服务端为准（存储的 cfg 不受影响）。"""
    return ActivityResponse(
        **{
            **activity.config_dict(),
            "activity_id": activity.id,
            "created_at": activity.created_at.isoformat(),
        }
    )


def _params_to_items(schema: ConfigParamsSchema) -> list[ConfigParamItem]:
    return [ConfigParamItem(**param) for param in schema.params_list()]


@router.get("/params", response_model=ConfigParamsResponse)
async def get_config_params(facade: ActivityFacade = Depends(get_activity_facade)):
    """当前生效的参数说明 schema；尚未配置时返回 404。"""
    schema = await facade.get_current_config_params_schema()
    if schema is None:
        raise NotFoundError("ConfigParamsSchema", "current")
    return ConfigParamsResponse(params=_params_to_items(schema))


@router.put("/params", response_model=ConfigParamsUpdateResponse)
async def update_config_params(
    body: ConfigParamsUpdateRequest,
    facade: ActivityFacade = Depends(get_activity_facade),
):
    """保存新的参数说明 schema，并替换为当前版本。"""
    logger.info("[config/params] 更新参数 schema，共 %d 项", len(body.params))
    schema = await facade.save_config_params_schema(
        [param.model_dump(exclude_none=True) for param in body.params]
    )
    return ConfigParamsUpdateResponse(
        schema_id=schema.id,
        updated_at=schema.updated_at.isoformat(),
        params=_params_to_items(schema),
    )


@router.post("", response_model=ActivityResponse, status_code=201)
async def create_config(
    body: Any = Body(...),
    facade: ActivityFacade = Depends(get_activity_facade),
):
    """创建 Activity。请求体原样交给 ActivityBuilder 校验，失败时返回全部字段错误。"""
    activity = await facade.create_activity(body)
    return _activity_to_response(activity)


@router.get("/{activity_id}", response_model=ActivityResponse)
async def get_config(activity_id: str, facade: ActivityFacade = Depends(get_activity_facade)):
    activity = await facade.get_activity(activity_id)
    if activity is None:
        raise NotFoundError("Activity", activity_id)
    return _activity_to_response(activity)


@router.get("", response_model=ActivityListResponse)
async def list_configs(facade: ActivityFacade = Depends(get_activity_facade)):
    activities = await facade.get_all_activities()
    return ActivityListResponse(
        count=len(activities),
        activities=[
            ActivitySummary(
                activity_id=activity.id,
                created_at=activity.created_at.isoformat(),
                title=activity.cfg.get("title"),
                grade=activity.cfg.get("grade"),
                number_of_exercises=activity.cfg.get("number_of_exercises"),
            )
            for activity in activities
        ],
    )
