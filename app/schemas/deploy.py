"""部署实例接口的请求/响应模型。"""
from typing import Any

from pydantic import BaseModel, Field


class DeployRequest(BaseModel):
    activity_id: str = Field(..., min_length=1)
    session_params: dict[str, Any] | None = None


class DeployResponse(BaseModel):
    instance_id: str
    activity_id: str
    deploy_url: str
    expires_in_seconds: int
    expires_at: str


class InstanceResponse(BaseModel):
    instance_id: str
    activity_id: str
    created_at: str
    expires_at: str
    session_params: dict[str, Any] | None = None


class InstanceSummary(BaseModel):
    instance_id: str
    activity_id: str
    created_at: str
    expires_at: str


class InstanceListResponse(BaseModel):
    count: int = 0
    instances: list[InstanceSummary] = Field(default_factory=list)
