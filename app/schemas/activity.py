"""Activity 配置接口的响应模型。请求体为原始 JSON，由 ActivityValidators 校验。"""
from pydantic import BaseModel, ConfigDict, Field


class ActivityResponse(BaseModel):
    """创建/查询 Activity 的响应：activity_id、created_at 加上完整配置字段（平铺）。"""

    model_config = ConfigDict(extra="allow")

    activity_id: str
    created_at: str


class ActivitySummary(BaseModel):
    activity_id: str
    created_at: str
    title: str | None = None
    grade: int | float | None = None
    number_of_exercises: int | float | None = None


class ActivityListResponse(BaseModel):
    count: int = 0
    activities: list[ActivitySummary] = Field(default_factory=list)
