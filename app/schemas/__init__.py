"""API 请求/响应 Pydantic 模型。按模块组织，路由从本包或子模块导入。"""
from app.schemas.activity import ActivityListResponse, ActivityResponse, ActivitySummary
from app.schemas.config_params import (
    ConfigParamItem,
    ConfigParamsResponse,
    ConfigParamsUpdateRequest,
    ConfigParamsUpdateResponse,
)
from app.schemas.deploy import (
    DeployRequest,
    DeployResponse,
    InstanceListResponse,
    InstanceResponse,
    InstanceSummary,
)
from app.schemas.health import HealthResponse
from app.schemas.submissions import (
    AnswerItem,
    AttemptItem,
    SubmissionListResponse,
    SubmissionRequest,
    SubmissionResponse,
)

__all__ = [
    "ActivityListResponse",
    "ActivityResponse",
    "ActivitySummary",
    "ConfigParamItem",
    "ConfigParamsResponse",
    "ConfigParamsUpdateRequest",
    "ConfigParamsUpdateResponse",
    "DeployRequest",
    "DeployResponse",
    "InstanceListResponse",
    "InstanceResponse",
    "InstanceSummary",
    "HealthResponse",
    "AnswerItem",
    "AttemptItem",
    "SubmissionListResponse",
    "SubmissionRequest",
    "SubmissionResponse",
]
