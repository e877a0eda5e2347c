from app.core.db import Base
from app.models.base import TimestampMixin
from app.models.activity import ActivityModel
from app.models.deployment_instance import DeploymentInstanceModel
from app.models.submission import SubmissionModel
from app.models.config_params_schema import ConfigParamsSchemaModel

__all__ = [
    "Base",
    "TimestampMixin",
    "ActivityModel",
    "DeploymentInstanceModel",
    "SubmissionModel",
    "ConfigParamsSchemaModel",
]
