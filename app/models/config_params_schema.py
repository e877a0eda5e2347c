from sqlalchemy import Boolean, Column, String

from app.models.base import JSONType, TimestampMixin
from app.core.db import Base


class ConfigParamsSchemaModel(Base, TimestampMixin):
    __tablename__ = "config_params_schemas"

    id = Column(String(36), primary_key=True)
    params = Column(JSONType, nullable=False)
    is_current = Column(Boolean, nullable=False, default=True, index=True)
