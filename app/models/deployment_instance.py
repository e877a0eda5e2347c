from sqlalchemy import Column, DateTime, ForeignKey, String

from app.models.base import JSONType, TimestampMixin
from app.core.db import Base


class DeploymentInstanceModel(Base, TimestampMixin):
    __tablename__ = "deployment_instances"

    id = Column(String(64), primary_key=True)
    activity_id = Column(String(36), ForeignKey("activities.id"), nullable=False, index=True)
    expires_at = Column(DateTime(timezone=True), nullable=False)
    session_params = Column(JSONType, nullable=True)
