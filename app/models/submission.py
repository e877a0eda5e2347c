from sqlalchemy import Column, ForeignKey, Integer, String

from app.models.base import JSONType, TimestampMixin
from app.core.db import Base


class SubmissionModel(Base, TimestampMixin):
    __tablename__ = "submissions"

    id = Column(String(36), primary_key=True)
    instance_id = Column(String(64), ForeignKey("deployment_instances.id"), nullable=False, index=True)
    student_id = Column(String(100), nullable=False, index=True)
    number_of_attempts = Column(Integer, nullable=False, default=0)
    attempts = Column(JSONType, nullable=False)
