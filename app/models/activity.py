from sqlalchemy import Column, String

from app.models.base import JSONType, TimestampMixin
from app.core.db import Base


class ActivityModel(Base, TimestampMixin):
    __tablename__ = "activities"

    id = Column(String(36), primary_key=True)
    title = Column(String(255), nullable=True)
    cfg = Column(JSONType, nullable=False)
