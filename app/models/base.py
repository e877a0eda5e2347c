from sqlalchemy import JSON, Column, DateTime
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.sql import func

# PostgreSQL 下用 JSONB，其余方言（测试用 SQLite）退回通用 JSON
JSONType = JSON().with_variant(JSONB(), "postgresql")


class TimestampMixin:
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )
