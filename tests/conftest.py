from __future__ import annotations

import os
from datetime import datetime, timedelta, timezone
from typing import AsyncGenerator

# 测试不连接 PostgreSQL；在导入 app 之前指定一个不会被使用的 SQLite 地址
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///./.pytest-unused.sqlite")

import pytest
import pytest_asyncio
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from app.core.db import get_db
from app.domain.entities import Activity, ConfigParamsSchema, DeploymentInstance, Submission
from app.main import create_app
from app.models import Base
from app.services.activity_service import ActivityService


class FrozenClock:
    def __init__(self, start: datetime):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now = self.now + timedelta(**kwargs)


class InMemoryActivityStore:
    def __init__(self):
        self.rows: dict[str, Activity] = {}

    async def save(self, activity):
        self.rows[activity.id] = activity
        return activity

    async def find_by_id(self, activity_id):
        return self.rows.get(activity_id)

    async def find_all(self):
        return list(self.rows.values())

    async def exists(self, activity_id):
        return activity_id in self.rows

    async def delete(self, activity_id):
        return self.rows.pop(activity_id, None) is not None


class InMemoryInstanceStore:
    def __init__(self):
        self.rows: dict[str, DeploymentInstance] = {}

    async def save(self, instance):
        self.rows[instance.instance_id] = instance
        return instance

    async def find_by_id(self, instance_id):
        return self.rows.get(instance_id)

    async def find_by_activity_id(self, activity_id):
        return [row for row in self.rows.values() if row.activity_id == activity_id]

    async def find_all(self):
        return list(self.rows.values())

    async def exists(self, instance_id):
        return instance_id in self.rows

    async def delete(self, instance_id):
        return self.rows.pop(instance_id, None) is not None


class InMemorySubmissionStore:
    def __init__(self):
        self.rows: dict[str, Submission] = {}

    async def save(self, submission):
        self.rows[submission.submission_id] = submission
        return submission

    async def find_by_id(self, submission_id):
        return self.rows.get(submission_id)

    async def find_by_instance_id(self, instance_id):
        return [row for row in self.rows.values() if row.instance_id == instance_id]

    async def find_all(self):
        return list(self.rows.values())

    async def delete(self, submission_id):
        return self.rows.pop(submission_id, None) is not None


class InMemoryConfigParamsSchemaStore:
    def __init__(self):
        self.rows: dict[str, ConfigParamsSchema] = {}
        self.current_id: str | None = None

    async def save(self, schema):
        self.rows[schema.id] = schema
        self.current_id = schema.id
        return schema

    async def get_current(self):
        return self.rows.get(self.current_id) if self.current_id else None

    async def find_by_id(self, schema_id):
        return self.rows.get(schema_id)

    async def find_all(self):
        return sorted(self.rows.values(), key=lambda schema: schema.created_at, reverse=True)


@pytest.fixture
def valid_config() -> dict:
    return {
        "title": "Exam",
        "grade": 12,
        "modules": "Mechanics",
        "number_of_exercises": 1,
        "total_time_minutes": 30,
        "number_of_retries": 1,
        "exercises": [
            {
                "question": "A block slides down a frictionless ramp. Which law applies?",
                "options": ["F = m*a", "E = m*c^2"],
                "correct_options": "A",
                "correct_answer": "F = m*a",
            }
        ],
    }


@pytest.fixture
def clock() -> FrozenClock:
    return FrozenClock(datetime(2026, 1, 1, 10, 0, 0, tzinfo=timezone.utc))


@pytest.fixture
def stores():
    return {
        "activities": InMemoryActivityStore(),
        "instances": InMemoryInstanceStore(),
        "submissions": InMemorySubmissionStore(),
        "config_params_schemas": InMemoryConfigParamsSchemaStore(),
    }


@pytest.fixture
def service(stores, clock) -> ActivityService:
    return ActivityService(**stores, clock=clock)


@pytest_asyncio.fixture()
async def engine(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test_activity.sqlite'}", future=True)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    try:
        yield engine
    finally:
        await engine.dispose()


@pytest_asyncio.fixture()
async def db_session(engine) -> AsyncGenerator[AsyncSession, None]:
    async_session = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with async_session() as session:
        yield session


@pytest.fixture
def test_app() -> FastAPI:
    return create_app()


@pytest_asyncio.fixture()
async def client(test_app: FastAPI, db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    async def _get_test_db() -> AsyncGenerator[AsyncSession, None]:
        yield db_session

    test_app.dependency_overrides[get_db] = _get_test_db
    transport = ASGITransport(app=test_app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as async_client:
        yield async_client
    test_app.dependency_overrides.clear()
