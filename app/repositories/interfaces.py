"""持久化协作者契约。服务层只依赖这些窄接口，可替换为任意存储实现。"""
from typing import Protocol

from app.domain.entities import Activity, ConfigParamsSchema, DeploymentInstance, Submission


class ActivityStore(Protocol):
    async def save(self, activity: Activity) -> Activity: ...

    async def find_by_id(self, activity_id: str) -> Activity | None: ...

    async def find_all(self) -> list[Activity]: ...

    async def exists(self, activity_id: str) -> bool: ...

    async def delete(self, activity_id: str) -> bool: ...


class InstanceStore(Protocol):
    async def save(self, instance: DeploymentInstance) -> DeploymentInstance: ...

    async def find_by_id(self, instance_id: str) -> DeploymentInstance | None: ...

    async def find_by_activity_id(self, activity_id: str) -> list[DeploymentInstance]: ...

    async def find_all(self) -> list[DeploymentInstance]: ...

    async def exists(self, instance_id: str) -> bool: ...

    async def delete(self, instance_id: str) -> bool: ...


class SubmissionStore(Protocol):
    async def save(self, submission: Submission) -> Submission: ...

    async def find_by_id(self, submission_id: str) -> Submission | None: ...

    async def find_by_instance_id(self, instance_id: str) -> list[Submission]: ...

    async def find_all(self) -> list[Submission]: ...

    async def delete(self, submission_id: str) -> bool: ...


class ConfigParamsSchemaStore(Protocol):
    async def save(self, schema: ConfigParamsSchema) -> ConfigParamsSchema:
        """保存为新的当前 schema，同时把此前的当前 schema 全部降级。"""
        ...

    async def get_current(self) -> ConfigParamsSchema | None: ...

    async def find_by_id(self, schema_id: str) -> ConfigParamsSchema | None: ...

    async def find_all(self) -> list[ConfigParamsSchema]: ...
