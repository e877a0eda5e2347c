"""建表并写入初始参数说明 schema。
与应用使用同一 DATABASE_URL（会从项目根目录 .env 加载环境变量）。已存在当前 schema 时不重复写入。"""
import asyncio
import os
import sys

# 项目根目录
_project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, _project_root)
os.chdir(_project_root)

# 在导入 app 前加载 .env，保证与 uvicorn 启动时使用同一 DATABASE_URL
_env_file = os.path.join(_project_root, ".env")
if os.path.isfile(_env_file):
    with open(_env_file, "r", encoding="utf-8") as f:
        for line in f:
            line = line.strip()
            if line and "=" in line and not line.startswith("#"):
                k, _, v = line.partition("=")
                k, v = k.strip(), v.strip()
                if k and os.environ.get(k) is None:
                    os.environ[k] = v

from app.core.config import settings
from app.core.db import SessionLocal, engine
from app.domain.entities import DEFAULT_CONFIG_PARAMS
from app.models import Base
from app.repositories.activity_repository import ActivityRepository
from app.repositories.config_params_repository import ConfigParamsSchemaRepository
from app.repositories.instance_repository import InstanceRepository
from app.repositories.submission_repository import SubmissionRepository
from app.services.activity_service import ActivityService


def _redact_url(url: str) -> str:
    """隐藏密码，便于日志核对连接的是哪个库。"""
    if "@" in url and "//" in url:
        pre, _, rest = url.partition("//")
        if "@" in rest:
            user_part, _, host_part = rest.rpartition("@")
            if ":" in user_part:
                user = user_part.split(":")[0]
                return f"{pre}//{user}:****@{host_part}"
    return url


async def main():
    print(f"Using DB: {_redact_url(settings.database_url)}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    print(f"Tables ready: {sorted(Base.metadata.tables)}")

    async with SessionLocal() as db:
        service = ActivityService(
            ActivityRepository(db),
            InstanceRepository(db),
            SubmissionRepository(db),
            ConfigParamsSchemaRepository(db),
        )
        current = await service.get_current_config_params_schema()
        if current is not None:
            print(f"当前参数 schema 已存在 ({current.id})，跳过初始化。")
        else:
            schema = await service.save_config_params_schema(DEFAULT_CONFIG_PARAMS)
            print(f"已写入初始参数 schema: {schema.id}（{len(schema.params)} 项）")
    await engine.dispose()


if __name__ == "__main__":
    asyncio.run(main())
