from fastapi import APIRouter

from app.api.routes.config import router as config_router
from app.api.routes.deploy import router as deploy_router
from app.api.routes.health import router as health_router
from app.api.routes.submissions import router as submissions_router

api_router = APIRouter()
api_router.include_router(health_router, tags=["health"])
api_router.include_router(config_router, prefix="/config", tags=["config"])
api_router.include_router(deploy_router, prefix="/deploy", tags=["deploy"])
api_router.include_router(submissions_router, prefix="/submissions", tags=["submissions"])
