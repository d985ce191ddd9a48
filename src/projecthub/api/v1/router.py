from fastapi import APIRouter

from src.projecthub.api.v1 import admin, auth, notifications, projects, users

api_router = APIRouter(prefix="/api/v1")
api_router.include_router(auth.router)
api_router.include_router(users.router)
api_router.include_router(projects.router)
api_router.include_router(notifications.router)
api_router.include_router(admin.router)
