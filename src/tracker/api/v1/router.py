from fastapi import APIRouter

from src.tracker.api.v1 import members, projects

api_router = APIRouter(prefix="/api/v1")
api_router.include_router(projects.router)
api_router.include_router(members.router)
