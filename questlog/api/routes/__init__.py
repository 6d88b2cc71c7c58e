"""API routes."""

from fastapi import APIRouter

from questlog.api.routes import auth, characters, health, tasks, user

router = APIRouter()
router.include_router(health.router, prefix="/health", tags=["health"])
router.include_router(auth.router, prefix="/auth", tags=["auth"])
router.include_router(user.router, prefix="/user", tags=["user"])
router.include_router(tasks.router, prefix="/tasks", tags=["tasks"])
router.include_router(characters.router, prefix="/characters", tags=["characters"])
