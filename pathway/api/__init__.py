from fastapi import APIRouter

from pathway.api.habit_systems import router as habit_systems_router
from pathway.api.habits import router as habits_router
from pathway.api.routes import router as program_router

router = APIRouter()
router.include_router(program_router)
router.include_router(habits_router)
router.include_router(habit_systems_router)

__all__ = ["router"]
