from fastapi import APIRouter

from src.projects.router import router as projects_router
from src.intake.router import router as intake_router
from src.drafting.router import router as drafting_router
from src.quality.router import router as quality_router
from src.export.router import router as export_router
from src.interview.router import router as interview_router
from src.usage.router import router as usage_router

api_router = APIRouter()

api_router.include_router(projects_router)
api_router.include_router(intake_router)
api_router.include_router(drafting_router)
api_router.include_router(quality_router)
api_router.include_router(export_router)
api_router.include_router(interview_router)
api_router.include_router(usage_router)
