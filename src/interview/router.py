from typing import List
from fastapi import APIRouter

from src.interview.questions import INTERVIEW_STEPS, InterviewStep

router = APIRouter(prefix="/interview", tags=["interview"])


@router.get("/steps", response_model=List[InterviewStep])
async def list_interview_steps():
    """The static questionnaire, step by step."""
    return INTERVIEW_STEPS
