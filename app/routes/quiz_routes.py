from fastapi import APIRouter, HTTPException
from app.schemas import AttemptRequest, AttemptResult
from app.core.engine import AssessmentEngine
from app.core.exceptions import AssessmentError
from app.core.grading import QuizGradingPolicy
from app.core.logging import attempt_id_var, get_logger


logger = get_logger(__name__)

router = APIRouter(prefix="/ai/quiz", tags=["quiz"])


@router.post("/score", response_model=AttemptResult)
async def score_quiz(req: AttemptRequest):
    attempt_id_var.set(req.attempt_id)
    try:
        engine = AssessmentEngine(policy=QuizGradingPolicy())
        return await engine.score_async(req.questions, req.submissions)
    except AssessmentError:
        raise
    except Exception as e:
        logger.error("Quiz scoring failed", error=str(e))
        raise HTTPException(status_code=500, detail=f"Scoring failed: {e}")
