from fastapi import APIRouter, HTTPException
from app.schemas import AttemptResult, ExamAttemptRequest
from app.core.engine import AssessmentEngine
from app.core.exceptions import AssessmentError
from app.core.grading import ExamGradingPolicy
from app.core.logging import attempt_id_var, get_logger


logger = get_logger(__name__)

router = APIRouter(prefix="/ai/exam", tags=["exam"])


@router.post("/score", response_model=AttemptResult)
async def score_exam(req: ExamAttemptRequest):
    attempt_id_var.set(req.attempt_id)
    try:
        engine = AssessmentEngine(policy=ExamGradingPolicy(), passing_score=req.passing_score)
        return await engine.score_async(req.questions, req.submissions)
    except AssessmentError:
        raise
    except Exception as e:
        logger.error("Exam scoring failed", error=str(e))
        raise HTTPException(status_code=500, detail=f"Scoring failed: {e}")
