from fastapi import APIRouter
from app.schemas import GenerationPlan, GenerationPlanRequest, QuotaRequest, QuotaResult
from app.core.quota import allocate, plan_generation
from app.core.logging import get_logger


logger = get_logger(__name__)

router = APIRouter(prefix="/ai", tags=["quota"])


@router.post("/quota/allocate", response_model=QuotaResult)
async def allocate_quota(req: QuotaRequest):
    return allocate(req.total, req.categories)


@router.post("/generation/plan", response_model=GenerationPlan)
async def generation_plan(req: GenerationPlanRequest):
    plan = plan_generation(
        question_count=req.question_count,
        question_types=req.question_types,
        difficulties=req.difficulties,
        document_count=req.document_count,
    )
    logger.info("Generation plan built",
                question_count=plan.question_count,
                per_document=plan.per_document,
                types=len(plan.type_quota.allocations))
    return plan
