"""
Question quotas: even splits of a question count across categories
"""
from __future__ import annotations

import math
from typing import List, Sequence

from app.config import settings
from app.core.exceptions import InvalidGenerationRequest, InvalidQuota
from app.core.logging import log_execution_time, metrics_logger
from app.schemas import CategoryQuota, GenerationPlan, QuotaResult


def allocate(total: int, categories: Sequence[str]) -> QuotaResult:
    """
    Split ``total`` across ``categories`` as evenly as possible.

    Every category gets total // N. The remainder goes one unit each to the
    first ``total % N`` categories in the order given, so reordering the same
    labels gives a different but equally balanced split. Repeated labels are
    separate slots. A total smaller than N leaves trailing categories at 0.
    """
    if isinstance(total, bool) or not isinstance(total, int) or total <= 0:
        metrics_logger.log_quota_rejected("non-positive total")
        raise InvalidQuota("Quota total must be a positive integer", {"total": total})
    if not categories:
        metrics_logger.log_quota_rejected("no categories")
        raise InvalidQuota("Quota needs at least one category", {"total": total, "categories": []})

    base, remainder = divmod(total, len(categories))
    allocations = [
        CategoryQuota(category=category, count=base + (1 if index < remainder else 0))
        for index, category in enumerate(categories)
    ]
    metrics_logger.log_quota_allocated(total, len(categories))
    return QuotaResult(total=total, allocations=allocations)


def describe_quota(quota: QuotaResult, noun: str = "questions") -> List[str]:
    """Literal instruction lines for a generation prompt, one per category."""
    return [f'Generate EXACTLY {a.count} "{a.category}" {noun}' for a in quota.allocations]


@log_execution_time
def plan_generation(
    question_count: int,
    question_types: Sequence[str],
    difficulties: Sequence[str] = ("easy", "medium", "hard"),
    document_count: int = 1,
) -> GenerationPlan:
    """
    Validate a generation request and work out its per-document quotas.

    Questions are generated per source document, so each document is asked
    for ceil(question_count / document_count) questions, split by type and,
    independently, by difficulty.
    """
    if not question_types:
        metrics_logger.log_generation_plan(question_count, 0, success=False)
        raise InvalidGenerationRequest(
            "No question types selected. Please select at least one question type."
        )
    if not difficulties:
        metrics_logger.log_generation_plan(question_count, 0, success=False)
        raise InvalidGenerationRequest("At least one difficulty level is required")
    if document_count < 1:
        metrics_logger.log_generation_plan(question_count, 0, success=False)
        raise InvalidGenerationRequest(
            "At least one document is required",
            {"document_count": document_count},
        )
    if not 1 <= question_count <= settings.max_question_count:
        metrics_logger.log_generation_plan(question_count, 0, success=False)
        raise InvalidGenerationRequest(
            f"Question count must be between 1 and {settings.max_question_count}",
            {"question_count": question_count},
        )
    if question_count < len(question_types):
        metrics_logger.log_generation_plan(question_count, 0, success=False)
        raise InvalidGenerationRequest(
            "Not enough questions requested for the selected types. "
            f"You selected {len(question_types)} question types but only requested "
            f"{question_count} questions.",
            {
                "question_count": question_count,
                "selected_types": len(question_types),
                "solution": (
                    f"Please increase the number of questions to at least {len(question_types)}, "
                    "or reduce the number of question types."
                ),
            },
        )

    per_document = math.ceil(question_count / document_count)
    type_quota = allocate(per_document, question_types)
    difficulty_quota = allocate(per_document, difficulties)

    instructions = describe_quota(type_quota) + describe_quota(difficulty_quota, noun="difficulty questions")
    metrics_logger.log_generation_plan(question_count, per_document)
    return GenerationPlan(
        question_count=question_count,
        document_count=document_count,
        per_document=per_document,
        type_quota=type_quota,
        difficulty_quota=difficulty_quota,
        instructions=instructions,
    )
