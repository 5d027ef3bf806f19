"""
Attempt scoring: grades every question of a submitted quiz or exam and sums the totals
"""
from __future__ import annotations

import asyncio
import time
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from app.config import settings
from app.core.exceptions import MalformedQuestion
from app.core.grading import GradingPolicy, QuizGradingPolicy, validate_question
from app.core.logging import get_logger, metrics_logger
from app.schemas import AttemptResult, Question, ScoreResult, Submission
from app.utils.rounding import round_half_away, round_percentage


logger = get_logger(__name__)

GradingPair = Tuple[Question, Optional[Submission]]


class AssessmentEngine:
    """
    Scores one attempt at a time and keeps nothing between calls.

    Every question is validated before any is graded, so a broken question
    rejects the whole attempt with MalformedQuestion instead of silently
    scoring 0. Questions without a submission are reported as unanswered.
    """

    def __init__(self, policy: Optional[GradingPolicy] = None, passing_score: Optional[int] = None):
        self.policy = policy or QuizGradingPolicy()
        self.passing_score = settings.passing_score if passing_score is None else passing_score

    def _pair(self, questions: Sequence[Question], submissions: Iterable[Submission]) -> List[GradingPair]:
        seen: set[str] = set()
        for q in questions:
            if q.id in seen:
                raise MalformedQuestion(q.id, "duplicate question id")
            seen.add(q.id)
            validate_question(q)

        by_id: Dict[str, Submission] = {}
        for sub in submissions:
            if sub.question_id not in seen:
                logger.warning("submission_for_unknown_question", question_id=sub.question_id)
                continue
            if sub.question_id in by_id:
                logger.warning("duplicate_submission", question_id=sub.question_id)
            by_id[sub.question_id] = sub
        return [(q, by_id.get(q.id)) for q in questions]

    def _grade_one(self, question: Question, submission: Optional[Submission]) -> ScoreResult:
        max_points = self.policy.max_points(question)
        result = self.policy.grade(question, submission, max_points)
        metrics_logger.log_question_graded(question.kind.value, result.status)
        return result

    def _aggregate(self, results: List[ScoreResult]) -> AttemptResult:
        total_earned = round_half_away(sum(r.points_earned for r in results), 1)
        total_max = sum(r.max_points for r in results)
        percentage_score = round_percentage(total_earned / total_max) if total_max > 0 else 0

        counts = {"correct": 0, "partial": 0, "incorrect": 0, "unanswered": 0}
        for r in results:
            counts[r.status] += 1

        return AttemptResult(
            results=results,
            total_earned=total_earned,
            total_max=total_max,
            percentage_score=percentage_score,
            total_questions=len(results),
            correct_count=counts["correct"],
            partial_count=counts["partial"],
            incorrect_count=counts["incorrect"],
            unanswered_count=counts["unanswered"],
            passing_score=self.passing_score,
            passed=percentage_score >= self.passing_score,
        )

    def _prepare(self, questions: Sequence[Question], submissions: Iterable[Submission]) -> List[GradingPair]:
        try:
            return self._pair(questions, submissions)
        except MalformedQuestion as e:
            metrics_logger.log_attempt_rejected(self.policy.name, e.message)
            raise

    def _finish(self, results: List[ScoreResult], start_time: float) -> AttemptResult:
        attempt = self._aggregate(results)
        metrics_logger.log_attempt_scored(
            self.policy.name,
            time.time() - start_time,
            attempt.total_questions,
            attempt.percentage_score,
            attempt.passed,
        )
        return attempt

    def score(self, questions: Sequence[Question], submissions: Iterable[Submission] = ()) -> AttemptResult:
        start_time = time.time()
        pairs = self._prepare(questions, submissions)
        results = [self._grade_one(q, s) for q, s in pairs]
        return self._finish(results, start_time)

    async def score_async(self, questions: Sequence[Question],
                          submissions: Iterable[Submission] = ()) -> AttemptResult:
        """Same result as score(), grading questions concurrently in worker threads."""
        start_time = time.time()
        pairs = self._prepare(questions, submissions)
        semaphore = asyncio.Semaphore(settings.grading_concurrency)

        async def _run(question: Question, submission: Optional[Submission]) -> ScoreResult:
            async with semaphore:
                return await asyncio.to_thread(self._grade_one, question, submission)

        results = await asyncio.gather(*(_run(q, s) for q, s in pairs))
        return self._finish(list(results), start_time)


def score_attempt(questions: Sequence[Question], submissions: Iterable[Submission] = (),
                  policy: Optional[GradingPolicy] = None) -> AttemptResult:
    return AssessmentEngine(policy=policy).score(questions, submissions)
