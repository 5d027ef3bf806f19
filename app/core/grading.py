"""
Grading policies: how a single question is priced and graded
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

from app.core.exceptions import MalformedQuestion
from app.core.points import ExamMarkingTable, PointAllocator, default_allocator, default_exam_table
from app.core.scoring import AnswerScorer, default_scorer, is_fully_correct
from app.schemas import (
    MultiSelectKey, Question, QuestionKind, ScoreResult, ScoreStatus, Submission, WrittenKey,
)
from app.utils.rounding import round_half_away, round_percentage

# Exam answers earning at least this share of their marks count as correct
FULL_MARKS_SHARE = 0.9


def validate_question(question: Question) -> None:
    """Raise MalformedQuestion when the question cannot be graded."""
    key = question.answer_key
    if isinstance(key, WrittenKey):
        if not key.reference_answer or not key.reference_answer.strip():
            raise MalformedQuestion(question.id, "written question has an empty reference answer")
        return

    option_count = len(question.options)
    if option_count < 2:
        raise MalformedQuestion(
            question.id,
            "choice question needs at least 2 options",
            {"options": option_count},
        )
    if isinstance(key, MultiSelectKey):
        if len(key.correct_indices) < 2:
            raise MalformedQuestion(
                question.id,
                "multi-select question needs at least 2 correct options",
                {"correct_indices": sorted(key.correct_indices)},
            )
        correct = sorted(key.correct_indices)
    else:
        correct = [key.correct_index]

    out_of_range = [i for i in correct if not 0 <= i < option_count]
    if out_of_range:
        raise MalformedQuestion(
            question.id,
            "correct option index out of range",
            {"indices": out_of_range, "options": option_count},
        )


def is_unanswered(question: Question, submission: Optional[Submission]) -> bool:
    if submission is None:
        return True
    if question.is_open_ended:
        return not submission.text or not submission.text.strip()
    return not submission.selected


def _status(percentage: int) -> ScoreStatus:
    if is_fully_correct(percentage):
        return "correct"
    return "partial" if percentage > 0 else "incorrect"


class GradingPolicy(ABC):
    """Prices a question and grades one submission against it."""

    name: str = "base"

    @abstractmethod
    def max_points(self, question: Question) -> int:
        ...

    @abstractmethod
    def grade(self, question: Question, submission: Optional[Submission], max_points: int) -> ScoreResult:
        ...

    @staticmethod
    def unanswered(question: Question, submission: Optional[Submission], max_points: int) -> ScoreResult:
        return ScoreResult(
            question_id=question.id,
            percentage=0,
            points_earned=0.0,
            max_points=max_points,
            is_fully_correct=False,
            status="unanswered",
            time_spent=submission.time_spent if submission else None,
        )


class QuizGradingPolicy(GradingPolicy):
    """Flat points per difficulty, percentage-proportional credit."""

    name = "quiz"

    def __init__(self, scorer: Optional[AnswerScorer] = None, allocator: Optional[PointAllocator] = None):
        self.scorer = scorer or default_scorer
        self.allocator = allocator or default_allocator

    def max_points(self, question: Question) -> int:
        if question.points:
            return question.points
        return self.allocator.max_points(question.difficulty, question.is_open_ended)

    def grade(self, question: Question, submission: Optional[Submission], max_points: int) -> ScoreResult:
        if is_unanswered(question, submission):
            return self.unanswered(question, submission, max_points)

        percentage = self.scorer.score_question(question, submission.selected, submission.text)
        return ScoreResult(
            question_id=question.id,
            percentage=percentage,
            points_earned=self.allocator.points_earned(percentage, max_points),
            max_points=max_points,
            is_fully_correct=is_fully_correct(percentage),
            status=_status(percentage),
            time_spent=submission.time_spent,
        )


class ExamGradingPolicy(GradingPolicy):
    """Banded marks with tiered written credit and multi-select partial credit."""

    name = "exam"

    def __init__(self, scorer: Optional[AnswerScorer] = None, table: Optional[ExamMarkingTable] = None):
        self.scorer = scorer or default_scorer
        self.table = table or default_exam_table

    def max_points(self, question: Question) -> int:
        if question.points:
            return question.points
        return self.table.max_marks(question.difficulty)

    def _marks(self, question: Question, submission: Submission, max_points: int) -> float:
        key = question.answer_key
        if isinstance(key, WrittenKey):
            combined = self.scorer.combined_score(submission.text, key.reference_answer)
            return self.table.written_marks(combined, max_points)
        if question.kind is QuestionKind.MULTI_SELECT:
            return self.table.multi_select_marks(submission.selected, key.correct_indices, max_points)
        return float(max_points) if self.scorer.score_choice(question, submission.selected) == 100 else 0.0

    def grade(self, question: Question, submission: Optional[Submission], max_points: int) -> ScoreResult:
        if is_unanswered(question, submission):
            return self.unanswered(question, submission, max_points)

        earned = round_half_away(min(self._marks(question, submission, max_points), max_points), 1)
        percentage = round_percentage(earned / max_points)
        full = earned >= max_points * FULL_MARKS_SHARE
        if full:
            status = "correct"
        else:
            status = "partial" if earned > 0 else "incorrect"
        return ScoreResult(
            question_id=question.id,
            percentage=percentage,
            points_earned=earned,
            max_points=max_points,
            is_fully_correct=full,
            status=status,
            time_spent=submission.time_spent,
        )
