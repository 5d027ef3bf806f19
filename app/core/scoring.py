"""
Answer scoring: partial credit for written answers, binary for choice questions
"""
from __future__ import annotations

from typing import Iterable, Optional

from app.core.concept_overlap import overlap
from app.core.edit_distance import similarity
from app.schemas import (
    MultiSelectKey, Question, SingleChoiceKey, TrueFalseKey, WrittenKey,
)
from app.utils.rounding import round_percentage


# Policy values carried over from the live grader. They have no documented
# derivation; recalibrate them together, never one at a time.
EDIT_DISTANCE_WEIGHT = 0.4
CONCEPT_WEIGHT = 0.6
FULLY_CORRECT_THRESHOLD = 90


def _is_blank(text: Optional[str]) -> bool:
    return not text or not text.strip()


def is_fully_correct(percentage: float) -> bool:
    return percentage >= FULLY_CORRECT_THRESHOLD


class AnswerScorer:
    """Turns a submitted answer into a 0-100 percentage."""

    def __init__(self, edit_weight: float = EDIT_DISTANCE_WEIGHT, concept_weight: float = CONCEPT_WEIGHT):
        self.edit_weight = edit_weight
        self.concept_weight = concept_weight

    def combined_score(self, submitted: Optional[str], reference: str) -> float:
        """Weighted blend of edit similarity and concept overlap, in [0, 1]."""
        if _is_blank(submitted):
            return 0.0
        if submitted.strip().lower() == (reference or "").strip().lower():
            return 1.0
        combined = (
            self.edit_weight * similarity(submitted, reference)
            + self.concept_weight * overlap(submitted, reference)
        )
        return min(1.0, max(0.0, combined))

    def score_written(self, submitted: Optional[str], reference: str) -> int:
        return round_percentage(self.combined_score(submitted, reference))

    @staticmethod
    def score_choice(question: Question, selected: Optional[Iterable[int]]) -> int:
        """100 for an exact match with the answer key, otherwise 0."""
        picked = list(selected or ())
        key = question.answer_key
        if isinstance(key, (SingleChoiceKey, TrueFalseKey)):
            return 100 if picked == [key.correct_index] else 0
        if isinstance(key, MultiSelectKey):
            return 100 if picked and set(picked) == set(key.correct_indices) else 0
        return 0

    def score_question(self, question: Question, selected: Optional[Iterable[int]] = None,
                       text: Optional[str] = None) -> int:
        key = question.answer_key
        if isinstance(key, WrittenKey):
            return self.score_written(text, key.reference_answer)
        return self.score_choice(question, selected)


default_scorer = AnswerScorer()


def score(submitted_text: Optional[str], reference_text: str) -> int:
    """Percentage for a written answer against its model answer."""
    return default_scorer.score_written(submitted_text, reference_text)
