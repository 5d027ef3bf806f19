"""
Point and mark tables for quiz and exam grading.

The quiz table and the exam table are separate policies. The quiz grants flat
base points per difficulty, the exam grants marks inside a difficulty band and
awards written answers in tiers. They are not meant to be merged.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, Tuple

from app.core.exceptions import MalformedQuestion
from app.utils.rounding import round_half_away


QUIZ_BASE_POINTS: Dict[str, int] = {
    "easy": 3,
    "medium": 5,
    "hard": 7,
}
OPEN_ENDED_BONUS = 1

# (inclusive lower bound, inclusive upper bound) of marks per difficulty
EXAM_MARK_BANDS: Dict[str, Tuple[int, int]] = {
    "easy": (2, 3),
    "medium": (4, 5),
    "hard": (6, 8),
}
# (minimum combined score, share of max marks), checked top-down
EXAM_WRITTEN_TIERS: Tuple[Tuple[float, float], ...] = (
    (0.9, 1.0),
    (0.7, 0.8),
    (0.5, 0.6),
    (0.3, 0.4),
    (0.15, 0.2),
)
EXAM_MAX_WRONG_SELECTION_PENALTY = 0.5


@dataclass(frozen=True)
class PointAllocator:
    """Flat per-difficulty points used by quizzes."""

    base_points: Dict[str, int] = field(default_factory=lambda: dict(QUIZ_BASE_POINTS))
    open_ended_bonus: int = OPEN_ENDED_BONUS

    def max_points(self, difficulty: str, is_open_ended: bool) -> int:
        try:
            points = self.base_points[difficulty]
        except KeyError:
            raise MalformedQuestion(None, f"unknown difficulty {difficulty!r}") from None
        if is_open_ended:
            points += self.open_ended_bonus
        return points

    @staticmethod
    def points_earned(percentage: float, max_points: int) -> float:
        return round_half_away(percentage / 100 * max_points, 1)


@dataclass(frozen=True)
class ExamMarkingTable:
    """Banded marks and tiered partial credit used by exams."""

    mark_bands: Dict[str, Tuple[int, int]] = field(default_factory=lambda: dict(EXAM_MARK_BANDS))
    written_tiers: Tuple[Tuple[float, float], ...] = EXAM_WRITTEN_TIERS
    max_wrong_penalty: float = EXAM_MAX_WRONG_SELECTION_PENALTY

    def max_marks(self, difficulty: str) -> int:
        try:
            return self.mark_bands[difficulty][1]
        except KeyError:
            raise MalformedQuestion(None, f"unknown difficulty {difficulty!r}") from None

    def written_marks(self, combined_score: float, max_marks: int) -> float:
        """Marks for a written answer given its combined 0..1 score."""
        for threshold, share in self.written_tiers:
            if combined_score >= threshold:
                return round_half_away(max_marks * share, 1)
        return 0.0

    def multi_select_marks(self, selected: Iterable[int], correct: Iterable[int], max_marks: int) -> float:
        """
        Partial credit for a multi-select answer.

        Accuracy is the share of correct options picked. Each wrong pick costs
        half of its share of the correct set, up to max_wrong_penalty overall.
        """
        picked = set(selected)
        expected = set(correct)
        if not picked or not expected:
            return 0.0

        hits = len(picked & expected)
        wrong = len(picked - expected)
        if hits == len(expected) and wrong == 0:
            return float(max_marks)

        accuracy = hits / len(expected)
        if accuracy >= 0.75:
            marks = max_marks * (0.5 + accuracy * 0.5)
        elif accuracy >= 0.5:
            marks = max_marks * (0.3 + accuracy * 0.4)
        elif accuracy >= 0.25:
            marks = max_marks * (accuracy * 0.5)
        else:
            marks = 0.0

        penalty = min(wrong / len(expected) * 0.5, self.max_wrong_penalty)
        marks *= 1 - penalty
        return max(0.0, round_half_away(marks, 1))


default_allocator = PointAllocator()
default_exam_table = ExamMarkingTable()


def max_points(difficulty: str, is_open_ended: bool) -> int:
    """Quiz max points for a question of the given difficulty."""
    return default_allocator.max_points(difficulty, is_open_ended)


def points_earned(percentage: float, max_points: int) -> float:
    return PointAllocator.points_earned(percentage, max_points)
