from typing import Annotated, Any, FrozenSet, List, Literal, Optional, Tuple, Union
from enum import Enum
from pydantic import BaseModel, ConfigDict, Field


Difficulty = Literal["easy", "medium", "hard"]
ScoreStatus = Literal["correct", "partial", "incorrect", "unanswered"]


class QuestionKind(str, Enum):
    SINGLE_CHOICE = "single_choice"
    MULTI_SELECT = "multi_select"
    TRUE_FALSE = "true_false"
    WRITTEN = "written"


# ======================= Answer keys =======================
# One variant per question kind, discriminated on ``kind``.

class SingleChoiceKey(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["single_choice"] = "single_choice"
    correct_index: int


class TrueFalseKey(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["true_false"] = "true_false"
    correct_index: int


class MultiSelectKey(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["multi_select"] = "multi_select"
    correct_indices: FrozenSet[int]


class WrittenKey(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["written"] = "written"
    reference_answer: str


AnswerKey = Annotated[
    Union[SingleChoiceKey, TrueFalseKey, MultiSelectKey, WrittenKey],
    Field(discriminator="kind"),
]


# ======================= Questions and submissions =======================

class Question(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    prompt: str = ""
    # Choice-based kinds only
    options: Tuple[str, ...] = Field(default_factory=tuple)
    answer_key: AnswerKey
    difficulty: Difficulty = "medium"
    subject: Optional[str] = None
    # Stored points take precedence over the allocator when present
    points: Optional[int] = Field(default=None, ge=1)
    explanation: Optional[str] = None

    @property
    def kind(self) -> QuestionKind:
        return QuestionKind(self.answer_key.kind)

    @property
    def is_open_ended(self) -> bool:
        return self.kind is QuestionKind.WRITTEN


class Submission(BaseModel):
    model_config = ConfigDict(frozen=True)

    question_id: str
    # For choice kinds: selected option indices; for written: free text
    selected: Optional[Tuple[int, ...]] = None
    text: Optional[str] = None
    # Opaque, echoed back on the score result
    time_spent: Optional[Any] = None


# ======================= Scoring results =======================

class ScoreResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    question_id: str
    percentage: int = Field(ge=0, le=100)
    points_earned: float = Field(ge=0.0)
    max_points: int = Field(ge=1)
    is_fully_correct: bool
    status: ScoreStatus
    time_spent: Optional[Any] = None


class AttemptResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    results: List[ScoreResult]
    total_earned: float
    total_max: int
    percentage_score: int = Field(ge=0, le=100)
    total_questions: int
    correct_count: int
    partial_count: int
    incorrect_count: int
    unanswered_count: int
    passing_score: int
    passed: bool


class AttemptRequest(BaseModel):
    # Caller-side identifier, only used to tag log events
    attempt_id: Optional[str] = None
    questions: List[Question]
    submissions: List[Submission] = Field(default_factory=list)


class ExamAttemptRequest(AttemptRequest):
    passing_score: Optional[int] = Field(default=None, ge=0, le=100)


# ======================= Quotas =======================

class QuotaRequest(BaseModel):
    total: int
    categories: List[str]


class CategoryQuota(BaseModel):
    model_config = ConfigDict(frozen=True)

    category: str
    count: int = Field(ge=0)


class QuotaResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    total: int
    allocations: List[CategoryQuota]

    @property
    def counts(self) -> List[int]:
        return [a.count for a in self.allocations]

    def count_for(self, category: str) -> int:
        """Summed count for a label; duplicated labels are separate slots."""
        return sum(a.count for a in self.allocations if a.category == category)


class GenerationPlanRequest(BaseModel):
    question_count: int
    question_types: List[str] = Field(default_factory=list)
    difficulties: List[str] = Field(default_factory=lambda: ["easy", "medium", "hard"])
    document_count: int = Field(default=1)


class GenerationPlan(BaseModel):
    model_config = ConfigDict(frozen=True)

    question_count: int
    document_count: int
    per_document: int
    type_quota: QuotaResult
    difficulty_quota: QuotaResult
    instructions: List[str] = Field(default_factory=list)
