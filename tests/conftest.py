import pytest

from app.schemas import (
    MultiSelectKey, Question, SingleChoiceKey, Submission, TrueFalseKey, WrittenKey,
)


@pytest.fixture
def written():
    def _make(qid="w1", reference="Photosynthesis converts light energy", difficulty="medium", **kwargs):
        return Question(
            id=qid,
            prompt=f"Question {qid}",
            answer_key=WrittenKey(reference_answer=reference),
            difficulty=difficulty,
            **kwargs,
        )
    return _make


@pytest.fixture
def single_choice():
    def _make(qid="s1", options=("Paris", "Rome", "Madrid", "Berlin"), correct=0, difficulty="easy", **kwargs):
        return Question(
            id=qid,
            prompt=f"Question {qid}",
            options=options,
            answer_key=SingleChoiceKey(correct_index=correct),
            difficulty=difficulty,
            **kwargs,
        )
    return _make


@pytest.fixture
def true_false():
    def _make(qid="t1", correct=1, difficulty="easy"):
        return Question(
            id=qid,
            prompt=f"Question {qid}",
            options=("False", "True"),
            answer_key=TrueFalseKey(correct_index=correct),
            difficulty=difficulty,
        )
    return _make


@pytest.fixture
def multi_select():
    def _make(qid="m1", options=("a", "b", "c", "d", "e"), correct=(0, 2), difficulty="medium", **kwargs):
        return Question(
            id=qid,
            prompt=f"Question {qid}",
            options=options,
            answer_key=MultiSelectKey(correct_indices=frozenset(correct)),
            difficulty=difficulty,
            **kwargs,
        )
    return _make


@pytest.fixture
def answer():
    def _make(qid, text=None, selected=None, time_spent=None):
        return Submission(question_id=qid, text=text, selected=selected, time_spent=time_spent)
    return _make
