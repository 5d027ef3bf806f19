import pytest
from fastapi.testclient import TestClient

from app.main import app


@pytest.fixture
def client():
    with TestClient(app) as c:
        yield c


def _choice_question(qid="q1", correct=1, difficulty="easy"):
    return {
        "id": qid,
        "prompt": "Capital of Italy?",
        "options": ["Paris", "Rome"],
        "answer_key": {"kind": "single_choice", "correct_index": correct},
        "difficulty": difficulty,
    }


def _written_question(qid="w1", reference="Photosynthesis converts light energy", difficulty="hard"):
    return {
        "id": qid,
        "prompt": "What does photosynthesis do?",
        "answer_key": {"kind": "written", "reference_answer": reference},
        "difficulty": difficulty,
    }


class TestServiceEndpoints:

    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_request_id_is_echoed(self, client):
        response = client.get("/health", headers={"X-Request-ID": "abc-123"})
        assert response.headers["X-Request-ID"] == "abc-123"

    def test_metrics(self, client):
        response = client.get("/metrics")
        assert response.status_code == 200
        assert "questions_graded_total" in response.text


class TestQuizScoring:

    def test_score_quiz(self, client):
        payload = {
            "questions": [_choice_question(), _written_question()],
            "submissions": [
                {"question_id": "q1", "selected": [1], "time_spent": 4},
                {"question_id": "w1", "text": "photosynthesis converts light energy"},
            ],
        }
        response = client.post("/ai/quiz/score", json=payload)
        assert response.status_code == 200
        body = response.json()
        assert body["total_max"] == 11
        assert body["total_earned"] == 11.0
        assert body["percentage_score"] == 100
        assert body["results"][0]["time_spent"] == 4

    def test_multi_select_key_from_json(self, client):
        question = {
            "id": "m1",
            "options": ["a", "b", "c"],
            "answer_key": {"kind": "multi_select", "correct_indices": [0, 2]},
            "difficulty": "medium",
        }
        payload = {"questions": [question], "submissions": [{"question_id": "m1", "selected": [2, 0]}]}
        response = client.post("/ai/quiz/score", json=payload)
        assert response.status_code == 200
        assert response.json()["results"][0]["percentage"] == 100

    def test_malformed_question_is_rejected(self, client):
        payload = {"questions": [_written_question(reference="")], "submissions": []}
        response = client.post("/ai/quiz/score", json=payload)
        assert response.status_code == 400
        body = response.json()
        assert body["code"] == "malformed_question"
        assert body["details"]["question_id"] == "w1"

    def test_unknown_answer_kind_fails_validation(self, client):
        question = _choice_question()
        question["answer_key"] = {"kind": "essay", "correct_index": 0}
        response = client.post("/ai/quiz/score", json={"questions": [question]})
        assert response.status_code == 422


class TestExamScoring:

    def test_score_exam_with_passing_score(self, client):
        payload = {
            "questions": [_choice_question(difficulty="medium"), _written_question()],
            "submissions": [
                {"question_id": "q1", "selected": [0]},
                {"question_id": "w1", "text": "Photosynthesis converts light energy"},
            ],
            "passing_score": 70,
        }
        response = client.post("/ai/exam/score", json=payload)
        assert response.status_code == 200
        body = response.json()
        assert body["total_max"] == 13
        assert body["total_earned"] == 8.0
        assert body["percentage_score"] == 62
        assert body["passed"] is False


class TestQuotaEndpoints:

    def test_allocate(self, client):
        response = client.post("/ai/quota/allocate", json={"total": 10, "categories": ["mc", "tf", "written"]})
        assert response.status_code == 200
        assert [a["count"] for a in response.json()["allocations"]] == [4, 3, 3]

    def test_allocate_rejects_zero_total(self, client):
        response = client.post("/ai/quota/allocate", json={"total": 0, "categories": ["mc"]})
        assert response.status_code == 400
        assert response.json()["code"] == "invalid_quota"

    def test_generation_plan(self, client):
        payload = {"question_count": 9, "question_types": ["multiple-choice", "written"], "document_count": 2}
        response = client.post("/ai/generation/plan", json=payload)
        assert response.status_code == 200
        body = response.json()
        assert body["per_document"] == 5
        assert [a["count"] for a in body["type_quota"]["allocations"]] == [3, 2]

    def test_generation_plan_rejects_too_few_questions(self, client):
        payload = {"question_count": 1, "question_types": ["multiple-choice", "written"]}
        response = client.post("/ai/generation/plan", json=payload)
        assert response.status_code == 400
        body = response.json()
        assert body["code"] == "invalid_generation_request"
        assert body["details"]["selected_types"] == 2
