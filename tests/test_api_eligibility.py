# tests/test_api_eligibility.py
from fixtures.screenings import all_correct_answers, with_wrong_answer


def test_questions_endpoint_lists_catalog(client):
    r = client.get("/eligibility/questions")

    assert r.status_code == 200
    body = r.json()
    assert len(body) == 8
    assert body[0]["promptText"] == "Is the business a for-profit entity?"
    assert body[7]["fatal"] is True


def test_evaluate_eligible(client):
    r = client.post(
        "/eligibility/evaluate",
        json={
            "answers": all_correct_answers(),
            "occupancy": {"totalSquareFeet": 1000, "borrowerOccupiedSquareFeet": 600},
        },
    )

    assert r.status_code == 200
    body = r.json()
    assert body["result"] == "eligible"
    assert body["reasons"] == []
    assert body["note"] is None


def test_evaluate_ineligible_with_note(client):
    r = client.post(
        "/eligibility/evaluate",
        json={"dealId": "api-1", "answers": with_wrong_answer("q5"), "includeNote": True},
    )

    body = r.json()
    assert body["result"] == "ineligible"
    assert body["reasons"] == ["Ineligible industry."]
    assert "Result: INELIGIBLE" in body["note"]


def test_evaluate_partial_needs_review(client):
    r = client.post("/eligibility/evaluate", json={"answers": {"q1": "yes"}})

    assert r.json()["result"] == "needs_review"
    assert r.json()["unanswered"] == 7


def test_negative_occupancy_rejected_before_evaluation(client):
    r = client.post(
        "/eligibility/evaluate",
        json={"answers": {}, "occupancy": {"totalSquareFeet": -10, "borrowerOccupiedSquareFeet": 5}},
    )

    assert r.status_code == 422
