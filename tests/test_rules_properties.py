# tests/test_rules_properties.py

from hypothesis import given, strategies as st

from dealdesk.domain.eligibility import QUESTIONS, OccupancyMeasurement
from dealdesk.domain.rules import evaluate

_question_ids = [q.id for q in QUESTIONS]
_expected = {q.id: q.expected_answer for q in QUESTIONS}


def _occupancy(total, share):
    return OccupancyMeasurement(total_square_feet=total, borrower_occupied_square_feet=total * share)


@given(
    total=st.floats(min_value=1.0, max_value=1_000_000.0),
    share=st.floats(min_value=0.52, max_value=1.0),
)
def test_all_matching_answers_with_majority_occupancy_are_eligible(total, share):
    verdict = evaluate(dict(_expected), _occupancy(total, share))

    assert verdict.result == "eligible"
    assert verdict.reasons == []


@given(
    wrong=st.sampled_from(_question_ids),
    answered=st.sets(st.sampled_from(_question_ids)),
)
def test_any_mismatch_is_ineligible_regardless_of_unanswered(wrong, answered):
    answers = {qid: _expected[qid] for qid in answered}
    answers[wrong] = "no" if _expected[wrong] == "yes" else "yes"

    verdict = evaluate(answers, None)

    assert verdict.result == "ineligible"
    assert verdict.reasons


@given(
    total=st.floats(min_value=1.0, max_value=1_000_000.0),
    share=st.floats(min_value=0.0, max_value=0.50),
)
def test_minority_occupancy_is_always_ineligible(total, share):
    verdict = evaluate(dict(_expected), _occupancy(total, share))

    assert verdict.result == "ineligible"
    assert len(verdict.reasons) == 1


@given(answered=st.sets(st.sampled_from(_question_ids), max_size=7))
def test_incomplete_matching_answers_need_review(answered):
    answers = {qid: _expected[qid] for qid in answered}

    verdict = evaluate(answers, None)

    assert verdict.result == "needs_review"
    assert verdict.unanswered == 8 - len(answered)
