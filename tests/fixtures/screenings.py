# tests/fixtures/screenings.py

from dealdesk.domain.eligibility import QUESTIONS, OccupancyMeasurement


def all_correct_answers() -> dict:
    """Every question answered the way policy expects."""
    return {q.id: q.expected_answer for q in QUESTIONS}


def flipped(answer: str) -> str:
    return "no" if answer == "yes" else "yes"


def with_wrong_answer(question_id: str) -> dict:
    answers = all_correct_answers()
    answers[question_id] = flipped(answers[question_id])
    return answers


def owner_occupied_600_of_1000() -> OccupancyMeasurement:
    return OccupancyMeasurement(total_square_feet=1000.0, borrower_occupied_square_feet=600.0)


def owner_occupied_400_of_1000() -> OccupancyMeasurement:
    return OccupancyMeasurement(total_square_feet=1000.0, borrower_occupied_square_feet=400.0)
