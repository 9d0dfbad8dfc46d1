import math
from decimal import ROUND_DOWN, Decimal
from typing import Optional

from dealdesk.domain.eligibility import (
    MIN_OWNER_OCCUPANCY,
    QUESTIONS,
    EligibilityAnswer,
    EligibilityVerdict,
    OccupancyMeasurement,
)


def format_occupancy_pct(ratio: float) -> str:
    """
    One decimal, truncated rather than rounded: 50.99% reads "50.9%", never
    "51.0%" next to a 51% minimum. Float noise is cleared first (0.29 -> "29.0").
    """
    if not math.isfinite(ratio):
        return f"{ratio * 100}%"
    pct = Decimal(repr(round(ratio * 100, 6)))
    return f"{pct.quantize(Decimal('0.1'), rounding=ROUND_DOWN)}%"


def _normalize_answer(value) -> Optional[str]:
    if not isinstance(value, str):
        return None
    v = value.strip().lower()
    return v if v in ("yes", "no") else None


def evaluate(
    answers: Optional[EligibilityAnswer],
    occupancy: Optional[OccupancyMeasurement] = None,
) -> EligibilityVerdict:
    answers = answers or {}
    reasons = []
    ineligible = False
    unanswered = 0

    # 1. Question catalog, in catalog order
    for q in QUESTIONS:
        answer = _normalize_answer(answers.get(q.id))
        if answer is None:
            unanswered += 1
        elif answer != q.expected_answer:
            ineligible = True
            reasons.append(q.failure_message)

    # 2. Owner occupancy (skipped when no square footage was measured)
    ratio = occupancy.ratio if occupancy is not None else None
    if ratio is not None and ratio < MIN_OWNER_OCCUPANCY:
        ineligible = True
        reasons.append(
            f"Owner occupancy is {format_occupancy_pct(ratio)}, below the "
            f"{MIN_OWNER_OCCUPANCY * 100:.0f}% minimum."
        )

    # 3. Final verdict: a violation is never downgraded to review
    if ineligible:
        result = "ineligible"
    elif unanswered == 0:
        result = "eligible"
    else:
        result = "needs_review"

    return EligibilityVerdict(
        result=result,
        reasons=reasons,
        answered=len(QUESTIONS) - unanswered,
        unanswered=unanswered,
        occupancy_ratio=ratio,
    )
