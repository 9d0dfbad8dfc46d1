# src/dealdesk/services/screening.py
from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from dealdesk.adapters.logging_utils import get_logger
from dealdesk.domain.eligibility import (
    QUESTIONS,
    EligibilityAnswer,
    EligibilityVerdict,
    OccupancyMeasurement,
)
from dealdesk.domain.rules import evaluate, format_occupancy_pct

logger = get_logger(__name__)


def format_eligibility_note(
    verdict: EligibilityVerdict,
    answers: EligibilityAnswer | None,
    checked_at: datetime | None = None,
) -> str:
    """
    Free-text summary the caller stores as a note on the deal.

        SBA Eligibility Check (2024-05-01T12:00:00+00:00):
        Result: INELIGIBLE
        - Is the business a for-profit entity?: YES
        ...
        - Owner occupancy: 40.0%

        Issues:
        Ineligible industry.
    """
    answers = answers or {}
    ts = (checked_at or datetime.now(timezone.utc)).isoformat()

    lines = [f"SBA Eligibility Check ({ts}):", f"Result: {verdict.result.upper()}"]
    for q in QUESTIONS:
        raw = answers.get(q.id)
        shown = raw.strip().upper() if isinstance(raw, str) and raw.strip() else "UNANSWERED"
        lines.append(f"- {q.prompt_text}: {shown}")
    if verdict.occupancy_ratio is not None:
        lines.append(f"- Owner occupancy: {format_occupancy_pct(verdict.occupancy_ratio)}")

    note = "\n".join(lines)
    if verdict.reasons:
        note += "\n\nIssues:\n" + "\n".join(verdict.reasons)
    return note


def screen_deal(
    answers: EligibilityAnswer | None,
    occupancy: OccupancyMeasurement | None = None,
    *,
    deal_id: Any = None,
) -> EligibilityVerdict:
    verdict = evaluate(answers, occupancy)
    logger.info(
        "eligibility screened",
        extra={
            "context": {
                "deal_id": deal_id,
                "result": verdict.result,
                "reasons": len(verdict.reasons),
                "unanswered": verdict.unanswered,
            }
        },
    )
    return verdict
