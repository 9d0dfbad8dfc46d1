# src/dealdesk/api/http.py
from __future__ import annotations

from datetime import date
from typing import Any

from fastapi import FastAPI, HTTPException, Query, Response

from dealdesk.adapters.config import config
from dealdesk.adapters.logging_utils import get_logger
from dealdesk.adapters.sql_store import build_store
from dealdesk.domain.eligibility import QUESTIONS, OccupancyMeasurement
from dealdesk.domain.errors import InvalidInputError, StorageError
from dealdesk.domain.fees import compute_fee_quote
from dealdesk.domain.underwriting import FinancialsUpdate
from dealdesk.services.memo import draft_credit_memo
from dealdesk.services.screening import format_eligibility_note, screen_deal
from dealdesk.services.underwriting_ledger import UnderwritingLedger
from .schemas import (
    EligibilityRequest,
    EligibilityResponse,
    FeeQuoteRequest,
    FeeQuoteResponse,
    MemoUpdate,
    QuestionItem,
    RiskRatingUpdate,
    StipStatusUpdate,
)

logger = get_logger(__name__)

app = FastAPI(title="dealdesk")

_ledger = UnderwritingLedger(build_store(config), config.UNDERWRITING_STORE_KEY)


def _not_saved(deal_id: str, e: StorageError) -> HTTPException:
    # caller must show a visible "not saved" warning; we never retry
    return HTTPException(status_code=503, detail=f"Change not saved for deal {deal_id}: {e}")


def _bad_request(e: Exception, **context: Any) -> HTTPException:
    logger.warning("request rejected", extra={"context": {"error": str(e), **context}})
    return HTTPException(status_code=400, detail=str(e))


# -----------------------------
# ELIGIBILITY
# -----------------------------
@app.get("/eligibility/questions", response_model=list[QuestionItem])
def list_questions() -> list[QuestionItem]:
    return [
        QuestionItem(
            id=q.id,
            prompt_text=q.prompt_text,
            expected_answer=q.expected_answer,
            failure_message=q.failure_message,
            fatal=q.fatal,
        )
        for q in QUESTIONS
    ]


@app.post("/eligibility/evaluate", response_model=EligibilityResponse)
def evaluate_eligibility(body: EligibilityRequest) -> EligibilityResponse:
    """
    Pure screen. Nothing is stored; persisting the note text is up to the caller.
    """
    occupancy = None
    if body.occupancy is not None:
        occupancy = OccupancyMeasurement(
            total_square_feet=body.occupancy.total_square_feet,
            borrower_occupied_square_feet=body.occupancy.borrower_occupied_square_feet,
        )

    verdict = screen_deal(body.answers, occupancy, deal_id=body.deal_id)

    return EligibilityResponse(
        result=verdict.result,
        reasons=verdict.reasons,
        answered=verdict.answered,
        unanswered=verdict.unanswered,
        occupancy_ratio=verdict.occupancy_ratio,
        note=format_eligibility_note(verdict, body.answers) if body.include_note else None,
    )


# -----------------------------
# UNDERWRITING
# -----------------------------
@app.get("/underwriting/{deal_id}", response_model=dict)
def get_underwriting(deal_id: str, response: Response) -> dict[str, Any]:
    try:
        record, action = _ledger.get_or_create_with_status(deal_id)
    except StorageError as e:
        raise _not_saved(deal_id, e) from e
    response.headers["X-Record-Action"] = action
    return record.to_payload()


@app.patch("/underwriting/{deal_id}/financials", response_model=dict)
def patch_financials(deal_id: str, body: FinancialsUpdate) -> dict[str, Any]:
    try:
        return _ledger.update_financials(deal_id, body).to_payload()
    except StorageError as e:
        raise _not_saved(deal_id, e) from e


@app.put("/underwriting/{deal_id}/stips/{stip_id}", response_model=dict)
def put_stipulation(deal_id: str, stip_id: str, body: StipStatusUpdate, response: Response) -> dict[str, Any]:
    try:
        record = _ledger.update_stipulation(deal_id, stip_id, body.status)
    except InvalidInputError as e:
        raise _bad_request(e, deal_id=deal_id, stip_id=stip_id) from e
    except StorageError as e:
        raise _not_saved(deal_id, e) from e

    # unknown ids are a no-op; tell the caller instead of failing
    response.headers["X-Stip-Updated"] = "true" if record.find_stip(stip_id) else "false"
    return record.to_payload()


@app.put("/underwriting/{deal_id}/risk-rating", response_model=dict)
def put_risk_rating(deal_id: str, body: RiskRatingUpdate) -> dict[str, Any]:
    try:
        record = _ledger.update_risk_rating(
            deal_id,
            body.rating,
            strengths=body.strengths,
            weaknesses=body.weaknesses,
        )
    except InvalidInputError as e:
        raise _bad_request(e, deal_id=deal_id) from e
    except StorageError as e:
        raise _not_saved(deal_id, e) from e
    return record.to_payload()


@app.put("/underwriting/{deal_id}/memo", response_model=dict)
def put_memo(deal_id: str, body: MemoUpdate) -> dict[str, Any]:
    try:
        return _ledger.update_memo(deal_id, body.memo_draft).to_payload()
    except StorageError as e:
        raise _not_saved(deal_id, e) from e


@app.get("/underwriting/{deal_id}/memo/draft")
def get_memo_draft(
    deal_id: str,
    borrower: str = Query("", description="Borrower / company name"),
    loan_amount: float | None = Query(None, alias="loanAmount", ge=0),
) -> dict[str, Any]:
    """
    Returns the saved memo if there is one, otherwise a generated default.
    The generated text is not saved.
    """
    try:
        record = _ledger.get_or_create(deal_id)
    except StorageError as e:
        raise _not_saved(deal_id, e) from e

    if record.memo_draft:
        return {"dealId": record.deal_id, "memoDraft": record.memo_draft, "generated": False}
    text = draft_credit_memo(record, borrower=borrower, loan_amount=loan_amount, as_of=date.today())
    return {"dealId": record.deal_id, "memoDraft": text, "generated": True}


# -----------------------------
# FEES
# -----------------------------
@app.post("/fees/quote", response_model=FeeQuoteResponse)
def fee_quote(body: FeeQuoteRequest) -> dict[str, float]:
    try:
        quote = compute_fee_quote(body.loan_amount, body.program, body.guarantor_count)
    except InvalidInputError as e:
        raise _bad_request(e) from e
    return quote.to_dict()
