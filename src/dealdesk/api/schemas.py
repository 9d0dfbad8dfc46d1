# src/dealdesk/api/schemas.py
from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from dealdesk.domain.fees import LoanProgram
from dealdesk.domain.underwriting import StipStatus


class _Camel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# --------------------------------------------
# Eligibility
# --------------------------------------------

class OccupancyIn(_Camel):
    total_square_feet: float = Field(default=0.0, ge=0)
    borrower_occupied_square_feet: float = Field(default=0.0, ge=0)


class EligibilityRequest(_Camel):
    """
    answers: question id -> "yes" | "no". Leave a question out (or send null)
    to mark it unanswered.
    """
    deal_id: str | None = None
    answers: dict[str, Literal["yes", "no"] | None] = Field(default_factory=dict)
    occupancy: OccupancyIn | None = None
    include_note: bool = False


class EligibilityResponse(_Camel):
    result: Literal["eligible", "ineligible", "needs_review"]
    reasons: list[str]
    answered: int
    unanswered: int
    occupancy_ratio: float | None = None
    note: str | None = None


class QuestionItem(_Camel):
    id: str
    prompt_text: str
    expected_answer: Literal["yes", "no"]
    failure_message: str
    fatal: bool = False


# --------------------------------------------
# Underwriting
# --------------------------------------------

class StipStatusUpdate(_Camel):
    status: StipStatus


class RiskRatingUpdate(_Camel):
    # range is enforced by the ledger so the error message is the domain's
    rating: int
    strengths: list[str] | None = None
    weaknesses: list[str] | None = None


class MemoUpdate(_Camel):
    memo_draft: str = ""


# --------------------------------------------
# Fees
# --------------------------------------------

class FeeQuoteRequest(_Camel):
    loan_amount: float
    program: LoanProgram = "504_standard"
    guarantor_count: int = 1


class FeeQuoteResponse(_Camel):
    closing_cost_tier: float
    interim_fee: float
    annual_service_fee: float
    total_upfront: float
