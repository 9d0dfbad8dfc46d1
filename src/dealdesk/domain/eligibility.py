# src/dealdesk/domain/eligibility.py
from dataclasses import dataclass, field
from typing import Literal, Mapping, Optional, List

Answer = Literal["yes", "no"]
VerdictResult = Literal["eligible", "ineligible", "needs_review"]

# question id -> "yes" | "no"; missing ids (or None) are unanswered
EligibilityAnswer = Mapping[str, Optional[str]]

MIN_OWNER_OCCUPANCY = 0.51


@dataclass(frozen=True)
class EligibilityQuestion:
    id: str
    prompt_text: str
    expected_answer: Answer
    failure_message: str
    fatal: bool = False     # display hint only, scored like any other question


QUESTIONS: tuple[EligibilityQuestion, ...] = (
    EligibilityQuestion(
        "q1",
        "Is the business a for-profit entity?",
        "yes",
        "SBA loans are only for for-profit businesses.",
    ),
    EligibilityQuestion(
        "q2",
        "Does the business operate in the US?",
        "yes",
        "Business must be located in the US.",
    ),
    EligibilityQuestion(
        "q3",
        "Is the owner a US Citizen or Lawful Permanent Resident?",
        "yes",
        "Owner must be a US Citizen or LPR.",
    ),
    EligibilityQuestion(
        "q4",
        "Has the business or owner ever defaulted on a government loan?",
        "no",
        "Prior government loan defaults usually disqualify.",
    ),
    EligibilityQuestion(
        "q5",
        "Is the business involved in lending, gambling, or speculation?",
        "no",
        "Ineligible industry.",
    ),
    EligibilityQuestion(
        "q6",
        "Does the business meet SBA size standards?",
        "yes",
        "Must meet size standards (revenue/employees).",
    ),
    EligibilityQuestion(
        "q7",
        "Can the business demonstrate a need for credit (Credit Elsewhere Test)?",
        "yes",
        "Must demonstrate inability to get credit elsewhere on reasonable terms.",
    ),
    EligibilityQuestion(
        "q8",
        "Is the SBA listed as Intended User on the appraisal?",
        "yes",
        "SBA must be listed as Intended User on the appraisal.",
        fatal=True,
    ),
)


@dataclass(frozen=True)
class OccupancyMeasurement:
    total_square_feet: float = 0.0
    borrower_occupied_square_feet: float = 0.0

    @property
    def ratio(self) -> Optional[float]:
        # None means "not applicable" (e.g. no real estate in the deal)
        if self.total_square_feet > 0:
            return self.borrower_occupied_square_feet / self.total_square_feet
        return None


@dataclass
class EligibilityVerdict:
    result: VerdictResult
    reasons: List[str] = field(default_factory=list)

    # Diagnostics
    answered: int = 0
    unanswered: int = 0
    occupancy_ratio: Optional[float] = None
