# src/dealdesk/domain/fees.py
from dataclasses import dataclass
from typing import Literal

from dealdesk.domain.errors import InvalidInputError

LoanProgram = Literal["504_standard", "504_refi_expansion", "504_refi_no_expansion"]

# CDC legal/closing cost by number of additional guarantors (1 EPC / 1 OC).
# Policy text only names "<= 3", "<= 6" and "10 or more"; 7-9 land in the top tier.
CLOSING_COST_TIERS: tuple[tuple[int, float], ...] = (
    (3, 4500.0),
    (6, 5500.0),
)
CLOSING_COST_TOP_TIER = 7500.0

INTERIM_FEE_RATE = 0.0050
ANNUAL_SERVICE_FEE_RATE = 0.002475
ANNUAL_SERVICE_FEE_RATE_REFI_NO_EXPANSION = 0.002590


@dataclass(frozen=True)
class FeeQuote:
    closing_cost_tier: float
    interim_fee: float
    annual_service_fee: float
    total_upfront: float

    def to_dict(self) -> dict[str, float]:
        return {
            "closingCostTier": self.closing_cost_tier,
            "interimFee": self.interim_fee,
            "annualServiceFee": self.annual_service_fee,
            "totalUpfront": self.total_upfront,
        }


def closing_cost_tier(guarantor_count: int) -> float:
    for max_guarantors, cost in CLOSING_COST_TIERS:
        if guarantor_count <= max_guarantors:
            return cost
    return CLOSING_COST_TOP_TIER


def annual_service_fee_rate(program: str) -> float:
    if program == "504_refi_no_expansion":
        return ANNUAL_SERVICE_FEE_RATE_REFI_NO_EXPANSION
    return ANNUAL_SERVICE_FEE_RATE


def compute_fee_quote(loan_amount: float, program: str, guarantor_count: int) -> FeeQuote:
    """
    Estimate 504 fees for a debenture.

    totalUpfront is the CDC closing cost plus the interim loan fee; the annual
    service fee is ongoing and reported separately.
    """
    if loan_amount < 0:
        raise InvalidInputError(f"loan_amount must be non-negative (got {loan_amount})")
    if guarantor_count < 0:
        raise InvalidInputError(f"guarantor_count must be non-negative (got {guarantor_count})")

    closing = closing_cost_tier(guarantor_count)
    interim = loan_amount * INTERIM_FEE_RATE
    annual = loan_amount * annual_service_fee_rate(program)

    return FeeQuote(
        closing_cost_tier=closing,
        interim_fee=interim,
        annual_service_fee=annual,
        total_upfront=closing + interim,
    )
