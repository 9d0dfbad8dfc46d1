# src/dealdesk/domain/underwriting.py
from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, computed_field
from pydantic.alias_generators import to_camel

from dealdesk.domain.finance import debt_service_coverage, net_operating_income

StipStatus = Literal["outstanding", "received", "waived"]
STIP_STATUSES: tuple[str, ...] = ("outstanding", "received", "waived")

MIN_RISK_RATING = 1
MAX_RISK_RATING = 10


class _CamelModel(BaseModel):
    """
    Snake_case in Python, camelCase on the wire and in the persisted mapping.
    Frozen; derive changed copies with model_copy(update=...).
    """
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


class FinancialStatement(_CamelModel):
    # noi / dscr arriving from storage are ignored and recomputed
    model_config = ConfigDict(extra="ignore")

    revenue: float = 0.0
    cost_of_goods_sold: float = 0.0
    operating_expenses: float = 0.0
    proposed_debt_service: float = 0.0

    @computed_field
    @property
    def noi(self) -> float:
        return net_operating_income(self.revenue, self.cost_of_goods_sold, self.operating_expenses)

    @computed_field
    @property
    def dscr(self) -> float:
        return debt_service_coverage(self.noi, self.proposed_debt_service)


class FinancialsUpdate(_CamelModel):
    """
    Partial update for FinancialStatement. Only fields that were explicitly
    set are merged; anything else (including noi/dscr) is rejected.
    """
    model_config = ConfigDict(extra="forbid")

    revenue: float | None = None
    cost_of_goods_sold: float | None = None
    operating_expenses: float | None = None
    proposed_debt_service: float | None = None

    def changes(self) -> dict[str, float]:
        return {k: v for k, v in self.model_dump(exclude_unset=True).items() if v is not None}


class Stipulation(_CamelModel):
    id: str
    description: str
    status: StipStatus = "outstanding"


# Seeded on first access; there is no way to add new stipulation types.
DEFAULT_STIPS: tuple[tuple[str, str, StipStatus], ...] = (
    ("1", "3 Years Business Tax Returns", "outstanding"),
    ("2", "Personal Financial Statement (PFS)", "outstanding"),
    ("3", "Business Debt Schedule", "outstanding"),
    ("4", "Entity Documents (Articles, Bylaws)", "received"),
)

DEFAULT_STRENGTHS = ("Strong Management Experience",)
DEFAULT_WEAKNESSES = ("High Leverage",)


class UnderwritingRecord(_CamelModel):
    deal_id: str
    financials: FinancialStatement = Field(default_factory=FinancialStatement)
    risk_rating: int = Field(default=5, ge=MIN_RISK_RATING, le=MAX_RISK_RATING)
    strengths: tuple[str, ...] = ()
    weaknesses: tuple[str, ...] = ()
    stips: tuple[Stipulation, ...] = ()
    memo_draft: str = ""

    def find_stip(self, stip_id: str) -> Stipulation | None:
        for stip in self.stips:
            if stip.id == stip_id:
                return stip
        return None

    def to_payload(self) -> dict:
        return self.model_dump(by_alias=True, mode="json")


def new_record(deal_id: str) -> UnderwritingRecord:
    return UnderwritingRecord(
        deal_id=deal_id,
        strengths=DEFAULT_STRENGTHS,
        weaknesses=DEFAULT_WEAKNESSES,
        stips=tuple(Stipulation(id=i, description=d, status=s) for i, d, s in DEFAULT_STIPS),
    )
