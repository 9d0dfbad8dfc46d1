from __future__ import annotations

from datetime import date

from dealdesk.domain.underwriting import UnderwritingRecord


def draft_credit_memo(
    record: UnderwritingRecord,
    *,
    borrower: str = "",
    loan_amount: float | None = None,
    as_of: date | None = None,
) -> str:
    """
    Starting text for the credit memorandum when the deal has no memo yet.
    Weaknesses become the risk list, strengths their mitigants.
    """
    fin = record.financials
    as_of = as_of or date.today()
    amount = f"${loan_amount:,.0f}" if loan_amount is not None else "TBD"

    risks = "\n".join(f"   - Risk: {w}." for w in record.weaknesses) or "   - Risk: None identified."
    mitigants = "\n".join(f"   - Mitigant: {s}." for s in record.strengths) or "   - Mitigant: None identified."

    outstanding = [s.description for s in record.stips if s.status == "outstanding"]
    stips = "\n".join(f"   - {d}" for d in outstanding) or "   - None"

    return (
        "CREDIT MEMORANDUM\n"
        f"Date: {as_of.isoformat()}\n"
        f"Borrower: {borrower or 'Unknown'}\n"
        f"Loan Amount: {amount}\n"
        f"Risk Rating: {record.risk_rating}/10\n"
        "\n"
        "Recommendation: [APPROVE / DECLINE]\n"
        "\n"
        "1. Transaction Overview\n"
        "   Request for financing of...\n"
        "\n"
        "2. Financial Analysis\n"
        f"   DSCR: {fin.dscr:.2f}x based on ${fin.noi:,.0f} NOI.\n"
        f"   Revenue: ${fin.revenue:,.0f}\n"
        "\n"
        "3. Risks & Mitigants\n"
        f"{risks}\n"
        f"{mitigants}\n"
        "\n"
        "4. Outstanding Stipulations\n"
        f"{stips}\n"
    )
