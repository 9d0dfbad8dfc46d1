def net_operating_income(revenue: float, cost_of_goods_sold: float, operating_expenses: float) -> float:
    return revenue - cost_of_goods_sold - operating_expenses


def debt_service_coverage(noi: float, debt_service: float) -> float:
    # No proposed debt means nothing to cover; report 0 rather than inf
    if debt_service > 0:
        return noi / debt_service
    return 0.0
