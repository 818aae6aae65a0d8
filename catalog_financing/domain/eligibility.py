"""Selection-time plan eligibility and priority policy"""

from typing import List, Sequence

from catalog_financing.domain.models import FinancingPlan
from catalog_financing.domain.pricing import compute_quote

# monto_minimo below this (e.g. 0.01 placeholders) means "no minimum"
NO_MINIMUM_THRESHOLD = 1


def has_minimum(plan: FinancingPlan) -> bool:
    return bool(plan.monto_minimo) and plan.monto_minimo >= NO_MINIMUM_THRESHOLD


def is_eligible(price: float, plan: FinancingPlan) -> bool:
    """
    Amount gating used when choosing which plans to offer.

    - Contado (1 cuota) is always offered
    - Plans without a meaningful minimum are always offered
    - Plans with a minimum need price >= minimum and, if a maximum is set, price <= maximum
    """
    if plan.is_cash:
        return True
    if not has_minimum(plan):
        return True
    meets_minimum = price >= plan.monto_minimo
    meets_maximum = not plan.monto_maximo or price <= plan.monto_maximo
    return meets_minimum and meets_maximum


def select_eligible_plans(price: float, plans: Sequence[FinancingPlan]) -> List[FinancingPlan]:
    """
    Pick the plans to offer for a price, cheapest monthly installment first.

    A plan with an explicit minimum is a targeted offer: once the price qualifies for
    one, generic no-minimum plans are dropped and only the targeted plans plus the
    contado plan remain.

    Ties on installment amount are broken by plan id.
    """
    qualifying = [plan for plan in plans if plan.activo and is_eligible(price, plan)]

    with_minimum = [plan for plan in qualifying if not plan.is_cash and has_minimum(plan)]
    without_minimum = [plan for plan in qualifying if not plan.is_cash and not has_minimum(plan)]
    cash_plan = next((plan for plan in qualifying if plan.is_cash), None)

    if with_minimum and without_minimum:
        selected = with_minimum + [cash_plan] if cash_plan else with_minimum
    else:
        selected = qualifying

    return sorted(selected, key=lambda plan: (compute_quote(price, plan).cuota_mensual, plan.id))
