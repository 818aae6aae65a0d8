"""Assembly of renderable financing offers for an item price"""

from typing import List, Sequence

from catalog_financing.domain.eligibility import select_eligible_plans
from catalog_financing.domain.models import FinancingPlan, PlanOffer
from catalog_financing.domain.pricing import (
    DEFAULT_CASH_DISCOUNT,
    cash_discount_percentage,
    cash_price,
    down_payment,
    quote,
)


def build_offers(
    price: float,
    plans: Sequence[FinancingPlan],
    default_cash_discount: float = DEFAULT_CASH_DISCOUNT,
) -> List[PlanOffer]:
    """
    Turn resolved candidate plans into the ordered offers a view renders.

    Contado plans become a discounted cash price instead of an installment quote.
    Financed plans whose raw amount gate rejects the price are skipped.
    """
    offers = []
    for plan in select_eligible_plans(price, plans):
        if plan.is_cash:
            offers.append(
                PlanOffer(
                    plan=plan,
                    quote=None,
                    anticipo=0.0,
                    descuento_contado=cash_discount_percentage(plan, default_cash_discount),
                    precio_contado=cash_price(price, plan, default_cash_discount),
                )
            )
            continue

        plan_quote = quote(price, plan)
        if plan_quote is None:
            continue

        offers.append(PlanOffer(plan=plan, quote=plan_quote, anticipo=down_payment(price, plan)))

    return offers
