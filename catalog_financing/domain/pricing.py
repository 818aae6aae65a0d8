"""Installment, surcharge and down-payment calculator"""

import re
from typing import Optional

from catalog_financing.domain.models import FinancingPlan, PriceQuote
from catalog_financing.domain.rounding import round_down_payment, round_installment

ELECTRO_MARKUP = 1.10
DEFAULT_CASH_DISCOUNT = 20.0

_PERCENT_TOKEN = re.compile(r"(\d+)%", re.IGNORECASE)


def electro_price(price: float) -> float:
    """P.ELECTRO basis: price plus a fixed 10%"""
    return price * ELECTRO_MARKUP


def surcharge(price: float, plan: FinancingPlan) -> float:
    return price * (plan.recargo_porcentual or 0) / 100 + (plan.recargo_fijo or 0)


def in_amount_band(price: float, plan: FinancingPlan) -> bool:
    """Raw min/max gate, without the cash or no-minimum exemptions"""
    if price < (plan.monto_minimo or 0):
        return False
    if plan.monto_maximo and price > plan.monto_maximo:
        return False
    return True


def compute_quote(price: float, plan: FinancingPlan) -> PriceQuote:
    """
    Run the surcharge/installment pipeline for a plan without gating on amounts.

    Used directly to order plans; callers that display a quote go through quote().
    """
    recargo = surcharge(price, plan)
    precio_final = price + recargo

    precio_electro = electro_price(price)
    precio_final_electro = precio_electro + surcharge(precio_electro, plan)

    return PriceQuote(
        precio_original=price,
        recargo_total=recargo,
        precio_final=precio_final,
        cuota_mensual=round_installment(precio_final / plan.cuotas),
        cuotas=plan.cuotas,
        recargo_porcentual=plan.recargo_porcentual,
        precio_electro=precio_electro,
        precio_final_electro=precio_final_electro,
        cuota_mensual_electro=round_installment(precio_final_electro / plan.cuotas),
    )


def quote(price: float, plan: FinancingPlan) -> Optional[PriceQuote]:
    """
    Compute the PriceQuote for a price under a plan.

    Returns None when the price falls outside the plan's [monto_minimo, monto_maximo]
    band; callers skip the plan instead of handling an error.

    Example:
        price 100000, 3 cuotas, 10% recargo
        recargo 10000, final 110000, cuota 36666.67 -> 36700
        electro 110000 -> final 121000, cuota 40333.33 -> 40300
    """
    if not in_amount_band(price, plan):
        return None
    return compute_quote(price, plan)


def down_payment(price: float, plan: FinancingPlan) -> float:
    """
    Minimum upfront payment required by a plan.

    A fixed anticipo wins over the percentage one. Amounts from 50 up are rounded
    up to the next multiple of 50 so the minimum is never understated.
    """
    anticipo = 0.0
    if plan.anticipo_minimo_fijo and plan.anticipo_minimo_fijo > 0:
        anticipo = plan.anticipo_minimo_fijo
    elif plan.anticipo_minimo and plan.anticipo_minimo > 0:
        anticipo = price * plan.anticipo_minimo / 100
    return round_down_payment(anticipo)


def cash_discount_percentage(plan: FinancingPlan, default: float = DEFAULT_CASH_DISCOUNT) -> float:
    """
    Discount advertised by a contado plan.

    The numeric descuento_contado column wins. Older rows only carry the discount in
    the display name ("Contado 20%off"), so the first integer followed by % is used.
    """
    if plan.descuento_contado is not None:
        return float(plan.descuento_contado)
    if plan.nombre:
        match = _PERCENT_TOKEN.search(plan.nombre)
        if match:
            return float(int(match.group(1)))
    return default


def cash_price(price: float, plan: FinancingPlan, default_discount: float = DEFAULT_CASH_DISCOUNT) -> float:
    return price * (1 - cash_discount_percentage(plan, default_discount) / 100)
