"""POST /v1/cotizacion - Quote a price under a single plan"""

from fastapi import APIRouter, Depends, HTTPException

from catalog_financing.api.v1.schemas import PlanSchema, QuoteRequest, QuoteResponse, QuoteSchema
from catalog_financing.api.dependencies import get_plan_repository
from catalog_financing.config import settings
from catalog_financing.infrastructure.database.repositories import PlanRepository
from catalog_financing.infrastructure.observability.metrics import quote_counter
from catalog_financing.domain.exceptions import PlanNotFoundError
from catalog_financing.domain.pricing import cash_discount_percentage, cash_price, down_payment, quote
from catalog_financing.domain.rounding import format_currency

router = APIRouter()


@router.post("/cotizacion", response_model=QuoteResponse)
def create_quote(request_body: QuoteRequest, plans: PlanRepository = Depends(get_plan_repository)):
    """
    Compute installments, electro installments and down payment for one plan.

    Contado plans also return the discounted cash price, the same figure the
    catalog offers show for them.

    Returns:
        404 if the plan is unknown or inactive, 422 if the price is outside its amount band
    """
    try:
        plan = plans.get_plan(request_body.plan_id)
    except PlanNotFoundError as e:
        quote_counter.labels(outcome="plan_not_found").inc()
        raise HTTPException(status_code=404, detail=str(e))

    plan_quote = quote(request_body.precio, plan)
    if plan_quote is None:
        quote_counter.labels(outcome="out_of_band").inc()
        raise HTTPException(status_code=422, detail="Price outside the plan's amount range")

    quote_counter.labels(outcome="quoted").inc()

    cash = {}
    if plan.is_cash:
        precio_contado = cash_price(request_body.precio, plan, settings.default_cash_discount)
        cash = {
            "descuento_contado": cash_discount_percentage(plan, settings.default_cash_discount),
            "precio_contado": precio_contado,
            "precio_contado_formateado": format_currency(precio_contado),
        }

    return QuoteResponse(
        plan=PlanSchema.from_domain(plan),
        cotizacion=QuoteSchema.from_domain(plan_quote),
        anticipo=down_payment(request_body.precio, plan),
        **cash,
    )
