"""Pydantic schemas for API request/response validation"""

from pydantic import BaseModel, Field
from typing import List, Optional

from catalog_financing.domain.models import FinancingPlan, PlanOffer, PriceQuote
from catalog_financing.domain.rounding import format_currency


class PlanSchema(BaseModel):
    """Financing plan as exposed to the storefront"""

    id: int
    nombre: Optional[str] = None
    cuotas: int
    recargo_porcentual: float
    recargo_fijo: float
    monto_minimo: Optional[float] = None
    monto_maximo: Optional[float] = None
    sin_interes: bool
    contado: bool

    @classmethod
    def from_domain(cls, plan: FinancingPlan) -> "PlanSchema":
        return cls(
            id=plan.id,
            nombre=plan.nombre,
            cuotas=plan.cuotas,
            recargo_porcentual=plan.recargo_porcentual,
            recargo_fijo=plan.recargo_fijo,
            monto_minimo=plan.monto_minimo,
            monto_maximo=plan.monto_maximo,
            sin_interes=plan.interest_free,
            contado=plan.is_cash,
        )


class QuoteSchema(BaseModel):
    """Computed installment figures for one plan"""

    precio_original: float
    recargo_total: float
    precio_final: float
    cuotas: int
    recargo_porcentual: float
    cuota_mensual: float
    cuota_mensual_formateada: str
    precio_electro: float
    precio_final_electro: float
    cuota_mensual_electro: float
    cuota_mensual_electro_formateada: str

    @classmethod
    def from_domain(cls, quote: PriceQuote) -> "QuoteSchema":
        return cls(
            precio_original=quote.precio_original,
            recargo_total=quote.recargo_total,
            precio_final=quote.precio_final,
            cuotas=quote.cuotas,
            recargo_porcentual=quote.recargo_porcentual,
            cuota_mensual=quote.cuota_mensual,
            cuota_mensual_formateada=format_currency(quote.cuota_mensual),
            precio_electro=quote.precio_electro,
            precio_final_electro=quote.precio_final_electro,
            cuota_mensual_electro=quote.cuota_mensual_electro,
            cuota_mensual_electro_formateada=format_currency(quote.cuota_mensual_electro),
        )


class OfferSchema(BaseModel):
    """One renderable financing option"""

    plan: PlanSchema
    cotizacion: Optional[QuoteSchema] = None
    anticipo: float
    anticipo_formateado: Optional[str] = None
    descuento_contado: Optional[float] = None
    precio_contado: Optional[float] = None
    precio_contado_formateado: Optional[str] = None

    @classmethod
    def from_domain(cls, offer: PlanOffer) -> "OfferSchema":
        return cls(
            plan=PlanSchema.from_domain(offer.plan),
            cotizacion=QuoteSchema.from_domain(offer.quote) if offer.quote else None,
            anticipo=offer.anticipo,
            anticipo_formateado=format_currency(offer.anticipo) if offer.anticipo > 0 else None,
            descuento_contado=offer.descuento_contado,
            precio_contado=offer.precio_contado,
            precio_contado_formateado=(
                format_currency(offer.precio_contado) if offer.precio_contado is not None else None
            ),
        )


class ItemSchema(BaseModel):
    """Sellable item summary"""

    id: int
    tipo: str  # producto | combo
    descripcion: str
    precio: float
    precio_formateado: str
    precio_original: Optional[float] = None  # combos only, price of the bundled products
    categoria: Optional[str] = None
    marca: Optional[str] = None


class ItemOffersResponse(BaseModel):
    """Response for GET /v1/productos/{id}/planes and /v1/combos/{id}/planes"""

    item: ItemSchema
    tipo_planes: str  # especiales | default | ninguno
    ofertas: List[OfferSchema]


class QuoteRequest(BaseModel):
    """Request body for POST /v1/cotizacion"""

    precio: float = Field(..., ge=0, description="Base price to finance")
    plan_id: int = Field(..., gt=0, description="Financing plan identifier")


class QuoteResponse(BaseModel):
    """Response for POST /v1/cotizacion (contado plans also carry the cash discount)"""

    plan: PlanSchema
    cotizacion: QuoteSchema
    anticipo: float
    descuento_contado: Optional[float] = None
    precio_contado: Optional[float] = None
    precio_contado_formateado: Optional[str] = None


class HomePlanResponse(BaseModel):
    """Response for GET /v1/home/plan"""

    plan: PlanSchema
