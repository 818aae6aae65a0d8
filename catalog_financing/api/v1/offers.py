"""GET /v1/productos/{id}/planes and /v1/combos/{id}/planes - financing offers for an item"""

import time
import logging
from fastapi import APIRouter, Depends, HTTPException, Request

from catalog_financing.api.v1.schemas import ItemOffersResponse, ItemSchema, OfferSchema
from catalog_financing.api.dependencies import get_catalog_repository, get_plan_repository, get_request_id
from catalog_financing.config import settings
from catalog_financing.infrastructure.database.repositories import CatalogRepository, PlanRepository
from catalog_financing.domain.exceptions import ItemNotFoundError
from catalog_financing.domain.models import SellableItem
from catalog_financing.domain.offers import build_offers
from catalog_financing.domain.resolution import parse_item_id, resolve_plans_for_item
from catalog_financing.domain.rounding import format_currency
from catalog_financing.infrastructure.observability.metrics import record_resolution
from catalog_financing.infrastructure.observability.logging import log_offers

router = APIRouter()


def _item_offers(
    kind: str,
    raw_item_id: str,
    request: Request,
    catalog: CatalogRepository,
    plans: PlanRepository,
) -> ItemOffersResponse:
    """
    Build the financing offers shown next to a product or combo.

    Flow:
    1. Load the item (404 when missing, inactive or out of its validity window)
    2. Resolve candidate plans: especiales > default > ninguno
    3. Filter by eligibility, collapse priorities and order by installment
    4. Quote each surviving plan
    """
    start_time = time.time()
    request_id = get_request_id(request)

    item_id = parse_item_id(raw_item_id)
    if item_id is None:
        raise HTTPException(status_code=400, detail="Invalid item ID format")

    try:
        # 1. Load item
        item: SellableItem = catalog.get_combo(item_id) if kind == "combo" else catalog.get_product(item_id)

        # 2. Resolve candidate plans
        resolution = resolve_plans_for_item(item.id, plans, kind=kind)

        # 3-4. Eligibility, ordering and quotes
        offers = build_offers(item.precio, resolution.plans, settings.default_cash_discount)

    except ItemNotFoundError as e:
        logging.info(f"Item not found: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=404, detail=str(e))

    except Exception as e:
        logging.error(f"Unexpected error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")

    # Record metrics and logs
    duration_ms = (time.time() - start_time) * 1000
    record_resolution(kind, resolution, len(offers))
    log_offers(request_id, kind, item.id, resolution.tier, len(resolution.plans), len(offers), duration_ms)

    return ItemOffersResponse(
        item=ItemSchema(
            id=item.id,
            tipo=item.kind,
            descripcion=item.descripcion,
            precio=item.precio,
            precio_original=getattr(item, "precio_original", None),
            precio_formateado=format_currency(item.precio),
            categoria=getattr(item, "categoria", None),
            marca=getattr(item, "marca", None),
        ),
        tipo_planes=resolution.tier,
        ofertas=[OfferSchema.from_domain(offer) for offer in offers],
    )


@router.get("/productos/{item_id}/planes", response_model=ItemOffersResponse)
def get_product_offers(
    item_id: str,
    request: Request,
    catalog: CatalogRepository = Depends(get_catalog_repository),
    plans: PlanRepository = Depends(get_plan_repository),
):
    """Financing offers for a product"""
    return _item_offers("producto", item_id, request, catalog, plans)


@router.get("/combos/{item_id}/planes", response_model=ItemOffersResponse)
def get_combo_offers(
    item_id: str,
    request: Request,
    catalog: CatalogRepository = Depends(get_catalog_repository),
    plans: PlanRepository = Depends(get_plan_repository),
):
    """Financing offers for a currently valid combo"""
    return _item_offers("combo", item_id, request, catalog, plans)
