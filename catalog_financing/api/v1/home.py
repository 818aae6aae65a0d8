"""GET /v1/home/plan - Plan highlighted on the storefront home"""

from fastapi import APIRouter, Depends, HTTPException

from catalog_financing.api.v1.schemas import HomePlanResponse, PlanSchema
from catalog_financing.api.dependencies import get_config_repository
from catalog_financing.infrastructure.database.repositories import ConfigRepository

router = APIRouter()


@router.get("/home/plan", response_model=HomePlanResponse)
def get_home_plan(config: ConfigRepository = Depends(get_config_repository)):
    """
    Retrieve the plan the home page advertises.

    Uses configuracion_web.home_display_plan_id, or the fallback plan when unset.
    """
    plan = config.get_home_plan()
    if plan is None:
        raise HTTPException(status_code=404, detail="Home plan not configured")

    return HomePlanResponse(plan=PlanSchema.from_domain(plan))
