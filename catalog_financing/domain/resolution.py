"""Plan resolution policy: special associations > default associations > none"""

import logging
from typing import List, Optional, Protocol, Sequence, Union

from catalog_financing.domain.exceptions import AssociationLookupError
from catalog_financing.domain.models import FinancingPlan, PlanResolution

logger = logging.getLogger(__name__)

TIER_SPECIAL = "especiales"
TIER_DEFAULT = "default"
TIER_NONE = "ninguno"


class PlanLookup(Protocol):
    """Read access to plan associations and active plans"""

    def special_plan_ids(self, kind: str, item_id: int) -> List[int]:
        ...

    def default_plan_ids(self, kind: str, item_id: int) -> List[int]:
        ...

    def active_plans(self, plan_ids: Sequence[int]) -> List[FinancingPlan]:
        ...


def parse_item_id(item_id: Union[int, str, None]) -> Optional[int]:
    """Return a positive integer id, or None for anything malformed"""
    if isinstance(item_id, bool):
        return None
    if isinstance(item_id, int):
        return item_id if item_id > 0 else None
    if isinstance(item_id, str) and item_id.strip().isdigit():
        parsed = int(item_id.strip())
        return parsed if parsed > 0 else None
    return None


def _plans_for_tier(lookup: PlanLookup, tier: str, kind: str, item_id: int) -> List[FinancingPlan]:
    try:
        if tier == TIER_SPECIAL:
            plan_ids = lookup.special_plan_ids(kind, item_id)
        else:
            plan_ids = lookup.default_plan_ids(kind, item_id)

        if not plan_ids:
            return []

        return [plan for plan in lookup.active_plans(plan_ids) if plan.activo]

    except AssociationLookupError as e:
        logger.warning(
            f"Association lookup failed, skipping tier: {e}",
            extra={"tier": tier, "item_kind": kind, "item_id": item_id},
        )
        return []


def resolve_plans_for_item(
    item_id: Union[int, str, None],
    lookup: PlanLookup,
    kind: str = "producto",
) -> PlanResolution:
    """
    Determine the authoritative candidate plans for a product or combo.

    Priority:
    1. Special (per-item) associations, if any resolve to active plans
    2. Default (catalog-wide) associations
    3. Nothing: items without associations show no financing

    Tiers never merge. A tier whose store is unavailable counts as empty, so this
    always returns a (possibly empty) resolution.
    """
    parsed_id = parse_item_id(item_id)
    if parsed_id is None:
        return PlanResolution(plans=(), tier=TIER_NONE)

    for tier in (TIER_SPECIAL, TIER_DEFAULT):
        plans = _plans_for_tier(lookup, tier, kind, parsed_id)
        if plans:
            return PlanResolution(plans=tuple(plans), tier=tier)

    return PlanResolution(plans=(), tier=TIER_NONE)
