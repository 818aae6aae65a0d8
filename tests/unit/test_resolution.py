"""Unit tests for plan resolution tiers"""

from typing import Dict, List, Sequence
from unittest.mock import MagicMock

import pytest
from sqlalchemy.exc import OperationalError

from catalog_financing.domain.exceptions import AssociationLookupError
from catalog_financing.domain.models import FinancingPlan
from catalog_financing.domain.resolution import parse_item_id, resolve_plans_for_item
from catalog_financing.infrastructure.cache import TTLCache
from catalog_financing.infrastructure.database.repositories import CatalogRepository, PlanRepository


PLANS = {
    1: FinancingPlan(id=1, cuotas=1),
    2: FinancingPlan(id=2, cuotas=3, recargo_porcentual=10),
    3: FinancingPlan(id=3, cuotas=12, recargo_porcentual=30),
    4: FinancingPlan(id=4, cuotas=18, activo=False),
}


class FakeLookup:
    """In-memory association store"""

    def __init__(
        self,
        special: Dict[int, List[int]] | None = None,
        default: Dict[int, List[int]] | None = None,
        fail_special: bool = False,
        fail_default: bool = False,
        fail_plans: Sequence[int] = (),
    ):
        self.special = special or {}
        self.default = default or {}
        self.fail_special = fail_special
        self.fail_default = fail_default
        self.fail_plans = set(fail_plans)  # plan ids whose read fails
        self.calls: List[str] = []

    def special_plan_ids(self, kind: str, item_id: int) -> List[int]:
        self.calls.append("special")
        if self.fail_special:
            raise AssociationLookupError("producto_planes does not exist")
        return self.special.get(item_id, [])

    def default_plan_ids(self, kind: str, item_id: int) -> List[int]:
        self.calls.append("default")
        if self.fail_default:
            raise AssociationLookupError("producto_planes_default does not exist")
        return self.default.get(item_id, [])

    def active_plans(self, plan_ids: Sequence[int]) -> List[FinancingPlan]:
        if self.fail_plans.intersection(plan_ids):
            raise AssociationLookupError("planes_financiacion is unavailable")
        return [PLANS[plan_id] for plan_id in plan_ids if plan_id in PLANS and PLANS[plan_id].activo]


def test_special_associations_win_without_merging():
    lookup = FakeLookup(special={10: [2]}, default={10: [1, 3]})
    resolution = resolve_plans_for_item(10, lookup)

    assert resolution.tier == "especiales"
    assert [plan.id for plan in resolution.plans] == [2]
    assert lookup.calls == ["special"]


def test_default_tier_when_no_special():
    lookup = FakeLookup(default={11: [1, 3]})
    resolution = resolve_plans_for_item(11, lookup)

    assert resolution.tier == "default"
    assert [plan.id for plan in resolution.plans] == [1, 3]


def test_special_with_only_inactive_plans_falls_through():
    lookup = FakeLookup(special={10: [4]}, default={10: [3]})
    resolution = resolve_plans_for_item(10, lookup)

    assert resolution.tier == "default"
    assert [plan.id for plan in resolution.plans] == [3]


def test_no_associations_resolves_to_nothing():
    resolution = resolve_plans_for_item(12, FakeLookup())

    assert resolution.tier == "ninguno"
    assert resolution.plans == ()


def test_unavailable_special_store_falls_back_to_default():
    lookup = FakeLookup(default={11: [2]}, fail_special=True)
    resolution = resolve_plans_for_item(11, lookup)

    assert resolution.tier == "default"
    assert [plan.id for plan in resolution.plans] == [2]


def test_all_stores_unavailable_never_raises():
    lookup = FakeLookup(fail_special=True, fail_default=True)
    resolution = resolve_plans_for_item(11, lookup)

    assert resolution.tier == "ninguno"
    assert resolution.plans == ()


def test_unreadable_special_plans_fall_back_to_default():
    """Special ids resolve, but reading their plans fails"""
    lookup = FakeLookup(special={10: [2]}, default={10: [3]}, fail_plans=[2])
    resolution = resolve_plans_for_item(10, lookup)

    assert resolution.tier == "default"
    assert [plan.id for plan in resolution.plans] == [3]


def test_unreadable_plans_resolve_to_nothing():
    lookup = FakeLookup(special={10: [2]}, default={10: [3]}, fail_plans=[2, 3])
    resolution = resolve_plans_for_item(10, lookup)

    assert resolution.tier == "ninguno"
    assert resolution.plans == ()
    assert lookup.calls == ["special", "default"]


@pytest.mark.parametrize("item_id", ["abc", "", None, "12abc", -3, 0, "0"])
def test_malformed_item_id_resolves_to_nothing(item_id):
    lookup = FakeLookup(special={12: [2]})
    resolution = resolve_plans_for_item(item_id, lookup)

    assert resolution.tier == "ninguno"
    assert lookup.calls == []


def test_string_item_id_is_parsed():
    assert parse_item_id("11") == 11
    assert parse_item_id(" 11 ") == 11
    assert resolve_plans_for_item("11", FakeLookup(default={11: [3]})).tier == "default"


def test_repository_wraps_storage_errors():
    """A missing association table surfaces as AssociationLookupError"""
    session = MagicMock()
    session.query.side_effect = OperationalError("SELECT", {}, Exception("no such table: producto_planes"))
    repo = PlanRepository(session)

    with pytest.raises(AssociationLookupError):
        repo.special_plan_ids("producto", 10)

    session.rollback.assert_called_once()


def test_repository_wraps_plan_read_errors():
    session = MagicMock()
    session.query.side_effect = OperationalError("SELECT", {}, Exception("no such table: planes_financiacion"))
    repo = PlanRepository(session)

    with pytest.raises(AssociationLookupError):
        repo.active_plans([2])

    session.rollback.assert_called_once()


def test_repository_builds_combo_from_precio_combo():
    """Combos carry their own price columns; there is no plain precio"""
    row = MagicMock(
        id=20,
        nombre="Combo cocina",
        precio_combo=100000,
        precio_original=111000,
        descuento_porcentaje=10,
        fecha_vigencia_inicio=None,
        fecha_vigencia_fin=None,
    )
    session = MagicMock()
    session.query.return_value.filter.return_value.filter.return_value.first.return_value = row
    repo = CatalogRepository(session, TTLCache(ttl_seconds=60, name="test"))

    combo = repo.get_combo(20)

    assert combo.precio == 100000
    assert combo.precio_original == 111000
    assert combo.descuento_porcentaje == 10


def test_repository_has_no_special_associations_for_combos():
    session = MagicMock()
    repo = PlanRepository(session)

    assert repo.special_plan_ids("combo", 20) == []
    session.query.assert_not_called()
