"""Data access layer for catalog items, financing plans and plan associations"""

import logging
from datetime import datetime
from typing import Dict, List, Optional, Sequence
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from catalog_financing.infrastructure.cache import TTLCache
from catalog_financing.infrastructure.database.models import (
    Categoria,
    ComboRow,
    ConfiguracionWeb,
    Marca,
    PlanFinanciacion,
    Producto,
    ProductoPlan,
    ProductoPlanDefault,
)
from catalog_financing.infrastructure.observability.metrics import association_lookup_failures_counter
from catalog_financing.domain.exceptions import AssociationLookupError, ItemNotFoundError, PlanNotFoundError
from catalog_financing.domain.models import Combo, FinancingPlan, Product
from catalog_financing.utils.date_utils import is_within_validity

logger = logging.getLogger(__name__)


def _optional_float(value) -> Optional[float]:
    return float(value) if value is not None else None


def to_financing_plan(row: PlanFinanciacion) -> FinancingPlan:
    """Map a planes_financiacion row to the domain plan, treating null surcharges as zero"""
    return FinancingPlan(
        id=row.id,
        cuotas=row.cuotas,
        recargo_porcentual=float(row.recargo_porcentual or 0),
        recargo_fijo=float(row.recargo_fijo or 0),
        monto_minimo=_optional_float(row.monto_minimo),
        monto_maximo=_optional_float(row.monto_maximo),
        anticipo_minimo=_optional_float(row.anticipo_minimo),
        anticipo_minimo_fijo=_optional_float(row.anticipo_minimo_fijo),
        nombre=row.nombre,
        descuento_contado=_optional_float(row.descuento_contado),
        activo=bool(row.activo),
    )


class PlanRepository:
    """Repository for financing plans and their item associations"""

    def __init__(self, db: Session):
        self.db = db

    def _association_ids(self, model, item_column, item_id: int, tier: str) -> List[int]:
        try:
            rows = (
                self.db.query(model.fk_id_plan)
                .filter(item_column == item_id)
                .filter(model.fk_id_plan.isnot(None))
                .filter(model.activo.is_(True))
                .all()
            )
        except SQLAlchemyError as e:
            self.db.rollback()  # Leave the session usable for the next tier
            association_lookup_failures_counter.labels(tier=tier).inc()
            raise AssociationLookupError(f"Cannot read {model.__tablename__}: {e}") from e

        return list(dict.fromkeys(row.fk_id_plan for row in rows))

    def special_plan_ids(self, kind: str, item_id: int) -> List[int]:
        """Per-product overrides (combos have no special associations)"""
        if kind != "producto":
            return []
        return self._association_ids(ProductoPlan, ProductoPlan.fk_id_producto, item_id, "especiales")

    def default_plan_ids(self, kind: str, item_id: int) -> List[int]:
        """Catalog-wide associations, keyed by product or by combo"""
        column = ProductoPlanDefault.fk_id_combo if kind == "combo" else ProductoPlanDefault.fk_id_producto
        return self._association_ids(ProductoPlanDefault, column, item_id, "default")

    def active_plans(self, plan_ids: Sequence[int]) -> List[FinancingPlan]:
        """Fetch active plans by id, ordered by number of installments"""
        if not plan_ids:
            return []
        try:
            rows = (
                self.db.query(PlanFinanciacion)
                .filter(PlanFinanciacion.id.in_(list(plan_ids)))
                .filter(PlanFinanciacion.activo.is_(True))
                .order_by(PlanFinanciacion.cuotas.asc(), PlanFinanciacion.id.asc())
                .all()
            )
        except SQLAlchemyError as e:
            self.db.rollback()
            association_lookup_failures_counter.labels(tier="planes").inc()
            raise AssociationLookupError(f"Cannot read planes_financiacion: {e}") from e

        return [to_financing_plan(row) for row in rows]

    def get_plan(self, plan_id: int) -> FinancingPlan:
        """
        Fetch a single active plan.

        Raises:
            PlanNotFoundError: Plan missing or inactive
        """
        row = (
            self.db.query(PlanFinanciacion)
            .filter(PlanFinanciacion.id == plan_id)
            .filter(PlanFinanciacion.activo.is_(True))
            .first()
        )
        if row is None:
            raise PlanNotFoundError(f"Plan {plan_id} not found or inactive")
        return to_financing_plan(row)


class CatalogRepository:
    """Repository for sellable items (products and combos)"""

    def __init__(self, db: Session, reference_cache: TTLCache):
        self.db = db
        self.reference_cache = reference_cache

    def _descriptions(self, model) -> Dict[int, str]:
        return {row.id: row.descripcion for row in self.db.query(model).all()}

    def category_names(self) -> Dict[int, str]:
        return self.reference_cache.get_or_load("categorias", lambda: self._descriptions(Categoria))

    def brand_names(self) -> Dict[int, str]:
        return self.reference_cache.get_or_load("marcas", lambda: self._descriptions(Marca))

    def get_product(self, product_id: int) -> Product:
        """
        Fetch an active product with its category and brand names.

        Raises:
            ItemNotFoundError: Product missing or inactive
        """
        row = (
            self.db.query(Producto)
            .filter(Producto.id == product_id)
            .filter(Producto.activo.is_(True))
            .first()
        )
        if row is None:
            raise ItemNotFoundError(f"Producto {product_id} not found")

        category_id = row.fk_id_categoria or 1
        brand_id = row.fk_id_marca or 1

        return Product(
            id=row.id,
            descripcion=row.descripcion or "",
            precio=float(row.precio or 0),
            categoria=self.category_names().get(category_id) or f"Categoría {category_id}",
            marca=self.brand_names().get(brand_id) or f"Marca {brand_id}",
        )

    def get_combo(self, combo_id: int, now: Optional[datetime] = None) -> Combo:
        """
        Fetch an active combo that is inside its validity window.

        Raises:
            ItemNotFoundError: Combo missing, inactive, expired or not yet started
        """
        row = (
            self.db.query(ComboRow)
            .filter(ComboRow.id == combo_id)
            .filter(ComboRow.activo.is_(True))
            .first()
        )
        if row is None:
            raise ItemNotFoundError(f"Combo {combo_id} not found")

        if not is_within_validity(row.fecha_vigencia_inicio, row.fecha_vigencia_fin, now):
            logger.info("Combo outside validity window", extra={"combo_id": combo_id})
            raise ItemNotFoundError(f"Combo {combo_id} is not currently valid")

        return Combo(
            id=row.id,
            descripcion=row.nombre or "",
            precio=float(row.precio_combo or 0),
            precio_original=_optional_float(row.precio_original),
            descuento_porcentaje=float(row.descuento_porcentaje or 0),
            fecha_vigencia_inicio=row.fecha_vigencia_inicio,
            fecha_vigencia_fin=row.fecha_vigencia_fin,
        )


class ConfigRepository:
    """Repository for storefront configuration"""

    def __init__(self, db: Session, plans: PlanRepository, fallback_plan_id: int):
        self.db = db
        self.plans = plans
        self.fallback_plan_id = fallback_plan_id

    def get_home_plan(self) -> Optional[FinancingPlan]:
        """Plan highlighted on the home page; falls back to the configured default plan"""
        config = self.db.query(ConfiguracionWeb).order_by(ConfiguracionWeb.id.asc()).first()
        plan_id = config.home_display_plan_id if config and config.home_display_plan_id else self.fallback_plan_id

        try:
            return self.plans.get_plan(plan_id)
        except PlanNotFoundError:
            logger.warning("Home display plan unavailable", extra={"plan_id": plan_id})
            return None
