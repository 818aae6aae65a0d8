"""Dependency injection for FastAPI endpoints"""

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from catalog_financing.config import settings
from catalog_financing.infrastructure.cache import TTLCache
from catalog_financing.infrastructure.database.repositories import CatalogRepository, ConfigRepository, PlanRepository
from catalog_financing.infrastructure.database.session import get_db

# Process-wide; holds categorias and marcas descriptions
reference_cache = TTLCache(settings.reference_cache_ttl_seconds, name="categorias_marcas")


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_reference_cache() -> TTLCache:
    """Provide the process-wide reference data cache"""
    return reference_cache


def get_plan_repository(db: Session = Depends(get_db)) -> PlanRepository:
    """Provide plan/association repository bound to the request session"""
    return PlanRepository(db)


def get_catalog_repository(
    db: Session = Depends(get_db),
    cache: TTLCache = Depends(get_reference_cache),
) -> CatalogRepository:
    """Provide product/combo repository bound to the request session"""
    return CatalogRepository(db, cache)


def get_config_repository(
    db: Session = Depends(get_db),
    plans: PlanRepository = Depends(get_plan_repository),
) -> ConfigRepository:
    """Provide storefront configuration repository"""
    return ConfigRepository(db, plans, settings.home_plan_fallback_id)
