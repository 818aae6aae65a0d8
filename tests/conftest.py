"""Pytest fixtures for testing"""

import pytest
from datetime import datetime, timedelta, timezone
from typing import Generator
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from catalog_financing.api.main import create_app
from catalog_financing.api.dependencies import get_reference_cache
from catalog_financing.infrastructure.cache import TTLCache
from catalog_financing.infrastructure.database.models import (
    Base,
    Categoria,
    ComboRow,
    Marca,
    PlanFinanciacion,
    Producto,
    ProductoPlan,
    ProductoPlanDefault,
)
from catalog_financing.infrastructure.database.session import get_db
from catalog_financing.domain.models import FinancingPlan


# Test database
TEST_DATABASE_URL = "sqlite:///./test.db"
engine = create_engine(TEST_DATABASE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db() -> Generator[Session, None, None]:
    """Create test database and session"""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db: Session) -> TestClient:
    """Create FastAPI test client with test database and a fresh reference cache"""
    app = create_app()
    cache = TTLCache(ttl_seconds=300, name="test")

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_reference_cache] = lambda: cache
    return TestClient(app)


@pytest.fixture
def catalog(db: Session) -> Session:
    """
    Seed a small catalog.

    Plans:
        1 Contado 15% OFF (1 cuota)
        2 3 cuotas, 10% recargo, no minimum
        3 12 cuotas, 30% recargo, no minimum
        4 6 cuotas sin interés, minimum 50000, 10% anticipo
        5 18 cuotas, inactive

    Items:
        producto 10 -> special plan 2 (and a default plan 3 that must be ignored)
        producto 11 -> default plans 1, 3, 4
        producto 12 -> no associations
        producto 13 -> inactive
        combo 20    -> default plan 2, currently valid
        combo 21    -> default plan 2, expired
    """
    now = datetime.now(timezone.utc)

    db.add_all([
        Categoria(id=1, descripcion="Electro"),
        Marca(id=1, descripcion="Philco"),
    ])
    db.add_all([
        PlanFinanciacion(id=1, nombre="Contado 15% OFF", cuotas=1, recargo_porcentual=0, recargo_fijo=0, activo=True),
        PlanFinanciacion(id=2, nombre="3 cuotas", cuotas=3, recargo_porcentual=10, recargo_fijo=0, monto_minimo=0, monto_maximo=0, activo=True),
        PlanFinanciacion(id=3, nombre="12 cuotas", cuotas=12, recargo_porcentual=30, recargo_fijo=0, activo=True),
        PlanFinanciacion(id=4, nombre="6 sin interés", cuotas=6, recargo_porcentual=0, recargo_fijo=0, monto_minimo=50000, anticipo_minimo=10, activo=True),
        PlanFinanciacion(id=5, nombre="18 cuotas", cuotas=18, recargo_porcentual=50, recargo_fijo=0, activo=False),
    ])
    db.add_all([
        Producto(id=10, descripcion="Heladera", precio=100000, fk_id_categoria=1, fk_id_marca=1, activo=True),
        Producto(id=11, descripcion="Lavarropas", precio=100000, fk_id_categoria=1, fk_id_marca=7, activo=True),
        Producto(id=12, descripcion="Ventilador", precio=40, activo=True),
        Producto(id=13, descripcion="Discontinuado", precio=5000, activo=False),
    ])
    db.add_all([
        ComboRow(id=20, nombre="Combo cocina", precio_combo=100000, precio_original=111000, descuento_porcentaje=10,
                 fecha_vigencia_inicio=now - timedelta(days=1), fecha_vigencia_fin=now + timedelta(days=30), activo=True),
        ComboRow(id=21, nombre="Combo verano", precio_combo=100000,
                 fecha_vigencia_inicio=now - timedelta(days=60), fecha_vigencia_fin=now - timedelta(days=30), activo=True),
    ])
    db.flush()
    db.add_all([
        ProductoPlan(fk_id_producto=10, fk_id_plan=2, activo=True),
        ProductoPlanDefault(fk_id_producto=10, fk_id_plan=3, activo=True),
        ProductoPlanDefault(fk_id_producto=11, fk_id_plan=1, activo=True),
        ProductoPlanDefault(fk_id_producto=11, fk_id_plan=3, activo=True),
        ProductoPlanDefault(fk_id_producto=11, fk_id_plan=4, activo=True),
        ProductoPlanDefault(fk_id_producto=11, fk_id_plan=5, activo=True),
        ProductoPlanDefault(fk_id_combo=20, fk_id_plan=2, activo=True),
        ProductoPlanDefault(fk_id_combo=21, fk_id_plan=2, activo=True),
    ])
    db.commit()
    return db


@pytest.fixture
def cash_plan() -> FinancingPlan:
    return FinancingPlan(id=1, cuotas=1, nombre="Contado 20% OFF")


@pytest.fixture
def three_installments() -> FinancingPlan:
    """3 cuotas with 10% surcharge and no amount band"""
    return FinancingPlan(id=2, cuotas=3, recargo_porcentual=10, recargo_fijo=0, monto_minimo=0, monto_maximo=0)


@pytest.fixture
def six_with_minimum() -> FinancingPlan:
    """6 interest-free cuotas for prices from 50000"""
    return FinancingPlan(id=4, cuotas=6, monto_minimo=50000, anticipo_minimo=10)
