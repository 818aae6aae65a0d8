"""SQLAlchemy ORM read models mapping the catalog store tables"""

from sqlalchemy import Column, Integer, Boolean, Numeric, DateTime, ForeignKey, Text
from sqlalchemy.orm import declarative_base
from sqlalchemy.sql import func

Base = declarative_base()

# Amounts come back as float; the pricing core works in floats
Amount = Numeric(14, 2, asdecimal=False)


class Categoria(Base):
    """Product category"""

    __tablename__ = "categorias"

    id = Column(Integer, primary_key=True)
    descripcion = Column(Text, nullable=True)


class Marca(Base):
    """Product brand"""

    __tablename__ = "marcas"

    id = Column(Integer, primary_key=True)
    descripcion = Column(Text, nullable=True)


class Producto(Base):
    """Catalog product"""

    __tablename__ = "productos"

    id = Column(Integer, primary_key=True)
    descripcion = Column(Text, nullable=True)
    precio = Column(Amount, nullable=True)
    fk_id_categoria = Column(Integer, ForeignKey("categorias.id"), nullable=True)
    fk_id_marca = Column(Integer, ForeignKey("marcas.id"), nullable=True)
    destacado = Column(Boolean, nullable=False, default=False)
    activo = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())


class ComboRow(Base):
    """Product bundle with its own price and validity window"""

    __tablename__ = "combos"

    id = Column(Integer, primary_key=True)
    nombre = Column(Text, nullable=True)
    precio_combo = Column(Amount, nullable=True)
    precio_original = Column(Amount, nullable=True)
    descuento_porcentaje = Column(Amount, nullable=True)
    fecha_vigencia_inicio = Column(DateTime(timezone=True), nullable=True)
    fecha_vigencia_fin = Column(DateTime(timezone=True), nullable=True)
    activo = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())


class PlanFinanciacion(Base):
    """Financing plan definition"""

    __tablename__ = "planes_financiacion"

    id = Column(Integer, primary_key=True)
    nombre = Column(Text, nullable=True)
    cuotas = Column(Integer, nullable=False)
    recargo_porcentual = Column(Amount, nullable=True)
    recargo_fijo = Column(Amount, nullable=True)
    monto_minimo = Column(Amount, nullable=True)
    monto_maximo = Column(Amount, nullable=True)
    anticipo_minimo = Column(Amount, nullable=True)
    anticipo_minimo_fijo = Column(Amount, nullable=True)
    descuento_contado = Column(Amount, nullable=True)
    activo = Column(Boolean, nullable=False, default=True)


class ProductoPlan(Base):
    """Special (per-product) plan association"""

    __tablename__ = "producto_planes"

    id = Column(Integer, primary_key=True)
    fk_id_producto = Column(Integer, ForeignKey("productos.id", ondelete="CASCADE"), nullable=False, index=True)
    fk_id_plan = Column(Integer, ForeignKey("planes_financiacion.id", ondelete="CASCADE"), nullable=False)
    activo = Column(Boolean, nullable=False, default=True)


class ProductoPlanDefault(Base):
    """Default plan association for a product or a combo"""

    __tablename__ = "producto_planes_default"

    id = Column(Integer, primary_key=True)
    fk_id_producto = Column(Integer, ForeignKey("productos.id", ondelete="CASCADE"), nullable=True, index=True)
    fk_id_combo = Column(Integer, ForeignKey("combos.id", ondelete="CASCADE"), nullable=True, index=True)
    fk_id_plan = Column(Integer, ForeignKey("planes_financiacion.id", ondelete="CASCADE"), nullable=True)
    activo = Column(Boolean, nullable=False, default=True)


class ConfiguracionWeb(Base):
    """Storefront display configuration (only the financing-related columns)"""

    __tablename__ = "configuracion_web"

    id = Column(Integer, primary_key=True)
    home_display_plan_id = Column(Integer, ForeignKey("planes_financiacion.id"), nullable=True)
