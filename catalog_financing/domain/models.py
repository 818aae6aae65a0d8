"""Domain models - pure Python dataclasses representing catalog pricing entities"""

from dataclasses import dataclass
from datetime import datetime
from typing import ClassVar, Optional, Tuple, Union


@dataclass(frozen=True)
class FinancingPlan:
    """Installment plan as stored in planes_financiacion"""

    id: int
    cuotas: int  # 1 = contado
    recargo_porcentual: float = 0.0
    recargo_fijo: float = 0.0
    monto_minimo: Optional[float] = None  # None or < 1 = no minimum
    monto_maximo: Optional[float] = None  # None or 0 = no maximum
    anticipo_minimo: Optional[float] = None  # percentage of price
    anticipo_minimo_fijo: Optional[float] = None  # wins over anticipo_minimo when > 0
    nombre: Optional[str] = None
    descuento_contado: Optional[float] = None
    activo: bool = True

    @property
    def is_cash(self) -> bool:
        return self.cuotas == 1

    @property
    def interest_free(self) -> bool:
        return not self.recargo_porcentual and not self.recargo_fijo


@dataclass(frozen=True)
class Product:
    """Catalog product as consumed by the pricing core"""

    kind: ClassVar[str] = "producto"

    id: int
    descripcion: str
    precio: float
    categoria: Optional[str] = None
    marca: Optional[str] = None


@dataclass(frozen=True)
class Combo:
    """Bundle of products sold at a single price during a validity window"""

    kind: ClassVar[str] = "combo"

    id: int
    descripcion: str
    precio: float  # precio_combo
    precio_original: Optional[float] = None  # sum of the bundled products
    descuento_porcentaje: float = 0.0
    fecha_vigencia_inicio: Optional[datetime] = None
    fecha_vigencia_fin: Optional[datetime] = None


SellableItem = Union[Product, Combo]


@dataclass(frozen=True)
class PriceQuote:
    """Computed pricing for one (price, plan) pair"""

    precio_original: float
    recargo_total: float
    precio_final: float
    cuota_mensual: float
    cuotas: int
    recargo_porcentual: float
    precio_electro: float
    precio_final_electro: float
    cuota_mensual_electro: float


@dataclass(frozen=True)
class PlanResolution:
    """Authoritative candidate plans for an item and the tier they came from"""

    plans: Tuple[FinancingPlan, ...]
    tier: str  # "especiales" | "default" | "ninguno"


@dataclass(frozen=True)
class PlanOffer:
    """Everything a view needs to render one financing option"""

    plan: FinancingPlan
    quote: Optional[PriceQuote]
    anticipo: float
    descuento_contado: Optional[float] = None
    precio_contado: Optional[float] = None
